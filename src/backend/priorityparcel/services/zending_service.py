from fastapi import HTTPException, status

from priorityparcel.models import Zending
from priorityparcel.repositories.base import Storage, matches
from priorityparcel.schemas.zending import TrackingEventOut, TrackingOut

# roles that may look at every customer's shipments
STAFF_ROLES = ("admin", "medewerker")


def is_staff(actor: dict) -> bool:
    return actor.get("role") in STAFF_ROLES


class ZendingService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def list_for(
        self,
        actor: dict,
        *,
        user_id: int | None = None,
        status_filter: str | None = None,
        search: str | None = None,
    ) -> list[Zending]:
        if not is_staff(actor):
            # customers only ever see their own shipments
            if user_id is not None and user_id != actor["user_id"]:
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to view these shipments")
            user_id = actor["user_id"]

        if user_id is None:
            return await self.storage.list_zendingen(status=status_filter, search=search)

        zendingen = await self.storage.list_zendingen_by_user(user_id)
        return [
            z for z in zendingen
            if (status_filter is None or z.status == status_filter)
            and matches(search, z.tracking_code, z.verzender, z.ontvanger, z.afleveradres)
        ]

    async def get_for(self, actor: dict, zending_id: int) -> Zending:
        zending = await self.storage.get_zending(zending_id)
        if not zending:
            raise HTTPException(status_code=404, detail="Zending not found")
        if not is_staff(actor) and zending.user_id != actor["user_id"]:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to view this shipment")
        return zending

    async def updates_for(self, actor: dict, zending_id: int):
        zending = await self.get_for(actor, zending_id)
        return await self.storage.list_zending_updates(zending.id)

    async def track(self, tracking_code: str) -> TrackingOut:
        zending = await self.storage.get_zending_by_tracking_code(tracking_code.strip())
        if not zending:
            raise HTTPException(status_code=404, detail="No shipment found for this tracking code")
        updates = await self.storage.list_zending_updates(zending.id)
        return TrackingOut(
            tracking_code=zending.tracking_code,
            status=zending.status,
            prioriteit=zending.prioriteit,
            verzend_datum=zending.verzend_datum,
            geplande_aflever_datum=zending.geplande_aflever_datum,
            werkelijke_aflever_datum=zending.werkelijke_aflever_datum,
            last_update=zending.last_update,
            updates=[TrackingEventOut.model_validate(u) for u in updates],
        )
