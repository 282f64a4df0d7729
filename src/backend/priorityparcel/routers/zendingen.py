from typing import Annotated
from fastapi import APIRouter, Depends, Query

from priorityparcel.core.security import get_actor_claims
from priorityparcel.db.session import get_storage
from priorityparcel.repositories.base import Storage
from priorityparcel.schemas.zending import ZendingOut, ZendingStatus, ZendingUpdateOut, TrackingOut
from priorityparcel.services.zending_service import ZendingService

router = APIRouter(prefix="/api", tags=["zendingen"])

@router.get("/zendingen", response_model=list[ZendingOut])
async def list_zendingen(
    user_id: Annotated[int | None, Query(alias="userId", gt=0)] = None,
    status: Annotated[ZendingStatus | None, Query()] = None,
    q: Annotated[str | None, Query(max_length=100)] = None,
    storage: Storage = Depends(get_storage),
    actor=Depends(get_actor_claims),
):
    return await ZendingService(storage).list_for(actor, user_id=user_id, status_filter=status, search=q)

@router.get("/zendingen/{zending_id}", response_model=ZendingOut)
async def get_zending(
    zending_id: int,
    storage: Storage = Depends(get_storage),
    actor=Depends(get_actor_claims),
):
    return await ZendingService(storage).get_for(actor, zending_id)

@router.get("/zendingen/{zending_id}/updates", response_model=list[ZendingUpdateOut])
async def list_zending_updates(
    zending_id: int,
    storage: Storage = Depends(get_storage),
    actor=Depends(get_actor_claims),
):
    return await ZendingService(storage).updates_for(actor, zending_id)

# public track & trace, no login needed
@router.get("/tracking/{tracking_code}", response_model=TrackingOut)
async def track(tracking_code: str, storage: Storage = Depends(get_storage)):
    return await ZendingService(storage).track(tracking_code)
