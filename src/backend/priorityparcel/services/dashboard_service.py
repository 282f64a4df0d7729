from priorityparcel.repositories.base import Storage
from priorityparcel.schemas.dashboard import DashboardStats


class DashboardService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def stats(self) -> DashboardStats:
        return DashboardStats(
            totaal_zendingen=await self.storage.count_zendingen(),
            actieve_zendingen=await self.storage.count_active_zendingen(),
            afgeleverd=await self.storage.count_delivered_zendingen(),
            gemiddelde_leveringstijd=await self.storage.average_delivery_time(),
            klanttevredenheid=await self.storage.customer_satisfaction(),
        )
