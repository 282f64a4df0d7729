from fastapi import APIRouter, Depends

from priorityparcel.core.security import get_actor_claims
from priorityparcel.db.session import get_storage
from priorityparcel.repositories.base import Storage
from priorityparcel.schemas.dashboard import DashboardStats
from priorityparcel.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(storage: Storage = Depends(get_storage), actor=Depends(get_actor_claims)):
    return await DashboardService(storage).stats()
