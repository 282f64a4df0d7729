from typing import Annotated
from fastapi import APIRouter, Depends, Query

from priorityparcel.core.security import require_admin
from priorityparcel.db.session import get_storage
from priorityparcel.repositories.base import Storage
from priorityparcel.schemas.user import UserOut

router = APIRouter(prefix="/api/admin", tags=["admin"])

@router.get("/klanten", response_model=list[UserOut])
async def list_klanten(
    q: Annotated[str | None, Query(max_length=100)] = None,
    storage: Storage = Depends(get_storage),
    actor=Depends(require_admin),
):
    users = await storage.list_users(search=q)
    return [u for u in users if u.role == "klant"]
