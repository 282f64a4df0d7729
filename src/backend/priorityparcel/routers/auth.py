from fastapi import APIRouter, Depends

from priorityparcel.core.security import get_actor_claims
from priorityparcel.db.session import get_storage
from priorityparcel.repositories.base import Storage
from priorityparcel.schemas.common import MessageOut
from priorityparcel.schemas.user import UserCreate, UserOut, LoginIn, LoginOut
from priorityparcel.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["auth"])

@router.post("/register", response_model=UserOut, status_code=201)
async def register(payload: UserCreate, storage: Storage = Depends(get_storage)):
    return await AuthService(storage).register(payload)

@router.post("/login", response_model=LoginOut)
async def login(payload: LoginIn, storage: Storage = Depends(get_storage)):
    user, token = await AuthService(storage).login(payload)
    return {"user": user, "token": token}

@router.get("/auth/user", response_model=UserOut)
async def current_user(storage: Storage = Depends(get_storage), actor=Depends(get_actor_claims)):
    return await AuthService(storage).current_user(actor)

@router.post("/logout", response_model=MessageOut)
async def logout():
    # tokens are stateless; the client drops its copy
    return {"message": "Logged out successfully"}
