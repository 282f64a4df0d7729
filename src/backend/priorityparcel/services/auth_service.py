# src/backend/priorityparcel/services/auth_service.py
from fastapi import HTTPException, status

from priorityparcel.core.config import settings
from priorityparcel.core.logging import get_logger
from priorityparcel.core.security import hash_password, verify_password, create_access_token
from priorityparcel.models import User
from priorityparcel.repositories.base import DuplicateRecordError, Storage
from priorityparcel.schemas.user import UserCreate, LoginIn

logger = get_logger(__name__)

# one message for every failure so callers can't probe which part was wrong
INVALID_CREDENTIALS = "Invalid email or password"


def issue_token(user: User, *, remember_me: bool = False) -> str:
    expires = settings.REMEMBER_ME_EXPIRE_MINUTES if remember_me else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    return create_access_token(
        subject=user.id,
        expires_minutes=expires,
        extra={"username": user.username, "role": user.role},
    )


class AuthService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def register(self, payload: UserCreate) -> User:
        # public sign-up always yields a customer account
        payload = payload.model_copy(update={"role": "klant"})

        if await self.storage.get_user_by_username(payload.username):
            raise HTTPException(status_code=409, detail="Username already exists")
        if await self.storage.get_user_by_email(payload.email):
            raise HTTPException(status_code=409, detail="Email already registered")

        try:
            user = await self.storage.create_user(payload, password_hash=hash_password(payload.password))
        except DuplicateRecordError as e:
            raise HTTPException(status_code=409, detail=f"{e.field} already exists")
        logger.info("Registered user id=%s username=%s", user.id, user.username)
        return user

    async def login(self, payload: LoginIn) -> tuple[User, str]:
        user = await self.storage.get_user_by_email(payload.email)
        if not user or not user.is_active or not verify_password(payload.password, user.password_hash):
            logger.warning("Failed login for %s", payload.email)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

        user = await self.storage.update_user_last_login(user.id) or user
        token = issue_token(user, remember_me=payload.remember_me)
        logger.info("User id=%s logged in", user.id)
        return user, token

    async def current_user(self, actor: dict) -> User:
        # the token only proves who signed in; the account must still exist and be active
        user = await self.storage.get_user(actor["user_id"])
        if not user or not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return user
