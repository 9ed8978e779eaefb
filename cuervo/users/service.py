# cuervo/users/service.py
from __future__ import annotations
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from cuervo.users.repository import get_by_email, create_user, bump_token_version
from cuervo.core.security import hash_password, create_access_token, verify_password
from cuervo.users.schemas import UserCreate
from cuervo.users.models import User

log = logging.getLogger("uvicorn")

async def register_user(db: AsyncSession, data: UserCreate) -> str:
    if await get_by_email(db, data.email):
        raise ValueError("email already exists")

    hashed = hash_password(data.password)
    user = await create_user(db, data.email, hashed, display_name=data.display_name)
    log.info(f"👤 Nuevo usuario {user.id}")

    # El commit lo hace el router
    return create_access_token(sub=user.id, version=user.token_version or 0)

async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    user = await get_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user

async def login_user(db: AsyncSession, email: str, password: str) -> str:
    user = await authenticate_user(db, email, password)
    if not user:
        raise ValueError("invalid credentials")
    return create_access_token(sub=user.id, version=user.token_version or 0)

async def logout_user(db: AsyncSession, user: User) -> None:
    # Los JWT no se pueden borrar: subimos la versión y los viejos dejan de valer
    await bump_token_version(db, user)
