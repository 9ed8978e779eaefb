# cuervo/users/session.py
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cuervo.db.session import get_session
from cuervo.core.security import decode_access_token
from cuervo.users.models import User
from cuervo.users.repository import get_by_id


@dataclass(frozen=True)
class AuthSession:
    """Credencial + dueño. Es la llave con la que se scopea todo lo de perfiles."""

    owner_id: str
    email: str
    token: str
    display_name: str | None = None


def extract_token(token: str | None, authorization: str | None) -> str:
    # token por query o Authorization: Bearer XXX
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1]
    if not token:
        raise HTTPException(status_code=401, detail="missing token")
    return token


async def current_user(
    db: AsyncSession = Depends(get_session),
    token: str | None = Query(None),
    authorization: str | None = Header(None),
) -> tuple[User, str]:
    tok = extract_token(token, authorization)
    try:
        user_id, version = decode_access_token(tok)
    except Exception:
        raise HTTPException(status_code=401, detail="invalid token")

    user = await get_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="invalid token")
    # token emitido antes del último logout
    if version != (user.token_version or 0):
        raise HTTPException(status_code=401, detail="invalid token")
    return user, tok


async def current_session(
    auth: tuple[User, str] = Depends(current_user),
) -> AuthSession:
    user, tok = auth
    return AuthSession(
        owner_id=user.id,
        email=user.email,
        token=tok,
        display_name=user.display_name,
    )
