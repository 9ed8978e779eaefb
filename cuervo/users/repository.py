# cuervo/users/repository.py
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from cuervo.users.models import User

async def get_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == email.lower()))
    return res.scalar_one_or_none()

async def get_by_id(db: AsyncSession, user_id: str) -> User | None:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()

async def create_user(
    db: AsyncSession, email: str, hashed_password: str, display_name: str | None = None
) -> User:
    user = User(email=email.lower(), hashed_password=hashed_password, display_name=display_name)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user

async def bump_token_version(db: AsyncSession, user: User) -> int:
    user.token_version = (user.token_version or 0) + 1
    await db.flush()
    return user.token_version
