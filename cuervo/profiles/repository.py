# cuervo/profiles/repository.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Protocol

from pydantic import ValidationError
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cuervo.core.errors import PersistenceError
from cuervo.profiles.models import ProfileRecord
from cuervo.profiles.schemas import Profile, ProfileData


@dataclass(frozen=True)
class ProfileFilter:
    """Filtros que usa la capa de perfiles: por dueño, por id y por chosen."""

    owner_id: str | None = None
    id: str | None = None
    chosen: bool | None = None


class ProfileGateway(Protocol):
    async def select(self, flt: ProfileFilter) -> List[Profile]: ...

    async def insert(self, record: dict[str, Any]) -> None: ...

    async def update(self, patch: dict[str, Any], flt: ProfileFilter) -> int: ...

    async def delete(self, flt: ProfileFilter) -> int: ...


# -------------------------
# mapeo fila <-> Profile
# -------------------------


def record_to_profile(row: ProfileRecord) -> Profile:
    try:
        data = ProfileData.model_validate(row.data or {})
    except ValidationError as e:
        # blob escrito por otro cliente o migrado con valores fuera del enum
        raise PersistenceError(f"profile {row.id} has invalid data: {e!r}") from e
    return Profile(
        id=row.id,
        title=row.profile_title,
        description=row.profile_description,
        data=data,
        chosen=bool(row.chosen),
    )


def profile_to_record(profile: Profile) -> dict[str, Any]:
    """Columnas editables desde el formulario (chosen NO va aquí)."""
    return {
        "profile_title": profile.title,
        "profile_description": profile.description,
        "data": profile.data.to_blob(),
    }


def _where(stmt, flt: ProfileFilter):
    if flt.owner_id is not None:
        stmt = stmt.where(ProfileRecord.user_id == flt.owner_id)
    if flt.id is not None:
        stmt = stmt.where(ProfileRecord.id == flt.id)
    if flt.chosen is not None:
        stmt = stmt.where(ProfileRecord.chosen.is_(flt.chosen))
    return stmt


async def list_profiles(db: AsyncSession, flt: ProfileFilter) -> List[ProfileRecord]:
    # orden de creación (y id para desempatar)
    res = await db.execute(
        _where(select(ProfileRecord), flt).order_by(
            ProfileRecord.created_at.asc(), ProfileRecord.id.asc()
        )
    )
    return list(res.scalars())


async def create_profile(db: AsyncSession, **values: Any) -> ProfileRecord:
    row = ProfileRecord(**values)
    db.add(row)
    await db.flush()
    await db.refresh(row)
    return row


async def update_profiles(db: AsyncSession, patch: dict[str, Any], flt: ProfileFilter) -> int:
    res = await db.execute(
        _where(update(ProfileRecord), flt)
        .values(**patch)
        .execution_options(synchronize_session=False)
    )
    await db.flush()
    return res.rowcount or 0


async def delete_profiles(db: AsyncSession, flt: ProfileFilter) -> int:
    res = await db.execute(
        _where(delete(ProfileRecord), flt).execution_options(synchronize_session=False)
    )
    await db.flush()
    return res.rowcount or 0


class SqlProfileGateway:
    """
    Record store sobre la sesión async. No hace commit (lo hace el router);
    cualquier error de SQLAlchemy sale como PersistenceError.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def select(self, flt: ProfileFilter) -> List[Profile]:
        try:
            rows = await list_profiles(self.db, flt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"select failed: {e!r}") from e
        return [record_to_profile(r) for r in rows]

    async def insert(self, record: dict[str, Any]) -> None:
        try:
            await create_profile(self.db, **record)
        except SQLAlchemyError as e:
            raise PersistenceError(f"insert failed: {e!r}") from e

    async def update(self, patch: dict[str, Any], flt: ProfileFilter) -> int:
        try:
            return await update_profiles(self.db, patch, flt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"update failed: {e!r}") from e

    async def delete(self, flt: ProfileFilter) -> int:
        try:
            return await delete_profiles(self.db, flt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"delete failed: {e!r}") from e
