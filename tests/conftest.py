"""Pytest configuration and fixtures for the Cuervo tests."""
import os
import tempfile
from pathlib import Path

# La DB de los tests tiene que estar definida antes de importar cuervo.*
_TMP_DIR = Path(tempfile.mkdtemp(prefix="cuervo-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["PUBLIC_BASE_URL"] = "https://cuervo.test"

import asyncio
import itertools
import uuid
from typing import Any

import pytest

from cuervo.core.errors import PersistenceError
from cuervo.profiles.models import ProfileRecord
from cuervo.profiles.repository import ProfileFilter, record_to_profile
from cuervo.profiles.schemas import Profile
from cuervo.users.session import AuthSession


class FakeGateway:
    """In-memory record store with the same filter semantics as the SQL one."""

    def __init__(self):
        self.rows: list[ProfileRecord] = []
        self.calls: list[tuple[str, Any]] = []
        self._ids = itertools.count(1)

    def _match(self, row: ProfileRecord, flt: ProfileFilter) -> bool:
        if flt.owner_id is not None and row.user_id != flt.owner_id:
            return False
        if flt.id is not None and row.id != flt.id:
            return False
        if flt.chosen is not None and bool(row.chosen) != flt.chosen:
            return False
        return True

    def seed(self, owner_id: str, title: str, chosen: bool = False, **data: str) -> str:
        row = ProfileRecord(
            id=f"p{next(self._ids)}",
            user_id=owner_id,
            profile_title=title,
            profile_description="",
            data=data,
            chosen=chosen,
        )
        self.rows.append(row)
        return row.id

    def chosen_ids(self, owner_id: str) -> list[str]:
        return [r.id for r in self.rows if r.user_id == owner_id and r.chosen]

    async def select(self, flt: ProfileFilter) -> list[Profile]:
        self.calls.append(("select", flt))
        return [record_to_profile(r) for r in self.rows if self._match(r, flt)]

    def _check_one_chosen(self, owner_id: str, skip: list) -> None:
        # mismo efecto que el índice único parcial de public_profiles
        if any(r.user_id == owner_id and r.chosen and r not in skip for r in self.rows):
            raise PersistenceError("unique violation: uq_public_profiles_one_chosen")

    async def insert(self, record: dict[str, Any]) -> None:
        self.calls.append(("insert", record))
        if record.get("chosen"):
            self._check_one_chosen(record["user_id"], skip=[])
        self.rows.append(ProfileRecord(id=f"p{next(self._ids)}", **record))

    async def update(self, patch: dict[str, Any], flt: ProfileFilter) -> int:
        self.calls.append(("update", (patch, flt)))
        hits = [r for r in self.rows if self._match(r, flt)]
        if patch.get("chosen"):
            if len(hits) > 1:
                raise PersistenceError("unique violation: uq_public_profiles_one_chosen")
            for r in hits:
                self._check_one_chosen(r.user_id, skip=hits)
        for r in hits:
            for key, value in patch.items():
                setattr(r, key, value)
        return len(hits)

    async def delete(self, flt: ProfileFilter) -> int:
        self.calls.append(("delete", flt))
        before = len(self.rows)
        self.rows = [r for r in self.rows if not self._match(r, flt)]
        return before - len(self.rows)


class InterleavingGateway(FakeGateway):
    """Yields to the loop before every call, so concurrent requests overlap."""

    async def select(self, flt):
        await asyncio.sleep(0)
        return await super().select(flt)

    async def insert(self, record):
        await asyncio.sleep(0)
        return await super().insert(record)


class BrokenGateway(FakeGateway):
    """Reads work, every write fails."""

    async def insert(self, record):
        self.calls.append(("insert", record))
        raise PersistenceError("insert failed: boom")

    async def update(self, patch, flt):
        self.calls.append(("update", (patch, flt)))
        raise PersistenceError("update failed: boom")

    async def delete(self, flt):
        self.calls.append(("delete", flt))
        raise PersistenceError("delete failed: boom")


@pytest.fixture
def owner_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def session(owner_id: str) -> AuthSession:
    return AuthSession(owner_id=owner_id, email="ana@example.com", token="tok", display_name="Ana")


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def broken_gateway() -> BrokenGateway:
    return BrokenGateway()


@pytest.fixture
def interleaving_gateway() -> InterleavingGateway:
    return InterleavingGateway()
