# cuervo/public/resolver.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from cuervo.profiles.repository import ProfileFilter, ProfileGateway
from cuervo.profiles.schemas import Profile

log = logging.getLogger("uvicorn")


class ResolutionState(str, Enum):
    LOADING = "loading"
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Resolution:
    state: ResolutionState
    profile: Profile | None = None


class PublicProfileResolver:
    """
    Dado el token del dueño, busca su perfil chosen. Solo lectura.

    "no tiene chosen" y "falló la consulta" se ven igual (NOT_FOUND):
    así no se filtra qué dueños existen.
    """

    def __init__(self, gateway: ProfileGateway):
        self.gateway = gateway
        self.result = Resolution(ResolutionState.LOADING)

    @property
    def state(self) -> ResolutionState:
        return self.result.state

    async def resolve(self, owner_token: str) -> Resolution:
        self.result = Resolution(ResolutionState.LOADING)
        try:
            rows = await self.gateway.select(ProfileFilter(owner_id=owner_token, chosen=True))
        except Exception as e:
            log.error(f"❌ Vista pública falló para {owner_token}: {e!r}")
            rows = []

        if not rows:
            self.result = Resolution(ResolutionState.NOT_FOUND)
        else:
            if len(rows) > 1:
                log.warning(f"⚠️ {owner_token} tiene {len(rows)} perfiles chosen; se muestra el primero")
            self.result = Resolution(ResolutionState.FOUND, rows[0])
        return self.result
