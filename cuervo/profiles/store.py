# cuervo/profiles/store.py
"""
Colección de perfiles en memoria + función de transición pura.

``reduce(state, command)`` nunca hace I/O ni lanza excepciones: un comando
cuyo objetivo no existe devuelve el estado tal cual.

Direccionamiento (Locator):
- ``ById(id)``: solo encuentra perfiles ya guardados con ese id.
- ``ByIndex(i)``: solo encuentra un borrador (id None) en la posición i.
  Nunca apunta a un perfil guardado, así una respuesta vieja no pisa
  un perfil que se corrió a esa posición.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal, Tuple, Union

from cuervo.profiles.schemas import Profile, ProfileData

ProfileCollection = Tuple[Profile, ...]
MetaField = Literal["title", "description"]


# -------------------------
# Locator
# -------------------------


@dataclass(frozen=True)
class ById:
    id: str


@dataclass(frozen=True)
class ByIndex:
    index: int


Locator = Union[ById, ByIndex]


def locator_for(profile: Profile, index: int) -> Locator:
    """El locator correcto para el perfil que está en ``index``."""
    if profile.id is not None:
        return ById(profile.id)
    return ByIndex(index)


def matches(locator: Locator, profile: Profile, index: int) -> bool:
    if isinstance(locator, ById):
        return profile.id is not None and profile.id == locator.id
    if isinstance(locator, ByIndex):
        return profile.id is None and index == locator.index
    return False


def _any_match(state: ProfileCollection, locator: Locator) -> bool:
    return any(matches(locator, p, i) for i, p in enumerate(state))


# -------------------------
# comandos
# -------------------------


@dataclass(frozen=True)
class SetAll:
    profiles: Tuple[Profile, ...]


@dataclass(frozen=True)
class Insert:
    profile: Profile


@dataclass(frozen=True)
class Remove:
    locator: Locator


@dataclass(frozen=True)
class Choose:
    locator: Locator


@dataclass(frozen=True)
class UpdateMeta:
    locator: Locator
    field: MetaField
    value: str


@dataclass(frozen=True)
class UpdateData:
    # solo se mezclan los campos que vienen seteados en el patch
    locator: Locator
    patch: ProfileData


@dataclass(frozen=True)
class ToggleExpanded:
    locator: Locator


@dataclass(frozen=True)
class CollapseAll:
    pass


Command = Union[SetAll, Insert, Remove, Choose, UpdateMeta, UpdateData, ToggleExpanded, CollapseAll]


def _map_matched(state: ProfileCollection, locator: Locator, fn) -> ProfileCollection:
    return tuple(fn(p) if matches(locator, p, i) else p for i, p in enumerate(state))


def reduce(state: ProfileCollection, command: Command) -> ProfileCollection:
    if isinstance(command, SetAll):
        # se confía en la fuente (ver ProfileController.reload)
        return tuple(command.profiles)

    if isinstance(command, Insert):
        return state + (command.profile,)

    if isinstance(command, Remove):
        return tuple(p for i, p in enumerate(state) if not matches(command.locator, p, i))

    if isinstance(command, Choose):
        if not _any_match(state, command.locator):
            return state
        # un solo paso: el elegido en true y todos los demás en false
        return tuple(
            p.model_copy(update={"chosen": matches(command.locator, p, i)})
            for i, p in enumerate(state)
        )

    if isinstance(command, UpdateMeta):
        if command.field not in ("title", "description"):
            return state
        return _map_matched(
            state,
            command.locator,
            lambda p: p.model_copy(update={command.field: command.value}),
        )

    if isinstance(command, UpdateData):
        changes = command.patch.model_dump(exclude_unset=True)
        if not changes:
            return state
        return _map_matched(
            state,
            command.locator,
            lambda p: p.model_copy(update={"data": p.data.model_copy(update=changes)}),
        )

    if isinstance(command, ToggleExpanded):
        return _map_matched(
            state,
            command.locator,
            lambda p: p.model_copy(update={"expanded": not p.expanded}),
        )

    if isinstance(command, CollapseAll):
        return tuple(p.model_copy(update={"expanded": False}) for p in state)

    return state


@dataclass
class ProfileStore:
    """Contenedor del estado actual; todo cambio pasa por ``dispatch``."""

    profiles: ProfileCollection = field(default_factory=tuple)

    def dispatch(self, command: Command) -> ProfileCollection:
        self.profiles = reduce(self.profiles, command)
        return self.profiles

    def load(self, profiles: Iterable[Profile]) -> ProfileCollection:
        return self.dispatch(SetAll(tuple(profiles)))

    def find(self, profile_id: str) -> Profile | None:
        for p in self.profiles:
            if p.id is not None and p.id == profile_id:
                return p
        return None

    @property
    def chosen(self) -> Profile | None:
        for p in self.profiles:
            if p.chosen:
                return p
        return None

    def add_draft(self) -> ProfileCollection:
        # colapsa los demás y agrega un borrador vacío abierto al final
        self.dispatch(CollapseAll())
        return self.dispatch(Insert(Profile.draft()))
