# cuervo/profiles/controller.py
"""
Orquesta los cambios del store con las llamadas al record store.

Reglas:
- chosen nunca se aplica en local antes de que el remoto confirme.
- el perfil activo no se puede borrar; primero hay que elegir otro.
- si el remoto falla, el store queda en el último estado confirmado
  y se lanza un ProfileError con el nombre de la operación.
"""
from __future__ import annotations

import logging

from cuervo.core.errors import (
    ChosenProfileDeleteError,
    DraftProfileError,
    LastProfileError,
    NotAuthenticatedError,
    PersistenceError,
    ProfileBusyError,
    ProfileNotFoundError,
    ProfilePersistenceError,
)
from cuervo.profiles.repository import ProfileFilter, ProfileGateway, profile_to_record
from cuervo.profiles.schemas import Profile, ProfileData
from cuervo.profiles.store import (
    ById,
    ByIndex,
    Choose,
    Locator,
    MetaField,
    ProfileCollection,
    ProfileStore,
    Remove,
    ToggleExpanded,
    UpdateData,
    UpdateMeta,
)
from cuervo.users.session import AuthSession

log = logging.getLogger("uvicorn")


def first_chosen_only(profiles: list[Profile]) -> list[Profile]:
    """
    Si la fuente trae más de un chosen, deja marcado solo el primero
    (orden de creación). Solo afecta la vista, no repara el remoto.
    """
    seen = False
    out: list[Profile] = []
    for p in profiles:
        if p.chosen and seen:
            p = p.model_copy(update={"chosen": False})
        elif p.chosen:
            seen = True
        out.append(p)
    return out


def _with_title(prefix: str, title: str | None, suffix: str = "") -> str:
    parts = [prefix, title or "", suffix]
    return " ".join(p for p in parts if p)


class ProfileController:
    def __init__(
        self,
        session: AuthSession | None,
        gateway: ProfileGateway,
        store: ProfileStore | None = None,
    ):
        self.session = session
        self.gateway = gateway
        self.store = store if store is not None else ProfileStore()
        self._updating: set[str] = set()

    @property
    def profiles(self) -> ProfileCollection:
        return self.store.profiles

    def _owner(self, operation: str) -> str:
        if self.session is None:
            raise NotAuthenticatedError(operation, "not authenticated")
        return self.session.owner_id

    # -------------------------
    # carga
    # -------------------------

    async def reload(self) -> ProfileCollection:
        owner = self._owner("reload")
        try:
            rows = await self.gateway.select(ProfileFilter(owner_id=owner))
        except PersistenceError as e:
            log.error(f"❌ Error cargando perfiles de {owner}: {e!r}")
            raise ProfilePersistenceError("reload", "Error loading profiles") from e

        if sum(1 for p in rows if p.chosen) > 1:
            log.warning(f"⚠️ {owner} tiene más de un perfil chosen; se muestra el primero")
            rows = first_chosen_only(rows)
        return self.store.load(rows)

    # -------------------------
    # operaciones remotas
    # -------------------------

    async def create(self, profile: Profile) -> str:
        owner = self._owner("create")
        record = profile_to_record(profile)
        record["user_id"] = owner

        try:
            # el primer perfil del usuario queda como el público; se pregunta
            # al remoto porque el store local puede estar viejo
            current = await self.gateway.select(ProfileFilter(owner_id=owner, chosen=True))
            record["chosen"] = not current
            await self.gateway.insert(record)
        except PersistenceError as e:
            log.error(f"❌ Error guardando perfil: {e!r}")
            raise ProfilePersistenceError("create", "Error saving profile") from e

        # recargamos para tener el id que asignó el servidor
        await self.reload()
        return _with_title("Perfil", profile.title, "guardado")

    async def update(self, profile: Profile) -> str:
        owner = self._owner("update")
        if profile.id is None:
            raise DraftProfileError("update", "Profile must be created before updating")
        if profile.id in self._updating:
            raise ProfileBusyError("update", "Profile is already being saved")

        self._updating.add(profile.id)
        try:
            count = await self.gateway.update(
                profile_to_record(profile),
                ProfileFilter(owner_id=owner, id=profile.id),
            )
        except PersistenceError as e:
            log.error(f"❌ Error actualizando perfil {profile.id}: {e!r}")
            raise ProfilePersistenceError("update", "Error updating profile") from e
        finally:
            self._updating.discard(profile.id)

        if count == 0:
            raise ProfileNotFoundError("update", "Profile not found")
        return _with_title("Perfil", profile.title, "actualizado")

    async def choose_active(self, profile_id: str, profile: Profile | None = None) -> str:
        owner = self._owner("choose")
        try:
            # si el destino no existe no se toca nada
            if not await self.gateway.select(ProfileFilter(owner_id=owner, id=profile_id)):
                raise ProfileNotFoundError("choose", "Profile not found")
            # primero apagamos los demás: el índice único no deja dos chosen
            for other in await self.gateway.select(ProfileFilter(owner_id=owner, chosen=True)):
                if other.id != profile_id:
                    await self.gateway.update(
                        {"chosen": False}, ProfileFilter(owner_id=owner, id=other.id)
                    )
            count = await self.gateway.update(
                {"chosen": True}, ProfileFilter(owner_id=owner, id=profile_id)
            )
            if count == 0:
                raise ProfileNotFoundError("choose", "Profile not found")
        except PersistenceError as e:
            log.error(f"❌ Error cambiando perfil activo a {profile_id}: {e!r}")
            raise ProfilePersistenceError("choose", "Error updating profile") from e

        # solo con confirmación remota se toca el store
        self.store.dispatch(Choose(ById(profile_id)))
        target = profile or self.store.find(profile_id)
        return _with_title("Cambios guardados para:", target.title if target else None)

    async def delete(self, profile_id: str) -> str:
        owner = self._owner("delete")
        target = self.store.find(profile_id)
        if target is None:
            raise ProfileNotFoundError("delete", "Profile not found")
        if len(self.store.profiles) <= 1:
            raise LastProfileError("delete", "Must have at least one profile")
        if target.chosen:
            raise ChosenProfileDeleteError(
                "delete",
                "No puedes eliminar el perfil activo, primero cambia de perfil y luego elimina",
            )

        try:
            await self.gateway.delete(ProfileFilter(owner_id=owner, id=profile_id))
        except PersistenceError as e:
            log.error(f"❌ Error eliminando perfil {profile_id}: {e!r}")
            raise ProfilePersistenceError("delete", "Error deleting profile") from e

        self.store.dispatch(Remove(ById(profile_id)))
        return "Perfil eliminado"

    # -------------------------
    # solo local (sin llamada remota)
    # -------------------------

    def add_draft(self) -> ProfileCollection:
        return self.store.add_draft()

    def discard_draft(self, index: int) -> ProfileCollection:
        if len(self.store.profiles) <= 1:
            raise LastProfileError("discard", "Must have at least one profile")
        return self.store.dispatch(Remove(ByIndex(index)))

    def toggle(self, locator: Locator) -> ProfileCollection:
        return self.store.dispatch(ToggleExpanded(locator))

    def edit_meta(self, locator: Locator, field: MetaField, value: str) -> ProfileCollection:
        return self.store.dispatch(UpdateMeta(locator, field, value))

    def edit_data(self, locator: Locator, **fields: str) -> ProfileCollection:
        return self.store.dispatch(UpdateData(locator, ProfileData(**fields)))
