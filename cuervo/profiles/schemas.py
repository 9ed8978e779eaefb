# cuervo/profiles/schemas.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator
from pydantic.alias_generators import to_camel

from cuervo.profiles.constants import BloodType, IdType, INITIAL_PROFILE_DATA


class ProfileData(BaseModel):
    """
    Datos personales + contacto de emergencia. Todo opcional.
    En JSON viajan en camelCase (fullName, idType...) como los guarda el front;
    en Python se usan en snake_case.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    # Personal
    full_name: str | None = None
    rh: BloodType | None = None
    id_type: IdType | None = None
    id_number: str | None = None
    health_insurance: str | None = None
    health_insurance_number: str | None = None
    extra_info: str | None = None

    # Emergencia
    emergency_name: str | None = None
    emergency_contact: str | None = None
    emergency_relationship: str | None = None

    @field_validator("rh", "id_type", mode="before")
    @classmethod
    def _blank_is_unset(cls, v):
        # el select del formulario manda '' cuando no se eligió nada
        if v == "":
            return None
        return v

    @classmethod
    def blank(cls) -> "ProfileData":
        return cls(**INITIAL_PROFILE_DATA)

    def to_blob(self) -> dict:
        """Forma en la que se guarda en la columna JSON."""
        return self.model_dump(mode="json", by_alias=True)


class Profile(BaseModel):
    """Un perfil de la colección. Sin ``id`` = borrador (todavía no se guardó)."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str | None = None
    title: str | None = ""
    description: str | None = ""
    data: ProfileData = Field(default_factory=ProfileData)
    chosen: bool = False
    # solo UI, nunca se persiste ni se serializa
    expanded: bool = Field(default=False, exclude=True)

    @property
    def is_draft(self) -> bool:
        return self.id is None

    @classmethod
    def draft(cls) -> "Profile":
        return cls(title="", description="", data=ProfileData.blank(), chosen=False, expanded=True)


class ProfileIn(BaseModel):
    # Acepta title | profile_title (nombre de la columna)
    title: str | None = Field(
        default="",
        max_length=120,
        validation_alias=AliasChoices("title", "profile_title"),
    )
    description: str | None = Field(
        default="",
        max_length=500,
        validation_alias=AliasChoices("description", "profile_description"),
    )
    data: ProfileData = Field(default_factory=ProfileData)

    def to_profile(self, profile_id: str | None = None) -> Profile:
        return Profile(
            id=profile_id,
            title=self.title,
            description=self.description,
            data=self.data,
        )


class ProfileActionOut(BaseModel):
    message: str
    profiles: list[Profile]


class PublicProfileOut(BaseModel):
    """Vista pública de solo lectura: sin ids ni dueño."""

    title: str | None = None
    description: str | None = None
    data: ProfileData
