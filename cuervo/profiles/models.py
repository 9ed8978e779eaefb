# cuervo/profiles/models.py
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Boolean, DateTime, JSON, ForeignKey, Index, func, text
from sqlalchemy.dialects.postgresql import JSONB
from cuervo.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProfileRecord(Base):
    """
    Fila de ``public_profiles``: un perfil de identidad de un usuario.
    Un usuario puede tener varios; solo uno con chosen = true.
    """

    __tablename__ = "public_profiles"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    profile_title: Mapped[str | None] = mapped_column(String(120), nullable=True)
    profile_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 👇 JSONB en postgres, JSON plano en sqlite (tests)
    data: Mapped[dict | None] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=True
    )
    chosen: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false", index=True
    )
    # default en python para tener microsegundos: el orden de la colección sale de aquí
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    __table_args__ = (
        # a lo sumo un chosen por dueño: si dos requests compiten, la segunda falla
        Index(
            "uq_public_profiles_one_chosen",
            "user_id",
            unique=True,
            postgresql_where=text("chosen"),
            sqlite_where=text("chosen"),
        ),
    )
