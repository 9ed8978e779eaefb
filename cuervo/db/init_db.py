import logging
from cuervo.db.session import engine
from cuervo.db.base import Base

# 👇 importa todos los modelos que deben existir en la DB
from cuervo.users.models import User
from cuervo.profiles.models import ProfileRecord

log = logging.getLogger("uvicorn")


async def init_models():
    """
    Crea/verifica todas las tablas declaradas en Base.metadata
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        log.info("✅ DB init: tablas creadas/verificadas.")
    except Exception as e:
        log.error(f"❌ DB init falló: {e!r}")
