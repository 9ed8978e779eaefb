# cuervo/db/session.py
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
from cuervo.core.config import settings

db_url = settings.DATABASE_URL

# Timeouts cortos: si la DB no responde → falla rápido (5s)
if db_url.startswith("postgresql+psycopg"):
    engine_args = {
        "pool_size": 5,
        "max_overflow": 10,
        "connect_args": {"connect_timeout": 5},
    }
elif db_url.startswith("postgresql+asyncpg"):
    engine_args = {
        "pool_size": 5,
        "max_overflow": 10,
        "connect_args": {
            "timeout": 5,
            "server_settings": {"client_encoding": "UTF8"},
        },
    }
elif db_url.startswith("sqlite+aiosqlite"):
    # sqlite (dev/tests): sin pool, cada sesión abre su conexión
    engine_args = {"poolclass": NullPool}
else:
    engine_args = {}

engine = create_async_engine(
    db_url,
    pool_pre_ping=True,
    **engine_args,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
