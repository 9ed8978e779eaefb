# cuervo/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from cuervo.core.json import UTF8JSONResponse
from cuervo.core.config import settings
from cuervo.db.init_db import init_models

# routers
from cuervo.users.router import router as users_router
from cuervo.profiles.router import router as profiles_router
from cuervo.public.router import router as public_router
from cuervo.qr.router import router as qr_router

log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("🚀 Iniciando servicio…")
    await init_models()
    log.info("✅ Startup listo.")
    yield


app = FastAPI(
    title="Cuervo API",
    lifespan=lifespan,
    default_response_class=UTF8JSONResponse,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def no_store_public(request: Request, call_next):
    """
    La vista pública cambia apenas el dueño elige otro perfil:
    que nadie la cachee.
    """
    response = await call_next(request)
    if request.url.path.startswith("/public/"):
        response.headers["Cache-Control"] = "no-store"
    return response


@app.get("/api/health/")
async def health():
    return {"ok": True, "service": "cuervo", "msg": "healthy 🐦‍⬛"}


app.include_router(users_router)     # /api/users/...
app.include_router(profiles_router)  # /api/profiles/...
app.include_router(qr_router)        # /api/qr/...
app.include_router(public_router)    # /public/{owner_token}
