# cuervo/__init__.py
"""
Paquete `cuervo`: perfiles de identidad + contacto de emergencia,
con un perfil activo (chosen) expuesto por link público / QR.

En Windows forzamos el Proactor aquí para que cualquier `import cuervo...`
(uvicorn con --reload, alembic, tests) use el mismo event loop.
"""

import sys
import asyncio

if sys.platform.startswith("win"):
    try:
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())
    except AttributeError:
        pass
