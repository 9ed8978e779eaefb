# run_dev.py
import os
import sys
import asyncio

# Proactor también aquí (por si corres este script directo)
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

from dotenv import load_dotenv

# Carga .env si existe (pydantic-settings también lo lee, pero uvicorn no)
load_dotenv(".env")


def main():
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload_flag = os.getenv("RELOAD", "1").strip() in ("1", "true", "True", "yes", "on")

    print(f"🔗 API local: http://127.0.0.1:{port}")
    print(f"🌀 reload={'ON' if reload_flag else 'OFF'}")

    uvicorn.run(
        os.getenv("APP_MODULE", "cuervo.main:app"),
        host=host,
        port=port,
        reload=reload_flag,
        reload_dirs=["cuervo"],
        log_level=os.getenv("LOG_LEVEL", "info"),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
