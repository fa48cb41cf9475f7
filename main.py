"""
Campus Assistant API - Main Server (FastAPI)
Features:
- Chat pipeline with sentiment tagging and tamper-checked campus data
- Offline cache with connectivity-driven resync
- Points and badges
- Query log insights

Run with `python main.py` or `uvicorn main:app`.
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campus_assistant.api import cache, chat, game, insights
from campus_assistant.extensions import Services, build_services
from campus_assistant.utils import logging_utils

logger = logging_utils.get_logger()

# Suppress noisy external libraries
logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app(services: Optional[Services] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.services = services or build_services()
        status = await app.state.services.cache.start()
        logger.info(
            f"[Startup] Offline cache ready (online={status.is_online}, "
            f"last sync={status.last_sync_time or 'never'})"
        )
        yield

    app = FastAPI(title="Campus Assistant API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat.router, prefix="/api", tags=["chat"])
    app.include_router(insights.router, prefix="/api", tags=["insights"])
    app.include_router(cache.router, prefix="/api", tags=["cache"])
    app.include_router(game.router, prefix="/api/game", tags=["game"])

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "5000")), reload=True)
