from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from devcred.api.router import router
from devcred.core.config import settings
from devcred.core.database import db
from devcred.repositories.base import ensure_all_indexes
from devcred.repositories.grove.repository import GroveUriRepository
from devcred.services.metadata.cache import MetadataCache
from devcred.workers.fetcher import close_http_client


def _configure_logging() -> None:
    """Configure the ``devcred`` logger namespace.

    ``logging.basicConfig`` is a no-op once uvicorn has installed its own
    root handlers, so the application namespace gets its own handler and
    does not propagate.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
    )
    app_log = logging.getLogger("devcred")
    app_log.setLevel(level)
    if not app_log.handlers:
        app_log.addHandler(handler)
    app_log.propagate = False


_configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # ── Startup ──────────────────────────────────────────────────────
    app.state.metadata_cache = MetadataCache(
        capacity=settings.metadata_cache_size,
        ttl=settings.metadata_cache_ttl,
    )
    await db.connect()
    await ensure_all_indexes(db, [GroveUriRepository])
    yield
    # ── Shutdown ─────────────────────────────────────────────────────
    app.state.metadata_cache.clear()
    await close_http_client()
    await db.disconnect()


app = FastAPI(
    title="DevCred API",
    description=(
        "Backend for DevCred: NFT metadata resolution, reputation NFT artwork, "
        "GitHub sign-in and statistics, and the Grove URI registry."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    database = "connected" if await db.ping() else "unavailable"
    return {"status": "ok", "database": database}
