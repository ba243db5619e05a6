"""Cat Monitor FastAPI application entry point."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catmonitor import config
from catmonitor.observability import initialize as initialize_observability, shutdown as shutdown_observability
from catmonitor.routers.dashboard import dashboard_router
from catmonitor.services.dashboard import dashboard_service
from catmonitor.watcher import source_watcher

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("catmonitor")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    logger.info("Cat Monitor starting up")
    initialize_observability(app)

    for source in dashboard_service.sources:
        if not source.path.exists():
            logger.warning(f"{source.name} source {source.path} does not exist yet")

    if config.WATCH_ENABLED:
        await source_watcher.start(dashboard_service)

    yield

    logger.info("Cat Monitor shutting down")
    await source_watcher.stop()
    shutdown_observability(app)


app = FastAPI(
    title="Cat Monitor API",
    description="Build log and project status dashboard backend",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS — allow the frontend dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        config.FRONTEND_ORIGIN,
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(dashboard_router)


@app.get("/api/health")
def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "watcher": "running" if source_watcher.is_running else "stopped",
        "sources": {
            source.name: "present" if source.path.is_file() else "missing"
            for source in dashboard_service.sources
        },
    }


def run() -> None:
    uvicorn.run("catmonitor.main:app", host=config.HOST, port=config.PORT)
