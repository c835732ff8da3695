import logging
import os

from fastapi import FastAPI

from merge2048.api.deps import init_controller_for_app
from merge2048.api.routes import countdowns, router

app = FastAPI(title="merge2048", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=os.environ.get("MERGE2048_LOG_LEVEL", "DEBUG").upper())
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def _startup() -> None:
    init_controller_for_app()


@app.on_event("shutdown")
async def _shutdown() -> None:
    countdowns.stop()


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "merge2048", "version": "0.1.0"}
