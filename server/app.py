"""FastAPI application for authoring and previewing journeys."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv()  # load environment variables before the modules below read them

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from server.draft_routes import router as draft_router
from server.journey_db import JOURNEY_DB_PATH
from server.journey_routes import router as journey_router
from server.workspace import get_workspace

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the journey catalog on startup."""
    get_workspace()
    logger.info("Journey catalog at %s", JOURNEY_DB_PATH)
    yield


app = FastAPI(
    title="Journey Graph API",
    description="API server for authoring journey graphs and previewing their layout",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routes
app.include_router(journey_router, prefix="/api")
app.include_router(draft_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "journey_db": str(JOURNEY_DB_PATH),
        "endpoints": {
            "journeys": "/api/journeys",
            "draft": "/api/draft",
            "preview": "/api/draft/preview",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
