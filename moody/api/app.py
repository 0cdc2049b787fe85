"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

# Configure logging in the worker process (visible with uvicorn --reload)
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from moody.api.state import AppState, get_state
from moody.config import MEDIA_DIR, ensure_data_dir

# Import routes after state to avoid circular imports
from moody.api.routes import songs

__all__ = ["app", "AppState", "get_state"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_data_dir()
    state = get_state()
    ping = getattr(state.catalog, "ping", None)
    if ping is not None:
        ping()
    logger.info(
        "Catalog: %s, media: %s",
        type(state.catalog).__name__,
        type(state.media).__name__,
    )

    yield

    close = getattr(state.catalog, "close", None)
    if close is not None:
        close()


app = FastAPI(
    title="Moody Player API",
    description="Song uploads and mood-filtered song lookup",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(songs.router, prefix="/songs", tags=["songs"])
# Audio kept by LocalMediaStore; unused (empty) when ImageKit is configured
app.mount("/media", StaticFiles(directory=MEDIA_DIR, check_dir=False), name="media")
