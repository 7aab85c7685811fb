import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cinema.routes.health import router as health_router
from cinema.db.session import init_engine, get_sessionmaker, get_db
from cinema.routes.intros import router as intros_router
from cinema.routes.user import router as user_router
from cinema.config import TMDB_API_KEY
from cinema.channels.tmdb_client import TMDBClient
from cinema.channels.trailers import TmdbTrailerChannel

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logging.getLogger("cinema.core.selection").setLevel(logging.DEBUG)
# Reduce noise from other modules
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.INFO)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    _initialise_application(app)
    tmdb_client = TMDBClient(TMDB_API_KEY) if TMDB_API_KEY else None
    app.state.tmdb_client = tmdb_client
    app.state.trailer_channel = (
        TmdbTrailerChannel(tmdb_client) if tmdb_client is not None else None
    )
    yield
    app.state.trailer_channel = None
    client = getattr(app.state, "tmdb_client", None)
    if client is not None:
        await client.aclose()
        app.state.tmdb_client = None


app = FastAPI(title="Cinema Mode Intros", version="0.1.0", lifespan=app_lifespan)

app.include_router(health_router, prefix="")
app.include_router(intros_router)
app.include_router(user_router)


def _initialise_application(app: FastAPI) -> None:
    # When tests override get_db we skip touching the real database.
    if get_db in app.dependency_overrides:
        return
    init_engine()
    get_sessionmaker()


def on_startup() -> None:
    _initialise_application(app)
