from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from moodpick.api.main import api_router
from moodpick.services.session import get_session

from .config import settings
from .version import __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).
    """
    session = get_session()
    await session.startup()
    logger.info(f"moodpick {__version__} ready")
    yield
    try:
        await session.close()
        logger.info("Picker session closed")
    except Exception as exc:
        logger.warning(f"Failed to close picker session: {exc}")


app = FastAPI(
    title="moodpick",
    description="Random movie and anime recommendations by genre, mood and score",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
