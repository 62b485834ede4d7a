import os
import sys

import uvicorn
from loguru import logger

from moodpick.core.app import app  # noqa: F401
from moodpick.core.config import settings

if __name__ == "__main__":
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL.upper())
    PORT = os.getenv("PORT", settings.PORT)
    reload = settings.APP_ENV == "development"
    uvicorn.run("moodpick.core.app:app", host=settings.HOST, port=int(PORT), reload=reload)
