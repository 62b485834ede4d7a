from fastapi import APIRouter

from .endpoints.favorites import router as favorites_router
from .endpoints.health import router as health_router
from .endpoints.options import router as options_router
from .endpoints.recommendations import router as recommendations_router

api_router = APIRouter()


@api_router.get("/")
async def root():
    return {"message": "moodpick API is running"}


api_router.include_router(health_router)
api_router.include_router(options_router)
api_router.include_router(recommendations_router)
api_router.include_router(favorites_router)
