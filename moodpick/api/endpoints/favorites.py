from fastapi import APIRouter, Depends, HTTPException

from moodpick.models.results import FavoriteEntry
from moodpick.services.session import PickerSession, get_session

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=list[FavoriteEntry])
async def list_favorites(session: PickerSession = Depends(get_session)):
    return session.list_favorites()


@router.post("/toggle")
async def toggle_favorite(session: PickerSession = Depends(get_session)) -> dict:
    """Add or remove the current suggestion."""
    is_favorite = await session.toggle_favorite()
    if is_favorite is None:
        raise HTTPException(status_code=400, detail="There is no suggestion to favorite yet.")
    return {
        "is_favorite": is_favorite,
        "favorites": [entry.model_dump(mode="json") for entry in session.list_favorites()],
    }


@router.delete("/{entry_id:path}", response_model=list[FavoriteEntry])
async def remove_favorite(entry_id: str, session: PickerSession = Depends(get_session)):
    removed = await session.remove_favorite(entry_id)
    if not removed:
        raise HTTPException(status_code=404, detail=f"Favorite {entry_id} not found")
    return session.list_favorites()
