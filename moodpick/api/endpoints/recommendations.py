from fastapi import APIRouter, Depends

from moodpick.models.filters import ContentKind, FilterSet, FilterUpdate
from moodpick.models.results import PublishedState
from moodpick.services.session import PickerSession, get_session

router = APIRouter(tags=["recommendations"])


@router.get("/state", response_model=PublishedState)
async def get_state(session: PickerSession = Depends(get_session)):
    return session.state()


@router.put("/filters", response_model=FilterSet)
async def update_filters(update: FilterUpdate, session: PickerSession = Depends(get_session)):
    return session.update_filters(update)


@router.put("/content-kind/{kind}", response_model=FilterSet)
async def set_content_kind(kind: ContentKind, session: PickerSession = Depends(get_session)):
    return session.set_content_kind(kind)


@router.post("/recommendation", response_model=PublishedState)
async def get_recommendation(session: PickerSession = Depends(get_session)):
    """
    Pick a new suggestion for the current filters.

    Failures are reported in the returned state's ``error`` and ``error_kind``.
    """
    return await session.get_recommendation()


@router.post("/reset", response_model=PublishedState)
async def reset_all(session: PickerSession = Depends(get_session)):
    return await session.reset_all()
