from fastapi import APIRouter, Body, Depends, Request

from config.categories import FOOD_CATEGORIES
from dependencies.landing_dependencies import get_landing_session, get_session_store
from models.landing_model import (
    CategoriesUpdateRequest,
    FieldUpdateRequest,
    LatLng,
    SearchRequest,
    Suggestion,
)
from services.landing_session import LandingSession, LandingSessionStore
from utils.response_helpers import success_response

router = APIRouter(prefix="/api/landing", tags=["landing"])


def _state(session: LandingSession, scroll=None):
    return success_response(session.snapshot(scroll).model_dump(mode="json"))


@router.get("/health")
async def health(request: Request):
    return success_response(
        {"status": "ok", "maps_available": request.app.state.maps_client.is_available}
    )


@router.get("/categories")
async def list_categories():
    return success_response(list(FOOD_CATEGORIES))


@router.post("/sessions")
async def create_session(store: LandingSessionStore = Depends(get_session_store)):
    session = store.create()
    return success_response(session.snapshot().model_dump(mode="json"), status_code=201)


@router.get("/sessions/{session_id}")
async def get_session(session: LandingSession = Depends(get_landing_session)):
    return _state(session)


# ---- place picker ----

@router.post("/sessions/{session_id}/search")
async def search_places(
    payload: SearchRequest = Body(...),
    session: LandingSession = Depends(get_landing_session),
):
    await session.picker.search(payload.query)
    return _state(session)


@router.post("/sessions/{session_id}/select")
async def select_suggestion(
    payload: Suggestion = Body(...),
    session: LandingSession = Depends(get_landing_session),
):
    await session.picker.select_suggestion(payload)
    return _state(session)


@router.post("/sessions/{session_id}/click")
async def click_map(
    payload: LatLng = Body(...),
    session: LandingSession = Depends(get_landing_session),
):
    await session.picker.click_map(payload)
    return _state(session)


@router.post("/sessions/{session_id}/explore")
async def confirm_explore(session: LandingSession = Depends(get_landing_session)):
    scroll = session.picker.confirm_explore()
    return _state(session, scroll)


@router.post("/sessions/{session_id}/info-window/close")
async def close_info_window(session: LandingSession = Depends(get_landing_session)):
    session.picker.close_info_window()
    return _state(session)


# ---- lead form ----

@router.put("/sessions/{session_id}/form/place")
async def set_place(
    payload: FieldUpdateRequest = Body(...),
    session: LandingSession = Depends(get_landing_session),
):
    session.form.set_place(payload.value)
    return _state(session)


@router.put("/sessions/{session_id}/form/email")
async def set_email(
    payload: FieldUpdateRequest = Body(...),
    session: LandingSession = Depends(get_landing_session),
):
    session.form.set_email(payload.value)
    return _state(session)


@router.post("/sessions/{session_id}/form/categories/{name}/toggle")
async def toggle_category(
    name: str,
    session: LandingSession = Depends(get_landing_session),
):
    session.form.toggle_category(name)
    return _state(session)


@router.put("/sessions/{session_id}/form/categories")
async def set_all_categories(
    payload: CategoriesUpdateRequest = Body(...),
    session: LandingSession = Depends(get_landing_session),
):
    session.form.set_all_categories(payload.value)
    return _state(session)


@router.post("/sessions/{session_id}/form/submit")
async def submit_form(session: LandingSession = Depends(get_landing_session)):
    session.form.submit()
    return _state(session)


@router.post("/sessions/{session_id}/form/dismiss")
async def dismiss_confirmation(session: LandingSession = Depends(get_landing_session)):
    scroll = session.form.dismiss_confirmation()
    return _state(session, scroll)
