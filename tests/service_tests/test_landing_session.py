from datetime import datetime, timedelta, timezone

import pytest

from exceptions.custom_exceptions import SessionNotFoundException
from services.landing_session import LandingSessionStore


@pytest.fixture
def store(maps_client, intake) -> LandingSessionStore:
    return LandingSessionStore(maps_client, intake, timeout=timedelta(minutes=30), debounce_seconds=0)


def test_create_and_get(store: LandingSessionStore):
    session = store.create()

    assert store.get(session.session_id) is session
    assert len(store) == 1


def test_unknown_session_raises(store: LandingSessionStore):
    with pytest.raises(SessionNotFoundException):
        store.get("does-not-exist")


def test_expired_sessions_are_swept(store: LandingSessionStore):
    stale = store.create()
    fresh = store.create()
    stale.last_activity = datetime.now(timezone.utc) - timedelta(minutes=31)

    assert store.remove_expired() == 1
    assert len(store) == 1
    assert store.get(fresh.session_id) is fresh
    with pytest.raises(SessionNotFoundException):
        store.get(stale.session_id)


def test_expired_session_not_served_before_sweep(store: LandingSessionStore):
    session = store.create()
    session.last_activity = datetime.now(timezone.utc) - timedelta(hours=1)

    with pytest.raises(SessionNotFoundException):
        store.get(session.session_id)
    assert len(store) == 0


@pytest.mark.asyncio
async def test_picker_selection_flows_into_form(store: LandingSessionStore, red_square_suggestion):
    session = store.create()

    await session.picker.select_suggestion(red_square_suggestion)
    session.picker.confirm_explore()

    state = session.snapshot()
    assert state.picker.selected_place.address == "Red Square, Moscow, Russia"
    assert state.form.draft.place == "Red Square, Moscow, Russia"


def test_sessions_do_not_share_state(store: LandingSessionStore):
    first = store.create()
    second = store.create()

    first.form.toggle_category("Бары")

    assert second.form.draft.categories["Бары"] is True
