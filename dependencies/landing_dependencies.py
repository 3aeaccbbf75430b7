from fastapi import Depends, Request

from services.landing_session import LandingSession, LandingSessionStore


def get_session_store(request: Request) -> LandingSessionStore:
    return request.app.state.session_store


def get_landing_session(
    session_id: str,
    store: LandingSessionStore = Depends(get_session_store),
) -> LandingSession:
    """Resolve the path's session id; unknown or expired ids raise 404."""
    return store.get(session_id)
