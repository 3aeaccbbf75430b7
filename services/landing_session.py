import asyncio
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import structlog

from adapters.google.maps_client import GoogleMapsClient
from config.settings import LandingConfig
from exceptions.custom_exceptions import SessionNotFoundException
from models.landing_model import LandingSessionState, ScrollDirective
from services.lead_form import LeadForm
from services.lead_intake import LeadIntake
from services.place_picker import PlacePicker

logger = structlog.get_logger(__name__)


class LandingSession:
    """One visitor's page: the picker feeds the selected address to the form."""

    def __init__(
        self,
        session_id: str,
        maps_client: GoogleMapsClient,
        intake: LeadIntake,
        debounce_seconds: Optional[float] = None,
    ) -> None:
        self.session_id = session_id
        self.form = LeadForm(intake)
        self.picker = PlacePicker(
            maps_client,
            on_place_select=self.form.receive_selected_place,
            debounce_seconds=debounce_seconds,
        )
        self.last_activity = datetime.now(timezone.utc)

    def touch(self) -> None:
        self.last_activity = datetime.now(timezone.utc)

    def snapshot(self, scroll: Optional[ScrollDirective] = None) -> LandingSessionState:
        return LandingSessionState(
            session_id=self.session_id,
            picker=self.picker.snapshot(),
            form=self.form.snapshot(),
            scroll=scroll,
        )


class LandingSessionStore:
    """In-memory sessions with an inactivity timeout."""

    def __init__(
        self,
        maps_client: GoogleMapsClient,
        intake: LeadIntake,
        timeout: Optional[timedelta] = None,
        debounce_seconds: Optional[float] = None,
    ) -> None:
        self._maps_client = maps_client
        self._intake = intake
        self._timeout = timeout or timedelta(minutes=LandingConfig.SESSION_TIMEOUT_MINUTES)
        self._debounce_seconds = debounce_seconds
        self._sessions: Dict[str, LandingSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> LandingSession:
        session_id = uuid.uuid4().hex
        session = LandingSession(
            session_id,
            self._maps_client,
            self._intake,
            debounce_seconds=self._debounce_seconds,
        )
        self._sessions[session_id] = session
        logger.info("session_created", session_id=session_id, active=len(self._sessions))
        return session

    def get(self, session_id: str) -> LandingSession:
        session = self._sessions.get(session_id)
        if session is None or self._is_expired(session, datetime.now(timezone.utc)):
            self._sessions.pop(session_id, None)
            raise SessionNotFoundException(session_id)
        session.touch()
        return session

    def remove_expired(self) -> int:
        now = datetime.now(timezone.utc)
        expired = [sid for sid, s in self._sessions.items() if self._is_expired(s, now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("sessions_expired", count=len(expired), active=len(self._sessions))
        return len(expired)

    async def run_sweeper(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            self.remove_expired()

    def _is_expired(self, session: LandingSession, now: datetime) -> bool:
        return now - session.last_activity > self._timeout
