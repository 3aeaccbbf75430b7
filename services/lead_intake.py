from collections import deque
from typing import Deque, Optional

import structlog

from config.settings import LandingConfig
from models.landing_model import Lead

logger = structlog.get_logger(__name__)


class LeadIntake:
    """Local stand-in for the external intake system.

    Leads are logged; the log line is the record. Only the most recent
    ``buffer_size`` leads are kept in memory for inspection. The follow-up
    email with dashboard access is sent by the intake system, not here.
    """

    def __init__(self, buffer_size: Optional[int] = None) -> None:
        self.captured: Deque[Lead] = deque(
            maxlen=buffer_size or LandingConfig.INTAKE_BUFFER_SIZE
        )

    def submit(self, lead: Lead) -> None:
        self.captured.append(lead)
        logger.info(
            "lead_captured",
            place=lead.place,
            email=lead.email,
            categories=lead.categories,
        )

    def last_captured(self) -> Optional[Lead]:
        return self.captured[-1] if self.captured else None
