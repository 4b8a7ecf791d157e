from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import RedemptionStrategy, StatusDecision


class PresentStrategy(RedemptionStrategy):
    """Redeemed while the session is open."""

    def decide(self, *, now: datetime, started_at: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
