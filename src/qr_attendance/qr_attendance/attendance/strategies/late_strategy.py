from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import RedemptionStrategy, StatusDecision


class LateStrategy(RedemptionStrategy):
    """Redeemed after the late threshold."""

    def decide(self, *, now: datetime, started_at: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
