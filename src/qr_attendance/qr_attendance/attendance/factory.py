from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from .strategies.base import RedemptionStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class RedemptionStrategyFactory:
    """Factory Pattern: choose the status strategy for a redemption.

    `late_after_minutes=None` turns the late rule off; every valid
    redemption is then recorded as present.
    """

    late_after_minutes: Optional[int] = None

    def for_redemption(self, *, now: datetime, started_at: Optional[datetime]) -> RedemptionStrategy:
        if self.late_after_minutes is None or started_at is None:
            return PresentStrategy()
        if now <= started_at + timedelta(minutes=self.late_after_minutes):
            return PresentStrategy()
        return LateStrategy()
