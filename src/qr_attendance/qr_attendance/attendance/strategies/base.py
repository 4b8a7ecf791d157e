from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class RedemptionStrategy(ABC):
    """Strategy Pattern: decide the status of a redeemed token."""

    @abstractmethod
    def decide(self, *, now: datetime, started_at: datetime) -> StatusDecision:
        raise NotImplementedError
