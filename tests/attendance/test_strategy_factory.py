from datetime import datetime

from src.qr_attendance.qr_attendance.attendance.factory import RedemptionStrategyFactory
from src.qr_attendance.qr_attendance.attendance.strategies.late_strategy import LateStrategy
from src.qr_attendance.qr_attendance.attendance.strategies.present_strategy import PresentStrategy
from src.qr_attendance.qr_attendance.core.enums import AttendanceStatus


def test_factory_without_late_rule_is_always_present():
    started = datetime(2025, 1, 1, 9, 0, 0)
    now = datetime(2025, 1, 1, 11, 0, 0)

    strategy = RedemptionStrategyFactory().for_redemption(now=now, started_at=started)

    assert isinstance(strategy, PresentStrategy)
    assert strategy.decide(now=now, started_at=started).status == AttendanceStatus.PRESENT


def test_factory_present_within_threshold():
    started = datetime(2025, 1, 1, 9, 0, 0)
    now = datetime(2025, 1, 1, 9, 10, 0)

    strategy = RedemptionStrategyFactory(late_after_minutes=10).for_redemption(now=now, started_at=started)

    assert isinstance(strategy, PresentStrategy)


def test_factory_late_after_threshold():
    started = datetime(2025, 1, 1, 9, 0, 0)
    now = datetime(2025, 1, 1, 9, 10, 1)

    strategy = RedemptionStrategyFactory(late_after_minutes=10).for_redemption(now=now, started_at=started)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide(now=now, started_at=started).status == AttendanceStatus.LATE


def test_factory_without_start_time_is_present():
    now = datetime(2025, 1, 1, 9, 30, 0)

    strategy = RedemptionStrategyFactory(late_after_minutes=5).for_redemption(now=now, started_at=None)

    assert isinstance(strategy, PresentStrategy)
