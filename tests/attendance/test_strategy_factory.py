from datetime import time

from src.hr_attendance.hr_attendance.attendance.factory import AttendanceStrategyFactory
from src.hr_attendance.hr_attendance.attendance.strategies.half_day_strategy import HalfDayStrategy
from src.hr_attendance.hr_attendance.attendance.strategies.late_strategy import LateStrategy
from src.hr_attendance.hr_attendance.attendance.strategies.normal_strategy import NormalStrategy
from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus
from src.hr_attendance.hr_attendance.shifts.model import WorkSchedule

SCHEDULE = WorkSchedule(start_time=time(9, 0), end_time=time(17, 0), late_threshold_minutes=15)


def test_factory_defaults_ignore_lateness():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(check_in=time(11, 30), schedule=SCHEDULE)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkin(check_in=time(11, 30), schedule=SCHEDULE).status == AttendanceStatus.PRESENT


def test_factory_checkin_on_time_within_threshold():
    factory = AttendanceStrategyFactory(apply_late_rule=True)
    strategy = factory.for_checkin(check_in=time(9, 15), schedule=SCHEDULE)

    assert isinstance(strategy, NormalStrategy)


def test_factory_checkin_late_after_threshold():
    factory = AttendanceStrategyFactory(apply_late_rule=True)
    strategy = factory.for_checkin(check_in=time(9, 16), schedule=SCHEDULE)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(check_in=time(9, 16), schedule=SCHEDULE).status == AttendanceStatus.LATE


def test_factory_late_rule_needs_a_schedule():
    factory = AttendanceStrategyFactory(apply_late_rule=True)

    assert isinstance(factory.for_checkin(check_in=time(13, 0), schedule=None), NormalStrategy)


def test_factory_checkout_half_day_below_threshold():
    factory = AttendanceStrategyFactory(apply_half_day_rule=True, half_day_hours=4.0)
    strategy = factory.for_checkout(working_hours=3.5, current=AttendanceStatus.PRESENT)

    assert isinstance(strategy, HalfDayStrategy)
    decision = strategy.decide_checkout(working_hours=3.5, current=AttendanceStatus.PRESENT)
    assert decision.status == AttendanceStatus.HALF_DAY


def test_factory_checkout_keeps_status_otherwise():
    factory = AttendanceStrategyFactory(apply_half_day_rule=True, half_day_hours=4.0)
    strategy = factory.for_checkout(working_hours=8.0, current=AttendanceStatus.LATE)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkout(working_hours=8.0, current=AttendanceStatus.LATE).status == AttendanceStatus.LATE


def test_factory_negative_hours_are_not_half_day():
    factory = AttendanceStrategyFactory(apply_half_day_rule=True)

    assert isinstance(factory.for_checkout(working_hours=-16.0, current=AttendanceStatus.PRESENT), NormalStrategy)
