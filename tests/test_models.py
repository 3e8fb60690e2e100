"""Tests for heating schedule models."""

from __future__ import annotations

import pytest

from pyrikafirenet.exceptions import InvalidParameterError
from pyrikafirenet.models import DailySchedule, HeatingSchedule, HeatPeriod, HeatTime, OperatingMode, StatusDetail


class TestHeatTime:
    """Test HeatTime validation."""

    def test_defaults_to_midnight(self) -> None:
        """Test the default time."""
        assert HeatTime() == HeatTime(0, 0)

    @pytest.mark.parametrize(("hours", "minutes"), [(0, 0), (23, 59), (12, 30)])
    def test_valid(self, hours: int, minutes: int) -> None:
        """Test times within range."""
        time = HeatTime(hours, minutes)
        assert (time.hours, time.minutes) == (hours, minutes)

    @pytest.mark.parametrize(
        ("hours", "minutes", "parameter"),
        [(24, 0, "hours"), (-1, 0, "hours"), (10, 60, "minutes"), (10, -1, "minutes")],
    )
    def test_out_of_range(self, hours: int, minutes: int, parameter: str) -> None:
        """Test times out of range are refused."""
        with pytest.raises(InvalidParameterError) as exc_info:
            HeatTime(hours, minutes)
        assert exc_info.value.parameter_name == parameter

    def test_ordering(self) -> None:
        """Test times compare chronologically."""
        assert HeatTime(6, 30) < HeatTime(9, 0) < HeatTime(9, 1)


class TestHeatPeriod:
    """Test HeatPeriod validation."""

    def test_empty(self) -> None:
        """Test the default period is the empty period."""
        assert HeatPeriod().is_empty
        assert not HeatPeriod.of(6, 30, 9, 0).is_empty

    @pytest.mark.parametrize(
        ("begin", "end"),
        [((22, 0), (6, 0)), ((9, 0), (9, 0)), ((9, 1), (9, 0))],
    )
    def test_crossing_midnight_refused(self, begin: tuple[int, int], end: tuple[int, int]) -> None:
        """Test a period must end after it begins, the empty period excepted."""
        with pytest.raises(InvalidParameterError, match="can't overlap 2 days"):
            HeatPeriod.of(*begin, *end)

    def test_invalid_time(self) -> None:
        """Test an invalid boundary time is refused."""
        with pytest.raises(InvalidParameterError):
            HeatPeriod.of(25, 0, 26, 0)


class TestSchedules:
    """Test DailySchedule and HeatingSchedule builders."""

    def test_single(self) -> None:
        """Test a single-period day leaves the second period empty."""
        day = DailySchedule.single(HeatPeriod.of(10, 15, 23, 0))
        assert day.first == HeatPeriod.of(10, 15, 23, 0)
        assert day.second.is_empty

    def test_all_same(self) -> None:
        """Test the same day schedule is used all week."""
        day = DailySchedule.dual(HeatPeriod.of(6, 30, 9, 0), HeatPeriod.of(18, 15, 22, 45))
        schedule = HeatingSchedule.all_same(day)
        assert {
            schedule.monday,
            schedule.tuesday,
            schedule.wednesday,
            schedule.thursday,
            schedule.friday,
            schedule.saturday,
            schedule.sunday,
        } == {day}

    def test_week_vs_end_days(self) -> None:
        """Test weekdays and weekend days get their own schedule."""
        week_day = DailySchedule.dual(HeatPeriod.of(7, 30, 10, 0), HeatPeriod.of(18, 15, 22, 45))
        week_end = DailySchedule.single(HeatPeriod.of(10, 15, 23, 0))

        schedule = HeatingSchedule.week_vs_end_days(week_day, week_end)

        assert schedule.monday == schedule.tuesday == schedule.wednesday == week_day
        assert schedule.thursday == schedule.friday == week_day
        assert schedule.saturday == schedule.sunday == week_end


def test_operating_mode_values() -> None:
    """Test operating mode codes."""
    assert [mode.value for mode in OperatingMode] == [0, 1, 2, 3]


def test_status_detail_labels() -> None:
    """Test status labels are plain strings."""
    assert StatusDetail.HEATING_UP == "HeatingUp"
    assert str(StatusDetail.SPLIT_LOG_CHECK) == "SplitLogCheck"
