"""Serialization of stove controls for the controls endpoint.

Design Philosophy:
    - Stateless functions (no classes, no state)
    - Wire names come from the `wire` metadata of StoveControls fields
    - The revision token is always the one of the snapshot the update is based on
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from pyrikafirenet.const import SCHEDULE_DAYS


if TYPE_CHECKING:
    from pyrikafirenet.models import DailySchedule, HeatingSchedule, HeatPeriod, StoveControls


__all__ = [
    "serialize_controls",
    "serialize_daily_schedule",
    "serialize_heat_period",
    "serialize_heating_schedule",
]


def serialize_heat_period(period: HeatPeriod) -> str:
    """Serialize a heating period to its `HHMMhhmm` wire format.

    Example:
        >>> serialize_heat_period(HeatPeriod.of(6, 30, 9, 0))
        '06300900'
    """
    return (
        f"{period.begin.hours:02d}{period.begin.minutes:02d}"
        f"{period.end.hours:02d}{period.end.minutes:02d}"
    )


def serialize_daily_schedule(day: DailySchedule) -> tuple[str, str]:
    """Serialize both heating periods of a day."""
    return serialize_heat_period(day.first), serialize_heat_period(day.second)


def serialize_heating_schedule(schedule: HeatingSchedule) -> dict[str, str]:
    """Serialize a weekly schedule to StoveControls field updates.

    Args:
        schedule: Weekly heating schedule.

    Returns:
        Mapping of StoveControls attribute names (heating_time_mon1, ...) to
        `HHMMhhmm` values, suitable for dataclasses.replace().
    """
    updates: dict[str, str] = {}
    for day, suffix in SCHEDULE_DAYS:
        first, second = serialize_daily_schedule(getattr(schedule, day))
        updates[f"heating_time_{suffix}1"] = first
        updates[f"heating_time_{suffix}2"] = second
    return updates


def _serialize_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def serialize_controls(controls: StoveControls, revision: int) -> dict[str, str]:
    """Serialize stove controls to the form body of the controls endpoint.

    Args:
        controls: Controls to send. None values are left out.
        revision: Revision token of the status snapshot the update is based on.

    Returns:
        Form fields keyed by wire name, e.g.
        {"revision": "1572181181", "onOff": "true", "operatingMode": "0", ...}.
    """
    form: dict[str, str] = {}
    for control in dataclasses.fields(controls):
        value = getattr(controls, control.name)
        if value is not None:
            form[control.metadata["wire"]] = _serialize_value(value)

    form["revision"] = str(revision)
    return form
