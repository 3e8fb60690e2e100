"""Stove status classification.

The portal reports the stove state as two integer codes (main state and sub
state). `classify_status` turns them into a `StatusDetail` label, the same way
the portal's web page does.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pyrikafirenet.const import BAKE_TEMPERATURE_TOLERANCE, BAKE_TEMPERATURE_UNSET
from pyrikafirenet.models import OperatingMode, StatusDetail


if TYPE_CHECKING:
    from pyrikafirenet.models import StoveStatus


__all__ = ["classify_status", "is_bake_mode"]

SPLIT_LOG_CHECK_STATES = frozenset({11, 13, 14, 16, 17, 50})
SPLIT_LOG_MODE_STATES = frozenset({20, 21})


def is_bake_mode(status: StoveStatus) -> bool:
    """Check if the stove is in bake mode with a bake temperature set.

    Bake mode is active when the operating mode is BAKE and neither the
    commanded nor the measured bake temperature is the "not set" sentinel.
    """
    return (
        status.controls.operating_mode == OperatingMode.BAKE
        and status.controls.bake_temperature != BAKE_TEMPERATURE_UNSET
        and status.sensors.input_bake_temperature != BAKE_TEMPERATURE_UNSET
    )


def _bake_temperature_delta(status: StoveStatus) -> float | None:
    try:
        measured = float(status.sensors.input_bake_temperature or "")
        commanded = float(status.controls.bake_temperature or "")
    except ValueError:
        return None
    return abs(measured - commanded)


def classify_status(status: StoveStatus) -> StatusDetail:
    """Derive the human readable status of a stove.

    Frost protection wins over everything else. Then the main state code picks
    the label, with the sub state (or the bake temperature delta while running)
    breaking ties.

    Args:
        status: Stove status snapshot.

    Returns:
        StatusDetail label. Unknown codes give StatusDetail.UNKNOWN.

    Example:
        >>> status.sensors.status_main_state, status.sensors.status_sub_state
        (1, 1)
        >>> classify_status(status)
        <StatusDetail.STANDBY: 'Standby'>
    """
    sensors = status.sensors
    main_state = sensors.status_main_state
    sub_state = sensors.status_sub_state

    if sensors.status_frost_started:
        return StatusDetail.FROST_PROTECTION

    if main_state == 1:
        if sub_state == 0:
            return StatusDetail.OFF
        if sub_state in (1, 3):
            return StatusDetail.STANDBY
        if sub_state == 2:
            return StatusDetail.EXTERNAL_REQUEST
        return StatusDetail.UNKNOWN

    if main_state == 2:
        return StatusDetail.IGNITION

    if main_state == 3:
        return StatusDetail.STARTUP

    if main_state == 4:
        if not is_bake_mode(status):
            return StatusDetail.RUNNING
        # An unreadable temperature counts as "not there yet"
        delta = _bake_temperature_delta(status)
        if delta is not None and delta < BAKE_TEMPERATURE_TOLERANCE:
            return StatusDetail.BAKING
        return StatusDetail.HEATING_UP

    if main_state == 5:
        if sub_state in (3, 4):
            return StatusDetail.DEEP_CLEANING
        return StatusDetail.CLEANING

    if main_state == 6:
        return StatusDetail.BURN_OFF

    if main_state in SPLIT_LOG_CHECK_STATES:
        return StatusDetail.SPLIT_LOG_CHECK

    if main_state in SPLIT_LOG_MODE_STATES:
        return StatusDetail.SPLIT_LOG_MODE

    return StatusDetail.UNKNOWN
