"""Parsing utilities for RIKA Firenet portal responses.

This module converts the summary HTML page and the status JSON document into
data models, and decodes the heating schedule stored in the stove controls.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from bs4 import BeautifulSoup

from pyrikafirenet.const import (
    EMPTY_HEAT_PERIOD,
    SCHEDULE_DAYS,
    STOVE_LINK_PREFIX,
    STOVE_LIST_SELECTOR,
)
from pyrikafirenet.exceptions import InvalidParameterError
from pyrikafirenet.models import (
    DailySchedule,
    HeatingSchedule,
    HeatPeriod,
    HeatTime,
    StoveControls,
    StoveSensors,
    StoveStatus,
)


__all__ = [
    "extract_stove_ids",
    "parse_daily_schedule",
    "parse_heat_period",
    "parse_heating_schedule",
    "parse_stove_controls",
    "parse_stove_sensors",
    "parse_stove_status",
]

_LOGGER = logging.getLogger(__name__)

HEAT_PERIOD_LENGTH = len(EMPTY_HEAT_PERIOD)


def extract_stove_ids(html: str) -> list[str]:
    """Extract stove IDs from the summary page.

    The summary page lists stoves as links to `/web/stove/{id}` inside
    `ul#stoveList`. Other links of the list (e.g. the edit buttons) are ignored.

    Args:
        html: Summary page HTML.

    Returns:
        Stove IDs in document order.

    Example:
        >>> extract_stove_ids('<ul id="stoveList"><li><a href="/web/stove/12345">Stove</a></li></ul>')
        ['12345']
    """
    soup = BeautifulSoup(html, "html.parser")

    stove_ids: list[str] = []
    for link in soup.select(STOVE_LIST_SELECTOR):
        href = link.get("href")
        if isinstance(href, str) and href.startswith(STOVE_LINK_PREFIX):
            stove_ids.append(href.removeprefix(STOVE_LINK_PREFIX))

    return stove_ids


def parse_stove_controls(data: dict[str, Any]) -> StoveControls:
    """Parse stove controls from the `controls` object of a status response.

    Args:
        data: Raw controls data in format {"onOff": bool, "operatingMode": int, ...}.

    Returns:
        StoveControls instance; controls missing from the response are None.
    """
    values = {
        control.name: data.get(control.metadata["wire"])
        for control in dataclasses.fields(StoveControls)
    }
    return StoveControls(**values)


def parse_stove_sensors(data: dict[str, Any]) -> StoveSensors:
    """Parse stove sensors from the `sensors` object of a status response.

    Args:
        data: Raw sensors data in format {"inputRoomTemperature": str, ...}.

    Returns:
        StoveSensors instance keeping every raw value.
    """
    return StoveSensors(
        input_room_temperature=data.get("inputRoomTemperature"),
        input_flame_temperature=data.get("inputFlameTemperature"),
        input_bake_temperature=data.get("inputBakeTemperature"),
        status_main_state=data.get("statusMainState"),
        status_sub_state=data.get("statusSubState"),
        status_frost_started=bool(data.get("statusFrostStarted", False)),
        status_error=data.get("statusError"),
        status_sub_error=data.get("statusSubError"),
        status_warning=data.get("statusWarning"),
        status_wifi_strength=data.get("statusWifiStrength"),
        raw=dict(data),
    )


def parse_stove_status(data: dict[str, Any]) -> StoveStatus:
    """Parse a stove status response.

    Args:
        data: Raw status data from /api/client/{stoveId}/status in format:
              {"stoveID": str, "name": str, "lastConfirmedRevision": int,
               "controls": {...}, "sensors": {...}, "stoveFeatures": {...}, ...}

    Returns:
        StoveStatus instance.
    """
    stove_id = str(data.get("stoveID", ""))

    return StoveStatus(
        stove_id=stove_id,
        name=data.get("name") or stove_id,
        last_confirmed_revision=int(data.get("lastConfirmedRevision", 0)),
        controls=parse_stove_controls(data.get("controls", {})),
        sensors=parse_stove_sensors(data.get("sensors", {})),
        oem=data.get("oem"),
        stove_type=data.get("stoveType"),
        last_seen_minutes=data.get("lastSeenMinutes"),
        features=data.get("stoveFeatures", {}),
        raw_data=data,
    )


def parse_heat_period(text: str) -> HeatPeriod:
    """Parse a heating period in `HHMMhhmm` format.

    Args:
        text: Eight digits, begin time then end time (e.g., "06300900").

    Returns:
        HeatPeriod instance; "00000000" gives the empty period.

    Raises:
        ValueError: If the text is not eight digits.
        InvalidParameterError: If a time is out of range or the period crosses midnight.
    """
    if len(text) != HEAT_PERIOD_LENGTH or not text.isdigit():
        msg = f"Invalid heat period {text!r}: expected HHMMhhmm"
        raise ValueError(msg)

    return HeatPeriod(
        begin=HeatTime(int(text[0:2]), int(text[2:4])),
        end=HeatTime(int(text[4:6]), int(text[6:8])),
    )


def _parse_heat_period_or_empty(text: str | None) -> HeatPeriod:
    if text is None:
        return HeatPeriod()
    try:
        return parse_heat_period(text)
    except (ValueError, InvalidParameterError) as exc:
        _LOGGER.debug("Ignoring unreadable heat period %r: %s", text, exc)
        return HeatPeriod()


def parse_daily_schedule(first: str | None, second: str | None) -> DailySchedule:
    """Parse the two heating periods of a day.

    Missing or unreadable periods fall back to the empty period rather than
    failing the whole status.

    Args:
        first: First period, `HHMMhhmm`.
        second: Second period, `HHMMhhmm`.

    Returns:
        DailySchedule instance.
    """
    return DailySchedule(
        first=_parse_heat_period_or_empty(first),
        second=_parse_heat_period_or_empty(second),
    )


def parse_heating_schedule(controls: StoveControls) -> HeatingSchedule:
    """Parse the weekly heating schedule stored in the stove controls.

    Args:
        controls: Stove controls holding the heating_time_{day}{1,2} values.

    Returns:
        HeatingSchedule instance.
    """
    days = {
        day: parse_daily_schedule(
            getattr(controls, f"heating_time_{suffix}1"),
            getattr(controls, f"heating_time_{suffix}2"),
        )
        for day, suffix in SCHEDULE_DAYS
    }
    return HeatingSchedule(**days)
