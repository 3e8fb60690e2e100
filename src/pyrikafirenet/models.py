"""Data models for RIKA Firenet portal requests and responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import Any

from pyrikafirenet.exceptions import InvalidParameterError


__all__ = [
    "DailySchedule",
    "HeatPeriod",
    "HeatTime",
    "HeatingSchedule",
    "OperatingMode",
    "StatusDetail",
    "StoveControls",
    "StoveSensors",
    "StoveStatus",
]


class OperatingMode(IntEnum):
    """Stove operating mode, as stored in the `operatingMode` control."""

    MANUAL = 0
    AUTO = 1
    COMFORT = 2
    BAKE = 3


class StatusDetail(StrEnum):
    """Human readable stove status derived from the sensor state codes."""

    BAKING = "Baking"
    BURN_OFF = "BurnOff"
    CLEANING = "Cleaning"
    DEEP_CLEANING = "DeepCleaning"
    EXTERNAL_REQUEST = "ExternalRequest"
    FROST_PROTECTION = "FrostProtection"
    HEATING_UP = "HeatingUp"
    IGNITION = "Ignition"
    OFF = "Off"
    RUNNING = "Running"
    SPLIT_LOG_CHECK = "SplitLogCheck"
    SPLIT_LOG_MODE = "SplitLogMode"
    STANDBY = "Standby"
    STARTUP = "Startup"
    UNKNOWN = "Unknown"


def _wire(name: str) -> Any:
    """Declare an optional control field sent as `name` on the wire."""
    return field(default=None, metadata={"wire": name})


@dataclass
class StoveControls:
    """Writable stove controls.

    Every field maps to a form field of the controls endpoint (see the `wire`
    metadata). Fields the portal did not report are None and are not sent back.
    Temperatures are strings because the portal handles them as strings.
    """

    revision: int | None = _wire("revision")
    on_off: bool | None = _wire("onOff")
    operating_mode: int | None = _wire("operatingMode")
    heating_power: int | None = _wire("heatingPower")
    target_temperature: str | None = _wire("targetTemperature")
    set_back_temperature: str | None = _wire("setBackTemperature")
    bake_temperature: str | None = _wire("bakeTemperature")
    room_power_request: int | None = _wire("RoomPowerRequest")
    eco_mode: bool | None = _wire("ecoMode")
    temperature_offset: str | None = _wire("temperatureOffset")
    frost_protection_active: bool | None = _wire("frostProtectionActive")
    frost_protection_temperature: str | None = _wire("frostProtectionTemperature")
    heating_times_active_for_comfort: bool | None = _wire("heatingTimesActiveForComfort")
    heating_time_mon1: str | None = _wire("heatingTimeMon1")
    heating_time_mon2: str | None = _wire("heatingTimeMon2")
    heating_time_tue1: str | None = _wire("heatingTimeTue1")
    heating_time_tue2: str | None = _wire("heatingTimeTue2")
    heating_time_wed1: str | None = _wire("heatingTimeWed1")
    heating_time_wed2: str | None = _wire("heatingTimeWed2")
    heating_time_thu1: str | None = _wire("heatingTimeThu1")
    heating_time_thu2: str | None = _wire("heatingTimeThu2")
    heating_time_fri1: str | None = _wire("heatingTimeFri1")
    heating_time_fri2: str | None = _wire("heatingTimeFri2")
    heating_time_sat1: str | None = _wire("heatingTimeSat1")
    heating_time_sat2: str | None = _wire("heatingTimeSat2")
    heating_time_sun1: str | None = _wire("heatingTimeSun1")
    heating_time_sun2: str | None = _wire("heatingTimeSun2")
    convection_fan1_active: bool | None = _wire("convectionFan1Active")
    convection_fan1_level: int | None = _wire("convectionFan1Level")
    convection_fan1_area: int | None = _wire("convectionFan1Area")
    convection_fan2_active: bool | None = _wire("convectionFan2Active")
    convection_fan2_level: int | None = _wire("convectionFan2Level")
    convection_fan2_area: int | None = _wire("convectionFan2Area")
    debug0: int | None = _wire("debug0")
    debug1: int | None = _wire("debug1")
    debug2: int | None = _wire("debug2")
    debug3: int | None = _wire("debug3")
    debug4: int | None = _wire("debug4")


@dataclass
class StoveSensors:
    """Stove sensor readings.

    Attributes:
        input_room_temperature: Room temperature in °C, as reported ("19.6").
        input_flame_temperature: Flame temperature in °C.
        input_bake_temperature: Bake compartment temperature ("1024" when absent).
        status_main_state: Primary state code of the stove.
        status_sub_state: Secondary state code, meaning depends on the main state.
        status_frost_started: Whether frost protection is currently heating.
        status_error: Error code (0=no error).
        status_sub_error: Error detail code.
        status_warning: Warning code (0=no warning).
        status_wifi_strength: Wifi signal strength in dBm.
        raw: Every sensor value reported by the portal.
    """

    input_room_temperature: str | None = None
    input_flame_temperature: int | None = None
    input_bake_temperature: str | None = None
    status_main_state: int | None = None
    status_sub_state: int | None = None
    status_frost_started: bool = False
    status_error: int | None = None
    status_sub_error: int | None = None
    status_warning: int | None = None
    status_wifi_strength: int | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass
class StoveStatus:
    """Snapshot of a stove returned by the status endpoint.

    Attributes:
        stove_id: Stove identifier.
        name: Stove name chosen by the user.
        oem: Manufacturer brand (e.g., "RIKA").
        stove_type: Stove model.
        last_seen_minutes: Minutes since the stove last contacted the portal.
        last_confirmed_revision: Revision token to echo back on control updates.
        controls: Current control values.
        sensors: Current sensor readings.
        features: Feature flags of the stove model.
        raw_data: Original portal response for debugging.
    """

    stove_id: str
    name: str
    last_confirmed_revision: int
    controls: StoveControls
    sensors: StoveSensors
    oem: str | None = None
    stove_type: str | None = None
    last_seen_minutes: int | None = None
    features: dict[str, Any] = field(default_factory=dict)
    raw_data: dict[str, Any] = field(default_factory=dict)

    @property
    def is_on(self) -> bool:
        """Check if the stove is switched on."""
        return self.controls.on_off or False

    @property
    def has_error(self) -> bool:
        """Check if the stove reports an error."""
        return (self.sensors.status_error or 0) > 0

    @property
    def status_detail(self) -> StatusDetail:
        """Human readable status derived from the sensor state codes."""
        from pyrikafirenet.status import classify_status  # noqa: PLC0415 - Lazy import to avoid circular dependency

        return classify_status(self)


@dataclass(frozen=True, order=True)
class HeatTime:
    """Time of day of a heating period boundary."""

    hours: int = 0
    minutes: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.hours <= 23:
            msg = "hours must be 0 <= hh <= 23"
            raise InvalidParameterError(msg, parameter_name="hours", value=self.hours)
        if not 0 <= self.minutes <= 59:
            msg = "minutes must be 0 <= mm <= 59"
            raise InvalidParameterError(msg, parameter_name="minutes", value=self.minutes)


@dataclass(frozen=True)
class HeatPeriod:
    """A heating period within a single day.

    The default period (00:00 to 00:00) is the empty period, meaning "unused".
    Any other period must end after it begins.
    """

    begin: HeatTime = field(default_factory=HeatTime)
    end: HeatTime = field(default_factory=HeatTime)

    def __post_init__(self) -> None:
        if not self.is_empty and self.begin >= self.end:
            msg = "Heat period can't overlap 2 days"
            raise InvalidParameterError(msg, parameter_name="period", value=(self.begin, self.end))

    @classmethod
    def of(cls, begin_hours: int, begin_minutes: int, end_hours: int, end_minutes: int) -> HeatPeriod:
        """Create a period from hours and minutes.

        Raises:
            InvalidParameterError: If a time is out of range or the period crosses midnight.
        """
        return cls(HeatTime(begin_hours, begin_minutes), HeatTime(end_hours, end_minutes))

    @property
    def is_empty(self) -> bool:
        """Check if this is the unused 00:00-00:00 period."""
        return self.begin == HeatTime() and self.end == HeatTime()


@dataclass(frozen=True)
class DailySchedule:
    """Up to two heating periods for one day."""

    first: HeatPeriod = field(default_factory=HeatPeriod)
    second: HeatPeriod = field(default_factory=HeatPeriod)

    @classmethod
    def single(cls, period: HeatPeriod) -> DailySchedule:
        """Schedule with one heating period."""
        return cls(first=period)

    @classmethod
    def dual(cls, first: HeatPeriod, second: HeatPeriod) -> DailySchedule:
        """Schedule with two heating periods."""
        return cls(first=first, second=second)


@dataclass(frozen=True)
class HeatingSchedule:
    """Weekly heating schedule used by the comfort mode."""

    monday: DailySchedule = field(default_factory=DailySchedule)
    tuesday: DailySchedule = field(default_factory=DailySchedule)
    wednesday: DailySchedule = field(default_factory=DailySchedule)
    thursday: DailySchedule = field(default_factory=DailySchedule)
    friday: DailySchedule = field(default_factory=DailySchedule)
    saturday: DailySchedule = field(default_factory=DailySchedule)
    sunday: DailySchedule = field(default_factory=DailySchedule)

    @classmethod
    def all_same(cls, day: DailySchedule) -> HeatingSchedule:
        """Same schedule every day of the week."""
        return cls(day, day, day, day, day, day, day)

    @classmethod
    def week_vs_end_days(cls, week_day: DailySchedule, week_end: DailySchedule) -> HeatingSchedule:
        """One schedule Monday to Friday, another on Saturday and Sunday."""
        return cls(week_day, week_day, week_day, week_day, week_day, week_end, week_end)
