"""Constants for pyrikafirenet library."""

from __future__ import annotations


# Portal Configuration
DEFAULT_BASE_URL = "https://www.rika-firenet.com"
DEFAULT_TIMEOUT = 30  # seconds
# The portal serves browser clients only
USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:110.0) Gecko/20100101 Firefox/110.0"

# Endpoints
LOGIN_PATH = "/web/login"
LOGOUT_PATH = "/web/logout"
SUMMARY_PATH = "/web/summary"
STOVE_STATUS_PATH = "/api/client/{stove_id}/status"
STOVE_CONTROLS_PATH = "/api/client/{stove_id}/controls"
SESSION_PATHS = frozenset({LOGIN_PATH, LOGOUT_PATH})

# Redirect locations observed when the session cookie is no longer valid.
# "401" is what the portal puts in Location for unauthenticated AJAX calls.
LOGIN_REDIRECT_LOCATIONS = frozenset({"/web/", LOGIN_PATH, "401"})

# Summary page scraping
STOVE_LIST_SELECTOR = "ul#stoveList li a"
STOVE_LINK_PREFIX = "/web/stove/"

# Parameter Validation
HEATING_POWER_MIN = 0
HEATING_POWER_MAX = 99
IDLE_TEMPERATURE_MIN = 12
IDLE_TEMPERATURE_MAX = 20
TARGET_TEMPERATURE_MIN = 14
TARGET_TEMPERATURE_MAX = 28
FROST_PROTECTION_TEMPERATURE_MIN = 4
FROST_PROTECTION_TEMPERATURE_MAX = 10

# Status classification
BAKE_TEMPERATURE_UNSET = "1024"
BAKE_TEMPERATURE_TOLERANCE = 10

# Heating schedule wire format
EMPTY_HEAT_PERIOD = "00000000"
# HeatingSchedule attribute -> suffix of the heatingTime{Day}{1,2} controls
SCHEDULE_DAYS = (
    ("monday", "mon"),
    ("tuesday", "tue"),
    ("wednesday", "wed"),
    ("thursday", "thu"),
    ("friday", "fri"),
    ("saturday", "sat"),
    ("sunday", "sun"),
)
