"""Python client library for RIKA Firenet pellet stoves.

This package provides an async client for the RIKA Firenet web portal, which
lets owners monitor and control their stoves remotely.

The library is organized into layers:
1. **Transport** (pyrikafirenet.transport): Buffered requests/responses and the interceptor chain
2. **Session** (pyrikafirenet.auth): Login/logout and automatic login on session expiry
3. **API Layer** (pyrikafirenet.api): Low-level calls to the stove endpoints
4. **Client Layer** (pyrikafirenet.client): Stove operations with input validation

Example:
    Basic usage:

    ```python
    from pyrikafirenet import RikaFirenetClient, classify_status

    async with RikaFirenetClient(email="user@example.com", password="password") as client:
        stove_ids = await client.list_stoves()

        status = await client.status(stove_ids[0])
        print(f"{status.name}: {classify_status(status)}")

        await client.set_manual_mode(stove_ids[0], heating_power_percent=60)
    ```
"""

from __future__ import annotations

from pyrikafirenet.api import RikaFirenetAPI
from pyrikafirenet.auth import (
    AuthApi,
    Credentials,
    LoginRetryInterceptor,
    is_login_redirection,
    is_session_request,
)
from pyrikafirenet.client import RikaFirenetClient, RikaFirenetClientBuilder
from pyrikafirenet.exceptions import (
    AuthenticationError,
    InvalidParameterError,
    RikaConnectionError,
    RikaFirenetError,
    RikaTimeoutError,
    StoveError,
)
from pyrikafirenet.interceptors import ContentTypeInterceptor
from pyrikafirenet.models import (
    DailySchedule,
    HeatingSchedule,
    HeatPeriod,
    HeatTime,
    OperatingMode,
    StatusDetail,
    StoveControls,
    StoveSensors,
    StoveStatus,
)
from pyrikafirenet.parsers import (
    extract_stove_ids,
    parse_daily_schedule,
    parse_heat_period,
    parse_heating_schedule,
    parse_stove_status,
)
from pyrikafirenet.serializers import (
    serialize_controls,
    serialize_daily_schedule,
    serialize_heat_period,
    serialize_heating_schedule,
)
from pyrikafirenet.status import classify_status, is_bake_mode
from pyrikafirenet.transport import (
    AiohttpTransport,
    ApiRequest,
    ApiResponse,
    Interceptor,
    InterceptorChain,
    RequestHandler,
)


__version__ = "0.1.0"

__all__ = [
    "AiohttpTransport",
    "ApiRequest",
    "ApiResponse",
    "AuthApi",
    "AuthenticationError",
    "ContentTypeInterceptor",
    "Credentials",
    "DailySchedule",
    "HeatPeriod",
    "HeatTime",
    "HeatingSchedule",
    "Interceptor",
    "InterceptorChain",
    "InvalidParameterError",
    "LoginRetryInterceptor",
    "OperatingMode",
    "RequestHandler",
    "RikaConnectionError",
    "RikaFirenetAPI",
    "RikaFirenetClient",
    "RikaFirenetClientBuilder",
    "RikaFirenetError",
    "RikaTimeoutError",
    "StatusDetail",
    "StoveControls",
    "StoveError",
    "StoveSensors",
    "StoveStatus",
    "__version__",
    "classify_status",
    "extract_stove_ids",
    "is_bake_mode",
    "is_login_redirection",
    "is_session_request",
    "parse_daily_schedule",
    "parse_heat_period",
    "parse_heating_schedule",
    "parse_stove_status",
    "serialize_controls",
    "serialize_daily_schedule",
    "serialize_heat_period",
    "serialize_heating_schedule",
]
