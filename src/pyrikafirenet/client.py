"""High-level client for RIKA Firenet stoves.

This module wires the transport, the interceptor chains, the session endpoints
and the stove endpoints together, and exposes the stove operations.
"""

from __future__ import annotations

import dataclasses
import logging
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Self

from aiohttp import ClientSession, CookieJar

from pyrikafirenet.api import RikaFirenetAPI
from pyrikafirenet.auth import AuthApi, Credentials, LoginRetryInterceptor
from pyrikafirenet.const import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    FROST_PROTECTION_TEMPERATURE_MAX,
    FROST_PROTECTION_TEMPERATURE_MIN,
    HEATING_POWER_MAX,
    HEATING_POWER_MIN,
    IDLE_TEMPERATURE_MAX,
    IDLE_TEMPERATURE_MIN,
    LOGIN_REDIRECT_LOCATIONS,
    TARGET_TEMPERATURE_MAX,
    TARGET_TEMPERATURE_MIN,
)
from pyrikafirenet.exceptions import InvalidParameterError, StoveError
from pyrikafirenet.interceptors import ContentTypeInterceptor
from pyrikafirenet.models import OperatingMode
from pyrikafirenet.parsers import extract_stove_ids, parse_stove_status
from pyrikafirenet.serializers import serialize_controls, serialize_heating_schedule
from pyrikafirenet.transport import AiohttpTransport, InterceptorChain


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from types import TracebackType

    from pyrikafirenet.models import HeatingSchedule, StoveControls, StoveStatus
    from pyrikafirenet.transport import Interceptor

_LOGGER = logging.getLogger(__name__)


class RikaFirenetClient:
    """Client for the stoves of a RIKA Firenet account.

    Every control operation reads the current stove status, applies a change to
    its controls, and posts all controls back with the revision token of that
    status. Logging in is automatic: the first request that bounces on the
    login page logs in and is sent again.

    Example:
        Basic usage with automatic session management:

        ```python
        from pyrikafirenet import RikaFirenetClient

        async with RikaFirenetClient("user@example.com", "password") as client:
            for stove_id in await client.list_stoves():
                status = await client.status(stove_id)
                print(f"{status.name}: {status.sensors.input_room_temperature}°C")

            await client.set_comfort_mode(stove_id, idle_temperature=17, target_temperature=21)
        ```

        Builder with session injection and an instrumentation interceptor:

        ```python
        client = (
            RikaFirenetClient.builder()
            .credentials("user@example.com", "password")
            .session(session)
            .interceptor(MetricsInterceptor())
            .build()
        )
        ```

    Attributes:
        api: Low-level RikaFirenetAPI instance for the stove endpoints.
        auth_api: Session endpoints (login/logout).
    """

    def __init__(
        self,
        email: str,
        password: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: ClientSession | None = None,
        interceptors: Sequence[Interceptor] = (),
        login_redirect_locations: Iterable[str] = LOGIN_REDIRECT_LOCATIONS,
        coalesce_logins: bool = True,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the RIKA Firenet client.

        Args:
            email: Account email address.
            password: Account password.
            base_url: Base URL of the portal. Defaults to the production portal.
            session: Optional aiohttp ClientSession. It must keep cookies. If not
                provided, one will be created when entering the context manager.
            interceptors: Caller interceptors (metrics, tracing...), outermost first.
                They see every request sent, logins and retries included.
            login_redirect_locations: Location values meaning "back to the login page".
            coalesce_logins: Share one login between concurrent requests that
                detect an expired session.
            timeout: Total timeout in seconds for each request.
        """
        credentials = Credentials(email=email, password=password)
        locations = frozenset(login_redirect_locations)

        self._session = session
        self._owns_session = session is None
        self._transport = AiohttpTransport(session, timeout=timeout)

        login_chain = InterceptorChain(self._transport, [ContentTypeInterceptor(), *interceptors])
        self._auth_api = AuthApi(login_chain, base_url, login_redirect_locations=locations)

        login_retry = LoginRetryInterceptor(
            self._auth_api,
            credentials,
            login_redirect_locations=locations,
            coalesce_logins=coalesce_logins,
        )
        api_chain = InterceptorChain(
            self._transport,
            [ContentTypeInterceptor(), login_retry, *interceptors],
        )
        self._api = RikaFirenetAPI(api_chain, base_url)

    @classmethod
    def builder(cls) -> RikaFirenetClientBuilder:
        """Start building a client step by step."""
        return RikaFirenetClientBuilder()

    @property
    def api(self) -> RikaFirenetAPI:
        """Get the underlying API client.

        This provides direct access to low-level API methods for advanced use cases.

        Returns:
            RikaFirenetAPI instance.
        """
        return self._api

    @property
    def auth_api(self) -> AuthApi:
        """Get the session endpoints client."""
        return self._auth_api

    async def __aenter__(self) -> Self:
        """Enter the context manager.

        Creates a session with a cookie jar if one wasn't provided. No request
        is sent: the first request logs in if needed.

        Returns:
            Self for use in async with statements.
        """
        if self._session is None:
            self._session = ClientSession(cookie_jar=CookieJar())
            self._owns_session = True
            self._transport.set_session(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager.

        Closes the session if it was created by this client. The portal session
        is left as is; call logout() to end it.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    # -------------------------------------------------------------------------
    # Stove Queries
    # -------------------------------------------------------------------------

    async def list_stoves(self) -> list[str]:
        """Get the IDs of the stoves registered on the account.

        Returns:
            Stove IDs, in the order of the portal's summary page.

        Raises:
            StoveError: If the summary page cannot be fetched.
            AuthenticationError: If logging in fails.
            RikaConnectionError: If connection fails.
        """
        status, html = await self._api.get_summary()

        if status != HTTPStatus.OK:
            msg = f"Failed to list stoves: HTTP {status}"
            _LOGGER.warning(msg)
            raise StoveError(msg)

        stove_ids = extract_stove_ids(html)
        _LOGGER.debug("Extracted stove ids: %s", ", ".join(stove_ids))
        return stove_ids

    async def status(self, stove_id: str) -> StoveStatus:
        """Get the current status of a stove.

        Args:
            stove_id: Stove identifier.

        Returns:
            StoveStatus snapshot.

        Raises:
            StoveError: If the stove is unknown or the status cannot be read.
            AuthenticationError: If logging in fails.
            RikaConnectionError: If connection fails.
        """
        status, data = await self._api.get_stove_status(stove_id)

        if status != HTTPStatus.OK or data is None:
            msg = f"Failed to get status of stove {stove_id}: HTTP {status}"
            _LOGGER.warning(msg)
            raise StoveError(msg, stove_id=stove_id)

        return parse_stove_status(data)

    # -------------------------------------------------------------------------
    # Stove Controls
    # -------------------------------------------------------------------------

    async def update_controls(self, stove_id: str, **changes: Any) -> None:
        """Change some controls of a stove, keeping the others as they are.

        Args:
            stove_id: Stove identifier.
            **changes: StoveControls attributes to change (e.g., on_off=False).

        Raises:
            TypeError: If a change names an unknown control.
            StoveError: If the status cannot be read or the update is refused.
        """
        current = await self.status(stove_id)
        controls = dataclasses.replace(current.controls, **changes)
        await self._send_controls(stove_id, controls, current.last_confirmed_revision)

    async def restore_controls(self, stove_id: str, controls: StoveControls) -> None:
        """Send back a previously captured set of controls.

        The revision token is taken from the current status, not from the
        captured controls.

        Args:
            stove_id: Stove identifier.
            controls: Controls captured from an earlier status.

        Raises:
            StoveError: If the status cannot be read or the update is refused.
        """
        current = await self.status(stove_id)
        await self._send_controls(stove_id, controls, current.last_confirmed_revision)

    async def _send_controls(self, stove_id: str, controls: StoveControls, revision: int) -> None:
        form = serialize_controls(controls, revision)
        status, _ = await self._api.update_stove_controls(stove_id, form)

        if status != HTTPStatus.OK:
            msg = f"Failed to update controls of stove {stove_id}: HTTP {status}"
            _LOGGER.warning(msg)
            raise StoveError(msg, stove_id=stove_id)

        _LOGGER.debug("Updated controls of stove %s (revision %d)", stove_id, revision)

    async def turn_on(self, stove_id: str) -> None:
        """Switch a stove on."""
        await self.update_controls(stove_id, on_off=True)

    async def turn_off(self, stove_id: str) -> None:
        """Switch a stove off."""
        await self.update_controls(stove_id, on_off=False)

    async def set_manual_mode(self, stove_id: str, heating_power_percent: int) -> None:
        """Run a stove at a fixed heating power.

        Args:
            stove_id: Stove identifier.
            heating_power_percent: Heating power (0-99).

        Raises:
            InvalidParameterError: If the heating power is out of range.
        """
        _validate_range("heating_power_percent", heating_power_percent, HEATING_POWER_MIN, HEATING_POWER_MAX)
        await self.update_controls(
            stove_id,
            operating_mode=OperatingMode.MANUAL.value,
            heating_power=heating_power_percent,
        )

    async def set_auto_mode(self, stove_id: str, heating_power_percent: int) -> None:
        """Let a stove regulate itself up to a heating power.

        Args:
            stove_id: Stove identifier.
            heating_power_percent: Heating power (0-99).

        Raises:
            InvalidParameterError: If the heating power is out of range.
        """
        _validate_range("heating_power_percent", heating_power_percent, HEATING_POWER_MIN, HEATING_POWER_MAX)
        await self.update_controls(
            stove_id,
            operating_mode=OperatingMode.AUTO.value,
            heating_power=heating_power_percent,
        )

    async def set_comfort_mode(self, stove_id: str, idle_temperature: int, target_temperature: int) -> None:
        """Regulate a stove on room temperature.

        Args:
            stove_id: Stove identifier.
            idle_temperature: Set-back temperature in °C (12-20).
            target_temperature: Target temperature in °C (14-28), above the idle one.

        Raises:
            InvalidParameterError: If a temperature is out of range or the idle
                temperature is not below the target temperature.
        """
        _validate_range("idle_temperature", idle_temperature, IDLE_TEMPERATURE_MIN, IDLE_TEMPERATURE_MAX)
        _validate_range("target_temperature", target_temperature, TARGET_TEMPERATURE_MIN, TARGET_TEMPERATURE_MAX)
        if idle_temperature >= target_temperature:
            msg = (
                f"idle_temperature must be lower than target_temperature, "
                f"got {idle_temperature} >= {target_temperature}"
            )
            raise InvalidParameterError(msg, parameter_name="idle_temperature", value=idle_temperature)

        await self.update_controls(
            stove_id,
            operating_mode=OperatingMode.COMFORT.value,
            set_back_temperature=str(idle_temperature),
            target_temperature=str(target_temperature),
        )

    async def enable_frost_protection(self, stove_id: str, temperature: int) -> None:
        """Enable frost protection.

        Args:
            stove_id: Stove identifier.
            temperature: Temperature in °C (4-10) under which the stove starts.

        Raises:
            InvalidParameterError: If the temperature is out of range.
        """
        _validate_range(
            "temperature",
            temperature,
            FROST_PROTECTION_TEMPERATURE_MIN,
            FROST_PROTECTION_TEMPERATURE_MAX,
        )
        await self.update_controls(
            stove_id,
            frost_protection_active=True,
            frost_protection_temperature=str(temperature),
        )

    async def disable_frost_protection(self, stove_id: str) -> None:
        """Disable frost protection."""
        await self.update_controls(stove_id, frost_protection_active=False)

    async def enable_schedule(self, stove_id: str, schedule: HeatingSchedule) -> None:
        """Set the weekly heating schedule and use it in comfort mode.

        Args:
            stove_id: Stove identifier.
            schedule: Weekly heating schedule.
        """
        await self.update_controls(
            stove_id,
            heating_times_active_for_comfort=True,
            **serialize_heating_schedule(schedule),
        )

    async def disable_schedule(self, stove_id: str) -> None:
        """Stop using the weekly heating schedule, keeping it stored."""
        await self.update_controls(stove_id, heating_times_active_for_comfort=False)

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    async def logout(self) -> None:
        """End the portal session.

        The next request logs in again automatically.

        Raises:
            AuthenticationError: If the portal answers with an error.
        """
        await self._auth_api.logout()


class RikaFirenetClientBuilder:
    """Step-by-step construction of a RikaFirenetClient.

    Example:
        ```python
        client = (
            RikaFirenetClient.builder()
            .base_url("https://www.rika-firenet.com")
            .credentials("user@example.com", "password")
            .build()
        )
        ```
    """

    def __init__(self) -> None:
        """Initialize the builder with defaults."""
        self._base_url = DEFAULT_BASE_URL
        self._credentials: Credentials | None = None
        self._session: ClientSession | None = None
        self._interceptors: list[Interceptor] = []
        self._login_redirect_locations: frozenset[str] = LOGIN_REDIRECT_LOCATIONS
        self._coalesce_logins = True
        self._timeout: float = DEFAULT_TIMEOUT

    def base_url(self, base_url: str) -> Self:
        """Use another portal, e.g. a mock server."""
        self._base_url = base_url
        return self

    def credentials(self, email: str, password: str) -> Self:
        """Set the account credentials."""
        self._credentials = Credentials(email=email, password=password)
        return self

    def session(self, session: ClientSession) -> Self:
        """Use an application-managed aiohttp session (must keep cookies)."""
        self._session = session
        return self

    def interceptor(self, interceptor: Interceptor) -> Self:
        """Add a caller interceptor (metrics, tracing...). Can be called several times."""
        self._interceptors.append(interceptor)
        return self

    def login_redirect_locations(self, locations: Iterable[str]) -> Self:
        """Replace the Location values meaning "back to the login page"."""
        self._login_redirect_locations = frozenset(locations)
        return self

    def coalesce_logins(self, enabled: bool) -> Self:
        """Share (or not) one login between concurrent requests."""
        self._coalesce_logins = enabled
        return self

    def timeout(self, seconds: float) -> Self:
        """Set the total timeout of each request."""
        self._timeout = seconds
        return self

    def build(self) -> RikaFirenetClient:
        """Build the client.

        Raises:
            ValueError: If no credentials were given.
        """
        if self._credentials is None:
            msg = "Credentials are required to use the portal"
            raise ValueError(msg)

        return RikaFirenetClient(
            self._credentials.email,
            self._credentials.password,
            self._base_url,
            session=self._session,
            interceptors=tuple(self._interceptors),
            login_redirect_locations=self._login_redirect_locations,
            coalesce_logins=self._coalesce_logins,
            timeout=self._timeout,
        )


def _validate_range(name: str, value: int, minimum: int, maximum: int) -> None:
    if not minimum <= value <= maximum:
        msg = f"{name} must be between {minimum} and {maximum}, got {value}"
        raise InvalidParameterError(msg, parameter_name=name, value=value)
