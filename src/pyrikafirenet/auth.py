"""Session handling for the RIKA Firenet portal.

The portal keeps its session in a cookie. The library never tracks whether it is
logged in: it sends requests and looks at the answer. When the portal answers
with a redirect to its login page (or a 401), `LoginRetryInterceptor` logs in
once and sends the original request again.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import TYPE_CHECKING

from yarl import URL

from pyrikafirenet.const import (
    DEFAULT_BASE_URL,
    LOGIN_PATH,
    LOGIN_REDIRECT_LOCATIONS,
    LOGOUT_PATH,
    SESSION_PATHS,
)
from pyrikafirenet.exceptions import AuthenticationError, RikaFirenetError
from pyrikafirenet.transport import ApiRequest


if TYPE_CHECKING:
    from pyrikafirenet.transport import ApiResponse, InterceptorChain, RequestHandler

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """Portal credentials.

    Attributes:
        email: Account email address.
        password: Account password (hidden from repr).
    """

    email: str
    password: str = field(repr=False)


def is_session_request(request: ApiRequest, session_paths: Iterable[str] = SESSION_PATHS) -> bool:
    """Check if a request is itself a login or logout request.

    Args:
        request: Outbound request.
        session_paths: Paths of the session management endpoints.

    Returns:
        True if the request path is exactly one of the session paths.
    """
    return request.path in session_paths


def is_login_redirection(
    response: ApiResponse,
    login_locations: Iterable[str] = LOGIN_REDIRECT_LOCATIONS,
) -> bool:
    """Check if a response means the session cookie is no longer valid.

    Args:
        response: Inbound response.
        login_locations: Location values the portal uses to send a client back
            to its login page.

    Returns:
        True for a 401, or a 302 whose Location is exactly one of the login
        locations. Any other redirect is a normal redirect.
    """
    if response.status == HTTPStatus.UNAUTHORIZED:
        return True

    if response.status != HTTPStatus.FOUND:
        return False

    return response.location in frozenset(login_locations)


class AuthApi:
    """Login and logout endpoints of the portal.

    Both calls go through their own interceptor chain, which must not contain a
    `LoginRetryInterceptor`. The chain shares its transport (and so its cookie
    jar) with the device endpoints: logging in here authenticates every later
    request.
    """

    def __init__(
        self,
        chain: InterceptorChain,
        base_url: str = DEFAULT_BASE_URL,
        *,
        login_redirect_locations: Iterable[str] = LOGIN_REDIRECT_LOCATIONS,
    ) -> None:
        """Initialize the session endpoint client.

        Args:
            chain: Interceptor chain used to send login and logout requests.
            base_url: Base URL of the portal.
            login_redirect_locations: Locations meaning "back to the login page".
        """
        self._chain = chain
        self._base_url = base_url.rstrip("/")
        self._login_locations = frozenset(login_redirect_locations)

    async def login(self, credentials: Credentials) -> None:
        """Log in and store the session cookie in the shared cookie jar.

        A successful login answers with a redirect to the summary page. A
        redirect back to the login page means the credentials were refused.

        Args:
            credentials: Account credentials.

        Raises:
            AuthenticationError: If the portal refuses the credentials.
            RikaTimeoutError: If the request times out.
            RikaConnectionError: If a connection error occurs.
        """
        request = ApiRequest(
            "POST",
            URL(f"{self._base_url}{LOGIN_PATH}"),
            form={"email": credentials.email, "password": credentials.password},
        )

        _LOGGER.debug("Logging in to %s", self._base_url)
        response = await self._chain.send(request)

        if response.status >= HTTPStatus.BAD_REQUEST:
            msg = f"Login failed with status {response.status}"
            raise AuthenticationError(msg)

        if response.status == HTTPStatus.FOUND and response.location in self._login_locations:
            msg = "Login failed: Invalid credentials"
            raise AuthenticationError(msg)

        _LOGGER.info("Logged in to %s", self._base_url)

    async def logout(self) -> None:
        """Log out and invalidate the current session.

        Raises:
            AuthenticationError: If the portal answers with an error status.
            RikaTimeoutError: If the request times out.
            RikaConnectionError: If a connection error occurs.
        """
        request = ApiRequest("GET", URL(f"{self._base_url}{LOGOUT_PATH}"))
        response = await self._chain.send(request)

        if response.status >= HTTPStatus.BAD_REQUEST:
            msg = f"Logout failed with status {response.status}"
            raise AuthenticationError(msg)

        _LOGGER.info("Logged out from %s", self._base_url)


class LoginRetryInterceptor:
    """Log in and retry once when a request bounces on the login page.

    For each request:

    1. Send it once.
    2. If it is not a login/logout request and the response is a redirect to the
       login page (or a 401), log in with the held credentials.
    3. If the login fails, raise `AuthenticationError`; the request is not retried.
    4. Otherwise send the original request once more and return that response
       as-is, without checking it for a login redirect again.

    With `coalesce_logins` (the default), concurrent requests that all hit an
    expired session share a single login call. Without it each of them logs in
    on its own. Nothing is cached after a login completes: the next expired
    session is detected from the portal's answer again.
    """

    def __init__(
        self,
        auth_api: AuthApi,
        credentials: Credentials,
        *,
        login_redirect_locations: Iterable[str] = LOGIN_REDIRECT_LOCATIONS,
        session_paths: Iterable[str] = SESSION_PATHS,
        coalesce_logins: bool = True,
    ) -> None:
        """Initialize the interceptor.

        Args:
            auth_api: Client for the login endpoint.
            credentials: Credentials used for every login.
            login_redirect_locations: Locations meaning "back to the login page".
            session_paths: Paths that never trigger a login.
            coalesce_logins: Share one in-flight login between concurrent requests.
        """
        self._auth_api = auth_api
        self._credentials = credentials
        self._login_locations = frozenset(login_redirect_locations)
        self._session_paths = frozenset(session_paths)
        self._coalesce_logins = coalesce_logins
        self._login_task: asyncio.Future[None] | None = None

    async def intercept(self, request: ApiRequest, handler: RequestHandler) -> ApiResponse:
        """Send the request, logging in and retrying once on session loss.

        Raises:
            AuthenticationError: If the login triggered by this request fails.
            RikaTimeoutError: If the first or the retried send times out.
            RikaConnectionError: If the first or the retried send fails.
        """
        response = await handler(request)

        if is_session_request(request, self._session_paths):
            return response

        if not is_login_redirection(response, self._login_locations):
            return response

        _LOGGER.debug(
            "Login redirect detected for %s %s (status %d)",
            request.method,
            request.path,
            response.status,
        )

        try:
            await self._login()
        except AuthenticationError:
            _LOGGER.warning("Login failed, not retrying %s %s", request.method, request.path)
            raise
        except RikaFirenetError as exc:
            _LOGGER.warning("Login failed, not retrying %s %s", request.method, request.path)
            msg = f"Login failed: {exc}"
            raise AuthenticationError(msg) from exc

        _LOGGER.debug("Retrying %s %s after login", request.method, request.path)
        return await handler(request)

    async def _login(self) -> None:
        if not self._coalesce_logins:
            await self._auth_api.login(self._credentials)
            return

        if self._login_task is None:
            self._login_task = asyncio.ensure_future(self._auth_api.login(self._credentials))
            self._login_task.add_done_callback(self._login_done)
        else:
            _LOGGER.debug("Waiting for login already in flight")

        # A cancelled waiter must not cancel the login shared with other waiters
        await asyncio.shield(self._login_task)

    def _login_done(self, task: asyncio.Future[None]) -> None:
        if self._login_task is task:
            self._login_task = None
        # Waiters re-raise the failure; mark it retrieved for when none are left
        if not task.cancelled():
            task.exception()
