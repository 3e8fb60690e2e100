"""Buffered HTTP transport and interceptor chain.

Every request leaving the library is an immutable `ApiRequest` snapshot and
every response coming back is a fully read `ApiResponse`. This makes requests
replayable (the login interceptor may send the same request twice) and lets
interceptors rewrite response headers without touching aiohttp internals.

The chain is an ordered list of interceptors; the first one is the outermost:

    ContentTypeInterceptor -> LoginRetryInterceptor -> <caller interceptors> -> transport
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout, hdrs
from multidict import CIMultiDict
from yarl import URL

from pyrikafirenet.const import DEFAULT_TIMEOUT, USER_AGENT
from pyrikafirenet.exceptions import RikaConnectionError, RikaTimeoutError


__all__ = [
    "AiohttpTransport",
    "ApiRequest",
    "ApiResponse",
    "Interceptor",
    "InterceptorChain",
    "RequestHandler",
    "Transport",
]

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiRequest:
    """Replayable outbound request.

    The form body is copied into a read-only mapping on creation, so sending the
    same request twice always sends the same bytes.

    Attributes:
        method: HTTP method (GET, POST).
        url: Absolute request URL.
        headers: Extra request headers.
        form: Optional form fields, sent as application/x-www-form-urlencoded.
    """

    method: str
    url: URL
    headers: Mapping[str, str] = field(default_factory=dict)
    form: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        if self.form is not None:
            object.__setattr__(self, "form", MappingProxyType(dict(self.form)))

    @property
    def path(self) -> str:
        """Path component of the request URL."""
        return self.url.path


@dataclass
class ApiResponse:
    """Fully buffered inbound response.

    Attributes:
        status: HTTP status code.
        headers: Response headers (case-insensitive, mutable for interceptors).
        body: Raw response body.
        url: URL the response was received from.
    """

    status: int
    headers: CIMultiDict[str] = field(default_factory=CIMultiDict)
    body: bytes = b""
    url: URL | None = None

    @property
    def location(self) -> str | None:
        """Value of the Location header, if any."""
        return self.headers.get(hdrs.LOCATION)

    @property
    def content_type(self) -> str | None:
        """Raw value of the Content-Type header, if any."""
        return self.headers.get(hdrs.CONTENT_TYPE)

    @property
    def is_json(self) -> bool:
        """Check if the Content-Type announces a JSON document."""
        content_type = (self.content_type or "").lower()
        return content_type.startswith("application") and "json" in content_type

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the body as text."""
        return self.body.decode(encoding, errors="replace")

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON.
        """
        return json.loads(self.body)


RequestHandler = Callable[[ApiRequest], Awaitable[ApiResponse]]


class Transport(Protocol):
    """Anything able to send an `ApiRequest`."""

    async def send(self, request: ApiRequest) -> ApiResponse:
        """Send the request and return the buffered response."""
        ...


class Interceptor(Protocol):
    """A stage of the interceptor chain.

    Implementations receive the request and the next handler in the chain. They
    may inspect or replace the request, call the handler any number of times,
    and inspect or replace the response.
    """

    async def intercept(self, request: ApiRequest, handler: RequestHandler) -> ApiResponse:
        """Handle the request, delegating to `handler` for the actual send."""
        ...


class AiohttpTransport:
    """Send `ApiRequest` snapshots with an aiohttp session.

    Redirects are never followed: a redirect to the login page must reach the
    interceptors as-is. Cookies set by the portal are kept in the session's
    cookie jar, which is where the authentication state lives.

    Attributes:
        timeout: Total timeout applied to each request.
    """

    def __init__(
        self,
        session: ClientSession | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = USER_AGENT,
    ) -> None:
        """Initialize the transport.

        Args:
            session: Optional aiohttp ClientSession. Can be set later with set_session().
            timeout: Total timeout in seconds for each request.
            user_agent: User-Agent header sent with every request.
        """
        self._session = session
        self._user_agent = user_agent
        self.timeout = ClientTimeout(total=timeout)

    @property
    def session(self) -> ClientSession | None:
        """The aiohttp session used for requests."""
        return self._session

    def set_session(self, session: ClientSession) -> None:
        """Set the aiohttp session used for requests.

        Args:
            session: The aiohttp ClientSession to use for requests.
        """
        self._session = session

    def _validate_session(self) -> None:
        """Validate that the session is initialized and open.

        Raises:
            RuntimeError: If session is not initialized or is closed.
        """
        if self._session is None:
            msg = "Session not initialized. Use 'async with' or provide a session."
            raise RuntimeError(msg)

        if self._session.closed:
            msg = "Session is closed. Cannot make requests."
            raise RuntimeError(msg)

    async def send(self, request: ApiRequest) -> ApiResponse:
        """Send a request once and buffer the response.

        Args:
            request: The request to send.

        Returns:
            The buffered response, whatever its status code.

        Raises:
            RuntimeError: If session is not initialized or is closed.
            RikaTimeoutError: If the request times out.
            RikaConnectionError: If a connection error occurs.
        """
        self._validate_session()
        assert self._session is not None

        headers = {hdrs.USER_AGENT: self._user_agent, **request.headers}
        form = dict(request.form) if request.form is not None else None

        try:
            async with self._session.request(
                request.method,
                request.url,
                headers=headers,
                data=form,
                allow_redirects=False,
                timeout=self.timeout,
            ) as response:
                body = await response.read()
                return ApiResponse(
                    status=response.status,
                    headers=CIMultiDict(response.headers),
                    body=body,
                    url=response.url,
                )

        except TimeoutError as exc:
            _LOGGER.exception("Request to %s timed out", request.url)
            msg = f"Request to {request.path} timed out"
            raise RikaTimeoutError(msg) from exc

        except ClientError as exc:
            _LOGGER.exception("Connection error for %s", request.url)
            msg = f"Failed to connect to portal: {exc}"
            raise RikaConnectionError(msg) from exc


class InterceptorChain:
    """Ordered interceptors in front of a transport.

    The first interceptor sees the request first and the response last.

    Example:
        ```python
        chain = InterceptorChain(transport, [ContentTypeInterceptor(), MetricsInterceptor()])
        response = await chain.send(ApiRequest("GET", URL("https://host/web/summary")))
        ```
    """

    def __init__(self, transport: Transport, interceptors: Sequence[Interceptor] = ()) -> None:
        """Initialize the chain.

        Args:
            transport: Transport performing the actual network send.
            interceptors: Interceptors, outermost first.
        """
        self._transport = transport
        self._interceptors = tuple(interceptors)

        handler: RequestHandler = transport.send
        for interceptor in reversed(self._interceptors):
            handler = _bind(interceptor, handler)
        self._handler = handler

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        """Interceptors of this chain, outermost first."""
        return self._interceptors

    async def send(self, request: ApiRequest) -> ApiResponse:
        """Send a request through every interceptor and the transport."""
        return await self._handler(request)


def _bind(interceptor: Interceptor, handler: RequestHandler) -> RequestHandler:
    async def run(request: ApiRequest) -> ApiResponse:
        return await interceptor.intercept(request, handler)

    return run
