"""Low-level client for the RIKA Firenet stove endpoints.

This module builds requests for the summary, status and controls endpoints and
sends them through the interceptor chain. All methods return
(status_code, response_data) tuples so callers decide how to handle errors.
"""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

from yarl import URL

from pyrikafirenet.const import (
    DEFAULT_BASE_URL,
    STOVE_CONTROLS_PATH,
    STOVE_STATUS_PATH,
    SUMMARY_PATH,
)
from pyrikafirenet.transport import ApiRequest


if TYPE_CHECKING:
    from collections.abc import Mapping

    from pyrikafirenet.transport import ApiResponse, InterceptorChain

_LOGGER = logging.getLogger(__name__)


class RikaFirenetAPI:
    """Low-level client for the RIKA Firenet portal stove endpoints.

    Requests go through an interceptor chain that takes care of logging in when
    the session has expired, so methods here never deal with authentication.

    Example:
        ```python
        api = RikaFirenetAPI(chain, base_url="https://www.rika-firenet.com")

        status, html = await api.get_summary()
        status, data = await api.get_stove_status("12345")
        status, _ = await api.update_stove_controls("12345", {"revision": "42", "onOff": "true"})
        ```

    Attributes:
        base_url: Base URL of the portal (default: https://www.rika-firenet.com).
    """

    def __init__(self, chain: InterceptorChain, base_url: str = DEFAULT_BASE_URL) -> None:
        """Initialize the API client.

        Args:
            chain: Interceptor chain used to send requests.
            base_url: Base URL of the portal. Defaults to the production portal.
        """
        self._chain = chain
        self.base_url = base_url.rstrip("/")

    async def request(
        self,
        method: str,
        path: str,
        *,
        form: Mapping[str, str] | None = None,
    ) -> ApiResponse:
        """Send a request to the portal.

        Args:
            method: HTTP method (GET, POST).
            path: Endpoint path (e.g., "/web/summary").
            form: Optional form fields for the request body.

        Returns:
            The buffered response.

        Raises:
            AuthenticationError: If the session expired and logging in again failed.
            RikaTimeoutError: If the request times out.
            RikaConnectionError: If a connection error occurs.
        """
        request = ApiRequest(method, URL(f"{self.base_url}{path}"), form=form)
        response = await self._chain.send(request)
        _LOGGER.debug("%s %s -> %d", method, path, response.status)
        return response

    async def get_summary(self) -> tuple[int, str]:
        """Get the summary page listing the stoves of the account.

        Returns:
            Tuple of (status_code, html).
        """
        response = await self.request("GET", SUMMARY_PATH)
        return response.status, response.text()

    async def get_stove_status(self, stove_id: str) -> tuple[int, dict[str, Any] | None]:
        """Get the status of a stove (controls, sensors, revision).

        Args:
            stove_id: Stove identifier.

        Returns:
            Tuple of (status_code, response_data) where response_data has format:
            {"stoveID": str, "lastConfirmedRevision": int, "controls": {...}, "sensors": {...}}
            Response data is None if the response is not a JSON document.
        """
        response = await self.request("GET", STOVE_STATUS_PATH.format(stove_id=stove_id))

        if response.status != HTTPStatus.OK or not response.is_json:
            return response.status, None

        try:
            data: dict[str, Any] = response.json()
        except json.JSONDecodeError as exc:
            _LOGGER.warning("Invalid JSON in status of stove %s: %s", stove_id, exc)
            return response.status, None

        return response.status, data

    async def update_stove_controls(
        self,
        stove_id: str,
        form: Mapping[str, str],
    ) -> tuple[int, str]:
        """Update the controls of a stove.

        Args:
            stove_id: Stove identifier.
            form: Every control field plus the revision token, as produced by
                serialize_controls().

        Returns:
            Tuple of (status_code, response_text). The portal answers "OK".
        """
        response = await self.request("POST", STOVE_CONTROLS_PATH.format(stove_id=stove_id), form=form)
        return response.status, response.text()
