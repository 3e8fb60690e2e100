"""Response interceptors working around portal quirks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aiohttp import hdrs


if TYPE_CHECKING:
    from pyrikafirenet.transport import ApiRequest, ApiResponse, RequestHandler

_LOGGER = logging.getLogger(__name__)

FALLBACK_CONTENT_TYPE = "text/plain"


class ContentTypeInterceptor:
    """Normalize the Content-Type header of portal responses.

    Some portal endpoints answer without a Content-Type, or with a wrong one.
    Anything that is not an `application/...json` type is rewritten to
    `text/plain` so that only real JSON documents are decoded as JSON.
    """

    async def intercept(self, request: ApiRequest, handler: RequestHandler) -> ApiResponse:
        """Send the request and fix up the response Content-Type."""
        response = await handler(request)

        content_type = response.content_type
        if content_type is None or not _is_json_content_type(content_type):
            _LOGGER.debug(
                "Rewriting Content-Type %r to %s for %s",
                content_type,
                FALLBACK_CONTENT_TYPE,
                request.path,
            )
            response.headers[hdrs.CONTENT_TYPE] = FALLBACK_CONTENT_TYPE

        return response


def _is_json_content_type(content_type: str) -> bool:
    return content_type.startswith("application") and "json" in content_type
