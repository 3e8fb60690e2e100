"""Example of a caller interceptor timing every request sent to the portal."""

import asyncio
import logging
import time
from collections import Counter

from pyrikafirenet import ApiRequest, ApiResponse, RequestHandler, RikaFirenetClient


_LOGGER = logging.getLogger(__name__)


class MetricsInterceptor:
    """Count requests per path and log how long each one took.

    Caller interceptors sit next to the network: they also see the logins the
    client performs and the requests it sends again after a login.
    """

    def __init__(self) -> None:
        self.requests: Counter[str] = Counter()

    async def intercept(self, request: ApiRequest, handler: RequestHandler) -> ApiResponse:
        started = time.monotonic()
        response = await handler(request)
        elapsed_ms = (time.monotonic() - started) * 1000

        self.requests[request.path] += 1
        _LOGGER.info("%s %s -> %d in %.0f ms", request.method, request.path, response.status, elapsed_ms)
        return response


async def main() -> None:
    """Poll a stove a few times and print request counts."""
    logging.basicConfig(level=logging.INFO)
    metrics = MetricsInterceptor()

    client = (
        RikaFirenetClient.builder()
        .credentials("your@email.com", "your_password")
        .interceptor(metrics)
        .build()
    )

    async with client:
        stove_id = (await client.list_stoves())[0]
        for _ in range(3):
            status = await client.status(stove_id)
            print(f"{status.name}: {status.sensors.input_room_temperature}°C")
            await asyncio.sleep(10)

    print(dict(metrics.requests))


if __name__ == "__main__":
    asyncio.run(main())
