"""Example showing session injection, e.g. for Home Assistant integrations."""

import asyncio

from aiohttp import ClientSession, CookieJar

from pyrikafirenet import RikaFirenetClient


async def main() -> None:
    """Use an application-managed aiohttp session."""
    # The portal keeps its session in a cookie: the session needs a cookie jar
    async with ClientSession(cookie_jar=CookieJar()) as session:
        client = (
            RikaFirenetClient.builder()
            .credentials("your@email.com", "your_password")
            .session(session)
            .timeout(15)
            .build()
        )

        async with client:
            for stove_id in await client.list_stoves():
                status = await client.status(stove_id)
                print(f"{status.name}: {'on' if status.is_on else 'off'}")

        # Session remains open after client exits
        print("Client closed, session still available for other requests")


if __name__ == "__main__":
    asyncio.run(main())
