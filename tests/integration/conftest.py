"""Pytest configuration and fixtures for integration tests.

Integration tests talk to the real portal and need an account. Put the
credentials in a .env file at the project root:

    RIKA_FIRENET_EMAIL=you@example.com
    RIKA_FIRENET_PASSWORD=secret
    RIKA_FIRENET_BASE_URL=https://www.rika-firenet.com  # optional
    RIKA_FIRENET_STOVE_ID=12345  # optional, defaults to the first stove
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from aiohttp import ClientSession, CookieJar
from dotenv import load_dotenv

from pyrikafirenet import RikaFirenetClient
from pyrikafirenet.const import DEFAULT_BASE_URL


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


# Load .env file from project root
env_path = Path(__file__).parents[2] / ".env"
load_dotenv(env_path)


@pytest.fixture(scope="session")
def integration_config() -> dict[str, str]:
    """Load integration test configuration from environment.

    Returns:
        Dictionary with portal credentials and configuration.
    """
    email = os.getenv("RIKA_FIRENET_EMAIL")
    password = os.getenv("RIKA_FIRENET_PASSWORD")

    if not email or not password:
        pytest.skip("RIKA_FIRENET_EMAIL and RIKA_FIRENET_PASSWORD are not set")

    return {
        "email": email,
        "password": password,
        "base_url": os.getenv("RIKA_FIRENET_BASE_URL", DEFAULT_BASE_URL),
    }


@pytest.fixture
async def client(integration_config: dict[str, str]) -> AsyncGenerator[RikaFirenetClient]:
    """Create a client for the test account, logging out at the end."""
    async with ClientSession(cookie_jar=CookieJar()) as session:
        client = RikaFirenetClient(
            integration_config["email"],
            integration_config["password"],
            integration_config["base_url"],
            session=session,
        )
        async with client:
            yield client
            await client.logout()


@pytest.fixture
async def stove_id(client: RikaFirenetClient) -> str:
    """Get the stove to test with: RIKA_FIRENET_STOVE_ID or the first stove."""
    configured = os.getenv("RIKA_FIRENET_STOVE_ID")
    if configured:
        return configured

    stove_ids = await client.list_stoves()
    if not stove_ids:
        pytest.skip("No stove registered on the test account")
    return stove_ids[0]
