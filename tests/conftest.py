"""Pytest configuration and shared fixtures.

The `mock_portal` fixture serves an in-process copy of the RIKA Firenet portal
behavior that matters to the library: cookie sessions, redirects to the login
page, the summary page, and the status/controls endpoints of two stoves.
"""

from __future__ import annotations

import copy
import secrets
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

import pytest
from aiohttp import ClientSession, CookieJar, web

from pyrikafirenet import RikaFirenetClient


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from aiohttp.test_utils import TestServer


REGISTERED_EMAIL = "registered-user@rika-firenet.com"
REGISTERED_PASSWORD = "Secret"
STOVE_IDS = ("12345", "333444")
INITIAL_REVISION = 1572181181
SESSION_COOKIE = "connect.sid"

SUMMARY_HTML = """
<!DOCTYPE html>
<html>
<head><title>RIKA Firenet - Summary</title></head>
<body>
  <div data-role="content">
    <ul id="stoveList" data-role="listview">
      <li><a href="/web/stove/12345" data-ajax="false">Living room</a></li>
      <li><a href="/web/stove/333444" data-ajax="false">Workshop</a></li>
      <li><a href="/web/edit/333444">Edit</a></li>
    </ul>
    <ul id="otherList">
      <li><a href="/web/stove/999999">Not a stove of this account</a></li>
    </ul>
  </div>
</body>
</html>
"""


def build_stove_status(stove_id: str) -> dict[str, Any]:
    """Build a status document as returned by /api/client/{id}/status."""
    return {
        "name": f"Stove {stove_id}",
        "stoveID": stove_id,
        "lastSeenMinutes": 1,
        "lastConfirmedRevision": INITIAL_REVISION,
        "controls": {
            "revision": INITIAL_REVISION,
            "onOff": True,
            "operatingMode": 2,
            "heatingPower": 65,
            "targetTemperature": "24",
            "bakeTemperature": "1024",
            "ecoMode": False,
            "heatingTimeMon1": "06300900",
            "heatingTimeMon2": "18152245",
            "heatingTimeTue1": "08001230",
            "heatingTimeTue2": "00000000",
            "heatingTimeWed1": "00000000",
            "heatingTimeWed2": "00000000",
            "heatingTimeThu1": "00000000",
            "heatingTimeThu2": "00000000",
            "heatingTimeFri1": "00000000",
            "heatingTimeFri2": "00000000",
            "heatingTimeSat1": "10152300",
            "heatingTimeSat2": "00000000",
            "heatingTimeSun1": "10152300",
            "heatingTimeSun2": "00000000",
            "heatingTimesActiveForComfort": True,
            "setBackTemperature": "18",
            "convectionFan1Active": False,
            "convectionFan1Level": 0,
            "convectionFan1Area": 0,
            "convectionFan2Active": False,
            "convectionFan2Level": 0,
            "convectionFan2Area": 0,
            "frostProtectionTemperature": "3",
            "frostProtectionActive": False,
            "temperatureOffset": "0",
            "RoomPowerRequest": 1,
            "debug0": 0,
            "debug1": 0,
            "debug2": 0,
            "debug3": 0,
            "debug4": 0,
        },
        "sensors": {
            "inputRoomTemperature": "19.6",
            "inputFlameTemperature": 22,
            "inputBakeTemperature": "1024",
            "statusError": 0,
            "statusSubError": 0,
            "statusWarning": 0,
            "statusService": 0,
            "outputExhaustFan": 0,
            "outputInsertionMotor": 0,
            "parameterFeedRateTotal": 1420,
            "parameterRuntimePellets": 1205,
            "statusMainState": 1,
            "statusSubState": 1,
            "statusWifiStrength": -60,
            "statusFrostStarted": False,
            "parameterVersionMainBoard": 223,
        },
        "stoveType": "DOMO MultiAir",
        "stoveFeatures": {
            "multiAir1": True,
            "multiAir2": False,
            "insertionMotor": False,
            "airFlaps": False,
            "logRuntime": False,
            "bakeMode": False,
        },
        "oem": "RIKA",
    }


def _coerce(value: str, current: Any) -> Any:
    if isinstance(current, bool):
        return value == "true"
    if isinstance(current, int):
        return int(value)
    return value


@dataclass
class MockPortal:
    """State of the mock portal.

    Attributes:
        login_count: Login attempts received.
        logout_count: Logout requests received.
        sessions: Session cookie value -> stove status documents of that session.
        control_forms: Every form posted to a controls endpoint, in order.
    """

    login_count: int = 0
    logout_count: int = 0
    sessions: dict[str, dict[str, dict[str, Any]]] = field(default_factory=dict)
    control_forms: list[dict[str, str]] = field(default_factory=list)

    def expire_sessions(self) -> None:
        """Forget every session, as the portal does after some idle time."""
        self.sessions.clear()

    def _stoves(self, request: web.Request) -> dict[str, dict[str, Any]] | None:
        token = request.cookies.get(SESSION_COOKIE)
        if token is None:
            return None
        return self.sessions.get(token)

    async def login(self, request: web.Request) -> web.Response:
        """POST /web/login"""
        self.login_count += 1
        form = await request.post()

        if form.get("email") != REGISTERED_EMAIL or form.get("password") != REGISTERED_PASSWORD:
            return web.Response(status=HTTPStatus.FOUND, headers={"Location": "/web/login"})

        token = secrets.token_hex(16)
        self.sessions[token] = {stove_id: build_stove_status(stove_id) for stove_id in STOVE_IDS}
        response = web.Response(status=HTTPStatus.FOUND, headers={"Location": "/web/summary"})
        response.set_cookie(SESSION_COOKIE, token, path="/", httponly=True)
        return response

    async def logout(self, request: web.Request) -> web.Response:
        """GET /web/logout"""
        self.logout_count += 1
        token = request.cookies.get(SESSION_COOKIE)
        if token is not None:
            self.sessions.pop(token, None)
        return web.Response(status=HTTPStatus.FOUND, headers={"Location": "/web/login"})

    async def summary(self, request: web.Request) -> web.Response:
        """GET /web/summary"""
        if self._stoves(request) is None:
            return web.Response(status=HTTPStatus.FOUND, headers={"Location": "/web/"})
        return web.Response(text=SUMMARY_HTML, content_type="text/html")

    async def status(self, request: web.Request) -> web.Response:
        """GET /api/client/{stove_id}/status"""
        stoves = self._stoves(request)
        if stoves is None:
            return web.Response(status=HTTPStatus.UNAUTHORIZED)

        stove = stoves.get(request.match_info["stove_id"])
        if stove is None:
            return web.Response(status=HTTPStatus.NOT_FOUND, text="Stove not found")
        return web.json_response(stove)

    async def controls(self, request: web.Request) -> web.Response:
        """POST /api/client/{stove_id}/controls"""
        stoves = self._stoves(request)
        if stoves is None:
            return web.Response(status=HTTPStatus.UNAUTHORIZED)

        stove = stoves.get(request.match_info["stove_id"])
        if stove is None:
            return web.Response(status=HTTPStatus.NOT_FOUND, text="Stove not found")

        form = {key: str(value) for key, value in (await request.post()).items()}
        self.control_forms.append(form)

        controls = stove["controls"]
        for key, value in form.items():
            if key != "revision":
                controls[key] = _coerce(value, controls.get(key))

        stove["lastConfirmedRevision"] += 1
        controls["revision"] = stove["lastConfirmedRevision"]

        sensors = stove["sensors"]
        if not controls["onOff"]:
            sensors["statusSubState"] = 0
        elif sensors["statusSubState"] == 0:
            sensors["statusSubState"] = 1

        return web.Response(text="OK")

    def app(self) -> web.Application:
        """Create the aiohttp application serving this portal."""
        app = web.Application()
        app.router.add_post("/web/login", self.login)
        app.router.add_get("/web/logout", self.logout)
        app.router.add_get("/web/summary", self.summary)
        app.router.add_get("/api/client/{stove_id}/status", self.status)
        app.router.add_post("/api/client/{stove_id}/controls", self.controls)
        return app


@pytest.fixture
def summary_html() -> str:
    """Summary page listing stoves 12345 and 333444."""
    return SUMMARY_HTML


@pytest.fixture
def stove_status_data() -> dict[str, Any]:
    """Status document of stove 12345."""
    return copy.deepcopy(build_stove_status("12345"))


@pytest.fixture
def registered_account() -> tuple[str, str]:
    """Email and password accepted by the mock portal."""
    return REGISTERED_EMAIL, REGISTERED_PASSWORD


@pytest.fixture
def mock_portal() -> MockPortal:
    """Create the state of a mock portal."""
    return MockPortal()


@pytest.fixture
async def portal_server(mock_portal: MockPortal, aiohttp_server: Any) -> TestServer:
    """Serve the mock portal on a local port."""
    server: TestServer = await aiohttp_server(mock_portal.app())
    return server


@pytest.fixture
def portal_url(portal_server: TestServer) -> str:
    """Base URL of the mock portal."""
    return str(portal_server.make_url("")).rstrip("/")


@pytest.fixture
async def cookie_session() -> AsyncGenerator[ClientSession]:
    """Create an aiohttp session keeping cookies set by 127.0.0.1.

    Yields:
        ClientSession with an unsafe cookie jar (IP hosts allowed).
    """
    async with ClientSession(cookie_jar=CookieJar(unsafe=True)) as session:
        yield session


@pytest.fixture
async def client(portal_url: str, cookie_session: ClientSession) -> AsyncGenerator[RikaFirenetClient]:
    """Create a client for the registered account of the mock portal."""
    client = RikaFirenetClient(
        REGISTERED_EMAIL,
        REGISTERED_PASSWORD,
        portal_url,
        session=cookie_session,
    )
    async with client:
        yield client
