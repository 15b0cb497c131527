"""Tests for fix payloads pushed to the map page."""

import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from gpslink.fix import Fix
from gpslink.link import SerialByteSource, SocketByteSource
from server import broadcaster
from server.config import ServerConfig
from server.formatters import format_fix_message
from server.main import app
from server.tracker import publish_position
from tests.link.conftest import ControlledByteSource

GGA_LINE = b"$GPGGA,123456,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*4D\r\n"
GGA_SW_LINE = b"$GPGGA,123456,4807.038,S,01131.000,W,1,08,0.9,545.4,M,46.9,M,,*42\r\n"
GGA_NO_FIX_LINE = b"$GPGGA,123456,4807.038,N,01131.000,E,0,00,,,M,,M,,*58\r\n"

# Captured before the autouse fixture patches it.
_create_byte_source = ServerConfig.create_byte_source


def test_fix_message_routing(byte_source: ControlledByteSource) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        byte_source.chunks.put(GGA_LINE)
        data = websocket.receive_json()
        assert data["type"] == "fix"
        assert data["lat"] == pytest.approx(48.1173)
        assert data["lon"] == pytest.approx(11.5166667)
        assert data["valid"] is True


def test_southern_western_fix_is_negative(byte_source: ControlledByteSource) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        byte_source.chunks.put(GGA_NO_FIX_LINE + GGA_SW_LINE)
        data = websocket.receive_json()
        assert data["lat"] == pytest.approx(-48.1173)
        assert data["lon"] == pytest.approx(-11.5166667)


def test_sentence_split_across_reads(byte_source: ControlledByteSource) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        byte_source.chunks.put(GGA_LINE[:20])
        byte_source.chunks.put(GGA_LINE[20:])
        assert websocket.receive_json()["type"] == "fix"


def test_index_page_served() -> None:
    with TestClient(app) as client:
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]


def test_format_fix_message() -> None:
    payload = json.loads(format_fix_message(Fix(-33.5, 151.25)))
    assert payload == {"type": "fix", "lat": -33.5, "lon": 151.25, "valid": True}


def test_late_subscriber_gets_latest_fix() -> None:
    async def _run() -> str:
        publish_position(10.0, 20.0)
        queue: asyncio.Queue[str] = asyncio.Queue(maxsize=2)
        broadcaster.add_subscriber(queue)
        try:
            return queue.get_nowait()
        finally:
            broadcaster.remove_subscriber(queue)

    message = json.loads(asyncio.run(_run()))
    assert (message["lat"], message["lon"]) == (10.0, 20.0)


class TestServerConfig:
    def test_defaults(self) -> None:
        config = ServerConfig.from_environ({})
        assert config == ServerConfig(host="localhost", port=10110)

    def test_tcp_endpoint_from_environment(self) -> None:
        config = ServerConfig.from_environ({"GPSLINK_HOST": "gps.local", "GPSLINK_PORT": "2947"})
        assert (config.host, config.port) == ("gps.local", 2947)

    def test_serial_port_takes_precedence(self) -> None:
        config = ServerConfig.from_environ(
            {"GPSLINK_SERIAL_PORT": "/dev/rfcomm0", "GPSLINK_BAUD_RATE": "4800"}
        )
        assert config.serial_port == "/dev/rfcomm0"
        assert config.baud_rate == 4800

    def test_invalid_port_rejected(self) -> None:
        with pytest.raises(ValueError):
            ServerConfig.from_environ({"GPSLINK_PORT": "nmea"})

    def test_socket_source_by_default(self) -> None:
        source = _create_byte_source(ServerConfig(host="gps.local", port=2947))
        assert isinstance(source, SocketByteSource)
        assert "gps.local" in repr(source)

    def test_serial_source_when_port_given(self) -> None:
        source = _create_byte_source(ServerConfig(serial_port="/dev/rfcomm0", baud_rate=4800))
        assert isinstance(source, SerialByteSource)
        assert (source.port, source.baudrate) == ("/dev/rfcomm0", 4800)
