"""Pytest fixtures for server module testing."""

from collections.abc import Iterator
from unittest.mock import patch

import pytest

from server import broadcaster
from tests.link.conftest import ControlledByteSource


@pytest.fixture(autouse=True)
def byte_source() -> Iterator[ControlledByteSource]:
    """Feed the dashboard's GPS session from an in-memory source."""
    controller = ControlledByteSource()
    with patch("server.config.ServerConfig.create_byte_source", return_value=controller):
        yield controller
    controller.chunks.put(b"")
    broadcaster.reset()
