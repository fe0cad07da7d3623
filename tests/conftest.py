"""
Test Configuration
==================

Pytest fixtures and fakes for pixel-brush.

The fakes stand in for the WebSocket transport at the Connector seam:
FakeConnection behaves like a CanvasConnection (it raises the
pixel-brush transport errors directly), FakeConnector hands out
scripted connections or handshake failures.
"""

import asyncio
from typing import List

import numpy as np
import pytest

from pixel_brush.errors import SendError, TransportClosed
from pixel_brush.palette import DEFAULT_PALETTE


class FakeConnection:
    """In-memory stand-in for CanvasConnection."""

    def __init__(
        self,
        url: str = "ws://canvas.test/ws",
        send_failures: int = 0,
        close_on_send_failure: bool = False,
    ) -> None:
        self.url = url
        self.sent: List[bytes] = []
        self.send_attempts = 0
        self.closed = False
        self.send_failures = send_failures
        self.close_on_send_failure = close_on_send_failure
        self._inbound: asyncio.Queue = asyncio.Queue()

    def push(self, item) -> None:
        """Queue a frame, or an exception to raise from recv()."""
        self._inbound.put_nowait(item)

    async def send(self, data: bytes) -> None:
        self.send_attempts += 1
        if self.send_failures > 0:
            self.send_failures -= 1
            if self.close_on_send_failure:
                self.push(TransportClosed("peer went away"))
            raise SendError("connection is closed")
        self.sent.append(data)

    async def recv(self):
        item = await self._inbound.get()
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


class FakeConnector:
    """Connector returning scripted outcomes, then fresh FakeConnections."""

    def __init__(self, *outcomes) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[str] = []
        self.created: List[FakeConnection] = []

    async def __call__(self, url: str):
        self.calls.append(url)
        outcome = self.outcomes.pop(0) if self.outcomes else FakeConnection(url)
        if isinstance(outcome, BaseException):
            raise outcome
        self.created.append(outcome)
        return outcome


class SleepRecorder:
    """Instant replacement for asyncio.sleep that records every delay."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        # let other tasks run, as a real sleep would
        for _ in range(5):
            await asyncio.sleep(0)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def palette_raster() -> np.ndarray:
    """2x3 RGB raster made only of palette colors (ids 0..5)."""
    colors = [entry.rgb for entry in DEFAULT_PALETTE][:6]
    return np.array(colors, dtype=np.uint8).reshape(2, 3, 3)


@pytest.fixture
def sample_settings_data() -> dict:
    """Minimal valid configuration mapping."""
    return {
        "brush": {
            "image": "picture.png",
            "offset_x": 10,
            "offset_y": 20,
        },
        "bots": [
            "ws://canvas.test/ws?bot=0",
            "ws://canvas.test/ws?bot=1",
        ],
    }
