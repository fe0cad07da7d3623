"""
Connection Tests
================

Error mapping of CanvasConnection / open_connection and handle
replacement in ConnectionSlot.
"""

import pytest
from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK, InvalidURI
from websockets.frames import Close

from pixel_brush.errors import HandshakeError, SendError, TransportClosed, TransportFatal
from pixel_brush.stream import connection as connection_module
from pixel_brush.stream.connection import CanvasConnection, ConnectionSlot, open_connection

from conftest import FakeConnection, FakeConnector


class ScriptedWebSocket:
    """Minimal object with the websockets connection surface."""

    def __init__(self, recv_error=None, send_error=None, close_error=None):
        self.recv_error = recv_error
        self.send_error = send_error
        self.close_error = close_error
        self.sent = []

    async def recv(self):
        if self.recv_error is not None:
            raise self.recv_error
        return b"hello"

    async def send(self, data):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)

    async def close(self):
        if self.close_error is not None:
            raise self.close_error


class TestCanvasConnection:
    """Tests for transport error translation."""

    @pytest.mark.asyncio
    async def test_recv_passes_frames_through(self):
        conn = CanvasConnection("ws://x", ScriptedWebSocket())
        assert await conn.recv() == b"hello"

    @pytest.mark.asyncio
    async def test_close_frame_is_transport_closed(self):
        error = ConnectionClosedOK(Close(1000, "bye"), Close(1000, "bye"), True)
        conn = CanvasConnection("ws://x", ScriptedWebSocket(recv_error=error))
        with pytest.raises(TransportClosed):
            await conn.recv()

    @pytest.mark.asyncio
    async def test_abrupt_close_is_transport_closed(self):
        error = ConnectionClosedError(None, None)
        conn = CanvasConnection("ws://x", ScriptedWebSocket(recv_error=error))
        with pytest.raises(TransportClosed):
            await conn.recv()

    @pytest.mark.asyncio
    async def test_os_error_is_fatal(self):
        conn = CanvasConnection("ws://x", ScriptedWebSocket(recv_error=OSError("reset")))
        with pytest.raises(TransportFatal):
            await conn.recv()

    @pytest.mark.asyncio
    async def test_send_failure_is_send_error(self):
        error = ConnectionClosedError(None, None)
        conn = CanvasConnection("ws://x", ScriptedWebSocket(send_error=error))
        with pytest.raises(SendError):
            await conn.send(b"\x00\x00\x00\x00")

    @pytest.mark.asyncio
    async def test_send_is_raw_binary(self):
        websocket = ScriptedWebSocket()
        conn = CanvasConnection("ws://x", websocket)
        await conn.send(b"\x01\x00\x00\x00")
        assert websocket.sent == [b"\x01\x00\x00\x00"]

    @pytest.mark.asyncio
    async def test_close_errors_are_not_raised(self):
        conn = CanvasConnection("ws://x", ScriptedWebSocket(close_error=OSError("gone")))
        await conn.close()


class TestOpenConnection:
    """Tests for handshake error mapping."""

    @pytest.mark.asyncio
    async def test_refused_is_handshake_error(self, monkeypatch):
        async def refuse(url, **kwargs):
            raise ConnectionRefusedError("refused")

        monkeypatch.setattr(connection_module.websockets, "connect", refuse)
        with pytest.raises(HandshakeError) as info:
            await open_connection("ws://canvas.test/ws")
        assert info.value.url == "ws://canvas.test/ws"

    @pytest.mark.asyncio
    async def test_invalid_uri_is_handshake_error(self, monkeypatch):
        async def reject(url, **kwargs):
            raise InvalidURI(url, "scheme isn't ws or wss")

        monkeypatch.setattr(connection_module.websockets, "connect", reject)
        with pytest.raises(HandshakeError):
            await open_connection("http://canvas.test")

    @pytest.mark.asyncio
    async def test_no_handshake_timeout(self, monkeypatch):
        captured = {}

        async def accept(url, **kwargs):
            captured.update(kwargs)
            return ScriptedWebSocket()

        monkeypatch.setattr(connection_module.websockets, "connect", accept)
        conn = await open_connection("ws://canvas.test/ws", ping_interval=None)

        assert isinstance(conn, CanvasConnection)
        assert captured["open_timeout"] is None
        assert captured["ping_interval"] is None


class TestConnectionSlot:
    """Tests for the replaceable connection handle."""

    @pytest.mark.asyncio
    async def test_reconnect_swaps_handle(self):
        first, second = FakeConnection(), FakeConnection()
        connector = FakeConnector(second)
        slot = ConnectionSlot("ws://x", first, connector)

        await slot.reconnect()
        await slot.send(b"data")

        assert slot.current is second
        assert slot.generation == 1
        assert first.closed
        assert second.sent == [b"data"]
        assert first.sent == []
        assert connector.calls == ["ws://x"]

    @pytest.mark.asyncio
    async def test_failed_reconnect_keeps_old_handle(self):
        first = FakeConnection()
        connector = FakeConnector(HandshakeError("ws://x", "refused"))
        slot = ConnectionSlot("ws://x", first, connector)

        with pytest.raises(HandshakeError):
            await slot.reconnect()

        assert slot.current is first
        assert slot.generation == 0

    @pytest.mark.asyncio
    async def test_recv_reads_current_handle(self):
        first = FakeConnection()
        first.push(b"frame")
        slot = ConnectionSlot("ws://x", first, FakeConnector())

        assert await slot.recv() == b"frame"
