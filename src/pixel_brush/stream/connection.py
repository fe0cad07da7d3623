"""
Canvas Connection
=================

WebSocket transport to the remote canvas service.

This module provides:
    - CanvasConnection: One open WebSocket, with transport errors
      translated into the pixel-brush error taxonomy
    - open_connection: Handshake helper (the default connector)
    - ConnectionSlot: Replaceable handle shared by a worker's duties

Error Mapping:
    handshake failure           -> HandshakeError
    ConnectionClosed on recv    -> TransportClosed (close frame, closed socket)
    any other error on recv     -> TransportFatal
    any error on send           -> SendError

Design Rules:
    - No timeout on handshake or receive
    - A slot is never shared between workers
    - Send and replace run under the slot lock, so a reconnect never
      races an in-flight send
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Union

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from pixel_brush.errors import HandshakeError, SendError, TransportClosed, TransportFatal


logger = logging.getLogger(__name__)


Message = Union[str, bytes]


class CanvasConnection:
    """
    A single open WebSocket to a canvas endpoint.

    Attributes:
        url: Endpoint the socket was opened against
    """

    def __init__(self, url: str, websocket: object) -> None:
        self.url = url
        self._websocket = websocket

    async def send(self, data: bytes) -> None:
        """
        Send one binary message.

        Raises:
            SendError: If the message could not be sent
        """
        try:
            await self._websocket.send(data)
        except (WebSocketException, OSError) as e:
            raise SendError(f"Cannot send data: {e}") from e

    async def recv(self) -> Message:
        """
        Receive one message.

        Raises:
            TransportClosed: Peer closed the connection, or it was already closed
            TransportFatal: Any other transport failure
        """
        try:
            return await self._websocket.recv()
        except ConnectionClosed as e:
            raise TransportClosed(str(e)) from e
        except (WebSocketException, OSError) as e:
            raise TransportFatal(str(e)) from e

    async def close(self) -> None:
        """Close the socket. Errors while closing are logged, not raised."""
        try:
            await self._websocket.close()
        except (WebSocketException, OSError) as e:
            logger.debug(f"Error while closing connection to {self.url}: {e}")


Connector = Callable[[str], Awaitable[CanvasConnection]]


async def open_connection(
    url: str,
    ping_interval: Optional[float] = None,
    max_size: Optional[int] = 2 ** 20,
) -> CanvasConnection:
    """
    Perform the WebSocket handshake against a canvas endpoint.

    Args:
        url: ws:// or wss:// endpoint (credentials, if any, are part of it)
        ping_interval: Keepalive ping interval in seconds (None = off)
        max_size: Maximum inbound message size in bytes

    Returns:
        Connected CanvasConnection

    Raises:
        HandshakeError: If the connection cannot be established
    """
    try:
        websocket = await websockets.connect(
            url,
            open_timeout=None,
            ping_interval=ping_interval,
            max_size=max_size,
        )
    except (WebSocketException, OSError, asyncio.TimeoutError) as e:
        raise HandshakeError(url, e) from e

    logger.debug(f"Connected to canvas endpoint: {url}")
    return CanvasConnection(url, websocket)


class ConnectionSlot:
    """
    Indirection slot holding a worker's current connection.

    Both worker duties go through the slot, so replacing the
    connection is a single swap observed consistently by both.

    Attributes:
        url: Endpoint used for every (re)connection
        generation: Number of times the connection has been replaced

    Example:
        slot = ConnectionSlot(url, await connector(url), connector)
        await slot.send(command)
        await slot.reconnect()
    """

    def __init__(
        self,
        url: str,
        connection: CanvasConnection,
        connector: Connector,
    ) -> None:
        self.url = url
        self._connection = connection
        self._connector = connector
        self._lock = asyncio.Lock()
        self._generation: int = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current(self) -> CanvasConnection:
        return self._connection

    async def send(self, data: bytes) -> None:
        """Send on the current connection (raises SendError)."""
        async with self._lock:
            await self._connection.send(data)

    async def recv(self) -> Message:
        """
        Receive from the current connection.

        The handle is read under the lock; the wait for the next frame
        happens outside it, otherwise an idle peer would block sends.
        """
        async with self._lock:
            connection = self._connection
        return await connection.recv()

    async def reconnect(self) -> None:
        """
        Replace the connection with a fresh one. Single attempt.

        Raises:
            HandshakeError: If the new handshake fails; the old
                (closed) connection stays in the slot
        """
        async with self._lock:
            old = self._connection
            self._connection = await self._connector(self.url)
            self._generation += 1
        await old.close()

    async def close(self) -> None:
        async with self._lock:
            await self._connection.close()
