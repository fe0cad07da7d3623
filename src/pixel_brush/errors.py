"""
Error Taxonomy
==============

Exceptions raised across pixel-brush.

Escalation Rules:
    - ConfigurationError, OutOfRangeError, ImageDecodeError:
      startup failures, abort the process
    - HandshakeError: fatal to the worker being created only
    - SendError: transient, retried by the paint duty
    - TransportClosed: recoverable with exactly one reconnection
    - TransportFatal: terminates the affected worker only
"""


class PixelBrushError(Exception):
    """Base class for all pixel-brush errors."""
    pass


class ConfigurationError(PixelBrushError):
    """Raised when configuration is missing or invalid."""
    pass


class OutOfRangeError(PixelBrushError):
    """Raised when the brush origin lies outside the canvas."""
    pass


class ImageDecodeError(PixelBrushError):
    """Raised when the source image cannot be decoded."""
    pass


class HandshakeError(PixelBrushError):
    """Raised when a WebSocket handshake with a canvas endpoint fails."""

    def __init__(self, url: str, reason: object) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Handshake with {url} failed: {reason}")


class SendError(PixelBrushError):
    """Raised when an outbound paint command could not be sent."""
    pass


class TransportClosed(PixelBrushError):
    """Raised when the peer closed the connection or it was already closed."""
    pass


class TransportFatal(PixelBrushError):
    """Raised on any other transport failure."""
    pass
