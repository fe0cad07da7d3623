"""
pixel-brush
===========

Collaborative painter for a shared remote pixel canvas.

Several workers, each holding its own WebSocket to the canvas service,
draw pixels from one shared, quantizing walk over a source image and
submit them as 4-byte paint commands. Together they paint the image
exactly once.

Components:
    - palette: The 25 canvas colors and nearest-color quantization
    - canvas: Pixel source and wire command encoder
    - stream: WebSocket transport and image decoding
    - worker: Per-endpoint connection/paint state machine
    - main: Orchestrator and command line entry point

Example:
    from pixel_brush.config import load_config
    from pixel_brush.main import run_brush

    settings = load_config("pb.json")
    reports = asyncio.run(run_brush(settings))
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
