"""
pixel-brush Main Application
============================

Entry point: paints one image onto the remote canvas with N workers.

Startup:
    1. Load .env and the config file
    2. Decode the image and build ONE shared pixel source
    3. Connect one worker per configured endpoint
    4. Run all workers until each one terminates

All workers pull from the same source, so the image is painted once
in total and throughput grows with the number of endpoints.

Exit Codes:
    0 - at least one worker ran to termination
    1 - no worker could connect
    2 - configuration, origin or image error at startup
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from pixel_brush import __version__
from pixel_brush.canvas import PixelSource, SharedPixelSource
from pixel_brush.config import Settings, load_config, setup_logging
from pixel_brush.errors import (
    ConfigurationError,
    HandshakeError,
    ImageDecodeError,
    OutOfRangeError,
)
from pixel_brush.models.state import WorkerReport
from pixel_brush.palette import DEFAULT_PALETTE, ColorQuantizer, Palette
from pixel_brush.stream import Connector, load_raster, open_connection
from pixel_brush.worker import JitterSleeper, Worker
from pixel_brush.worker.pacing import SleepFunc


logger = logging.getLogger(__name__)


# =============================================================================
# Orchestration
# =============================================================================

def build_source(
    settings: Settings,
    palette: Palette = DEFAULT_PALETTE,
) -> SharedPixelSource:
    """
    Decode the configured image into the shared pixel source.

    Args:
        settings: Loaded configuration
        palette: Palette the image is quantized against

    Raises:
        ImageDecodeError: If the image cannot be decoded
        OutOfRangeError: If the brush origin is off the canvas
    """
    raster = load_raster(settings.brush.image)
    source = PixelSource(
        raster,
        settings.brush.offset_x,
        settings.brush.offset_y,
        quantizer=ColorQuantizer(palette),
    )
    logger.info(
        f"Brush at ({settings.brush.offset_x}, {settings.brush.offset_y}), "
        f"{source.total} pixels to paint"
    )
    return SharedPixelSource(source)


def default_connector(settings: Settings) -> Connector:
    """Connector opening WebSockets with the configured stream options."""

    async def connect(url: str):
        return await open_connection(
            url,
            ping_interval=settings.stream.ping_interval,
            max_size=settings.stream.max_message_size,
        )

    return connect


async def run_endpoint(
    worker_id: int,
    url: str,
    settings: Settings,
    source: SharedPixelSource,
    pacing: JitterSleeper,
    connector: Connector,
    sleep: SleepFunc = asyncio.sleep,
) -> Optional[WorkerReport]:
    """
    Connect one worker and run it to termination.

    Each endpoint gets its own task, so a handshake that hangs or fails
    only holds up its own worker.

    Returns:
        The worker's final report, or None if the handshake failed
    """
    worker = Worker(
        worker_id,
        url,
        source,
        pacing,
        connector=connector,
        max_send_attempts=settings.send.max_attempts,
        retry_delay=settings.send.retry_delay_seconds,
        sleep=sleep,
    )
    try:
        await worker.connect()
    except HandshakeError as e:
        logger.error(f"Worker #{worker_id} could not start: {e}")
        return None

    try:
        return await worker.run()
    except Exception:
        logger.exception(f"Worker #{worker_id} crashed")
        return worker.report()


async def run_brush(
    settings: Settings,
    source: Optional[SharedPixelSource] = None,
    connector: Optional[Connector] = None,
    sleep: SleepFunc = asyncio.sleep,
) -> List[WorkerReport]:
    """
    Paint the configured image with one worker per endpoint.

    Args:
        settings: Loaded configuration
        source: Shared pixel source (built from settings if None)
        connector: Handshake function (WebSocket by default)
        sleep: Coroutine used for every timed wait

    Returns:
        One WorkerReport per worker that connected and ran
    """
    if source is None:
        source = build_source(settings)
    if connector is None:
        connector = default_connector(settings)

    pacing = JitterSleeper(
        settings.pacing.min_delay_seconds,
        settings.pacing.max_delay_seconds,
        seed=settings.pacing.seed,
        sleep=sleep,
    )

    logger.info(f"Starting {len(settings.bots)} workers")
    tasks = [
        asyncio.create_task(
            run_endpoint(worker_id, url, settings, source, pacing, connector, sleep),
            name=f"worker-{worker_id}",
        )
        for worker_id, url in enumerate(settings.bots)
    ]
    results = await asyncio.gather(*tasks)

    reports = [report for report in results if report is not None]
    if not reports:
        logger.error("No worker could connect; nothing was painted")
        return []

    logger.info(
        f"{len(reports)}/{len(settings.bots)} workers finished; "
        f"source progress: {source.metrics()}"
    )
    return reports


# =============================================================================
# Command Line
# =============================================================================

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pixel-brush",
        description="Paint an image onto the shared canvas with several workers",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Config file (YAML or JSON). Defaults to $PB_CONFIG, then pb.json",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Console entry point."""
    load_dotenv()
    args = parse_args(argv)

    try:
        settings = load_config(args.config)
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(str(e))
        return 2

    setup_logging(settings)
    logger.info(f"Starting pixel-brush {__version__}")

    try:
        source = build_source(settings)
    except (ImageDecodeError, OutOfRangeError) as e:
        logger.error(str(e))
        return 2

    reports = asyncio.run(run_brush(settings, source=source))
    return 0 if reports else 1


if __name__ == "__main__":
    sys.exit(main())
