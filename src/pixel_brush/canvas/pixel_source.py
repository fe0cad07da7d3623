"""
Pixel Source
============

Sequential producer of paint work over a decoded RGB raster.

This module provides:
    - PixelSource: Stateful row-major walk over the raster, one pixel
      per call, quantized to the palette
    - SharedPixelSource: Lock-guarded wrapper handed to every worker

Design Rules:
    - The cursor only ever moves forward; no coordinate is re-emitted
    - Once exhausted, a source stays exhausted
    - Workers only ever see SharedPixelSource.pull(); the cursor is
      never exposed
    - Each call advances at most ONE row
"""

import asyncio
import logging
from typing import Optional, Tuple

import numpy as np

from pixel_brush.canvas.constants import CANVAS_HEIGHT, CANVAS_WIDTH
from pixel_brush.errors import OutOfRangeError
from pixel_brush.models.pixel import PixelRecord
from pixel_brush.palette.quantizer import ColorQuantizer


logger = logging.getLogger(__name__)


class PixelSource:
    """
    Row-major walk over an RGB raster anchored at a canvas origin.

    Attributes:
        origin: (x0, y0) canvas coordinate of the raster's top-left pixel
        width: Raster width in pixels (after cropping to the canvas)
        height: Raster height in pixels (after cropping to the canvas)

    Example:
        source = PixelSource(raster, x0=10, y0=20)
        while (record := source.next()) is not None:
            paint(record)
    """

    def __init__(
        self,
        raster: np.ndarray,
        x0: int,
        y0: int,
        quantizer: Optional[ColorQuantizer] = None,
    ) -> None:
        """
        Initialize the pixel source.

        Args:
            raster: RGB image as an (H, W, 3) array
            x0: Canvas column of the raster's left edge
            y0: Canvas row of the raster's top edge
            quantizer: Palette resolver (defaults to the canvas palette)

        Raises:
            OutOfRangeError: If the origin is not on the canvas
            ValueError: If the raster is not (H, W, 3)
        """
        # Origin is checked before the raster is looked at
        if not 0 <= x0 < CANVAS_WIDTH:
            raise OutOfRangeError(f"X axis is out of range: {x0}")
        if not 0 <= y0 < CANVAS_HEIGHT:
            raise OutOfRangeError(f"Y axis is out of range: {y0}")

        raster = np.asarray(raster)
        if raster.ndim != 3 or raster.shape[2] != 3:
            raise ValueError(f"Raster must have shape (H, W, 3), got {raster.shape}")

        height, width = raster.shape[:2]
        max_width = CANVAS_WIDTH - x0
        max_height = CANVAS_HEIGHT - y0
        if width > max_width or height > max_height:
            logger.warning(
                f"Image {width}x{height} at ({x0}, {y0}) extends past the canvas, "
                f"cropping to {min(width, max_width)}x{min(height, max_height)}"
            )
            raster = raster[:max_height, :max_width]

        self._raster = raster
        self._quantizer = quantizer if quantizer is not None else ColorQuantizer()
        self._origin = (x0, y0)

        # Raster-relative cursor
        self._dx: int = 0
        self._dy: int = 0
        self._exhausted: bool = False
        self._emitted: int = 0

    @property
    def origin(self) -> Tuple[int, int]:
        return self._origin

    @property
    def width(self) -> int:
        return self._raster.shape[1]

    @property
    def height(self) -> int:
        return self._raster.shape[0]

    @property
    def total(self) -> int:
        """Number of records the source will produce in total."""
        return self.width * self.height

    @property
    def emitted(self) -> int:
        """Number of records produced so far."""
        return self._emitted

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def next(self) -> Optional[PixelRecord]:
        """
        Produce the next pixel record.

        Returns:
            PixelRecord in absolute canvas coordinates, or None once
            the raster has been fully walked
        """
        if self._exhausted:
            return None

        if self._dx >= self.width:
            self._dx = 0
            self._dy += 1

        if self._dy >= self.height or self.width == 0:
            self._exhausted = True
            logger.info(f"Pixel source exhausted after {self._emitted} pixels")
            return None

        dx, dy = self._dx, self._dy
        r, g, b = self._raster[dy, dx][:3]
        match = self._quantizer.resolve(r, g, b)
        if not match.exact:
            logger.warning(
                f"Pixel {{{dx}:{dy}}} does not exactly match an allowed color. "
                f"Converted to {match.index:x}"
            )

        self._dx += 1
        self._emitted += 1

        x0, y0 = self._origin
        return PixelRecord(x=x0 + dx, y=y0 + dy, color_id=match.index)


class SharedPixelSource:
    """
    Exclusive-access wrapper around a PixelSource.

    Pulling the next record is the only operation, and it runs under a
    single asyncio.Lock. Concurrent workers therefore never receive the
    same record and never leave a gap in the sequence.

    Example:
        shared = SharedPixelSource(PixelSource(raster, 0, 0))
        record = await shared.pull()
    """

    def __init__(self, source: PixelSource) -> None:
        self._source = source
        self._lock = asyncio.Lock()

    async def pull(self) -> Optional[PixelRecord]:
        """Take the next record, or None when the source is exhausted."""
        async with self._lock:
            return self._source.next()

    @property
    def exhausted(self) -> bool:
        return self._source.exhausted

    def metrics(self) -> dict:
        """
        Get source progress for observability.

        Returns:
            Dict with emitted, total, exhausted
        """
        return {
            "emitted": self._source.emitted,
            "total": self._source.total,
            "exhausted": self._source.exhausted,
        }
