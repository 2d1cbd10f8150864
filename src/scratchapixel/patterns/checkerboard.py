from __future__ import annotations

import logging
from dataclasses import dataclass

from scratchapixel.ppm import BLACK, WHITE, RGB, PixelBuffer

logger = logging.getLogger(__name__)


class PatternValidationError(ValueError):
    pass


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise PatternValidationError(msg)


@dataclass(frozen=True)
class CheckerboardSpec:
    width: int = 64
    height: int = 64
    cell_px: int = 8
    even: RGB = BLACK
    odd: RGB = WHITE

    def __post_init__(self) -> None:
        _require(self.width > 0 and self.height > 0, "checkerboard width/height must be > 0")
        _require(self.cell_px > 0, "checkerboard cell_px must be > 0")
        _require(isinstance(self.even, RGB) and isinstance(self.odd, RGB), "checkerboard colors must be RGB")

    def color_at(self, x: int, y: int) -> RGB:
        parity = (x // self.cell_px + y // self.cell_px) % 2
        return self.even if parity == 0 else self.odd


def paint_checkerboard(buffer: PixelBuffer, spec: CheckerboardSpec) -> int:
    """
    Paint `spec` into `buffer` pixel by pixel, starting at the top-left corner.

    Pixels of the spec's extent that fall outside the buffer are skipped.
    Returns the number of pixels actually written.
    """
    written = 0
    for y in range(spec.height):
        for x in range(spec.width):
            if buffer.set_pixel(x, y, spec.color_at(x, y)):
                written += 1
    skipped = spec.width * spec.height - written
    if skipped:
        logger.debug("checkerboard: %d pixels outside the %dx%d buffer", skipped, buffer.width, buffer.height)
    return written


def render_checkerboard(spec: CheckerboardSpec) -> PixelBuffer:
    buffer = PixelBuffer(spec.height, spec.width)
    paint_checkerboard(buffer, spec)
    return buffer
