from __future__ import annotations

import logging
import operator
from pathlib import Path
from typing import BinaryIO, Literal

import numpy as np
from PIL import Image

from scratchapixel.ppm.rgb import RGB

logger = logging.getLogger(__name__)

MAXVAL = 255

WriteStage = Literal["header", "body"]


class PixelBufferError(Exception):
    pass


class AllocationError(PixelBufferError, MemoryError):
    pass


class SinkWriteError(PixelBufferError, OSError):
    """The byte sink refused the header or the pixel data; `stage` says which."""

    def __init__(self, stage: WriteStage, message: str) -> None:
        super().__init__(message)
        self.stage = stage


class PixelBuffer:
    """
    Fixed-size RGB canvas serialized as binary PPM.

    Storage is one contiguous uint8 array of 3 * height * width bytes, row-major
    (top row first), R, G, B per pixel, zero-initialized (black). Reads and
    writes outside [0, width) x [0, height) are reported through the return
    value and never touch the buffer.

    The buffer has no locking; concurrent writers must keep to disjoint pixels.
    """

    __slots__ = ("_height", "_width", "_data")

    def __init__(self, height: int, width: int) -> None:
        height = operator.index(height)
        width = operator.index(width)
        if height < 0 or width < 0:
            raise ValueError(f"buffer dimensions must be >= 0, got height={height} width={width}")

        size = 3 * height * width
        if size > np.iinfo(np.intp).max:
            raise AllocationError(f"cannot represent a {width}x{height} RGB buffer ({size} bytes)")
        try:
            data = np.zeros(size, dtype=np.uint8)
        except (MemoryError, ValueError, OverflowError) as e:
            raise AllocationError(f"cannot allocate a {width}x{height} RGB buffer ({size} bytes)") from e

        self._height = height
        self._width = width
        self._data = data
        logger.debug("allocated %dx%d pixel buffer (%d bytes)", width, height, size)

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def size_bytes(self) -> int:
        return self._data.size

    def __repr__(self) -> str:
        return f"PixelBuffer(height={self._height}, width={self._width})"

    def offset(self, x: int, y: int) -> int | None:
        """Byte offset of pixel (x, y), or None when it lies outside the canvas."""
        x = operator.index(x)
        y = operator.index(y)
        if 0 <= x < self._width and 0 <= y < self._height:
            return 3 * self._width * y + 3 * x
        return None

    def get_pixel(self, x: int, y: int) -> RGB | None:
        off = self.offset(x, y)
        if off is None:
            return None
        r, g, b = self._data[off : off + 3].tolist()
        return RGB(r, g, b)

    def set_pixel(self, x: int, y: int, color: RGB) -> bool:
        off = self.offset(x, y)
        if off is None:
            return False
        self._data[off : off + 3] = (color.r, color.g, color.b)
        return True

    def fill(self, color: RGB) -> None:
        self.as_array()[...] = (color.r, color.g, color.b)

    def as_array(self) -> np.ndarray:
        """Writable (height, width, 3) view sharing the buffer's storage."""
        return self._data.reshape(self._height, self._width, 3)

    def header(self) -> bytes:
        # Field order is width then height.
        return f"P6 {self._width} {self._height} {MAXVAL}\n".encode("ascii")

    def to_bytes(self) -> bytes:
        return self.header() + self._data.tobytes()

    def write_to(self, sink: BinaryIO) -> None:
        """
        Write the header followed by the raw pixel bytes to an open binary sink.

        Raises SinkWriteError (an OSError) naming the failed stage. A failure in
        the body leaves the header already written; cleanup is up to the caller.
        """
        try:
            sink.write(self.header())
        except OSError as e:
            raise SinkWriteError("header", f"could not write PPM header: {e}") from e
        try:
            sink.write(memoryview(self._data))
        except OSError as e:
            raise SinkWriteError("body", f"could not write PPM pixel data: {e}") from e
        logger.debug("wrote %dx%d PPM (%d bytes of pixel data)", self._width, self._height, self._data.size)

    def write_file(self, path: str | Path) -> Path:
        p = Path(path)
        with p.open("wb") as f:
            self.write_to(f)
        logger.debug("wrote %s", p)
        return p

    def to_image(self) -> Image.Image:
        """Copy the pixels into an in-memory Pillow RGB image."""
        return Image.fromarray(self.as_array().copy())
