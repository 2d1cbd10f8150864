from scratchapixel.ppm.format import AllocationError, PixelBuffer, PixelBufferError, SinkWriteError
from scratchapixel.ppm.rgb import BLACK, RED, RGB, WHITE

__all__ = [
    "AllocationError",
    "PixelBuffer",
    "PixelBufferError",
    "SinkWriteError",
    "RGB",
    "BLACK",
    "WHITE",
    "RED",
]
