from scratchapixel.geometry import Matrix4x4, Vector3, spherical_to_cartesian
from scratchapixel.ppm import RGB, PixelBuffer

__all__ = [
    "Matrix4x4",
    "Vector3",
    "spherical_to_cartesian",
    "RGB",
    "PixelBuffer",
]
