from scratchapixel.geometry.matrix import Matrix4x4
from scratchapixel.geometry.vector import (
    Vector3,
    cos_phi,
    cos_theta,
    sin_phi,
    sin_theta,
    spherical_phi,
    spherical_theta,
    spherical_to_cartesian,
)

__all__ = [
    "Matrix4x4",
    "Vector3",
    "cos_phi",
    "cos_theta",
    "sin_phi",
    "sin_theta",
    "spherical_phi",
    "spherical_theta",
    "spherical_to_cartesian",
]
