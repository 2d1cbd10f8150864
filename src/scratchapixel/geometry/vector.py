from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, DTypeLike


def _check_numeric(dtype: np.dtype) -> np.dtype:
    if not np.issubdtype(dtype, np.number):
        raise TypeError(f"Vector3 requires a numeric dtype, got {dtype}")
    return dtype


class Vector3:
    """
    3-component vector over a numpy numeric dtype (float64 by default).

    The components live in a single (3,) array, so every operation works the
    same way for float32, float64 or integer vectors; arithmetic follows numpy
    type promotion. Instances are mutable (components and `normalize`), which
    is what lets `Matrix4x4.transform_point(..., out=v)` write into a
    caller-owned vector.
    """

    __slots__ = ("_xyz",)

    # numpy scalars and arrays defer to the operators below instead of
    # converting the vector through __array__.
    __array_ufunc__ = None

    def __init__(self, x: Any, y: Any, z: Any, dtype: DTypeLike = np.float64) -> None:
        dt = _check_numeric(np.dtype(dtype))
        self._xyz = np.array([x, y, z], dtype=dt)

    @classmethod
    def from_array(cls, a: ArrayLike, dtype: DTypeLike | None = None) -> Vector3:
        arr = np.asarray(a)
        if arr.shape != (3,):
            raise ValueError(f"expected an array of shape (3,), got {arr.shape}")
        if dtype is None:
            dtype = arr.dtype if np.issubdtype(arr.dtype, np.number) else np.float64
        return cls(arr[0], arr[1], arr[2], dtype=dtype)

    @classmethod
    def zero(cls, dtype: DTypeLike = np.float64) -> Vector3:
        return cls(0, 0, 0, dtype=dtype)

    @classmethod
    def diagonal(cls, value: Any, dtype: DTypeLike = np.float64) -> Vector3:
        return cls(value, value, value, dtype=dtype)

    @classmethod
    def from_spherical(cls, theta: float, phi: float, dtype: DTypeLike = np.float64) -> Vector3:
        return spherical_to_cartesian(theta, phi, dtype=dtype)

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> Vector3:
        v = cls.__new__(cls)
        v._xyz = arr
        return v

    # Components

    @property
    def dtype(self) -> np.dtype:
        return self._xyz.dtype

    @property
    def x(self) -> Any:
        return self._xyz[0]

    @x.setter
    def x(self, value: Any) -> None:
        self._xyz[0] = value

    @property
    def y(self) -> Any:
        return self._xyz[1]

    @y.setter
    def y(self, value: Any) -> None:
        self._xyz[1] = value

    @property
    def z(self) -> Any:
        return self._xyz[2]

    @z.setter
    def z(self, value: Any) -> None:
        self._xyz[2] = value

    def set(self, x: Any, y: Any, z: Any) -> None:
        self._xyz[:] = (x, y, z)

    def copy(self) -> Vector3:
        return self._wrap(self._xyz.copy())

    def __len__(self) -> int:
        return 3

    def __iter__(self) -> Iterator[Any]:
        return iter(self._xyz)

    def __getitem__(self, index: int) -> Any:
        return self._xyz[index]

    def __array__(self, dtype: DTypeLike | None = None, copy: bool | None = None) -> np.ndarray:
        if copy is False:
            raise ValueError("Vector3 cannot be converted to an array without a copy")
        if dtype is None:
            return self._xyz.copy()
        return self._xyz.astype(dtype)

    def __repr__(self) -> str:
        x, y, z = self._xyz.tolist()
        return f"Vector3({x!r}, {y!r}, {z!r}, dtype={self.dtype.name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return bool(np.array_equal(self._xyz, other._xyz))

    __hash__ = None  # mutable

    def allclose(self, other: Vector3, rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        return bool(np.allclose(self._xyz, np.asarray(other), rtol=rtol, atol=atol))

    # Algebra

    def __add__(self, other: object) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self._wrap(self._xyz + other._xyz)

    def __sub__(self, other: object) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self._wrap(self._xyz - other._xyz)

    def __neg__(self) -> Vector3:
        return self._wrap(-self._xyz)

    def __mul__(self, scalar: Any) -> Vector3:
        if isinstance(scalar, Vector3) or np.ndim(scalar) != 0:
            return NotImplemented
        return self._wrap(self._xyz * scalar)

    __rmul__ = __mul__

    def dot(self, other: Vector3) -> Any:
        return np.dot(self._xyz, other._xyz)

    def cross(self, other: Vector3) -> Vector3:
        a, b = self._xyz, other._xyz
        return self._wrap(
            np.array(
                [
                    a[1] * b[2] - a[2] * b[1],
                    a[2] * b[0] - a[0] * b[2],
                    a[0] * b[1] - a[1] * b[0],
                ],
                dtype=np.result_type(a, b),
            )
        )

    def norm_squared(self) -> Any:
        return self.dot(self)

    def length(self) -> Any:
        return np.sqrt(self.norm_squared())

    def normalize(self) -> None:
        """
        Scale this vector in place to unit length.

        A zero-length vector is left untouched. Integer vectors cannot hold the
        result and raise TypeError.
        """
        if not np.issubdtype(self.dtype, np.inexact):
            raise TypeError(f"normalize requires a floating-point dtype, got {self.dtype}")
        n = self.length()
        if n > 0:
            self._xyz *= 1 / n

    def normalized(self) -> Vector3:
        v = self.copy() if np.issubdtype(self.dtype, np.inexact) else self._wrap(self._xyz.astype(np.float64))
        v.normalize()
        return v


def spherical_to_cartesian(theta: float, phi: float, dtype: DTypeLike = np.float64) -> Vector3:
    """
    Unit direction for polar angle `theta` (from +z) and azimuth `phi` (from +x), in radians.

    No range checks: any angle pair gives a well-defined vector.
    """
    st = np.sin(theta)
    return Vector3(np.cos(phi) * st, np.sin(phi) * st, np.cos(theta), dtype=dtype)


# Accessors below expect unit-length directions (the caller normalizes). They
# accept a Vector3 or an array-like with last axis 3 and broadcast over batches.


def _components(v: Vector3 | ArrayLike) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    a = np.asarray(v)
    if a.shape[-1:] != (3,):
        raise ValueError(f"expected last axis of length 3, got shape {a.shape}")
    if not np.issubdtype(a.dtype, np.inexact):
        a = a.astype(np.float64)
    return a[..., 0], a[..., 1], a[..., 2]


def _unwrap(a: Any) -> Any:
    # 0-d results come back as numpy scalars, batches as arrays.
    return np.asarray(a)[()]


def cos_theta(v: Vector3 | ArrayLike) -> Any:
    _, _, z = _components(v)
    return _unwrap(z)


def sin_theta(v: Vector3 | ArrayLike) -> Any:
    _, _, z = _components(v)
    return _unwrap(np.sqrt(np.maximum(0.0, 1.0 - z * z)))


def spherical_theta(v: Vector3 | ArrayLike) -> Any:
    _, _, z = _components(v)
    return _unwrap(np.arccos(np.clip(z, -1.0, 1.0)))


def spherical_phi(v: Vector3 | ArrayLike) -> Any:
    """Azimuth in [0, 2*pi)."""
    x, y, _ = _components(v)
    p = np.arctan2(y, x)
    return _unwrap(np.where(p < 0, p + 2 * np.pi, p))


def cos_phi(v: Vector3 | ArrayLike) -> Any:
    # Poles (sin_theta == 0) have no azimuth; they report phi = 0.
    x, _, _ = _components(v)
    st = np.asarray(sin_theta(v))
    ratio = np.divide(x, st, out=np.ones_like(st), where=st != 0)
    return _unwrap(np.clip(ratio, -1.0, 1.0))


def sin_phi(v: Vector3 | ArrayLike) -> Any:
    _, y, _ = _components(v)
    st = np.asarray(sin_theta(v))
    ratio = np.divide(y, st, out=np.zeros_like(st), where=st != 0)
    return _unwrap(np.clip(ratio, -1.0, 1.0))
