from __future__ import annotations

import math
import operator
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

from scratchapixel.geometry.vector import Vector3


class Matrix4x4:
    """
    4x4 matrix over a numpy numeric dtype (float64 by default).

    Vectors are rows: a point p maps to p @ M, so translation lives in the last
    row and `a @ b` applies `a` first, then `b`. No exposed operation mutates
    the entries; transpose, product and inverse all return new matrices.
    """

    __slots__ = ("_m",)

    def __init__(self, entries: ArrayLike, dtype: DTypeLike = np.float64) -> None:
        dt = np.dtype(dtype)
        if not np.issubdtype(dt, np.number):
            raise TypeError(f"Matrix4x4 requires a numeric dtype, got {dt}")
        m = np.array(entries, dtype=dt)
        if m.shape != (4, 4):
            raise ValueError(f"Matrix4x4 entries must have shape (4, 4), got {m.shape}")
        m.flags.writeable = False
        self._m = m

    @classmethod
    def zero(cls, dtype: DTypeLike = np.float64) -> Matrix4x4:
        return cls(np.zeros((4, 4)), dtype=dtype)

    @classmethod
    def diagonal(cls, p: Any, q: Any, r: Any, s: Any, dtype: DTypeLike = np.float64) -> Matrix4x4:
        return cls(np.diag(np.array([p, q, r, s], dtype=dtype)), dtype=dtype)

    @classmethod
    def identity(cls, dtype: DTypeLike = np.float64) -> Matrix4x4:
        return cls.diagonal(1, 1, 1, 1, dtype=dtype)

    @classmethod
    def translation(cls, tx: float, ty: float, tz: float, dtype: DTypeLike = np.float64) -> Matrix4x4:
        m = np.eye(4)
        m[3, :3] = (tx, ty, tz)
        return cls(m, dtype=dtype)

    @classmethod
    def scaling(cls, sx: float, sy: float, sz: float, dtype: DTypeLike = np.float64) -> Matrix4x4:
        return cls.diagonal(sx, sy, sz, 1, dtype=dtype)

    @classmethod
    def rotation_x(cls, angle: float, dtype: DTypeLike = np.float64) -> Matrix4x4:
        c, s = math.cos(angle), math.sin(angle)
        return cls(
            [
                [1.0, 0.0, 0.0, 0.0],
                [0.0, c, s, 0.0],
                [0.0, -s, c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ],
            dtype=dtype,
        )

    @classmethod
    def rotation_y(cls, angle: float, dtype: DTypeLike = np.float64) -> Matrix4x4:
        c, s = math.cos(angle), math.sin(angle)
        return cls(
            [
                [c, 0.0, -s, 0.0],
                [0.0, 1.0, 0.0, 0.0],
                [s, 0.0, c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ],
            dtype=dtype,
        )

    @classmethod
    def rotation_z(cls, angle: float, dtype: DTypeLike = np.float64) -> Matrix4x4:
        c, s = math.cos(angle), math.sin(angle)
        return cls(
            [
                [c, s, 0.0, 0.0],
                [-s, c, 0.0, 0.0],
                [0.0, 0.0, 1.0, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ],
            dtype=dtype,
        )

    @property
    def dtype(self) -> np.dtype:
        return self._m.dtype

    @property
    def entries(self) -> np.ndarray:
        return self._m.copy()

    def __getitem__(self, row: int) -> np.ndarray:
        i = operator.index(row)
        if not 0 <= i < 4:
            raise IndexError(f"Matrix4x4 row index out of range: {row}")
        return self._m[i].copy()

    def __array__(self, dtype: DTypeLike | None = None, copy: bool | None = None) -> np.ndarray:
        same_dtype = dtype is None or np.dtype(dtype) == self.dtype
        if copy is False:
            if not same_dtype:
                raise ValueError(f"Matrix4x4 cannot be converted to {np.dtype(dtype)} without a copy")
            # read-only, so sharing it keeps the matrix immutable
            return self._m
        if same_dtype:
            return self._m.copy()
        return self._m.astype(dtype)

    def __repr__(self) -> str:
        return f"Matrix4x4({self._m.tolist()!r}, dtype={self.dtype.name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix4x4):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    def __hash__(self) -> int:
        return hash((self.dtype.str, self._m.tobytes()))

    def allclose(self, other: Matrix4x4, rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        return bool(np.allclose(self._m, np.asarray(other), rtol=rtol, atol=atol))

    def transpose(self) -> Matrix4x4:
        return Matrix4x4(self._m.T, dtype=self.dtype)

    def multiply(self, other: Matrix4x4) -> Matrix4x4:
        """Standard product: result[i][j] = sum_k self[i][k] * other[k][j]."""
        m = self._m @ other._m
        return Matrix4x4(m, dtype=m.dtype)

    def __matmul__(self, other: object) -> Matrix4x4:
        if not isinstance(other, Matrix4x4):
            return NotImplemented
        return self.multiply(other)

    def inverse(self) -> Matrix4x4:
        """Raises numpy.linalg.LinAlgError when the matrix is singular."""
        m = np.linalg.inv(self._m)
        return Matrix4x4(m, dtype=m.dtype)

    def transform_point(self, v: Vector3, out: Vector3 | None = None) -> Vector3:
        """
        Transform `v` as the homogeneous point (x, y, z, 1).

        The result is divided by the resulting w unless w is exactly 0 or 1; a
        zero w therefore yields the raw, undivided x/y/z instead of a division
        fault. When `out` is given the result is written into it (cast to its
        dtype) and `out` is returned.
        """
        src = np.asarray(v)
        xyz = src @ self._m[:3, :3] + self._m[3, :3]
        w = src @ self._m[:3, 3] + self._m[3, 3]
        if w != 1 and w != 0:
            xyz = xyz / w
        return _emit(xyz, out)

    def transform_direction(self, v: Vector3, out: Vector3 | None = None) -> Vector3:
        """Transform `v` by the upper-left 3x3 only: no translation, no divide."""
        xyz = np.asarray(v) @ self._m[:3, :3]
        return _emit(xyz, out)

    def transform_points(self, points: ArrayLike) -> np.ndarray:
        """Batch `transform_point` over an (N, 3) array, same divide policy per row."""
        p = _as_rows(points)
        xyz = p @ self._m[:3, :3] + self._m[3, :3]
        w = p @ self._m[:3, 3] + self._m[3, 3]
        divide = (w != 1) & (w != 0)
        safe_w = np.where(divide, w, 1)
        return xyz / safe_w[:, None]

    def transform_directions(self, directions: ArrayLike) -> np.ndarray:
        return _as_rows(directions) @ self._m[:3, :3]


def _as_rows(a: ArrayLike) -> np.ndarray:
    arr = np.asarray(a)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"expected an (N, 3) array, got shape {arr.shape}")
    return arr


def _emit(xyz: np.ndarray, out: Vector3 | None) -> Vector3:
    if out is None:
        return Vector3.from_array(xyz)
    out.set(xyz[0], xyz[1], xyz[2])
    return out
