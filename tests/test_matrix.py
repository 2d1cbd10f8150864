from __future__ import annotations

import math

import numpy as np
import pytest

from scratchapixel.geometry import Matrix4x4, Vector3

TRANSLATE_HALF = [
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 1.0, 0.0],
    [0.5, 0.5, 0.5, 1.0],
]


def test_zero_matrix() -> None:
    m = Matrix4x4.zero()
    np.testing.assert_array_equal(m.entries, np.zeros((4, 4)))
    assert m == Matrix4x4([[0.0] * 4 for _ in range(4)])


def test_custom_entries_are_kept_as_given() -> None:
    grid = [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 2.0, 0.0, 0.0],
        [0.0, 0.0, 3.0, 0.0],
        [0.0, 0.0, 4.0, 0.0],
    ]
    m = Matrix4x4(grid)
    np.testing.assert_array_equal(m.entries, grid)


def test_rejects_wrong_shape() -> None:
    with pytest.raises(ValueError):
        Matrix4x4([[1.0, 2.0], [3.0, 4.0]])


def test_entries_cannot_be_mutated_through_accessors() -> None:
    m = Matrix4x4.identity()
    row = m[0]
    row[0] = 42.0
    e = m.entries
    e[1, 1] = 42.0
    assert m == Matrix4x4.identity()


def test_row_indexing() -> None:
    m = Matrix4x4(
        [
            [1.0, 2.0, 3.0, 4.0],
            [2.0, 3.0, 4.0, 5.0],
            [3.0, 4.0, 5.0, 6.0],
            [4.0, 5.0, 6.0, 7.0],
        ]
    )
    np.testing.assert_array_equal(m[1], [2.0, 3.0, 4.0, 5.0])
    with pytest.raises(IndexError):
        m[4]
    with pytest.raises(IndexError):
        m[-1]


def test_diagonal_product() -> None:
    m = Matrix4x4.diagonal(1.0, 2.0, 3.0, 4.0)
    n = Matrix4x4.diagonal(4.0, 3.0, 2.0, 1.0)
    assert m @ n == Matrix4x4.diagonal(4.0, 6.0, 6.0, 4.0)
    assert m.multiply(n) == Matrix4x4.diagonal(4.0, 6.0, 6.0, 4.0)


def test_product_is_not_commutative() -> None:
    a = Matrix4x4([[1, 2, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]])
    b = Matrix4x4([[1, 0, 0, 0], [3, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]])
    assert a @ b != b @ a
    np.testing.assert_array_equal((a @ b).entries, np.asarray(a) @ np.asarray(b))


def test_transpose() -> None:
    m = Matrix4x4(np.arange(1.0, 17.0).reshape(4, 4))
    assert m.transpose() == Matrix4x4(
        [
            [1.0, 5.0, 9.0, 13.0],
            [2.0, 6.0, 10.0, 14.0],
            [3.0, 7.0, 11.0, 15.0],
            [4.0, 8.0, 12.0, 16.0],
        ]
    )
    rng = np.random.default_rng(0)
    for _ in range(20):
        r = Matrix4x4(rng.normal(size=(4, 4)))
        assert r.transpose().transpose() == r


def test_transform_point_translates() -> None:
    m = Matrix4x4(TRANSLATE_HALF)
    assert m.transform_point(Vector3(1.0, 2.0, 3.0)) == Vector3(1.5, 2.5, 3.5)
    assert Matrix4x4.translation(0.5, 0.5, 0.5) == m


def test_transform_direction_ignores_translation() -> None:
    m = Matrix4x4(TRANSLATE_HALF)
    assert m.transform_direction(Vector3(1.0, 2.0, 3.0)) == Vector3(1.0, 2.0, 3.0)


def test_transform_writes_into_destination() -> None:
    m = Matrix4x4(TRANSLATE_HALF)
    src = Vector3(1.0, 2.0, 3.0)
    dst = Vector3.zero()
    result = m.transform_point(src, out=dst)
    assert result is dst
    assert dst == Vector3(1.5, 2.5, 3.5)
    assert src == Vector3(1.0, 2.0, 3.0)

    dst32 = Vector3.zero(dtype=np.float32)
    m.transform_direction(src, out=dst32)
    assert dst32.dtype == np.float32
    assert dst32 == Vector3(1.0, 2.0, 3.0)


def test_transform_point_perspective_divide() -> None:
    m = Matrix4x4.diagonal(1.0, 1.0, 1.0, 2.0)
    assert m.transform_point(Vector3(2.0, 4.0, 6.0)) == Vector3(1.0, 2.0, 3.0)


def test_transform_point_skips_divide_when_w_is_zero() -> None:
    m = Matrix4x4.diagonal(1.0, 1.0, 1.0, 0.0)
    assert m.transform_point(Vector3(2.0, 4.0, 6.0)) == Vector3(2.0, 4.0, 6.0)


def test_batch_transforms_match_single() -> None:
    rng = np.random.default_rng(1)
    m = Matrix4x4(rng.normal(size=(4, 4)))
    pts = rng.normal(size=(10, 3))
    got = m.transform_points(pts)
    got_dirs = m.transform_directions(pts)
    for i in range(10):
        v = Vector3.from_array(pts[i])
        np.testing.assert_allclose(got[i], np.asarray(m.transform_point(v)), rtol=1e-12, atol=1e-12)
        np.testing.assert_allclose(got_dirs[i], np.asarray(m.transform_direction(v)), rtol=1e-12, atol=1e-12)


def test_batch_transform_zero_w_rows_are_not_divided() -> None:
    m = Matrix4x4.diagonal(1.0, 1.0, 1.0, 0.0)
    pts = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    np.testing.assert_array_equal(m.transform_points(pts), pts)


def test_rotations_are_right_handed() -> None:
    q = math.pi / 2
    assert Matrix4x4.rotation_z(q).transform_direction(Vector3(1, 0, 0)).allclose(Vector3(0, 1, 0), atol=1e-12)
    assert Matrix4x4.rotation_x(q).transform_direction(Vector3(0, 1, 0)).allclose(Vector3(0, 0, 1), atol=1e-12)
    assert Matrix4x4.rotation_y(q).transform_direction(Vector3(0, 0, 1)).allclose(Vector3(1, 0, 0), atol=1e-12)


def test_composition_applies_left_operand_first() -> None:
    m = Matrix4x4.scaling(2.0, 2.0, 2.0) @ Matrix4x4.translation(1.0, 0.0, 0.0)
    assert m.transform_point(Vector3(1.0, 1.0, 1.0)) == Vector3(3.0, 2.0, 2.0)


def test_inverse() -> None:
    m = Matrix4x4.rotation_y(0.3) @ Matrix4x4.translation(1.0, -2.0, 0.5)
    assert (m @ m.inverse()).allclose(Matrix4x4.identity(), atol=1e-12)
    p = Vector3(0.25, 4.0, -1.0)
    assert m.inverse().transform_point(m.transform_point(p)).allclose(p, atol=1e-12)
    with pytest.raises(np.linalg.LinAlgError):
        Matrix4x4.zero().inverse()


def test_integer_matrices() -> None:
    m = Matrix4x4.diagonal(1, 2, 3, 4, dtype=np.int64)
    assert m.dtype == np.int64
    assert (m @ m).dtype == np.int64
    assert m.transpose() == m


def test_array_conversion_without_copy_is_read_only() -> None:
    m = Matrix4x4.identity()
    shared = m.__array__(copy=False)
    assert not shared.flags.writeable
    np.testing.assert_array_equal(shared, np.eye(4))
    with pytest.raises(ValueError):
        m.__array__(dtype=np.float32, copy=False)
    assert m.__array__(dtype=np.float32).dtype == np.float32
    owned = np.asarray(m)
    owned[0, 0] = 5.0
    assert m == Matrix4x4.identity()
