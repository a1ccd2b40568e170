"""Conversions between pose representations, vectors and quaternions."""

from __future__ import annotations

import numpy as np

__all__ = [
    "to_descriptor_vector",
    "to_se3",
    "to_homogeneous",
    "sim3_to_matrix",
    "to_vector3d",
    "to_matrix3d",
    "to_quaternion",
]


def to_descriptor_vector(descriptors):
    """Split a descriptor matrix into a list of its rows."""
    matrix = np.asarray(descriptors)
    if matrix.ndim != 2:
        raise ValueError("descriptors must be a two-dimensional array")
    return [row.copy() for row in matrix]


def to_se3(matrix):
    """Return the rotation (3x3) and translation (3,) of a homogeneous transform."""
    m = np.asarray(matrix, dtype=np.float64)
    if m.ndim != 2 or m.shape[0] < 3 or m.shape[1] < 4:
        raise ValueError("a transform needs at least 3 rows and 4 columns")
    return m[:3, :3].copy(), m[:3, 3].copy()


def to_homogeneous(rotation, translation):
    """Build a 4x4 single-precision transform from a rotation and a translation."""
    r = np.asarray(rotation, dtype=np.float64)
    t = np.asarray(translation, dtype=np.float64).reshape(-1)
    if r.shape != (3, 3):
        raise ValueError("rotation must be 3x3")
    if t.size != 3:
        raise ValueError("translation must have three components")
    out = np.eye(4, dtype=np.float32)
    out[:3, :3] = r
    out[:3, 3] = t
    return out


def sim3_to_matrix(rotation, translation, scale):
    """Build a 4x4 transform whose upper-left block is the scaled rotation."""
    return to_homogeneous(float(scale) * np.asarray(rotation, dtype=np.float64), translation)


def to_vector3d(value):
    """Return a double-precision 3-vector from an array or a point with x, y, z."""
    if all(hasattr(value, name) for name in ("x", "y", "z")):
        return np.array([value.x, value.y, value.z], dtype=np.float64)
    flat = np.asarray(value, dtype=np.float64).reshape(-1)
    if flat.size < 3:
        raise ValueError("a 3-vector needs three components")
    return flat[:3].copy()


def to_matrix3d(matrix):
    """Return the upper-left 3x3 block of a matrix in double precision."""
    m = np.asarray(matrix, dtype=np.float64)
    if m.ndim != 2 or m.shape[0] < 3 or m.shape[1] < 3:
        raise ValueError("matrix must be at least 3x3")
    return m[:3, :3].copy()


def to_quaternion(matrix):
    """Return the quaternion [x, y, z, w] of a rotation matrix."""
    m = to_matrix3d(matrix)
    q = np.zeros(3)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        s = np.sqrt(trace + 1.0)
        w = 0.5 * s
        s = 0.5 / s
        q[0] = (m[2, 1] - m[1, 2]) * s
        q[1] = (m[0, 2] - m[2, 0]) * s
        q[2] = (m[1, 0] - m[0, 1]) * s
    else:
        i = 0
        if m[1, 1] > m[0, 0]:
            i = 1
        if m[2, 2] > m[i, i]:
            i = 2
        j = (i + 1) % 3
        k = (j + 1) % 3
        s = np.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
        q[i] = 0.5 * s
        s = 0.5 / s
        w = (m[k, j] - m[j, k]) * s
        q[j] = (m[j, i] + m[i, j]) * s
        q[k] = (m[k, i] + m[i, k]) * s
    return np.array([q[0], q[1], q[2], w], dtype=np.float32)