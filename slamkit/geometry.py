"""Two-view geometry: normalisation, homography, fundamental matrix, triangulation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

__all__ = [
    "RTCheck",
    "normalize",
    "compute_h21",
    "compute_f21",
    "triangulate",
    "decompose_e",
    "check_rt",
]

_PARALLAX_COS_LIMIT = 0.99998


def _point(p):
    if hasattr(p, "pt"):
        p = p.pt
    if hasattr(p, "x") and hasattr(p, "y"):
        return float(p.x), float(p.y)
    return float(p[0]), float(p[1])


def _coords(points):
    if isinstance(points, np.ndarray):
        return points.astype(np.float64).reshape(-1, 2)
    return np.array([_point(p) for p in points], dtype=np.float64).reshape(-1, 2)


@dataclass
class RTCheck:
    """Outcome of testing one motion hypothesis against the matches."""

    n_good: int
    points: np.ndarray
    good: np.ndarray
    parallax: float


def normalize(points):
    """Centre points and scale them to unit mean absolute deviation.

    Returns the normalised points (N x 2) and the 3x3 transform that maps
    homogeneous input points onto them.
    """
    pts = _coords(points)
    if len(pts) == 0:
        raise ValueError("cannot normalize an empty point set")
    mean = pts.mean(axis=0)
    centred = pts - mean
    mean_dev = np.abs(centred).mean(axis=0)
    scale = 1.0 / mean_dev
    normalized = centred * scale
    T = np.eye(3)
    T[0, 0] = scale[0]
    T[1, 1] = scale[1]
    T[0, 2] = -mean[0] * scale[0]
    T[1, 2] = -mean[1] * scale[1]
    return normalized, T


def _null_vector(A):
    _, _, vt = np.linalg.svd(A, full_matrices=True)
    return vt[-1]


def compute_h21(points1, points2):
    """Estimate the homography mapping points1 onto points2 by DLT."""
    p1 = _coords(points1)
    p2 = _coords(points2)
    if len(p1) != len(p2):
        raise ValueError("point sets must have the same length")
    rows = []
    for (u1, v1), (u2, v2) in zip(p1, p2):
        rows.append([0.0, 0.0, 0.0, -u1, -v1, -1.0, v2 * u1, v2 * v1, v2])
        rows.append([u1, v1, 1.0, 0.0, 0.0, 0.0, -u2 * u1, -u2 * v1, -u2])
    return _null_vector(np.array(rows)).reshape(3, 3)


def compute_f21(points1, points2):
    """Estimate the rank-2 fundamental matrix with x2^T F x1 = 0."""
    p1 = _coords(points1)
    p2 = _coords(points2)
    if len(p1) != len(p2):
        raise ValueError("point sets must have the same length")
    rows = [
        [u2 * u1, u2 * v1, u2, v2 * u1, v2 * v1, v2, u1, v1, 1.0]
        for (u1, v1), (u2, v2) in zip(p1, p2)
    ]
    f_pre = _null_vector(np.array(rows)).reshape(3, 3)
    u, w, vt = np.linalg.svd(f_pre)
    w[2] = 0.0
    return u @ np.diag(w) @ vt


def triangulate(kp1, kp2, P1, P2):
    """Triangulate one correspondence from two 3x4 projection matrices."""
    x1, y1 = _point(kp1)
    x2, y2 = _point(kp2)
    P1 = np.asarray(P1, dtype=np.float64)
    P2 = np.asarray(P2, dtype=np.float64)
    A = np.vstack([
        x1 * P1[2] - P1[0],
        y1 * P1[2] - P1[1],
        x2 * P2[2] - P2[0],
        y2 * P2[2] - P2[1],
    ])
    x = _null_vector(A)
    with np.errstate(divide="ignore", invalid="ignore"):
        return x[:3] / x[3]


def decompose_e(E):
    """Split an essential matrix into two rotations and a unit translation."""
    u, _, vt = np.linalg.svd(np.asarray(E, dtype=np.float64))
    t = u[:, 2] / np.linalg.norm(u[:, 2])
    W = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
    R1 = u @ W @ vt
    if np.linalg.det(R1) < 0:
        R1 = -R1
    R2 = u @ W.T @ vt
    if np.linalg.det(R2) < 0:
        R2 = -R2
    return R1, R2, t


def check_rt(R, t, keys1, keys2, matches, inliers, K, th2):
    """Triangulate the inlier matches under (R, t) and count the good ones.

    A point is good when it lies in front of both cameras (unless parallax is
    too low to tell) and reprojects within sqrt(th2) pixels in both images.
    """
    R = np.asarray(R, dtype=np.float64).reshape(3, 3)
    t = np.asarray(t, dtype=np.float64).reshape(3)
    K = np.asarray(K, dtype=np.float64)
    fx, fy, cx, cy = K[0, 0], K[1, 1], K[0, 2], K[1, 2]
    pts1 = _coords(keys1)
    pts2 = _coords(keys2)

    good = np.zeros(len(pts1), dtype=bool)
    points = np.zeros((len(pts1), 3))
    cos_parallaxes = []

    P1 = np.zeros((3, 4))
    P1[:, :3] = K
    P2 = K @ np.hstack([R, t[:, None]])
    O2 = -R.T @ t

    with np.errstate(divide="ignore", invalid="ignore"):
        for (i1, i2), inlier in zip(matches, inliers):
            if not inlier:
                continue
            kp1 = pts1[i1]
            kp2 = pts2[i2]
            p3d_c1 = triangulate(kp1, kp2, P1, P2)
            if not np.all(np.isfinite(p3d_c1)):
                good[i1] = False
                continue

            normal2 = p3d_c1 - O2
            cos_parallax = float(
                p3d_c1 @ normal2 / (np.linalg.norm(p3d_c1) * np.linalg.norm(normal2))
            )

            if p3d_c1[2] <= 0 and cos_parallax < _PARALLAX_COS_LIMIT:
                continue
            p3d_c2 = R @ p3d_c1 + t
            if p3d_c2[2] <= 0 and cos_parallax < _PARALLAX_COS_LIMIT:
                continue

            inv_z1 = 1.0 / p3d_c1[2]
            im1 = np.array([fx * p3d_c1[0] * inv_z1 + cx, fy * p3d_c1[1] * inv_z1 + cy])
            if np.sum((im1 - kp1) ** 2) > th2:
                continue

            inv_z2 = 1.0 / p3d_c2[2]
            im2 = np.array([fx * p3d_c2[0] * inv_z2 + cx, fy * p3d_c2[1] * inv_z2 + cy])
            if np.sum((im2 - kp2) ** 2) > th2:
                continue

            cos_parallaxes.append(cos_parallax)
            points[i1] = p3d_c1
            if cos_parallax < _PARALLAX_COS_LIMIT:
                good[i1] = True

    n_good = len(cos_parallaxes)
    if n_good:
        cos_parallaxes.sort()
        idx = min(50, n_good - 1)
        parallax = float(np.degrees(np.arccos(np.clip(cos_parallaxes[idx], -1.0, 1.0))))
    else:
        parallax = 0.0
    return RTCheck(n_good=n_good, points=points, good=good, parallax=parallax)