"""Planes fitted to tracked map points, used to anchor virtual objects."""

from __future__ import annotations

import math
import random

import numpy as np

__all__ = ["Plane", "exp_so3", "gl_matrix", "status_text", "detect_plane"]

_EPS = 1e-4
_MIN_POINTS = 50
_MIN_OBSERVATIONS = 5
_INLIER_FACTOR = 1.4
_UP = np.array([0.0, 1.0, 0.0])

_RED = (255, 0, 0)
_GREEN = (0, 255, 0)


def _value(obj, name):
    attr = getattr(obj, name)
    return attr() if callable(attr) else attr


def _world_pos(map_point):
    return np.asarray(_value(map_point, "world_pos"), dtype=np.float64).reshape(3)


def _is_bad(map_point):
    return bool(_value(map_point, "is_bad")) if hasattr(map_point, "is_bad") else False


def exp_so3(v):
    """Rotation matrix of a rotation vector (exponential map of so(3))."""
    x, y, z = (float(c) for c in np.asarray(v, dtype=np.float64).reshape(-1)[:3])
    d2 = x * x + y * y + z * z
    d = math.sqrt(d2)
    W = np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])
    identity = np.eye(3)
    if d < _EPS:
        return identity + W + 0.5 * W @ W
    return identity + W * math.sin(d) / d + W @ W * (1.0 - math.cos(d)) / d2


def gl_matrix(T):
    """Column-major list of 16 values of a 4x4 rigid transform, as OpenGL expects."""
    T = np.asarray(T, dtype=np.float64)
    if T.shape[0] < 3 or T.shape[1] < 4:
        raise ValueError("a transform needs at least 3 rows and 4 columns")
    values = []
    for col in range(4):
        values.extend(float(T[row, col]) for row in range(3))
        values.append(1.0 if col == 3 else 0.0)
    return values


def status_text(status, localization_mode):
    """Caption and RGB colour shown for a tracking status, or None for other statuses."""
    if status == 1:
        return "SLAM NOT INITIALIZED", _RED
    if status == 2:
        return ("LOCALIZATION ON" if localization_mode else "SLAM ON"), _GREEN
    if status == 3:
        return ("LOCALIZATION LOST" if localization_mode else "SLAM LOST"), _RED
    return None


def _plane_pose(normal, origin, rang):
    """Transform whose y axis is the plane normal and whose origin lies on the plane."""
    v = np.cross(_UP, normal)
    sa = float(np.linalg.norm(v))
    ca = float(_UP @ normal)
    if sa < _EPS:
        axis = np.zeros(3) if ca > 0 else np.array([math.pi, 0.0, 0.0])
    else:
        axis = v * math.atan2(sa, ca) / sa
    T = np.eye(4)
    T[:3, :3] = exp_so3(axis) @ exp_so3(_UP * rang)
    T[:3, 3] = origin
    return T


def _random_angle(rng):
    return -3.14 / 2 + rng.random() * 3.14


class Plane:
    """A plane through map points, oriented towards the camera that first saw it."""

    def __init__(self, map_points, tcw, rng=None):
        rng = rng if rng is not None else random.Random()
        self.map_points = list(map_points)
        self.tcw = np.array(tcw, dtype=np.float64)
        self.xc = None
        self.rang = _random_angle(rng)
        self.normal = None
        self.origin = None
        self.tpw = None
        self.gl_tpw = None
        self.recompute()

    @classmethod
    def from_normal(cls, normal, origin, rng=None):
        """A plane given directly by its normal and a point on it."""
        rng = rng if rng is not None else random.Random()
        plane = object.__new__(cls)
        plane.map_points = []
        plane.tcw = None
        plane.xc = None
        plane.normal = np.asarray(normal, dtype=np.float64).reshape(3).copy()
        plane.origin = np.asarray(origin, dtype=np.float64).reshape(3).copy()
        plane.rang = _random_angle(rng)
        plane.tpw = _plane_pose(plane.normal, plane.origin, plane.rang)
        plane.gl_tpw = gl_matrix(plane.tpw)
        return plane

    def recompute(self):
        """Refit the plane to its map points that are not bad."""
        points = [_world_pos(mp) for mp in self.map_points if not _is_bad(mp)]
        if not points:
            raise ValueError("no valid map points to fit a plane to")
        pts = np.array(points)
        A = np.column_stack([pts, np.ones(len(pts))])
        _, _, vt = np.linalg.svd(A, full_matrices=True)
        abc = vt[3, :3].copy()
        origin = pts.mean(axis=0)

        if self.xc is None:
            if self.tcw is None:
                raise ValueError("a plane without a camera pose cannot be refitted")
            R = self.tcw[:3, :3]
            camera_centre = -R.T @ self.tcw[:3, 3]
            self.xc = camera_centre - origin

        if float(self.xc @ abc) > 0:
            abc = -abc

        self.normal = abc / float(np.linalg.norm(abc))
        self.origin = origin
        self.tpw = _plane_pose(self.normal, self.origin, self.rang)
        self.gl_tpw = gl_matrix(self.tpw)


def detect_plane(tcw, map_points, iterations=50, rng=None):
    """Fit a plane by RANSAC to well-observed map points; None when too few or no fit."""
    if iterations < 1:
        raise ValueError("at least one RANSAC iteration is needed")
    rng = rng if rng is not None else random.Random()

    chosen = [mp for mp in map_points
              if mp is not None and _value(mp, "observations") > _MIN_OBSERVATIONS]
    n = len(chosen)
    if n < _MIN_POINTS:
        return None
    pts = np.array([_world_pos(mp) for mp in chosen])

    best_dist = 1e10
    best_distances = None
    nth = max(int(0.2 * n), 20)
    for _ in range(iterations):
        available = list(range(n))
        sample = []
        for _ in range(3):
            k = rng.randint(0, len(available) - 1)
            sample.append(available[k])
            available[k] = available[-1]
            available.pop()

        A = np.column_stack([pts[sample], np.ones(3)])
        _, _, vt = np.linalg.svd(A, full_matrices=True)
        a, b, c, d = vt[3]
        f = 1.0 / math.sqrt(a * a + b * b + c * c + d * d)
        distances = np.abs(pts @ np.array([a, b, c]) + d) * f
        median = float(np.sort(distances)[nth])
        if median < best_dist:
            best_dist = median
            best_distances = distances

    if best_distances is None:
        return None
    threshold = _INLIER_FACTOR * best_dist
    inliers = [mp for mp, dist in zip(chosen, best_distances) if dist < threshold]
    if not inliers:
        return None
    return Plane(inliers, tcw, rng)