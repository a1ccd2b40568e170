# slamkit

Building blocks for feature-based visual SLAM, written with NumPy.

## Modules

- `slamkit.converter` – conversions between pose matrices, rotation matrices,
  3-vectors and quaternions: `to_descriptor_vector`, `to_se3`,
  `to_homogeneous`, `sim3_to_matrix`, `to_vector3d`, `to_matrix3d` and
  `to_quaternion` (which returns `[x, y, z, w]`).
- `slamkit.geometry` – two-view geometry: `normalize` (centre points and scale
  them to unit mean absolute deviation), `compute_h21` (homography by DLT),
  `compute_f21` (rank-2 fundamental matrix), `triangulate` (linear
  triangulation from two 3x4 projection matrices), `decompose_e` (two
  rotations and a unit translation from an essential matrix) and `check_rt`,
  which tests a motion hypothesis against matched points and returns an
  `RTCheck` with the number of good points, their 3D positions, a mask of
  points with enough parallax, and the parallax in degrees.
- `slamkit.sequences` – loaders for dataset listings that return a
  `MonoSequence` or `PairSequence` of image paths and timestamps in seconds:
  `load_euroc_mono`, `load_kitti_mono`, `load_tum_mono` and `load_tum_rgbd`.
  `frame_delay` says how long to wait after a frame so playback keeps the
  recorded rate, and `tracking_statistics` returns a `TrackingStats` with the
  median and mean of per-frame tracking times.
- `slamkit.stereo_sequences` – `load_euroc_stereo` and `load_kitti_stereo` for
  left/right image pairs.
- `slamkit.plane` – `detect_plane` fits a plane by RANSAC to map points seen
  more than five times (at least fifty are needed), and `Plane` keeps that fit,
  oriented towards the camera that first saw it, with its pose `tpw` and the
  column-major `gl_tpw`. Also `exp_so3`, `gl_matrix` and `status_text`.
  Map points are any objects with `world_pos` and `observations` (attributes or
  methods) and, optionally, `is_bad`.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Example

```python
import numpy as np
from slamkit.converter import to_homogeneous, to_quaternion
from slamkit.geometry import decompose_e
from slamkit.sequences import load_tum_mono, tracking_statistics

pose = to_homogeneous(np.eye(3), np.array([1.0, 2.0, 3.0]))
print(to_quaternion(pose))   # [0. 0. 0. 1.] as x, y, z, w

E = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
R1, R2, t = decompose_e(E)

sequence = load_tum_mono("rgbd_dataset/rgb.txt")
for filename, timestamp in sequence:
    ...

print(tracking_statistics([0.03, 0.02, 0.05]))
```

## What it does not do

slamkit works on key points, matches and map points that you supply. It does
not read or decode images, extract features, build frames, track the camera,
initialize or maintain a map, or draw anything, and it has no command-line
program. The sequence loaders return file paths only.

## Running the tests

```
pytest
```