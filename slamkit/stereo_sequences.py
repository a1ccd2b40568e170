"""Loading rectified stereo sequences from dataset index files."""

from __future__ import annotations

from slamkit.sequences import (
    PairSequence,
    _content_lines,
    _fields,
    _kitti_timestamps,
    _parse_time,
)

__all__ = ["load_euroc_stereo", "load_kitti_stereo"]

_EUROC_NS_PER_SECOND = 1e9


def load_euroc_stereo(left_path, right_path, times_path):
    """Read a EuRoC times file; each line names a left and a right image.

    Image names are the lines themselves and timestamps are converted from
    nanoseconds to seconds.
    """
    sequence = PairSequence()
    for line in _content_lines(times_path):
        token = _fields(line, 1, times_path)[0]
        sequence.first.append(f"{left_path}/{line}.png")
        sequence.second.append(f"{right_path}/{line}.png")
        sequence.timestamps.append(_parse_time(token, times_path) / _EUROC_NS_PER_SECOND)
    return sequence


def load_kitti_stereo(sequence_path):
    """Read a KITTI sequence: times.txt with left images in image_0/ and right in image_1/."""
    timestamps = _kitti_timestamps(sequence_path)
    left_prefix = f"{sequence_path}/image_0/"
    right_prefix = f"{sequence_path}/image_1/"
    names = [f"{i:06d}.png" for i in range(len(timestamps))]
    return PairSequence(
        first=[left_prefix + name for name in names],
        second=[right_prefix + name for name in names],
        timestamps=timestamps,
    )