"""Loading image sequences from dataset index files and timing their playback."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

__all__ = [
    "MonoSequence",
    "PairSequence",
    "TrackingStats",
    "load_euroc_mono",
    "load_kitti_mono",
    "load_tum_mono",
    "load_tum_rgbd",
    "frame_delay",
    "tracking_statistics",
]

_EUROC_NS_PER_SECOND = 1e9
_TUM_HEADER_LINES = 3


@dataclass
class MonoSequence:
    """Image paths of a single-camera sequence and their timestamps in seconds."""

    images: list = field(default_factory=list)
    timestamps: list = field(default_factory=list)

    def __len__(self):
        return len(self.images)

    def __iter__(self):
        return iter(zip(self.images, self.timestamps))


@dataclass
class PairSequence:
    """Paired image paths (left/right or colour/depth) with their timestamps."""

    first: list = field(default_factory=list)
    second: list = field(default_factory=list)
    timestamps: list = field(default_factory=list)

    def __len__(self):
        return len(self.first)

    def __iter__(self):
        return iter(zip(self.first, self.second, self.timestamps))


@dataclass(frozen=True)
class TrackingStats:
    """Median and mean of the per-frame tracking times."""

    median: float
    mean: float


def _content_lines(path, skip=0):
    with open(path, encoding="utf-8") as handle:
        lines = handle.read().splitlines()
    return [line for line in lines[skip:] if line]


def _parse_time(token, path):
    try:
        return float(token)
    except ValueError:
        raise ValueError(f"bad timestamp {token!r} in {path}") from None


def _fields(line, count, path):
    tokens = line.split()
    if len(tokens) < count:
        raise ValueError(f"expected {count} fields in line {line!r} of {path}")
    return tokens


def load_euroc_mono(image_path, times_path):
    """Read a EuRoC times file whose lines are nanosecond timestamps naming the images."""
    sequence = MonoSequence()
    for line in _content_lines(times_path):
        token = _fields(line, 1, times_path)[0]
        sequence.images.append(f"{image_path}/{line}.png")
        sequence.timestamps.append(_parse_time(token, times_path) / _EUROC_NS_PER_SECOND)
    return sequence


def _kitti_timestamps(sequence_path):
    times_path = os.path.join(str(sequence_path), "times.txt")
    return [
        _parse_time(_fields(line, 1, times_path)[0], times_path)
        for line in _content_lines(times_path)
    ]


def load_kitti_mono(sequence_path):
    """Read a KITTI sequence: times.txt and images numbered in image_0/."""
    timestamps = _kitti_timestamps(sequence_path)
    prefix = f"{sequence_path}/image_0/"
    images = [f"{prefix}{i:06d}.png" for i in range(len(timestamps))]
    return MonoSequence(images=images, timestamps=timestamps)


def load_tum_mono(list_path):
    """Read a TUM rgb.txt list; image names stay relative to the sequence folder."""
    sequence = MonoSequence()
    for line in _content_lines(list_path, skip=_TUM_HEADER_LINES):
        tokens = _fields(line, 2, list_path)
        sequence.timestamps.append(_parse_time(tokens[0], list_path))
        sequence.images.append(tokens[1])
    return sequence


def load_tum_rgbd(association_path):
    """Read a TUM association file of 'time rgb time depth' lines."""
    sequence = PairSequence()
    for line in _content_lines(association_path):
        tokens = _fields(line, 4, association_path)
        sequence.timestamps.append(_parse_time(tokens[0], association_path))
        sequence.first.append(tokens[1])
        sequence.second.append(tokens[3])
    return sequence


def frame_delay(timestamps, index, elapsed):
    """Seconds to wait after frame index so playback follows the recorded rate."""
    count = len(timestamps)
    if not 0 <= index < count:
        raise IndexError(f"frame index {index} is out of range")
    if index < count - 1:
        gap = timestamps[index + 1] - timestamps[index]
    elif index > 0:
        gap = timestamps[index] - timestamps[index - 1]
    else:
        gap = 0.0
    return gap - elapsed if elapsed < gap else 0.0


def tracking_statistics(times):
    """Median (upper middle element) and mean of tracking times."""
    ordered = sorted(times)
    if not ordered:
        raise ValueError("no tracking times were recorded")
    return TrackingStats(median=ordered[len(ordered) // 2], mean=sum(ordered) / len(ordered))


def sequence_path(base, name):
    """Join a sequence folder and a relative image name."""
    return str(Path(base) / name)