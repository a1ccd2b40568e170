import pytest

from slamkit.sequences import (
    MonoSequence,
    PairSequence,
    TrackingStats,
    frame_delay,
    load_euroc_mono,
    load_kitti_mono,
    load_tum_mono,
    load_tum_rgbd,
    tracking_statistics,
)


def test_euroc_mono_names_and_seconds(tmp_path):
    times = tmp_path / "times.txt"
    times.write_text("2000000000\n3500000000\n\n")
    seq = load_euroc_mono("/data/cam0", times)
    assert seq.images == ["/data/cam0/2000000000.png", "/data/cam0/3500000000.png"]
    assert seq.timestamps == pytest.approx([2.0, 3.5])
    assert len(seq) == 2


def test_euroc_mono_bad_timestamp(tmp_path):
    times = tmp_path / "times.txt"
    times.write_text("abc\n")
    with pytest.raises(ValueError):
        load_euroc_mono("/data", times)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_euroc_mono("/data", tmp_path / "absent.txt")


def test_kitti_mono_zero_padded(tmp_path):
    (tmp_path / "times.txt").write_text("0.0\n0.1\n0.2\n")
    seq = load_kitti_mono(tmp_path)
    assert seq.images[0] == f"{tmp_path}/image_0/000000.png"
    assert seq.images[2] == f"{tmp_path}/image_0/000002.png"
    assert seq.timestamps == pytest.approx([0.0, 0.1, 0.2])


def test_tum_mono_skips_header(tmp_path):
    rgb = tmp_path / "rgb.txt"
    rgb.write_text(
        "# color images\n# file: x\n# timestamp filename\n"
        "1305031102.175304 rgb/1305031102.175304.png\n"
        "1305031102.211214 rgb/1305031102.211214.png\n"
    )
    seq = load_tum_mono(rgb)
    assert isinstance(seq, MonoSequence)
    assert seq.images == ["rgb/1305031102.175304.png", "rgb/1305031102.211214.png"]
    assert seq.timestamps == pytest.approx([1305031102.175304, 1305031102.211214])


def test_tum_mono_iteration_pairs(tmp_path):
    rgb = tmp_path / "rgb.txt"
    rgb.write_text("a\nb\nc\n1.5 one.png\n")
    assert list(load_tum_mono(rgb)) == [("one.png", 1.5)]


def test_tum_rgbd_association(tmp_path):
    assoc = tmp_path / "associations.txt"
    assoc.write_text(
        "1.0 rgb/1.png 1.01 depth/1.png\n"
        "2.0 rgb/2.png 2.02 depth/2.png\n"
    )
    seq = load_tum_rgbd(assoc)
    assert isinstance(seq, PairSequence)
    assert seq.first == ["rgb/1.png", "rgb/2.png"]
    assert seq.second == ["depth/1.png", "depth/2.png"]
    assert seq.timestamps == pytest.approx([1.0, 2.0])
    assert len(seq) == 2


def test_tum_rgbd_short_line(tmp_path):
    assoc = tmp_path / "associations.txt"
    assoc.write_text("1.0 rgb/1.png\n")
    with pytest.raises(ValueError):
        load_tum_rgbd(assoc)


def test_frame_delay_uses_next_gap():
    ts = [0.0, 0.5, 1.5]
    assert frame_delay(ts, 0, 0.2) + 0.2 == pytest.approx(ts[1] - ts[0])


def test_frame_delay_last_uses_previous_gap():
    ts = [0.0, 0.5, 1.5]
    assert frame_delay(ts, 2, 0.25) + 0.25 == pytest.approx(ts[2] - ts[1])


def test_frame_delay_zero_when_slow():
    assert frame_delay([0.0, 0.5], 0, 0.9) == 0.0
    assert frame_delay([3.0], 0, 0.0) == 0.0


def test_frame_delay_out_of_range():
    with pytest.raises(IndexError):
        frame_delay([0.0], 1, 0.0)


def test_tracking_statistics_median_and_mean():
    times = [0.3, 0.1, 0.2, 0.4]
    stats = tracking_statistics(times)
    assert isinstance(stats, TrackingStats)
    assert stats.median == 0.3
    assert stats.mean == pytest.approx(sum(times) / len(times))


def test_tracking_statistics_empty():
    with pytest.raises(ValueError):
        tracking_statistics([])