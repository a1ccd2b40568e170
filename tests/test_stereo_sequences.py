import pytest

from slamkit.stereo_sequences import load_euroc_stereo, load_kitti_stereo


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_euroc_stereo_paths_follow_times_file(tmp_path):
    stamps = ["1403636579763555584", "1403636579813555456"]
    times = _write(tmp_path / "times.txt", "\n".join(stamps) + "\n")
    seq = load_euroc_stereo("cam0", "cam1", str(times))
    assert seq.first == [f"cam0/{s}.png" for s in stamps]
    assert seq.second == [f"cam1/{s}.png" for s in stamps]
    assert len(seq) == 2


def test_euroc_stereo_timestamps_in_seconds(tmp_path):
    times = _write(tmp_path / "times.txt", "1000000000\n3000000000\n")
    seq = load_euroc_stereo("l", "r", str(times))
    assert seq.timestamps == pytest.approx([1.0, 3.0])


def test_euroc_stereo_skips_blank_lines(tmp_path):
    times = _write(tmp_path / "times.txt", "5\n\n7\n\n")
    seq = load_euroc_stereo("l", "r", str(times))
    assert seq.first == ["l/5.png", "l/7.png"]
    assert len(seq.second) == len(seq.timestamps) == 2


def test_euroc_stereo_bad_timestamp_raises(tmp_path):
    times = _write(tmp_path / "times.txt", "abc\n")
    with pytest.raises(ValueError):
        load_euroc_stereo("l", "r", str(times))


def test_euroc_stereo_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_euroc_stereo("l", "r", str(tmp_path / "absent.txt"))


def test_euroc_stereo_iteration_yields_triples(tmp_path):
    times = _write(tmp_path / "times.txt", "2000000000\n")
    seq = load_euroc_stereo("l", "r", str(times))
    items = list(seq)
    assert items == [("l/2000000000.png", "r/2000000000.png", pytest.approx(2.0))]


def test_kitti_stereo_numbered_images(tmp_path):
    _write(tmp_path / "times.txt", "0.0\n0.103\n0.207\n")
    seq = load_kitti_stereo(str(tmp_path))
    assert seq.first[0] == f"{tmp_path}/image_0/000000.png"
    assert seq.second[2] == f"{tmp_path}/image_1/000002.png"
    assert len(seq) == 3


def test_kitti_stereo_timestamps_and_pairing(tmp_path):
    _write(tmp_path / "times.txt", "0.0\n0.103\n\n0.207\n")
    seq = load_kitti_stereo(str(tmp_path))
    assert seq.timestamps == pytest.approx([0.0, 0.103, 0.207])
    for left, right in zip(seq.first, seq.second):
        assert left.split("/")[-1] == right.split("/")[-1]
        assert "image_0" in left and "image_1" in right


def test_kitti_stereo_missing_times_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_kitti_stereo(str(tmp_path))


def test_kitti_stereo_empty_times_gives_empty_sequence(tmp_path):
    _write(tmp_path / "times.txt", "\n\n")
    seq = load_kitti_stereo(str(tmp_path))
    assert len(seq) == 0
    assert seq.second == []