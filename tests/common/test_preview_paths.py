from previewgen.common.path.preview import preview_path_for, write_atomic


def test_preview_path_sits_next_to_source(tmp_path):
    video = tmp_path / "shows" / "Episode.01.mkv"
    assert preview_path_for(video, ".preview.jpg") == tmp_path / "shows" / "Episode.01.preview.jpg"


def test_preview_path_custom_suffix(tmp_path):
    assert preview_path_for(tmp_path / "a.mp4", "_sheet.jpg").name == "a_sheet.jpg"


def test_write_atomic_leaves_only_the_target(tmp_path):
    out = tmp_path / "nested" / "a.preview.jpg"
    write_atomic(b"jpeg-bytes", out)
    assert out.read_bytes() == b"jpeg-bytes"
    assert [p.name for p in out.parent.iterdir()] == ["a.preview.jpg"]


def test_write_atomic_replaces_existing(tmp_path):
    out = tmp_path / "a.preview.jpg"
    out.write_bytes(b"old")
    write_atomic(b"new", out)
    assert out.read_bytes() == b"new"
