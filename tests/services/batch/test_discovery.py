from previewgen.services.batch.discovery import find_candidates


def test_find_candidates_case_insensitive_recursive(tmp_path, make_video):
    make_video("b.MP4")
    make_video("A.mkv")
    make_video("season/ep01.Avi")
    make_video("season/deep/ep02.wmv")
    make_video("notes.txt")
    make_video("a.preview.jpg")
    (tmp_path / "folder.mp4").mkdir()

    found = find_candidates(tmp_path, "**/*.{avi,mkv,mp4,wmv}")
    rel = [str(p.relative_to(tmp_path.resolve())).replace("\\", "/") for p in found]
    assert rel == ["A.mkv", "b.MP4", "season/deep/ep02.wmv", "season/ep01.Avi"]


def test_find_candidates_deduplicates_overlapping_patterns(tmp_path, make_video):
    make_video("clip.mp4")
    found = find_candidates(tmp_path, "{*.mp4,**/*.mp4}")
    assert len(found) == 1


def test_find_candidates_empty_folder(tmp_path):
    assert find_candidates(tmp_path, "**/*.mp4") == []
