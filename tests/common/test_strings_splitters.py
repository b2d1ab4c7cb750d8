from previewgen.common.strings.splitters import csv_to_list, expand_braces


def test_csv_to_list_none():
    assert csv_to_list(None) == []


def test_csv_to_list_list_input():
    assert csv_to_list([" a ", "b", "", "  "]) == ["a", "b"]


def test_csv_to_list_string_input():
    assert csv_to_list(" a, b ,c ,, d ") == ["a", "b", "c", "d"]


def test_expand_braces_without_group_is_identity():
    assert expand_braces("**/*.mp4") == ["**/*.mp4"]


def test_expand_braces_default_video_glob():
    out = expand_braces("**/*.{asf,avi,mp4}")
    assert out == ["**/*.asf", "**/*.avi", "**/*.mp4"]


def test_expand_braces_multiple_and_nested_groups():
    assert expand_braces("{a,b}/*.{x,y}") == ["a/*.x", "a/*.y", "b/*.x", "b/*.y"]
    assert expand_braces("*.{m{p4,kv},avi}") == ["*.mp4", "*.mkv", "*.avi"]


def test_expand_braces_unbalanced_is_literal():
    assert expand_braces("*.{mp4") == ["*.{mp4"]
