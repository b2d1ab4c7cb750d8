# tests/services/test_grid_compositor.py
from __future__ import annotations

import io

import pytest
from PIL import Image

from previewgen.domain.errors import CompositeError
from previewgen.domain.policies.grid_planner import plan_grid
from previewgen.services.thumbs.grid_compositor import GridCompositor, load_font


def _center(layout, idx, border):
    x, y = layout.cell_origin(idx, border)
    return x + layout.cell_width // 2, y + layout.cell_height // 2


def test_under_production_leaves_background_cells(tmp_path, make_snapshot):
    layout = plan_grid(640, 480, 4, 3, 2, False, 16, 16 / 9, 36)
    snaps = [make_snapshot(tmp_path / f"{i:02d}.jpg") for i in range(1, 6)]

    data = GridCompositor(quality=95).composite(snaps, layout, (640, 480), 2)
    sheet = Image.open(io.BytesIO(data))

    assert sheet.format == "JPEG"
    assert sheet.size == (640, 480)
    r, g, b = sheet.convert("RGB").getpixel(_center(layout, 4, 2))
    assert r > 200 and g < 60 and b < 60
    for idx in range(5, 12):
        assert max(sheet.convert("RGB").getpixel(_center(layout, idx, 2))) < 40


def test_extra_snapshots_beyond_grid_are_ignored(tmp_path, make_snapshot):
    layout = plan_grid(320, 240, 2, 1, 2, False, 16, 16 / 9, 36)
    snaps = [make_snapshot(tmp_path / f"{i}.jpg") for i in range(1, 5)]
    data = GridCompositor().composite(snaps, layout, (320, 240), 2)
    assert Image.open(io.BytesIO(data)).size == (320, 240)


def test_label_is_drawn_in_top_strip(tmp_path, make_snapshot):
    layout = plan_grid(640, 480, 2, 2, 2, True, 16, 16 / 9, 36)
    snaps = [make_snapshot(tmp_path / "1.jpg", color=(0, 0, 0))]
    plain = Image.open(io.BytesIO(GridCompositor().composite(snaps, layout, (640, 480), 2)))
    labeled = Image.open(io.BytesIO(
        GridCompositor(font="DoesNotExist", font_size=16).composite(
            snaps, layout, (640, 480), 2, label="holiday/beach.mp4"
        )
    ))

    strip = (0, 0, 300, int(layout.top_offset))
    assert max(plain.convert("L").crop(strip).getdata()) < 40
    assert max(labeled.convert("L").crop(strip).getdata()) > 150


def test_unreadable_snapshot_is_a_composite_error(tmp_path, make_snapshot):
    layout = plan_grid(320, 240, 2, 1, 2, False, 16, 16 / 9, 36)
    good = make_snapshot(tmp_path / "1.jpg")
    bad = tmp_path / "2.jpg"
    bad.write_bytes(b"not a jpeg")
    with pytest.raises(CompositeError):
        GridCompositor().composite([good, bad], layout, (320, 240), 2)


def test_quality_changes_output_size(tmp_path):
    noisy = Image.effect_noise((128, 72), 64).convert("RGB")
    path = tmp_path / "1.jpg"
    noisy.save(path, format="JPEG", quality=95)
    layout = plan_grid(320, 240, 1, 1, 0, False, 16, 16 / 9, 72)
    high = GridCompositor(quality=100).composite([path], layout, (320, 240), 0)
    low = GridCompositor(quality=10).composite([path], layout, (320, 240), 0)
    assert len(low) < len(high)


def test_load_font_falls_back_for_unknown_family():
    font = load_font("No Such Font Family", 20)
    assert font is not None
