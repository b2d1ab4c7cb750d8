import dataclasses

import pytest

from previewgen.domain.entities.probe import ProbeResult


def test_probe_result_dataclass_defaults():
    pr = ProbeResult()
    assert pr.duration_sec is None
    assert pr.missing_fields() == ["duration", "width", "height"]
    assert pr.is_complete is False
    assert pr.aspect_ratio is None


def test_probe_result_complete():
    pr = ProbeResult(duration_sec=130.0, width=1280, height=720)
    assert pr.is_complete
    assert pr.missing_fields() == []
    assert pr.aspect_ratio == pytest.approx(16 / 9)


def test_probe_result_reports_each_missing_datum():
    assert ProbeResult(width=1280, height=720).missing_fields() == ["duration"]
    assert ProbeResult(duration_sec=1.0, height=720).missing_fields() == ["width"]


def test_probe_result_is_immutable():
    pr = ProbeResult(duration_sec=1.0, width=2, height=3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        pr.width = 10  # type: ignore[misc]
