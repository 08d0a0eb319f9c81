import logging

import pytest

from anatomy import Point3D
from pain import DEFAULT_PAIN_LEVEL, PAIN_COLOURS, build_pain_point, pain_colour, severity_for


@pytest.mark.parametrize("level, severity", [
    (0, "none"),
    (1, "mild"),
    (3, "mild"),
    (4, "moderate"),
    (6, "moderate"),
    (7, "severe"),
    (10, "severe"),
])
def test_severity_bands(level, severity):
    assert severity_for(level) == severity


@pytest.mark.parametrize("level", [-1, 11, 5.5, True, "5"])
def test_bad_levels_rejected(level):
    with pytest.raises(ValueError):
        severity_for(level)


def test_colour_anchors():
    assert pain_colour(0) == PAIN_COLOURS["none"]
    assert pain_colour(3) == PAIN_COLOURS["mild"]
    assert pain_colour(6) == PAIN_COLOURS["moderate"]
    assert pain_colour(10) == PAIN_COLOURS["severe"]


def test_colour_blends_between_anchors():
    colour = pain_colour(8)
    assert colour.startswith("#") and len(colour) == 7
    assert colour not in PAIN_COLOURS.values()
    # halfway from orange (0x8c green) to red (0x00 green)
    assert colour == "#ff4600"


def test_build_pain_point():
    record = build_pain_point(Point3D(0.07, 0.70, 0.01), intensity=8, notes="  sharp when lifting ")

    assert record.region == "shoulder"
    assert record.label == "Right Anterior Shoulder"
    assert record.medical_term == "Right Regio Deltoidea Anterior"
    assert record.pain_level == 8
    assert record.severity == "severe"
    assert record.notes == "sharp when lifting"
    assert record.position == (0.07, 0.70, 0.01)
    assert record.id.startswith("custom-")


def test_build_pain_point_defaults():
    record = build_pain_point(Point3D(0, 0.64, 0.02), point_id="p-1")
    assert record.pain_level == DEFAULT_PAIN_LEVEL
    assert record.severity == "moderate"
    assert record.id == "p-1"

    data = record.as_dict()
    assert data["medicalTerm"] == "Sternum"
    assert data["painLevel"] == 5
    assert data["position"] == [0, 0.64, 0.02]
    assert "createdAt" in data


def test_build_pain_point_rejects_level():
    with pytest.raises(ValueError):
        build_pain_point(Point3D(0, 0.64, 0.02), intensity=11)


def test_fallback_placement_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger="painmap"):
        record = build_pain_point(Point3D(0.5, 0.5, 0), intensity=2)
    assert record.region == "abdomen"
    assert "fallback:abdomen-hip" in caplog.text
