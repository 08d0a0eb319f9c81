import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple

from anatomy import Point3D
from rules import classify

logger = logging.getLogger("painmap.pain")

MIN_PAIN_LEVEL = 0
MAX_PAIN_LEVEL = 10
DEFAULT_PAIN_LEVEL = 5

# ---------------- SEVERITY / COLOUR SCALE ----------------

PAIN_COLOURS = {
    "none": "#2196f3",
    "mild": "#ffd700",
    "moderate": "#ff8c00",
    "severe": "#ff0000",
}


def _check_level(level: int) -> int:
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValueError(f"Pain level must be an integer, got {level!r}")
    if not MIN_PAIN_LEVEL <= level <= MAX_PAIN_LEVEL:
        raise ValueError(f"Pain level must be between {MIN_PAIN_LEVEL} and {MAX_PAIN_LEVEL}, got {level}")
    return level


def severity_for(level: int) -> str:
    level = _check_level(level)
    if level == 0:
        return "none"
    if level <= 3:
        return "mild"
    if level <= 6:
        return "moderate"
    return "severe"


def _rgb(hex_colour: str) -> Tuple[int, int, int]:
    hex_colour = hex_colour.lstrip("#")
    return tuple(int(hex_colour[i:i + 2], 16) for i in (0, 2, 4))


def _blend(start: str, end: str, ratio: float) -> str:
    a, b = _rgb(start), _rgb(end)
    mixed = (round(x + (y - x) * ratio) for x, y in zip(a, b))
    return "#" + "".join(f"{c:02x}" for c in mixed)


def pain_colour(level: int) -> str:
    """Continuous colour for a pain level: blue at 0, yellow at 3, orange at 6, red at 10."""
    level = _check_level(level)
    if level == 0:
        return PAIN_COLOURS["none"]
    if level <= 3:
        return _blend(PAIN_COLOURS["none"], PAIN_COLOURS["mild"], level / 3)
    if level <= 6:
        return _blend(PAIN_COLOURS["mild"], PAIN_COLOURS["moderate"], (level - 3) / 3)
    return _blend(PAIN_COLOURS["moderate"], PAIN_COLOURS["severe"], (level - 6) / 4)


# ---------------- PAIN POINT RECORD ----------------

@dataclass(frozen=True)
class PainPoint:
    id: str
    position: Tuple[float, float, float]
    region: str
    label: str
    medical_term: str
    pain_level: int
    severity: str
    notes: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "position": list(self.position),
            "region": self.region,
            "label": self.label,
            "medicalTerm": self.medical_term,
            "painLevel": self.pain_level,
            "severity": self.severity,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat(),
        }


def build_pain_point(
    point: Point3D,
    intensity: int = DEFAULT_PAIN_LEVEL,
    notes: str = "",
    point_id: Optional[str] = None,
) -> PainPoint:
    """Classify a click and wrap it with the user's intensity and note. Nothing is stored."""
    severity = severity_for(intensity)
    match = classify(point)
    if match.is_fallback:
        logger.info("Pain point at (%.3f, %.3f, %.3f) placed by %s", point.x, point.y, point.z, match.rule)

    return PainPoint(
        id=point_id or f"custom-{uuid.uuid4().hex[:12]}",
        position=(point.x, point.y, point.z),
        region=match.region.value,
        label=match.label,
        medical_term=match.medical_term,
        pain_level=intensity,
        severity=severity,
        notes=(notes or "").strip(),
    )
