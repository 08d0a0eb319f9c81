from dataclasses import dataclass
from enum import Enum
from typing import Dict


# ---------------- REGIONS ----------------

class Region(str, Enum):
    HEAD = "head"
    NECK = "neck"
    SHOULDER = "shoulder"
    CHEST = "chest"
    BACK = "back"
    ARM = "arm"
    ABDOMEN = "abdomen"
    HIP = "hip"
    LEG = "leg"
    FOOT = "foot"


REGION_LABELS: Dict[Region, str] = {
    Region.HEAD: "Head",
    Region.NECK: "Neck",
    Region.SHOULDER: "Shoulders",
    Region.BACK: "Back",
    Region.CHEST: "Chest",
    Region.ARM: "Arms",
    Region.ABDOMEN: "Abdomen",
    Region.HIP: "Hips",
    Region.LEG: "Legs",
    Region.FOOT: "Feet",
}

REGION_COLOURS: Dict[Region, str] = {
    Region.HEAD: "#ff8080",
    Region.NECK: "#80ff80",
    Region.SHOULDER: "#8080ff",
    Region.CHEST: "#ffff80",
    Region.BACK: "#ff80ff",
    Region.ARM: "#80ffff",
    Region.ABDOMEN: "#ff8040",
    Region.HIP: "#40ff80",
    Region.LEG: "#4080ff",
    Region.FOOT: "#ff4080",
}


def region_catalogue():
    """Regions in display order, as plain dicts for the API."""
    return [
        {"id": region.value, "label": REGION_LABELS[region], "colour": REGION_COLOURS[region]}
        for region in REGION_LABELS
    ]


# ---------------- LATERALITY / FACING ----------------

class Side(str, Enum):
    RIGHT = "Right"
    LEFT = "Left"

    @classmethod
    def from_x(cls, x: float) -> "Side":
        # x == 0 reads as Left, same as the click handler in the browser
        return cls.RIGHT if x > 0 else cls.LEFT

    def mirror(self) -> "Side":
        return Side.LEFT if self is Side.RIGHT else Side.RIGHT


class Facing(Enum):
    ANTERIOR = "anterior"
    POSTERIOR = "posterior"
    NOT_ANTERIOR = "not-anterior"
    EITHER = "either"

    def covers(self, z: float) -> bool:
        if self is Facing.ANTERIOR:
            return z > 0
        if self is Facing.POSTERIOR:
            return z <= 0
        # differs from POSTERIOR only for NaN z
        if self is Facing.NOT_ANTERIOR:
            return not z > 0
        return True


# ---------------- POINT / MATCH ----------------

@dataclass(frozen=True)
class Point3D:
    """Model-local click position. y is vertical (0 = feet), x is left(-)/right(+), z is back(-)/front(+)."""
    x: float
    y: float
    z: float

    @property
    def abs_x(self) -> float:
        return abs(self.x)

    @property
    def side(self) -> Side:
        return Side.from_x(self.x)


FALLBACK_PREFIX = "fallback:"


@dataclass(frozen=True)
class RegionMatch:
    region: Region
    label: str
    medical_term: str
    rule: str

    @property
    def is_fallback(self) -> bool:
        return self.rule.startswith(FALLBACK_PREFIX)

    def as_dict(self) -> dict:
        return {
            "region": self.region.value,
            "label": self.label,
            "medicalTerm": self.medical_term,
        }
