import logging
import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from anatomy import FALLBACK_PREFIX, Facing, Point3D, Region, RegionMatch

logger = logging.getLogger("painmap.rules")


# ============================================================
# SPANS
#
# Interval notation, so every table row reads like the band it
# encodes: "(0.85, 0.95]" is 0.85 < v <= 0.95.
# ============================================================

_SPAN_RE = re.compile(r'^\s*([\[(])\s*(-?inf|-?[\d.]+)\s*,\s*(-?inf|-?[\d.]+)\s*([\])])\s*$')


@dataclass(frozen=True)
class Span:
    low: float
    high: float
    closed_low: bool = False
    closed_high: bool = False

    def __contains__(self, value: float) -> bool:
        above = value >= self.low if self.closed_low else value > self.low
        below = value <= self.high if self.closed_high else value < self.high
        return above and below

    def __str__(self) -> str:
        return "%s%g, %g%s" % (
            "[" if self.closed_low else "(",
            self.low,
            self.high,
            "]" if self.closed_high else ")",
        )


def span(notation: str) -> Span:
    match = _SPAN_RE.match(notation)
    if not match:
        raise ValueError(f"Bad span notation: {notation!r}")
    opening, low, high, closing = match.groups()
    return Span(
        low=float(low),
        high=float(high),
        closed_low=opening == "[",
        closed_high=closing == "]",
    )


# ============================================================
# RULES
# ============================================================

@dataclass(frozen=True)
class Rule:
    name: str
    region: Region
    y: Span
    x: Span
    facing: Facing
    label: str
    medical_term: str

    @property
    def lateral(self) -> bool:
        return "{side}" in self.label

    def applies(self, point: Point3D) -> bool:
        return point.y in self.y and point.abs_x in self.x and self.facing.covers(point.z)

    def match(self, point: Point3D) -> Optional[RegionMatch]:
        if not self.applies(point):
            return None
        side = point.side.value
        return RegionMatch(
            region=self.region,
            label=self.label.format(side=side),
            medical_term=self.medical_term.format(side=side),
            rule=self.name,
        )


def _rule(name, region, y, x, facing, label, medical_term):
    return Rule(name, region, span(y), span(x), facing, label, medical_term)


A = Facing.ANTERIOR
P = Facing.POSTERIOR
N = Facing.NOT_ANTERIOR
E = Facing.EITHER

# Order is precedence: first applicable row wins. Torso rows come before
# the arm rows, and the two wide-stance groups run last.
RULES: Tuple[Rule, ...] = (
    # ---------------- HEAD ----------------
    _rule("vertex", Region.HEAD, "(0.85, 0.95]", "[0, 0.06)", A,
          "Vertex of Skull", "Vertex Cranii"),
    _rule("posterior-skull", Region.HEAD, "(0.85, 0.95]", "[0, 0.06)", N,
          "Posterior Skull", "Posterior Cranii"),
    _rule("temporal", Region.HEAD, "(0.85, 0.95]", "[0.06, 0.08)", E,
          "{side} Temporal Region", "{side} Regio Temporalis"),

    # ---------------- FACE ----------------
    _rule("face", Region.HEAD, "(0.80, 0.85]", "[0, 0.04)", A,
          "Face", "Facies"),
    _rule("cheek", Region.HEAD, "(0.80, 0.85]", "[0.04, 0.08)", A,
          "{side} Cheek", "{side} Regio Buccalis"),
    _rule("occipital", Region.HEAD, "(0.80, 0.85]", "[0, 0.06)", P,
          "Occipital Region", "Regio Occipitalis"),
    _rule("occipital-lateral", Region.HEAD, "(0.80, 0.85]", "[0.06, inf)", P,
          "{side} Occipital Area", "{side} Regio Occipitalis Lateralis"),

    # ---------------- NECK ----------------
    _rule("neck-anterior", Region.NECK, "(0.75, 0.85]", "[0, 0.05)", A,
          "Anterior Neck", "Regio Cervicalis Anterior"),
    _rule("neck-posterior", Region.NECK, "(0.75, 0.85]", "[0, 0.05)", P,
          "Posterior Neck", "Regio Cervicalis Posterior"),
    _rule("neck-lateral", Region.NECK, "(0.75, 0.85]", "[0.05, 0.10)", E,
          "{side} Lateral Neck", "{side} Regio Cervicalis Lateralis"),

    # ---------------- SHOULDER ----------------
    _rule("shoulder-anterior", Region.SHOULDER, "(0.68, 0.75]", "[0.05, 0.15)", A,
          "{side} Anterior Shoulder", "{side} Regio Deltoidea Anterior"),
    _rule("shoulder-posterior", Region.SHOULDER, "(0.68, 0.75]", "[0.05, 0.15)", P,
          "{side} Posterior Shoulder", "{side} Regio Deltoidea Posterior"),

    # ---------------- CHEST / UPPER BACK ----------------
    _rule("sternum", Region.CHEST, "(0.60, 0.68]", "[0, 0.05)", A,
          "Sternum", "Sternum"),
    _rule("pectoral", Region.CHEST, "(0.60, 0.68]", "[0.05, 0.10)", A,
          "{side} Pectoral Region", "{side} Regio Pectoralis"),
    _rule("upper-thoracic-spine", Region.BACK, "(0.60, 0.68]", "[0, 0.03)", P,
          "Upper Thoracic Spine", "Vertebrae Thoracicae Superiores (T1-T4)"),
    _rule("upper-back", Region.BACK, "(0.60, 0.68]", "[0.03, 0.10)", P,
          "{side} Upper Back", "{side} Regio Thoracica Superior"),

    # ---------------- ARM ----------------
    _rule("biceps", Region.ARM, "(0.55, 0.65]", "(0.12, 0.20)", A,
          "{side} Biceps", "{side} Musculus Biceps Brachii"),
    _rule("triceps", Region.ARM, "(0.55, 0.65]", "(0.12, 0.20)", N,
          "{side} Triceps", "{side} Musculus Triceps Brachii"),
    _rule("elbow", Region.ARM, "(0.45, 0.55]", "(0.12, 0.20)", E,
          "{side} Elbow", "{side} Cubitus"),
    _rule("forearm-anterior", Region.ARM, "(0.40, 0.45]", "(0.12, 0.20)", A,
          "{side} Anterior Forearm", "{side} Regio Antebrachii Anterior"),
    _rule("forearm-posterior", Region.ARM, "(0.40, 0.45]", "(0.12, 0.20)", N,
          "{side} Posterior Forearm", "{side} Regio Antebrachii Posterior"),
    _rule("wrist", Region.ARM, "(0.38, 0.40]", "(0.12, 0.20)", E,
          "{side} Wrist", "{side} Carpus"),
    _rule("hand", Region.ARM, "(0.35, 0.38]", "(0.12, 0.20)", E,
          "{side} Hand", "{side} Manus"),

    # ---------------- MID BACK ----------------
    _rule("mid-thoracic-spine", Region.BACK, "(0.50, 0.60]", "[0, 0.03)", P,
          "Mid Thoracic Spine", "Vertebrae Thoracicae Mediae (T5-T8)"),
    _rule("mid-back", Region.BACK, "(0.50, 0.60]", "[0.03, 0.10)", P,
          "{side} Mid Back", "{side} Regio Thoracica Media"),

    # ---------------- ABDOMEN ----------------
    _rule("epigastrium", Region.ABDOMEN, "(0.55, 0.60]", "[0, 0.05)", A,
          "Epigastrium", "Regio Epigastrica"),
    _rule("umbilical", Region.ABDOMEN, "(0.48, 0.55]", "[0, 0.05)", A,
          "Umbilical Region", "Regio Umbilicalis"),
    _rule("upper-quadrant", Region.ABDOMEN, "(0.55, 0.60]", "[0.05, 0.10)", A,
          "{side} Upper Quadrant", "{side} Hypochondrium"),
    _rule("flank", Region.ABDOMEN, "(0.48, 0.55]", "[0.05, 0.10)", A,
          "{side} Flank", "{side} Regio Lateralis"),

    # ---------------- LOWER BACK ----------------
    _rule("lower-thoracic-spine", Region.BACK, "(0.40, 0.50]", "[0, 0.03)", P,
          "Lower Thoracic Spine", "Vertebrae Thoracicae Inferiores (T9-T12)"),
    _rule("lower-back", Region.BACK, "(0.40, 0.50]", "[0.03, 0.10)", P,
          "{side} Lower Back", "{side} Regio Lumbalis"),

    # ---------------- LOWER ABDOMEN ----------------
    _rule("hypogastrium", Region.ABDOMEN, "(0.40, 0.48]", "[0, 0.05)", A,
          "Hypogastrium", "Regio Hypogastrica"),
    _rule("lower-quadrant", Region.ABDOMEN, "(0.40, 0.48]", "[0.05, 0.10)", A,
          "{side} Lower Quadrant", "{side} Regio Inguinalis"),

    # ---------------- HIP / SACRUM / PELVIS ----------------
    _rule("lumbar-spine", Region.BACK, "(0.35, 0.40]", "[0, 0.05)", P,
          "Lumbar Spine", "Vertebrae Lumbales (L1-L5)"),
    _rule("sacrum", Region.BACK, "(0.30, 0.35]", "[0, 0.05)", P,
          "Sacrum", "Os Sacrum"),
    # rest of the midline pelvis once lumbar and sacrum have taken z <= 0
    _rule("pubic", Region.HIP, "(0.30, 0.40]", "[0, 0.05)", E,
          "Pubic Region", "Regio Pubica"),
    _rule("hip-anterior", Region.HIP, "(0.30, 0.40]", "[0.05, 0.12)", A,
          "{side} Anterior Hip", "{side} Regio Coxae Anterior"),
    # posterior pelvis reads as back, like the lumbar and sacral rows above
    _rule("gluteal", Region.BACK, "(0.30, 0.40]", "[0.05, 0.12)", N,
          "{side} Gluteal Region", "{side} Regio Glutealis"),

    # ---------------- THIGH ----------------
    _rule("thigh-anterior", Region.LEG, "(0.20, 0.30]", "[0.03, 0.10]", A,
          "{side} Anterior Thigh", "{side} Regio Femoris Anterior"),
    _rule("thigh-posterior", Region.LEG, "(0.20, 0.30]", "[0.03, 0.10]", N,
          "{side} Posterior Thigh", "{side} Regio Femoris Posterior"),

    # ---------------- KNEE ----------------
    _rule("knee", Region.LEG, "(0.15, 0.20]", "[0.03, 0.10]", A,
          "{side} Knee", "{side} Genu Anterior"),
    _rule("popliteal-fossa", Region.LEG, "(0.15, 0.20]", "[0.03, 0.10]", N,
          "{side} Popliteal Fossa", "{side} Fossa Poplitea"),

    # ---------------- LOWER LEG ----------------
    _rule("shin", Region.LEG, "(0.10, 0.15]", "[0.03, 0.10]", A,
          "{side} Shin", "{side} Regio Tibialis Anterior"),
    _rule("calf", Region.LEG, "(0.10, 0.15]", "[0.03, 0.10]", N,
          "{side} Calf", "{side} Regio Suralis"),

    # ---------------- FOOT ----------------
    _rule("foot-dorsal", Region.FOOT, "[0.00, 0.10]", "[0.03, 0.10]", A,
          "{side} Dorsal Foot", "{side} Dorsum Pedis"),
    _rule("foot-plantar", Region.FOOT, "[0.00, 0.10]", "[0.03, 0.10]", N,
          "{side} Plantar Foot", "{side} Planta Pedis"),

    # ---------------- WIDE-STANCE ARM ----------------
    _rule("upper-arm-wide", Region.ARM, "(0.55, 0.65]", "[0.20, 0.30)", E,
          "{side} Upper Arm", "{side} Brachium"),
    _rule("forearm-wide", Region.ARM, "(0.45, 0.55]", "[0.20, 0.30)", E,
          "{side} Forearm", "{side} Antebrachium"),
    _rule("wrist-hand-wide", Region.ARM, "(0.30, 0.45]", "[0.20, 0.30)", E,
          "{side} Wrist/Hand", "{side} Carpus/Manus"),

    # ---------------- WIDE-STANCE LEG ----------------
    _rule("thigh-lateral-wide", Region.LEG, "(0.20, 0.30]", "[0.10, 0.15)", E,
          "{side} Lateral Thigh", "{side} Regio Femoris Lateralis"),
    _rule("knee-lateral-wide", Region.LEG, "(0.15, 0.20]", "[0.10, 0.15)", E,
          "{side} Lateral Knee", "{side} Genu Lateralis"),
    _rule("lower-leg-lateral-wide", Region.LEG, "(0.10, 0.15]", "[0.10, 0.15)", E,
          "{side} Lateral Lower Leg", "{side} Regio Cruris Lateralis"),
)


# ============================================================
# FALLBACK: default arm of the table
#
# Coarse y-only buckets, checked top-down on "y > above".
# The floor has no condition, so classify() always returns.
# ============================================================

@dataclass(frozen=True)
class Bucket:
    name: str
    above: float
    region: Region
    label: str
    medical_term: str
    facing: Facing = Facing.EITHER

    def applies(self, point: Point3D) -> bool:
        return point.y > self.above and self.facing.covers(point.z)

    def result(self) -> RegionMatch:
        return RegionMatch(self.region, self.label, self.medical_term, FALLBACK_PREFIX + self.name)


@dataclass(frozen=True)
class Fallback:
    buckets: Tuple[Bucket, ...]
    floor: Bucket

    def resolve(self, point: Point3D) -> RegionMatch:
        for bucket in self.buckets:
            if bucket.applies(point):
                return bucket.result()
        return self.floor.result()


FALLBACK = Fallback(
    buckets=(
        Bucket("head", 0.85, Region.HEAD, "Head Region", "Caput"),
        Bucket("neck", 0.75, Region.NECK, "Neck Region", "Cervix"),
        Bucket("torso-front", 0.60, Region.CHEST, "Torso Front", "Truncus Anterior", Facing.ANTERIOR),
        Bucket("torso-back", 0.60, Region.BACK, "Torso Back", "Truncus Posterior"),
        Bucket("abdomen-hip", 0.30, Region.ABDOMEN, "Abdominal/Hip Region", "Regio Abdominalis/Coxae"),
        Bucket("upper-leg", 0.15, Region.LEG, "Upper Leg Region", "Membrum Inferius Superius"),
        Bucket("lower-leg", 0.10, Region.LEG, "Lower Leg Region", "Membrum Inferius Inferius"),
    ),
    floor=Bucket("foot", -math.inf, Region.FOOT, "Foot Region", "Pes"),
)


# ============================================================
# CLASSIFIER
# ============================================================

def classify(point: Point3D) -> RegionMatch:
    """Map a model-local click position to a body region. Total and pure."""
    for rule in RULES:
        found = rule.match(point)
        if found is not None:
            logger.debug("(%.3f, %.3f, %.3f) -> %s", point.x, point.y, point.z, rule.name)
            return found

    found = FALLBACK.resolve(point)
    logger.debug("(%.3f, %.3f, %.3f) -> %s (no precise rule)", point.x, point.y, point.z, found.rule)
    return found


def classify_xyz(x: float, y: float, z: float) -> RegionMatch:
    return classify(Point3D(x, y, z))


def rules_for(region: Region) -> Tuple[Rule, ...]:
    return tuple(rule for rule in RULES if rule.region is region)
