"""
Pytest Configuration and Shared Fixtures
"""
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient

from anatomy import Facing, Point3D
from rules import Span


def midpoint(s: Span) -> float:
    high = s.low + 0.05 if s.high == float("inf") else s.high
    return (s.low + high) / 2


@pytest.fixture
def rule_point():
    """Point in the middle of a rule's y and |x| spans, on the right side."""
    def _make(rule, mirror=False):
        z = 0.01 if rule.facing in (Facing.ANTERIOR, Facing.EITHER) else -0.01
        x = midpoint(rule.x)
        return Point3D(-x if mirror else x, midpoint(rule.y), z)
    return _make


@pytest.fixture
def client():
    from main import app
    with TestClient(app) as test_client:
        yield test_client
