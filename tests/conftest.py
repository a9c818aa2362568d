import math
import sys
from pathlib import Path

import pytest

# --- SETUP PATHS ---
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from stroke_recognizer.utils.gesture_utils import Point


class Shapes:
    """Deterministic stroke generators for tests."""

    @staticmethod
    def circle(radius=100.0, segments=64, center=(0.0, 0.0), wobble=0.0, rotation=0.0):
        """Closed circle starting at angle 0, optionally wobbly and rotated (degrees)."""
        cx, cy = center
        offset = math.radians(rotation)
        points = []
        for i in range(segments + 1):
            t = 2 * math.pi * i / segments
            r = radius + wobble * math.sin(3 * t)
            points.append(Point(cx + r * math.cos(t + offset), cy + r * math.sin(t + offset)))
        return points

    @staticmethod
    def line(start=(0.0, 0.0), end=(200.0, 50.0), steps=20):
        (x0, y0), (x1, y1) = start, end
        return [Point(x0 + (x1 - x0) * i / steps, y0 + (y1 - y0) * i / steps)
                for i in range(steps + 1)]

    @staticmethod
    def check(scale=1.0):
        """A check mark: short stroke down-right then a long one up-right."""
        corners = [(0.0, 0.0), (40.0, 60.0), (140.0, -80.0)]
        points = []
        for (x0, y0), (x1, y1) in zip(corners, corners[1:]):
            for i in range(10):
                points.append(Point(scale * (x0 + (x1 - x0) * i / 10),
                                    scale * (y0 + (y1 - y0) * i / 10)))
        points.append(Point(scale * corners[-1][0], scale * corners[-1][1]))
        return points

    @staticmethod
    def triangle():
        corners = [(0.0, 0.0), (100.0, 0.0), (50.0, 90.0), (0.0, 0.0)]
        points = []
        for (x0, y0), (x1, y1) in zip(corners, corners[1:]):
            for i in range(8):
                points.append(Point(x0 + (x1 - x0) * i / 8, y0 + (y1 - y0) * i / 8))
        points.append(Point(*corners[-1]))
        return points


@pytest.fixture
def shapes():
    return Shapes
