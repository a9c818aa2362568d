"""
Rotation-optimised distance between normalised gestures (step 4 of $1).

The query is rotated about its centroid within [-angle_range, +angle_range]
and the angle minimising the mean point-to-point distance is found with a
golden section search. Nothing here keeps state between comparisons, and the
gestures passed in are never modified.
"""

from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from ..config.settings import RecognizerConfig
from ..utils.exceptions import EmptyPathError, LengthMismatchError
from ..utils.gesture_utils import GeometryUtils, PathUtils, Point


@dataclass
class GoldenSectionState:
    """Bracket [a, b] with its two interior probes and their values."""
    a: float
    b: float
    x1: float
    x2: float
    f1: float
    f2: float
    evaluations: int = 2

    @property
    def width(self) -> float:
        return self.b - self.a

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.a + self.b)


class DistanceEngine:
    """Computes $1 distances between normalised gestures."""

    def __init__(self, angle_range: float = RecognizerConfig.ANGLE_RANGE,
                 angle_precision: float = RecognizerConfig.ANGLE_PRECISION,
                 golden_ratio: float = RecognizerConfig.GOLDEN_RATIO):
        if angle_precision <= 0:
            raise ValueError("angle_precision must be positive")
        self.angle_range = abs(angle_range)
        self.angle_precision = angle_precision
        self.golden_ratio = golden_ratio

    def path_distance(self, path: Sequence[Point], gesture) -> float:
        """Mean Euclidean distance between path[i] and gesture.points[i]."""
        other = gesture.points
        if len(path) != len(other):
            raise LengthMismatchError(len(path), len(other))
        if not path:
            raise EmptyPathError("cannot compare empty paths")

        diff = PathUtils.to_array(path) - PathUtils.to_array(other)
        return float(np.mean(np.hypot(diff[:, 0], diff[:, 1])))

    def distance_at_angle(self, angle: float, query, template) -> float:
        """Distance to template after rotating a copy of query by angle degrees."""
        rotated = GeometryUtils.rotate_points(query.points, angle)
        return self.path_distance(rotated, template)

    def golden_section_search(self, objective: Callable[[float], float],
                              lower: float, upper: float) -> GoldenSectionState:
        """
        Narrow [lower, upper] around the minimum of a unimodal objective.

        Each iteration keeps the side holding the smaller probe value and
        reuses the surviving probe, so only one new evaluation is made per
        step. Stops once the bracket is narrower than angle_precision.
        """
        phi = self.golden_ratio
        a, b = lower, upper
        x1 = phi * a + (1.0 - phi) * b
        x2 = (1.0 - phi) * a + phi * b
        state = GoldenSectionState(a, b, x1, x2, objective(x1), objective(x2))

        while state.width >= self.angle_precision:
            if state.f1 < state.f2:
                state.b = state.x2
                state.x2, state.f2 = state.x1, state.f1
                state.x1 = phi * state.a + (1.0 - phi) * state.b
                state.f1 = objective(state.x1)
            else:
                state.a = state.x1
                state.x1, state.f1 = state.x2, state.f2
                state.x2 = (1.0 - phi) * state.a + phi * state.b
                state.f2 = objective(state.x2)
            state.evaluations += 1

        return state

    def best_angle(self, query, template) -> float:
        """Rotation in degrees that best aligns query with template."""
        state = self.golden_section_search(
            lambda angle: self.distance_at_angle(angle, query, template),
            -self.angle_range, self.angle_range,
        )
        return state.midpoint

    def distance_at_best_angle(self, query, template) -> float:
        """Distance between query and template at the best rotation of query."""
        angle = self.best_angle(query, template)
        return self.distance_at_angle(angle, query, template)
