"""
Gesture entity for the $1 Unistroke Recognizer.

A Gesture owns a name and the ordered points of one stroke. Points are added
as the stroke is drawn, then the gesture is normalised in place (resample,
rotate to zero, translate to origin, scale to square) before it is compared
against templates.

Reference: Wobbrock, Wilson and Li, "Gestures without Libraries, Toolkits or
Training", UIST 2007.
"""

import math
import re
from typing import Any, Iterable, List, Optional, Tuple

from ..config.settings import RecognizerConfig
from ..utils.exceptions import InsufficientPointsError, MalformedSerializationError
from ..utils.gesture_utils import GeometryUtils, PathUtils, Point
from .distance import DistanceEngine

_FLOAT = r'[-+]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?|inf(?:inity)?|nan)'
_NUMBER = re.compile(r'\s*(' + _FLOAT + r')', re.IGNORECASE)


class Gesture:
    """A named single stroke."""

    def __init__(self, name: str = RecognizerConfig.DEFAULT_NAME,
                 points: Optional[Iterable[Any]] = None):
        self.name = name
        self._points: List[Point] = PathUtils.convert_to_points(points if points is not None else [])

    def __repr__(self):
        return f"Gesture({self.name!r}, {len(self._points)} points)"

    def __len__(self):
        return len(self._points)

    def __eq__(self, other):
        if not isinstance(other, Gesture):
            return False
        return self.name == other.name and self._points == other._points

    @property
    def points(self) -> List[Point]:
        """Copies of the stroke's points; editing them leaves the gesture alone."""
        return [p.copy() for p in self._points]

    def get_name(self) -> str:
        return self.name

    def set_name(self, name: str):
        self.name = name

    def add_point(self, point: Any):
        """Append a Point, {'x', 'y'} dict or (x, y) pair to the stroke."""
        self._points.append(PathUtils.to_point(point))

    def copy(self) -> 'Gesture':
        return Gesture(self.name, self._points)

    def clear(self):
        """Empty the stroke and reset the name."""
        self._points = []
        self.name = RecognizerConfig.DEFAULT_NAME

    def normalise_gesture(self, num_resampled: int = RecognizerConfig.NUM_RESAMPLED,
                          square_size: float = RecognizerConfig.SQUARE_SIZE):
        """
        Normalise the stroke as in steps 1-3 of the $1 paper.

        The result replaces the points only once every step has succeeded, so a
        failure leaves the gesture as it was.

        Args:
            num_resampled: Number of points to resample to. Must match the value
                used for the templates this gesture will be compared with.
            square_size: Side of the reference square. Must also match the
                templates.

        Raises:
            InsufficientPointsError: if the stroke has fewer than 2 points.
        """
        if len(self._points) < 2:
            raise InsufficientPointsError(len(self._points))

        points = GeometryUtils.resample(self._points, num_resampled)
        points = GeometryUtils.rotate_to_zero(points)
        points = GeometryUtils.translate_to_origin(points)
        points = GeometryUtils.scale_to_square(points, square_size)
        self._points = points

    def distance_at_best_angle(self, template: 'Gesture') -> float:
        """Distance from this (normalised) gesture to a template at the best rotation."""
        return DistanceEngine().distance_at_best_angle(self, template)

    def serialize(self) -> str:
        """Render as the name, a space, then x;y; for every point."""
        if not self.name or any(ch.isspace() for ch in self.name):
            raise ValueError(f"gesture name {self.name!r} must be a single non-empty token")
        return self.name + ' ' + ''.join(str(p) for p in self._points)

    @classmethod
    def deserialize(cls, text: str) -> 'Gesture':
        """
        Parse the text form written by serialize.

        After the name, numbers are read in pairs: x, one separator character,
        y, one separator character.

        Raises:
            MalformedSerializationError: if the name is missing, a token is not
                a finite number, or an x has no matching y.
        """
        parts = text.split(None, 1)
        if not parts:
            raise MalformedSerializationError("missing gesture name")
        name = parts[0]
        body = parts[1].rstrip() if len(parts) > 1 else ''

        gesture = cls(name)
        pos = 0
        while pos < len(body):
            x, pos = cls._read_number(body, pos)
            pos += 1
            if pos >= len(body):
                raise MalformedSerializationError(
                    f"gesture {name!r}: x value {x!r} has no matching y"
                )
            y, pos = cls._read_number(body, pos)
            pos += 1
            gesture._points.append(Point(x, y))
        return gesture

    @staticmethod
    def _read_number(body: str, pos: int) -> Tuple[float, int]:
        match = _NUMBER.match(body, pos)
        if match is None:
            raise MalformedSerializationError(
                f"expected a number at offset {pos}: {body[pos:pos + 20]!r}"
            )
        value = float(match.group(1))
        if not math.isfinite(value):
            raise MalformedSerializationError(
                f"coordinate {match.group(1)!r} at offset {pos} is not finite"
            )
        return value, match.end()
