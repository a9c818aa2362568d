"""
Shared geometry for single-stroke gesture recognition.

This module holds the point and rectangle types and the path operations of the
$1 pipeline (resampling, rotation, translation and scaling). Every path
operation is pure: it returns a new list and never edits the one it was given.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..config.settings import RecognizerConfig
from .exceptions import EmptyPathError, InsufficientPointsError


class Point:
    """Represents a 2D point."""

    def __init__(self, x: float, y: float):
        self.x = float(x)
        self.y = float(y)

    def __repr__(self):
        return f"Point({self.x:.1f}, {self.y:.1f})"

    def __str__(self):
        # repr() of a float is the shortest text that reads back to the same value
        return f"{self.x!r};{self.y!r};"

    def __eq__(self, other):
        if not isinstance(other, Point):
            return False
        return abs(self.x - other.x) < 1e-10 and abs(self.y - other.y) < 1e-10

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def copy(self) -> 'Point':
        return Point(self.x, self.y)

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)


@dataclass
class Rect:
    """Axis-aligned box: (x, y) is the minimum corner, (w, h) the extents."""
    x: float
    y: float
    w: float
    h: float

    def contains(self, point: Point, tolerance: float = 1e-9) -> bool:
        return (self.x - tolerance <= point.x <= self.x + self.w + tolerance
                and self.y - tolerance <= point.y <= self.y + self.h + tolerance)


class GeometryUtils:
    """Path operations used to normalise and compare strokes."""

    @staticmethod
    def calculate_distance(p1: Point, p2: Point) -> float:
        """Calculate Euclidean distance between two points."""
        return math.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2)

    @staticmethod
    def path_length(points: Sequence[Point]) -> float:
        """Calculate total path length."""
        if len(points) < 2:
            return 0.0

        length = 0.0
        for i in range(1, len(points)):
            length += GeometryUtils.calculate_distance(points[i-1], points[i])
        return length

    @staticmethod
    def resample(points: Sequence[Point], num_points: int) -> List[Point]:
        """
        Resample a path to num_points points equally spaced by arc length.

        Whenever the walk crosses a multiple of the interval, the boundary point
        is interpolated, emitted and inserted into the walked path, so the rest
        of that segment still counts towards the next interval.

        Raises:
            ValueError: if num_points is below 2.
            InsufficientPointsError: if the path has fewer than 2 points.
        """
        if num_points < 2:
            raise ValueError(f"cannot resample to {num_points} points, need at least 2")
        if len(points) < 2:
            raise InsufficientPointsError(len(points))

        path = [p.copy() for p in points]
        interval = GeometryUtils.path_length(path) / (num_points - 1)
        if interval == 0:
            return [path[0].copy() for _ in range(num_points)]

        D = 0.0
        resampled = [path[0].copy()]
        i = 1
        while i < len(path):
            prev_point = path[i-1]
            curr_point = path[i]
            d = GeometryUtils.calculate_distance(prev_point, curr_point)
            if D + d >= interval:
                ratio = (interval - D) / d
                q = Point(prev_point.x + ratio * (curr_point.x - prev_point.x),
                          prev_point.y + ratio * (curr_point.y - prev_point.y))
                resampled.append(q)
                path.insert(i, q)
                D = 0.0
            else:
                D += d
            i += 1

        # Rounding can leave the walk a hair short of the final point
        while len(resampled) < num_points:
            resampled.append(path[-1].copy())
        del resampled[num_points:]

        return resampled

    @staticmethod
    def centroid(points: Sequence[Point]) -> Point:
        """Calculate the centroid of a list of points."""
        if not points:
            raise EmptyPathError("centroid of an empty path is undefined")
        sum_x = sum(p.x for p in points)
        sum_y = sum(p.y for p in points)
        return Point(sum_x / len(points), sum_y / len(points))

    @staticmethod
    def bounding_box(points: Sequence[Point]) -> Rect:
        """Get the bounding box of a path."""
        if not points:
            raise EmptyPathError("bounding box of an empty path is undefined")

        min_x = max_x = points[0].x
        min_y = max_y = points[0].y
        for point in points[1:]:
            min_x = min(min_x, point.x)
            max_x = max(max_x, point.x)
            min_y = min(min_y, point.y)
            max_y = max(max_y, point.y)

        return Rect(min_x, min_y, max_x - min_x, max_y - min_y)

    @staticmethod
    def rotate_by(points: Sequence[Point], center: Point, theta: float) -> List[Point]:
        """Rotate points about center by theta degrees."""
        radians = math.radians(theta)
        cos_theta = math.cos(radians)
        sin_theta = math.sin(radians)

        rotated = []
        for point in points:
            dx = point.x - center.x
            dy = point.y - center.y

            new_x = dx * cos_theta - dy * sin_theta + center.x
            new_y = dx * sin_theta + dy * cos_theta + center.y

            rotated.append(Point(new_x, new_y))

        return rotated

    @staticmethod
    def rotate_points(points: Sequence[Point], theta: float,
                      center: Optional[Point] = None) -> List[Point]:
        """Rotate points by theta degrees about center, or about their centroid."""
        if center is None:
            center = GeometryUtils.centroid(points)
        return GeometryUtils.rotate_by(points, center, theta)

    @staticmethod
    def indicative_angle(points: Sequence[Point]) -> float:
        """Angle in degrees of the vector from the first point to the centroid."""
        c = GeometryUtils.centroid(points)
        return math.degrees(math.atan2(c.y - points[0].y, c.x - points[0].x))

    @staticmethod
    def rotate_to_zero(points: Sequence[Point]) -> List[Point]:
        """Rotate points so the indicative angle becomes 0 degrees."""
        theta = GeometryUtils.indicative_angle(points)
        return GeometryUtils.rotate_by(points, GeometryUtils.centroid(points), -theta)

    @staticmethod
    def translate_to_origin(points: Sequence[Point]) -> List[Point]:
        """Translate points so the centroid is at the origin."""
        c = GeometryUtils.centroid(points)
        return [point - c for point in points]

    @staticmethod
    def scale_to_square(points: Sequence[Point], size: float) -> List[Point]:
        """
        Scale points non-uniformly so the bounding box becomes size x size.

        A straight stroke has no meaningful extent on one axis, so that axis
        takes the factor of the other one instead of being blown up. When both
        extents are zero the points come back unchanged.
        """
        box = GeometryUtils.bounding_box(points)
        larger = max(box.w, box.h)
        if larger == 0:
            return [p.copy() for p in points]

        floor = larger * RecognizerConfig.DEGENERATE_EXTENT_RATIO
        scale_x = size / (box.w if box.w > floor else larger)
        scale_y = size / (box.h if box.h > floor else larger)

        return [Point(p.x * scale_x, p.y * scale_y) for p in points]


class PathUtils:
    """Utility class for path conversion."""

    @staticmethod
    def to_point(value: Any) -> Point:
        """Convert a Point, an {'x', 'y'} dict or an (x, y) pair to a Point."""
        if isinstance(value, Point):
            return value.copy()
        if isinstance(value, dict):
            return Point(value['x'], value['y'])
        x, y = value
        return Point(x, y)

    @staticmethod
    def convert_to_points(path: Iterable[Any]) -> List[Point]:
        """Convert a path of points, dicts or pairs to Point objects."""
        return [PathUtils.to_point(p) for p in path]

    @staticmethod
    def convert_points_to_dict(points: Iterable[Point]) -> List[Dict[str, float]]:
        """Convert Point objects to dict format."""
        return [{'x': p.x, 'y': p.y} for p in points]

    @staticmethod
    def to_array(points: Sequence[Point]) -> np.ndarray:
        """Stack points into an (n, 2) float array."""
        return np.array([(p.x, p.y) for p in points], dtype=float).reshape(-1, 2)


class DataValidator:
    """Utility class for validating gesture data."""

    @staticmethod
    def validate_path_data(path: Any) -> bool:
        """Validate that path data is a list of at least 2 {'x', 'y'} dicts with finite values."""
        if not isinstance(path, list) or len(path) < 2:
            return False

        for point in path:
            if not isinstance(point, dict):
                return False
            if 'x' not in point or 'y' not in point:
                return False
            try:
                if not (math.isfinite(float(point['x'])) and math.isfinite(float(point['y']))):
                    return False
            except (ValueError, TypeError):
                return False

        return True
