"""
Error types raised by the stroke recognizer.

All of them are recoverable by the caller: the core reports the condition and
leaves the decision to skip or abort to whoever drives recognition.
"""


class GestureError(Exception):
    """Base class for gesture processing errors."""


class InsufficientPointsError(GestureError, ValueError):
    """Raised when fewer than 2 points are given to resample or normalize."""

    def __init__(self, count: int, required: int = 2):
        super().__init__(f"need at least {required} points, got {count}")
        self.count = count
        self.required = required


class EmptyPathError(GestureError, ValueError):
    """Raised when a centroid or bounding box is requested for an empty path."""


class LengthMismatchError(GestureError, ValueError):
    """Raised when two paths of different length are compared point by point."""

    def __init__(self, left: int, right: int):
        super().__init__(
            f"cannot compare paths of {left} and {right} points; "
            "were both normalised with the same point count?"
        )
        self.left = left
        self.right = right


class MalformedSerializationError(GestureError, ValueError):
    """Raised when gesture text does not parse as a name and x;y; pairs."""
