"""
Utilities package for gesture recognition.

This package provides the geometry shared by the gesture entity, the distance
engine and the recognizer, along with the error types they raise.
"""

from .exceptions import (
    GestureError,
    InsufficientPointsError,
    EmptyPathError,
    LengthMismatchError,
    MalformedSerializationError
)
from .gesture_utils import (
    Point,
    Rect,
    GeometryUtils,
    PathUtils,
    DataValidator
)

__all__ = [
    'GestureError',
    'InsufficientPointsError',
    'EmptyPathError',
    'LengthMismatchError',
    'MalformedSerializationError',
    'Point',
    'Rect',
    'GeometryUtils',
    'PathUtils',
    'DataValidator'
]
