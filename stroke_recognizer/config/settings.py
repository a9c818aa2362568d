"""
Configuration settings for the stroke recognizer.
"""

import math


class RecognizerConfig:
    """Configuration constants for $1 gesture recognition."""

    # Normalisation (templates and candidates must use the same values)
    NUM_RESAMPLED = 64
    SQUARE_SIZE = 250.0

    # Golden section search over rotation (degrees)
    ANGLE_RANGE = 45.0
    ANGLE_PRECISION = 1.0
    GOLDEN_RATIO = 0.5 * (-1.0 + math.sqrt(5.0))

    # Scaling: an extent this small relative to the other axis counts as zero
    DEGENERATE_EXTENT_RATIO = 1e-9

    # Name given to gestures that have not been named
    DEFAULT_NAME = "dummy"

    # Minimum similarity (0.0-1.0) for a match to count as recognized
    SIMILARITY_THRESHOLD = 0.85


class RecognitionConfig:
    """Runtime configuration for recognition sensitivity."""

    def __init__(self, num_resampled: int = RecognizerConfig.NUM_RESAMPLED,
                 square_size: float = RecognizerConfig.SQUARE_SIZE,
                 angle_range: float = RecognizerConfig.ANGLE_RANGE,
                 angle_precision: float = RecognizerConfig.ANGLE_PRECISION,
                 similarity_threshold: float = RecognizerConfig.SIMILARITY_THRESHOLD):
        self.num_resampled = num_resampled
        self.square_size = square_size
        self.angle_range = angle_range
        self.angle_precision = angle_precision
        self.set_threshold(similarity_threshold)

    @property
    def half_diagonal(self) -> float:
        """Largest meaningful distance between two normalised gestures."""
        return 0.5 * math.sqrt(self.square_size ** 2 + self.square_size ** 2)

    def set_threshold(self, threshold: float):
        """Set the similarity threshold (0.0-1.0)."""
        self.similarity_threshold = max(0.0, min(1.0, threshold))

    def get_threshold(self) -> float:
        """Get the current similarity threshold."""
        return self.similarity_threshold
