"""
$1 Unistroke Recognizer Implementation

Normalises a candidate stroke, measures it against every template at the best
rotation, and reports the closest template.

Reference: https://depts.washington.edu/acelab/proj/dollar/index.html
"""

import json
import logging
import math
import os
import time
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..config.settings import RecognitionConfig
from ..utils.exceptions import GestureError
from ..utils.gesture_utils import PathUtils, Point
from .distance import DistanceEngine
from .gesture import Gesture
from .template_store import TemplateStore

logger = logging.getLogger(__name__)


@dataclass
class RecognitionResult:
    """Result of $1 recognition with name, distance, similarity score and timing."""
    name: Optional[str]
    distance: float
    score: float
    time_ms: float


def _template_distances(query: Gesture, templates: Sequence[Gesture],
                        engine: DistanceEngine, max_workers: Optional[int]) -> List[float]:
    if max_workers and max_workers > 1 and len(templates) > 1:
        # map() yields in submission order whatever order the work finishes in
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(
                lambda template: engine.distance_at_best_angle(query, template), templates
            ))
    return [engine.distance_at_best_angle(query, template) for template in templates]


def recognize(query_points: Any, num_resampled: int, square_size: float,
              templates: Any, engine: Optional[DistanceEngine] = None,
              max_workers: Optional[int] = None) -> Tuple[Optional[str], float]:
    """
    Find the template closest to a raw stroke.

    Args:
        query_points: Raw stroke as a Gesture or an iterable of points.
        num_resampled: Point count the templates were normalised with.
        square_size: Square size the templates were normalised with.
        templates: Normalised templates, as an iterable of Gestures or a
            mapping of name to Gesture.
        engine: Distance engine to use; a default one when omitted.
        max_workers: Compare templates on this many threads when above 1.

    Returns:
        (best_name, best_distance). On equal distances the template that comes
        first wins. (None, inf) when there are no templates.

    Raises:
        GestureError: if a template yields a NaN distance.
    """
    engine = engine or DistanceEngine()
    if isinstance(query_points, Gesture):
        query = query_points.copy()
    else:
        query = Gesture(points=query_points)
    query.normalise_gesture(num_resampled, square_size)

    if isinstance(templates, Mapping):
        templates = templates.values()
    templates = list(templates)

    distances = _template_distances(query, templates, engine, max_workers)

    best_name = None
    best_distance = math.inf
    for template, distance in zip(templates, distances):
        logger.debug(f"Template {template.name}: distance {distance:.4f}")
        if math.isnan(distance):
            raise GestureError(f"distance to template {template.name!r} is not a number")
        if distance < best_distance:
            best_name = template.name
            best_distance = distance

    return best_name, best_distance


class DollarRecognizer:
    """$1 Unistroke Recognizer for gesture classification."""

    def __init__(self, config: Optional[RecognitionConfig] = None,
                 templates_path: Optional[str] = None,
                 max_workers: Optional[int] = None):
        self.config = config or RecognitionConfig()
        self.store = TemplateStore(self.config.num_resampled, self.config.square_size)
        self.engine = DistanceEngine(self.config.angle_range, self.config.angle_precision)
        self.max_workers = max_workers
        if templates_path:
            self.load_templates(templates_path)

    @property
    def templates(self) -> List[Gesture]:
        return list(self.store)

    def add_template(self, name: str, points: Iterable[Any]) -> int:
        """Add (or replace) a gesture template, returns the number of templates."""
        self.store.add_points(name, points)
        return len(self.store)

    def remove_template(self, name: str) -> bool:
        return self.store.remove(name)

    def recognize(self, points: Any) -> RecognitionResult:
        """
        Recognize a stroke.

        Args:
            points: Raw stroke as a Gesture, Points, {'x', 'y'} dicts or pairs.

        Returns:
            RecognitionResult for the closest template. The name is None when
            no templates are loaded.
        """
        start_time = time.perf_counter()
        name, distance = recognize(
            points, self.config.num_resampled, self.config.square_size,
            self.templates, self.engine, self.max_workers,
        )
        elapsed_ms = (time.perf_counter() - start_time) * 1000.0

        score = self._distance_to_similarity(distance)
        logger.debug(f"Best template: {name} with distance {distance:.4f} (score {score:.3f})")
        return RecognitionResult(name, distance, score, elapsed_ms)

    def classify(self, points: Any) -> Optional[str]:
        """Name of the closest template, or None if it is below the similarity threshold."""
        result = self.recognize(points)
        if result.name is not None and result.score >= self.config.get_threshold():
            return result.name
        return None

    def _distance_to_similarity(self, distance: float) -> float:
        """Convert distance to similarity score (0.0-1.0)."""
        if math.isinf(distance):
            return 0.0
        return max(0.0, 1.0 - distance / self.config.half_diagonal)

    def load_templates(self, filename: str, strict: bool = False,
                       normalise: bool = True) -> int:
        """Load templates from a .json file or a gesture text file."""
        if filename.endswith('.json'):
            return self.store.load_json(filename, strict=strict, normalise=normalise)
        return self.store.load(filename, strict=strict, normalise=normalise)

    def save_templates(self, filename: str):
        """Save templates to a .json file or a gesture text file."""
        if filename.endswith('.json'):
            self.store.save_json(filename)
        else:
            self.store.save(filename)


class TemplateTrainer:
    """Builds templates by averaging several recorded samples of a gesture."""

    def __init__(self, recognizer: DollarRecognizer):
        self.recognizer = recognizer
        self.training_data: List[Dict[str, Any]] = []

    def add_training_sample(self, name: str, path: Iterable[Any]):
        """Add a training sample for a gesture."""
        points = PathUtils.convert_to_points(path)
        self.training_data.append({
            'name': name,
            'path': PathUtils.convert_points_to_dict(points)
        })

    def samples_for(self, name: str) -> List[List[Dict[str, float]]]:
        return [sample['path'] for sample in self.training_data if sample['name'] == name]

    def train_template(self, name: str, samples: Optional[List[Iterable[Any]]] = None) -> bool:
        """
        Train a template from samples, or from the collected samples for name.

        Each sample is normalised, corresponding points are averaged, and the
        average is added to the recognizer. Returns False if there is nothing
        to train on.
        """
        if samples is None:
            samples = self.samples_for(name)
        if not samples:
            return False

        config = self.recognizer.config
        normalised = []
        for sample in samples:
            gesture = Gesture(name, sample)
            gesture.normalise_gesture(config.num_resampled, config.square_size)
            normalised.append(PathUtils.to_array(gesture.points))

        averaged = np.mean(np.stack(normalised), axis=0)
        self.recognizer.add_template(name, [Point(x, y) for x, y in averaged])
        logger.info(f"Trained template '{name}' from {len(samples)} samples")
        return True

    def save_training_data(self, filename: str):
        """Save training data to file."""
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump(self.training_data, f, indent=2)

    def load_training_data(self, filename: str):
        """Load training data from file."""
        if not os.path.exists(filename):
            logger.warning(f"Training data file '{filename}' not found")
            return

        with open(filename, 'r', encoding='utf-8') as f:
            self.training_data = json.load(f)
