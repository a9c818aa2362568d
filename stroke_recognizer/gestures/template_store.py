"""
Named template library for the $1 recognizer.

Templates are kept in insertion order, and every stored gesture has the
store's point count and square size; raw strokes are normalised on the way
in. The store reads and writes the gesture text format (one
"name x;y;x;y;..." line per template) and the JSON layout used for recorded
strokes.
"""

import json
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from ..config.settings import RecognizerConfig
from ..utils.exceptions import GestureError, LengthMismatchError
from ..utils.gesture_utils import DataValidator, PathUtils
from .gesture import Gesture

logger = logging.getLogger(__name__)


class TemplateStore:
    """Insertion-ordered mapping of template name to normalised Gesture."""

    def __init__(self, num_resampled: int = RecognizerConfig.NUM_RESAMPLED,
                 square_size: float = RecognizerConfig.SQUARE_SIZE):
        self.num_resampled = num_resampled
        self.square_size = square_size
        self._templates: Dict[str, Gesture] = {}

    def __len__(self):
        return len(self._templates)

    def __iter__(self) -> Iterator[Gesture]:
        return iter(list(self._templates.values()))

    def __contains__(self, name: str):
        return name in self._templates

    def names(self) -> List[str]:
        return list(self._templates)

    def get(self, name: str) -> Optional[Gesture]:
        return self._templates.get(name)

    def add(self, gesture: Gesture, normalise: bool = True) -> Gesture:
        """
        Store a copy of gesture under its name.

        The copy is normalised unless normalise is False, in which case the
        gesture must already hold num_resampled points. A template with the
        same name is replaced but keeps its position.
        """
        template = gesture.copy()
        if normalise:
            template.normalise_gesture(self.num_resampled, self.square_size)
        elif len(template) != self.num_resampled:
            raise LengthMismatchError(len(template), self.num_resampled)
        self._templates[template.name] = template
        return template

    def add_points(self, name: str, points: Iterable[Any], normalise: bool = True) -> Gesture:
        return self.add(Gesture(name, points), normalise=normalise)

    def remove(self, name: str) -> bool:
        return self._templates.pop(name, None) is not None

    def clear(self):
        self._templates.clear()

    def loads(self, text: str, strict: bool = False, normalise: bool = True) -> int:
        """
        Load templates from gesture text, one per line.

        Blank lines and lines starting with '#' are ignored. A line that fails
        to parse or normalise is skipped with a warning, or re-raised when
        strict is set. Pass normalise=False for text written by dumps, so the
        stored templates come back unchanged. Returns the number loaded.
        """
        loaded = 0
        for line_no, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            try:
                self.add(Gesture.deserialize(line), normalise=normalise)
            except GestureError as e:
                if strict:
                    raise
                logger.warning(f"Skipping template on line {line_no}: {e}")
                continue
            loaded += 1
        return loaded

    def dumps(self) -> str:
        return ''.join(template.serialize() + '\n' for template in self._templates.values())

    def load(self, filename: str, strict: bool = False, normalise: bool = True) -> int:
        """Load templates from a gesture text file."""
        with open(filename, 'r', encoding='utf-8') as f:
            text = f.read()
        loaded = self.loads(text, strict=strict, normalise=normalise)
        logger.info(f"Loaded {loaded} templates from '{filename}'")
        return loaded

    def save(self, filename: str):
        """Save templates to a gesture text file."""
        with open(filename, 'w', encoding='utf-8') as f:
            f.write(self.dumps())
        logger.info(f"Saved {len(self)} templates to '{filename}'")

    def load_json(self, filename: str, strict: bool = False, normalise: bool = True) -> int:
        """
        Load templates from a JSON file.

        Accepts a list of {"name": ..., "points": [{"x": .., "y": ..}, ...]}
        entries, or a dict holding that list under "templates". Invalid entries
        are skipped with a warning. With strict set the first failure is raised
        as is: GestureError for a bad entry, or the subclass the gesture raised.
        """
        with open(filename, 'r', encoding='utf-8') as f:
            data = json.load(f)

        templates_data = data.get('templates', data) if isinstance(data, dict) else data
        if not isinstance(templates_data, list):
            raise GestureError(f"Invalid template format in '{filename}': expected a list of templates")

        loaded = 0
        for i, item in enumerate(templates_data):
            try:
                problem = self._validate_json_template(item)
                if problem is not None:
                    raise GestureError(f"Template {i} in '{filename}': {problem}")
                self.add_points(str(item['name']).strip(), item['points'], normalise=normalise)
            except GestureError as e:
                if strict:
                    raise
                logger.warning(f"Skipping template {i}: {e}")
                continue
            loaded += 1

        logger.info(f"Loaded {loaded} templates from '{filename}'")
        return loaded

    def save_json(self, filename: str):
        """Save templates to a JSON file."""
        data = [
            {'name': template.name, 'points': PathUtils.convert_points_to_dict(template.points)}
            for template in self._templates.values()
        ]
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump({'templates': data}, f, indent=2)
        logger.info(f"Saved {len(data)} templates to '{filename}'")

    @staticmethod
    def _validate_json_template(item: Any) -> Optional[str]:
        if not isinstance(item, dict):
            return "not a dictionary"
        if 'name' not in item:
            return "missing 'name' field"
        if 'points' not in item:
            return "missing 'points' field"
        name = str(item['name']).strip()
        if not name or any(ch.isspace() for ch in name):
            return f"invalid name {item['name']!r}"
        if not DataValidator.validate_path_data(item['points']):
            return f"'{name}' needs a list of at least 2 points with finite numeric x and y"
        return None
