"""
Stroke Recognizer Package
Single-stroke 2D gesture recognition with the $1 Unistroke Recognizer.
"""

from .gestures.gesture import Gesture
from .gestures.distance import DistanceEngine
from .gestures.dollar_recognizer import DollarRecognizer, RecognitionResult, recognize
from .gestures.template_store import TemplateStore

__version__ = "1.0.0"
__all__ = ["Gesture", "DistanceEngine", "DollarRecognizer", "RecognitionResult",
           "recognize", "TemplateStore"]
