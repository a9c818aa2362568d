"""
Gesture recognition.

This package provides the gesture entity, the rotation-optimised distance
engine, the template store and the $1 recognizer that ties them together.
"""

from .gesture import Gesture
from .distance import DistanceEngine, GoldenSectionState
from .template_store import TemplateStore
from .dollar_recognizer import DollarRecognizer, RecognitionResult, TemplateTrainer, recognize

__all__ = [
    'Gesture',
    'DistanceEngine',
    'GoldenSectionState',
    'TemplateStore',
    'DollarRecognizer',
    'RecognitionResult',
    'TemplateTrainer',
    'recognize'
]
