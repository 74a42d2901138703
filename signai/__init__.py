"""
SignAI
Camera-based sign-language-to-text assistant: static hand poses -> words -> short sentences.
"""

from .GestureClassifier import GestureClassifier, ClassificationResult, NONE_LABEL, VOCABULARY
from .GestureState import StabilizerSession, GestureEvent
from .SentenceBuilder import SentenceBuilder
from .SignPipeline import SignPipeline, FrameResult

__version__ = "0.1.0"
__all__ = [
    "GestureClassifier",
    "ClassificationResult",
    "NONE_LABEL",
    "VOCABULARY",
    "StabilizerSession",
    "GestureEvent",
    "SentenceBuilder",
    "SignPipeline",
    "FrameResult",
]
