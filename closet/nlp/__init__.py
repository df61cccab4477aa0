"""Language and vision model clients."""

from .vision import (
    ClothingAnalysis,
    VisionClassificationError,
    VisionClassifier,
    VisionErrorKind,
)

__all__ = [
    "ClothingAnalysis",
    "VisionClassificationError",
    "VisionClassifier",
    "VisionErrorKind",
]
