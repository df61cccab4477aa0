"""Application services built on the compositor and the item store."""

from .ingestion import IngestionResult, ItemIngestionService
from .outfit_builder import OutfitBuilder, OutfitValidationError
from .preview import PreviewScheduler
from .wardrobe import WardrobeService

__all__ = [
    "IngestionResult",
    "ItemIngestionService",
    "OutfitBuilder",
    "OutfitValidationError",
    "PreviewScheduler",
    "WardrobeService",
]
