"""Garment photo ingestion: normalise, strip background, classify."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from closet.imgproc.encoding import DEFAULT_QUALITY, to_jpeg_bytes
from closet.integrations.removebg import RemoveBgClient, RemoveBgError
from closet.nlp.vision import ClothingAnalysis, VisionClassificationError, VisionClassifier

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IngestionResult:
    """Image to store plus whatever the classifier could tell us about it."""

    image_data: bytes
    background_removed: bool
    analysis: ClothingAnalysis | None = None
    error: str | None = None


class ItemIngestionService:
    """Prepares a freshly picked photo for the add-item form."""

    def __init__(
        self,
        background_remover: RemoveBgClient | None,
        classifier: VisionClassifier | None,
        *,
        jpeg_quality: float = DEFAULT_QUALITY,
    ) -> None:
        self._background_remover = background_remover
        self._classifier = classifier
        self._jpeg_quality = jpeg_quality

    async def ingest(self, photo: bytes) -> IngestionResult:
        """Process a photo; removal and classification failures are not fatal.

        Raises ``ValueError`` only when ``photo`` is not an image at all.
        """

        jpeg = await asyncio.to_thread(to_jpeg_bytes, photo, self._jpeg_quality)

        image_data, removed = jpeg, False
        if self._background_remover is not None:
            try:
                image_data = await self._background_remover.remove_background(jpeg)
                removed = True
            except RemoveBgError as exc:
                logger.warning(
                    "Background removal failed (%s); keeping the original image.",
                    exc,
                )

        result = IngestionResult(image_data=image_data, background_removed=removed)
        if self._classifier is None:
            result.error = "Classification is not configured"
            return result

        try:
            result.analysis = await self._classifier.classify(image_data)
        except VisionClassificationError as exc:
            logger.warning("Clothing classification failed (%s): %s", exc.kind.value, exc)
            result.error = str(exc)
        return result
