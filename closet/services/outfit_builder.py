"""Outfit building workflow: per-category selection, preview and save."""

from __future__ import annotations

import logging
import unicodedata

from sqlalchemy.ext.asyncio import AsyncSession

from closet.catalog.categories import ClothingCategory
from closet.compositor import CompositeImage, GarmentLayer, OutfitCompositor
from closet.config.settings import Settings
from closet.db import models
from closet.imgproc.encoding import DEFAULT_QUALITY, encode_jpeg
from closet.services.preview import PreviewScheduler
from closet.services.wardrobe import WardrobeService

logger = logging.getLogger(__name__)


class OutfitValidationError(ValueError):
    """Raised when an outfit cannot be saved; message is user-facing."""


class OutfitBuilder:
    """Holds the items chosen for a new outfit and keeps its preview current."""

    def __init__(
        self,
        wardrobe: WardrobeService,
        scheduler: PreviewScheduler,
        *,
        jpeg_quality: float = DEFAULT_QUALITY,
        name_max_length: int = 50,
    ) -> None:
        self._wardrobe = wardrobe
        self._scheduler = scheduler
        self._jpeg_quality = jpeg_quality
        self._name_max_length = name_max_length
        self._selected: dict[ClothingCategory, models.ClothingItem] = {}
        self.name = ""

    @classmethod
    def from_settings(cls, wardrobe: WardrobeService, settings: Settings) -> "OutfitBuilder":
        compositor = OutfitCompositor(settings.canvas_size)
        scheduler = PreviewScheduler(compositor, delay=settings.preview_debounce)
        return cls(
            wardrobe,
            scheduler,
            jpeg_quality=settings.jpeg_quality,
            name_max_length=settings.outfit_name_max_length,
        )

    @property
    def selected_items(self) -> dict[ClothingCategory, models.ClothingItem]:
        return dict(self._selected)

    @property
    def preview(self) -> CompositeImage | None:
        return self._scheduler.result

    @property
    def is_generating(self) -> bool:
        return self._scheduler.pending

    def select_item(self, category: ClothingCategory, item: models.ClothingItem | None) -> None:
        """Replace (or clear, with ``None``) the item for ``category`` and refresh the preview."""

        if item is None:
            self._selected.pop(category, None)
        else:
            if item.category_enum is not category:
                raise ValueError(f"Item {item.id} is a {item.category}, not a {category.value}")
            self._selected[category] = item
        self.refresh_preview()

    def refresh_preview(self) -> None:
        self._scheduler.schedule(self.layers())

    async def wait_for_preview(self) -> CompositeImage | None:
        """Wait for any pending recomposition and return the current preview."""

        return await self._scheduler.wait()

    def layers(self) -> dict[ClothingCategory, GarmentLayer]:
        return {
            category: GarmentLayer(category=category, image=item.image_data, item_id=item.id)
            for category, item in self._selected.items()
        }

    async def validate(self, session: AsyncSession) -> str | None:
        """Return the first reason the outfit cannot be saved, or ``None``."""

        name = self.name.strip()
        if not name:
            return "Outfit name cannot be empty"
        # Composed form, so "e" plus a combining accent counts once.
        if len(unicodedata.normalize("NFC", name)) > self._name_max_length:
            return f"Outfit name is too long (max {self._name_max_length} characters)"
        if await self._wardrobe.is_outfit_name_taken(session, name):
            return "An outfit with this name already exists"
        if self.preview is None:
            return "Please generate a preview before saving"
        return None

    async def save(self, session: AsyncSession) -> models.Outfit:
        """Validate, encode the preview as JPEG and persist the outfit."""

        await self.wait_for_preview()
        problem = await self.validate(session)
        if problem is not None:
            logger.info("Outfit %r not saved: %s", self.name, problem)
            raise OutfitValidationError(problem)

        preview = self.preview
        if preview is None:
            raise OutfitValidationError("Please generate a preview before saving")
        image_data = encode_jpeg(preview.image, self._jpeg_quality)
        return await self._wardrobe.create_outfit(
            session,
            name=self.name.strip(),
            image_data=image_data,
            item_ids=[item.id for item in self._selected.values()],
        )
