"""Outfit preview compositor built on Pillow."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import Mapping
from uuid import UUID

from PIL import Image

from closet.catalog.categories import ClothingCategory
from closet.compositor.errors import CanvasError, GarmentDecodeError
from closet.compositor.layout import (
    LAYOUT_RULES,
    Frame,
    LayoutRule,
    draw_order,
    frame_for,
    rule_for,
)

logger = logging.getLogger(__name__)

CANVAS_SIZE = (600, 800)
WHITE = (255, 255, 255, 255)
TRANSPARENT = (0, 0, 0, 0)


@dataclass(frozen=True, slots=True)
class GarmentLayer:
    """One category's garment image, either encoded bytes or a decoded bitmap."""

    category: ClothingCategory
    image: bytes | Image.Image
    item_id: UUID | None = None

    @property
    def cache_key(self) -> str:
        """Identity used to detect unchanged selections."""

        if self.item_id is not None:
            return str(self.item_id)
        if isinstance(self.image, bytes):
            return hashlib.sha1(self.image).hexdigest()
        return hashlib.sha1(self.image.tobytes()).hexdigest()


@dataclass(frozen=True, slots=True)
class Placement:
    category: ClothingCategory
    frame: Frame


@dataclass(slots=True)
class CompositeImage:
    """Rendered outfit preview plus a record of what went into it."""

    image: Image.Image
    placements: list[Placement] = field(default_factory=list)
    skipped: list[ClothingCategory] = field(default_factory=list)

    @property
    def is_degraded(self) -> bool:
        """True when a selected garment could not be drawn."""

        return bool(self.skipped)

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


SelectionMap = Mapping[ClothingCategory, GarmentLayer | None]


def selection_key(selections: SelectionMap) -> frozenset[tuple[ClothingCategory, str]]:
    """Return an order-independent key for the occupied categories of ``selections``."""

    return frozenset(
        (category, layer.cache_key) for category, layer in selections.items() if layer is not None
    )


class OutfitCompositor:
    """Stacks garment images onto a fixed canvas in a human-silhouette arrangement.

    ``compose`` is pure: it never mutates its inputs and keeps no state
    between calls, so a single instance may be shared across threads.
    """

    def __init__(
        self,
        canvas_size: tuple[int, int] = CANVAS_SIZE,
        *,
        background: tuple[int, int, int, int] = WHITE,
        layout: Mapping[ClothingCategory, LayoutRule] = LAYOUT_RULES,
        resample: Image.Resampling = Image.Resampling.LANCZOS,
    ) -> None:
        self._canvas_size = canvas_size
        self._background = background
        self._layout = layout
        self._resample = resample

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self._canvas_size

    def compose(self, selections: SelectionMap) -> CompositeImage | None:
        """Render the selected garments, or return ``None`` when nothing can be drawn.

        Undecodable garments are logged and left out of the result. Raises
        :class:`CanvasError` if the canvas itself cannot be created.
        """

        occupied = {
            category: layer for category, layer in selections.items() if layer is not None
        }
        if not occupied:
            return None

        canvas = self._new_canvas()
        result = CompositeImage(image=canvas)

        for category in draw_order(occupied, self._layout):
            try:
                garment = self._decode(occupied[category])
            except GarmentDecodeError as exc:
                logger.warning("Skipping garment layer: %s", exc)
                result.skipped.append(category)
                continue

            frame = frame_for(rule_for(category, self._layout), self._canvas_size, garment.size)
            result.image = self._draw(result.image, garment, frame)
            result.placements.append(Placement(category=category, frame=frame))

        if not result.placements:
            logger.warning(
                "No selected garment could be decoded (%s); nothing to compose.",
                ", ".join(category.value for category in result.skipped),
            )
            return None
        return result

    def _new_canvas(self) -> Image.Image:
        width, height = self._canvas_size
        if width <= 0 or height <= 0:
            raise CanvasError(f"Invalid canvas size {self._canvas_size}")
        try:
            return Image.new("RGBA", (width, height), self._background)
        except (MemoryError, ValueError) as exc:
            raise CanvasError(f"Unable to allocate a {width}x{height} canvas") from exc

    def _decode(self, layer: GarmentLayer) -> Image.Image:
        source = layer.image
        try:
            if isinstance(source, Image.Image):
                # Bitmaps from Image.open are lazy; pixel data is read here.
                source.load()
                image = source
            else:
                with Image.open(BytesIO(source)) as opened:
                    opened.load()
                    image = opened.copy()

            if image.width <= 0 or image.height <= 0:
                raise GarmentDecodeError(layer.category, f"empty image {image.size}")
            if image.mode != "RGBA":
                image = image.convert("RGBA")
        # Pillow plugins report malformed chunks with SyntaxError.
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise GarmentDecodeError(layer.category, f"cannot decode image ({exc})") from exc
        return image

    def _draw(self, canvas: Image.Image, garment: Image.Image, frame: Frame) -> Image.Image:
        left, top, width, height = frame.to_box()
        scaled = garment.resize((width, height), self._resample)
        return Image.alpha_composite(canvas, _place(scaled, (left, top), canvas.size))


def _place(layer: Image.Image, position: tuple[int, int], size: tuple[int, int]) -> Image.Image:
    """Position ``layer`` on a transparent sheet the size of the canvas."""

    if layer.size == size and position == (0, 0):
        return layer
    sheet = Image.new("RGBA", size, TRANSPARENT)
    sheet.paste(layer, position)
    return sheet
