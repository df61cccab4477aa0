"""Per-category placement rules for the outfit preview canvas.

Every category maps to a fixed :class:`LayoutRule`: a fractional centre, a
fractional bounding box and a stack order. Garments are scaled to fit their
box without distortion and centred on the rule's centre point.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from closet.catalog.categories import ClothingCategory


@dataclass(frozen=True, slots=True)
class LayoutRule:
    """Canvas-relative placement for one category."""

    center: tuple[float, float]
    max_size: tuple[float, float]
    stack_order: int


@dataclass(frozen=True, slots=True)
class Frame:
    """Absolute on-canvas rectangle in pixels (floating point)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def to_box(self) -> tuple[int, int, int, int]:
        """Round to an integer ``(left, top, width, height)`` box, at least 1px each way."""

        return (
            int(round(self.x)),
            int(round(self.y)),
            max(1, int(round(self.width))),
            max(1, int(round(self.height))),
        )


FALLBACK_RULE = LayoutRule(center=(0.5, 0.5), max_size=(0.5, 0.5), stack_order=0)

LAYOUT_RULES: Mapping[ClothingCategory, LayoutRule] = {
    ClothingCategory.SHOES: LayoutRule(center=(0.5, 0.85), max_size=(0.40, 0.20), stack_order=1),
    ClothingCategory.PANTS: LayoutRule(center=(0.5, 0.60), max_size=(0.70, 0.40), stack_order=2),
    ClothingCategory.DRESS: LayoutRule(center=(0.5, 0.45), max_size=(0.80, 0.60), stack_order=2),
    ClothingCategory.SHIRT: LayoutRule(center=(0.5, 0.35), max_size=(0.70, 0.40), stack_order=3),
    ClothingCategory.JACKET: LayoutRule(center=(0.5, 0.35), max_size=(0.75, 0.45), stack_order=4),
    ClothingCategory.ACCESSORY: LayoutRule(center=(0.5, 0.15), max_size=(0.30, 0.20), stack_order=5),
}


def validate_layout_table(table: Mapping[ClothingCategory, LayoutRule]) -> None:
    """Raise ``ValueError`` unless every category has a well-formed rule."""

    missing = [category.value for category in ClothingCategory if category not in table]
    if missing:
        raise ValueError(f"Layout table has no rule for: {', '.join(missing)}")

    for category, rule in table.items():
        fx, fy = rule.center
        fw, fh = rule.max_size
        if not (0.0 <= fx <= 1.0 and 0.0 <= fy <= 1.0):
            raise ValueError(f"{category.value}: centre {rule.center} outside the canvas")
        if not (0.0 < fw <= 1.0 and 0.0 < fh <= 1.0):
            raise ValueError(f"{category.value}: max size {rule.max_size} must be in (0, 1]")


validate_layout_table(LAYOUT_RULES)


def rule_for(
    category: ClothingCategory,
    table: Mapping[ClothingCategory, LayoutRule] = LAYOUT_RULES,
) -> LayoutRule:
    return table.get(category, FALLBACK_RULE)


def draw_order(
    categories: Iterable[ClothingCategory],
    table: Mapping[ClothingCategory, LayoutRule] = LAYOUT_RULES,
) -> list[ClothingCategory]:
    """Return categories back-to-front: stack order first, then category ordinal."""

    return sorted(
        set(categories),
        key=lambda category: (rule_for(category, table).stack_order, category.ordinal),
    )


def frame_for(
    rule: LayoutRule,
    canvas_size: tuple[int, int],
    image_size: tuple[int, int],
) -> Frame:
    """Fit ``image_size`` into the rule's box, preserving aspect ratio, centred on the rule."""

    canvas_w, canvas_h = canvas_size
    image_w, image_h = image_size
    if image_w <= 0 or image_h <= 0:
        raise ValueError(f"Image size must be positive, got {image_size}")

    max_w = canvas_w * rule.max_size[0]
    max_h = canvas_h * rule.max_size[1]
    aspect = image_w / image_h

    if aspect > max_w / max_h:
        width, height = max_w, max_w / aspect
    else:
        width, height = max_h * aspect, max_h

    x = canvas_w * rule.center[0] - width / 2
    y = canvas_h * rule.center[1] - height / 2
    return Frame(x=x, y=y, width=width, height=height)
