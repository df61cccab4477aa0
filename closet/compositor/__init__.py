"""Deterministic outfit preview composition."""

from .compositor import (
    CANVAS_SIZE,
    CompositeImage,
    GarmentLayer,
    OutfitCompositor,
    Placement,
    selection_key,
)
from .errors import CanvasError, CompositionError, GarmentDecodeError
from .layout import FALLBACK_RULE, LAYOUT_RULES, Frame, LayoutRule, draw_order, frame_for, rule_for

__all__ = [
    "CANVAS_SIZE",
    "FALLBACK_RULE",
    "LAYOUT_RULES",
    "CanvasError",
    "CompositeImage",
    "CompositionError",
    "Frame",
    "GarmentDecodeError",
    "GarmentLayer",
    "LayoutRule",
    "OutfitCompositor",
    "Placement",
    "draw_order",
    "frame_for",
    "rule_for",
    "selection_key",
]
