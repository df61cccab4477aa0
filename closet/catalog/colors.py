"""Colour-based ordering of wardrobe items."""

from __future__ import annotations

from typing import Iterable, Protocol, TypeVar

COLOR_ORDER: tuple[str, ...] = (
    "white", "cream", "beige", "tan", "brown",
    "gray", "grey", "black",
    "red", "pink", "orange", "yellow",
    "green", "blue", "navy", "purple",
    "multi", "pattern", "other",
)


class _Coloured(Protocol):
    color: str | None
    title: str | None


T = TypeVar("T", bound=_Coloured)


def color_rank(color: str | None) -> int:
    """Return the position of the first palette entry contained in ``color``.

    Colours matching nothing rank after the whole palette.
    """

    name = (color or "other").lower()
    for index, entry in enumerate(COLOR_ORDER):
        if entry in name:
            return index
    return len(COLOR_ORDER)


def sort_by_color(items: Iterable[T]) -> list[T]:
    """Order items by palette rank, then alphabetically by title."""

    return sorted(items, key=lambda item: (color_rank(item.color), item.title or ""))
