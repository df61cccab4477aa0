"""Validated payloads for creating and editing wardrobe items."""

from __future__ import annotations

from pydantic import BaseModel, ValidationError, field_validator

from closet.catalog.categories import ClothingCategory


class ClothingItemValidationError(ValueError):
    """Raised when an item draft is incomplete; message is user-facing."""


class ClothingItemDraft(BaseModel):
    """Fields required before a clothing item may be stored."""

    title: str
    category: ClothingCategory
    subcategory: str
    color: str
    image_data: bytes

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, ClothingCategory):
            return ClothingCategory.parse(value)
        return value

    @field_validator("title", "subcategory", "color")
    @classmethod
    def _strip(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be empty")
        return stripped

    @field_validator("image_data")
    @classmethod
    def _require_image(cls, value: bytes) -> bytes:
        if not value:
            raise ValueError("must not be empty")
        return value


_FIELD_MESSAGES = {
    "image_data": "Please select a photo",
    "title": "Please enter a title",
    "category": "Please select a category",
    "subcategory": "Please select a type",
    "color": "Please enter a color",
}


def build_draft(
    *,
    title: str | None,
    category: ClothingCategory | str | None,
    subcategory: str | None,
    color: str | None,
    image_data: bytes | None,
) -> ClothingItemDraft:
    """Validate raw form values, reporting the first missing field."""

    payload = {
        "title": title or "",
        "category": category,
        "subcategory": subcategory or "",
        "color": color or "",
        "image_data": image_data or b"",
    }
    try:
        return ClothingItemDraft.model_validate(payload)
    except ValidationError as exc:
        failed = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
        for field, message in _FIELD_MESSAGES.items():
            if field in failed:
                raise ClothingItemValidationError(message) from exc
        raise ClothingItemValidationError(str(exc)) from exc
