"""SQLAlchemy models describing the wardrobe tables."""

from __future__ import annotations

import unicodedata
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, LargeBinary, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, synonym

from closet.catalog.categories import ClothingCategory


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def outfit_name_key(name: str) -> str:
    """Canonical form used for case-insensitive outfit name comparison."""

    return unicodedata.normalize("NFC", name.strip().casefold())


class Base(DeclarativeBase):
    """Base class for ORM models."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )


class ClothingItem(Base):
    """Garment photographed and catalogued by the user."""

    __tablename__ = "clothing_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(128), index=True)
    category: Mapped[str] = mapped_column(String(32), index=True)
    subcategory: Mapped[str] = mapped_column(String(64))
    color: Mapped[str] = mapped_column(String(64))
    image_data: Mapped[bytes] = mapped_column(LargeBinary)

    @property
    def category_enum(self) -> ClothingCategory:
        return ClothingCategory.parse(self.category)


class Outfit(Base):
    """Saved outfit: composed preview plus the ids of the items it was built from."""

    __tablename__ = "outfits"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(128))
    name_key: Mapped[str] = mapped_column(String(128), index=True)
    image_data: Mapped[bytes] = mapped_column(LargeBinary)
    # Stored as a plain list of UUID strings; membership is unordered.
    item_ids: Mapped[list[str]] = mapped_column(JSON, default=list)

    created_date = synonym("created_at")

    @property
    def item_uuids(self) -> set[uuid.UUID]:
        return {uuid.UUID(value) for value in self.item_ids}
