"""Business logic for managing the user's wardrobe and saved outfits."""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from closet.catalog.categories import ClothingCategory
from closet.catalog.colors import sort_by_color
from closet.catalog.schemas import ClothingItemDraft
from closet.db import models

logger = logging.getLogger(__name__)


class WardrobeService:
    """Facade over the clothing item and outfit tables."""

    async def add_item(self, session: AsyncSession, draft: ClothingItemDraft) -> models.ClothingItem:
        """Persist a validated clothing item."""

        item = models.ClothingItem(
            title=draft.title,
            category=draft.category.value,
            subcategory=draft.subcategory,
            color=draft.color,
            image_data=draft.image_data,
        )
        session.add(item)
        await session.commit()
        await session.refresh(item)
        logger.info("Stored clothing item %s (%s)", item.id, item.category)
        return item

    async def get_item(self, session: AsyncSession, item_id: uuid.UUID) -> models.ClothingItem | None:
        return await session.get(models.ClothingItem, item_id)

    async def update_item(
        self,
        session: AsyncSession,
        *,
        item: models.ClothingItem,
        draft: ClothingItemDraft,
    ) -> models.ClothingItem:
        """Replace an item's fields with the validated draft."""

        item.title = draft.title
        item.category = draft.category.value
        item.subcategory = draft.subcategory
        item.color = draft.color
        item.image_data = draft.image_data
        session.add(item)
        await session.commit()
        await session.refresh(item)
        return item

    async def delete_item(self, session: AsyncSession, *, item: models.ClothingItem) -> None:
        await session.delete(item)
        await session.commit()

    async def list_items(
        self,
        session: AsyncSession,
        *,
        category: ClothingCategory | None = None,
    ) -> list[models.ClothingItem]:
        """Return stored items ordered by title, optionally limited to one category."""

        stmt = select(models.ClothingItem).order_by(models.ClothingItem.title)
        if category is not None:
            stmt = stmt.where(models.ClothingItem.category == category.value)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def items_by_ids(
        self,
        session: AsyncSession,
        item_ids: Iterable[uuid.UUID | str],
    ) -> list[models.ClothingItem]:
        """Return the items that still exist for the given ids, ordered by category."""

        ids = [value if isinstance(value, uuid.UUID) else uuid.UUID(value) for value in item_ids]
        if not ids:
            return []
        stmt = (
            select(models.ClothingItem)
            .where(models.ClothingItem.id.in_(ids))
            .order_by(models.ClothingItem.category)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def grouped_items(
        self,
        session: AsyncSession,
    ) -> list[tuple[str, list[models.ClothingItem]]]:
        """Group items under ``"Category - Subcategory"`` keys, each group sorted by colour."""

        groups: dict[str, list[models.ClothingItem]] = defaultdict(list)
        for item in await self.list_items(session):
            groups[f"{item.category or 'Unknown'} - {item.subcategory or 'Other'}"].append(item)
        return [(key, sort_by_color(groups[key])) for key in sorted(groups)]

    async def is_outfit_name_taken(self, session: AsyncSession, name: str) -> bool:
        """Case-insensitive lookup of an existing outfit name."""

        stmt = (
            select(func.count())
            .select_from(models.Outfit)
            .where(models.Outfit.name_key == models.outfit_name_key(name))
        )
        result = await session.execute(stmt)
        return result.scalar_one() > 0

    async def create_outfit(
        self,
        session: AsyncSession,
        *,
        name: str,
        image_data: bytes,
        item_ids: Iterable[uuid.UUID],
    ) -> models.Outfit:
        """Persist an outfit; name uniqueness is checked by the caller."""

        outfit = models.Outfit(
            name=name,
            name_key=models.outfit_name_key(name),
            image_data=image_data,
            item_ids=sorted({str(item_id) for item_id in item_ids}),
        )
        session.add(outfit)
        await session.commit()
        await session.refresh(outfit)
        logger.info("Saved outfit %s with %d item(s)", outfit.id, len(outfit.item_ids))
        return outfit

    async def get_outfit(self, session: AsyncSession, outfit_id: uuid.UUID) -> models.Outfit | None:
        return await session.get(models.Outfit, outfit_id)

    async def list_outfits(self, session: AsyncSession) -> list[models.Outfit]:
        """Return saved outfits, newest first."""

        stmt = select(models.Outfit).order_by(models.Outfit.created_at.desc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def delete_outfit(self, session: AsyncSession, *, outfit: models.Outfit) -> None:
        await session.delete(outfit)
        await session.commit()

    async def outfit_items(
        self,
        session: AsyncSession,
        *,
        outfit: models.Outfit,
    ) -> list[models.ClothingItem]:
        """Resolve the items an outfit was built from; deleted items are dropped."""

        return await self.items_by_ids(session, outfit.item_ids)
