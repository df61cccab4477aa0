"""Debounced, cancellable outfit preview generation."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Mapping

from closet.catalog.categories import ClothingCategory
from closet.compositor import (
    CompositeImage,
    CompositionError,
    GarmentLayer,
    OutfitCompositor,
    selection_key,
)

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE = 0.3

PreviewCallback = Callable[[CompositeImage | None], None]


class PreviewScheduler:
    """Coalesces bursts of selection changes into a single recomposition.

    Each call to :meth:`schedule` supersedes the previous one. Composition
    runs in a worker thread after ``delay`` seconds of quiet; a result that
    arrives after its request has been superseded is discarded.
    """

    def __init__(
        self,
        compositor: OutfitCompositor,
        *,
        delay: float = DEFAULT_DEBOUNCE,
        on_result: PreviewCallback | None = None,
    ) -> None:
        self._compositor = compositor
        self._delay = delay
        self._on_result = on_result
        self._task: asyncio.Task[None] | None = None
        self._generation = 0
        self._cached_key: frozenset | None = None
        self._result: CompositeImage | None = None
        self._is_generating = False

    @property
    def result(self) -> CompositeImage | None:
        """Latest accepted preview, ``None`` when there is nothing to show."""

        return self._result

    @property
    def is_generating(self) -> bool:
        return self._is_generating

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, selections: Mapping[ClothingCategory, GarmentLayer | None]) -> None:
        """Request a preview for ``selections``; must be called from the event loop."""

        self.cancel()

        snapshot = {category: layer for category, layer in selections.items() if layer is not None}
        if not snapshot:
            self._cached_key = None
            self._publish(None)
            return

        key = selection_key(snapshot)
        if key == self._cached_key:
            return

        generation = self._generation
        self._task = asyncio.get_running_loop().create_task(self._run(generation, key, snapshot))

    def cancel(self) -> None:
        """Drop any pending or in-flight request."""

        self._generation += 1
        self._is_generating = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> CompositeImage | None:
        """Wait for the current request (and any that supersede it) to settle."""

        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self._result

    async def _run(
        self,
        generation: int,
        key: frozenset,
        snapshot: dict[ClothingCategory, GarmentLayer],
    ) -> None:
        await asyncio.sleep(self._delay)
        if generation != self._generation:
            return

        self._is_generating = True
        try:
            composite = await asyncio.to_thread(self._compositor.compose, snapshot)
        except CompositionError:
            logger.exception("Outfit preview composition failed")
            composite = None
        except Exception:  # noqa: BLE001 - any failure means no preview
            logger.exception("Unexpected error while composing outfit preview")
            composite = None
        finally:
            if generation == self._generation:
                self._is_generating = False

        if generation != self._generation:
            logger.debug("Discarding stale outfit preview (generation %d)", generation)
            return

        self._cached_key = key
        self._publish(composite)

    def _publish(self, composite: CompositeImage | None) -> None:
        self._result = composite
        if self._on_result is None:
            return
        try:
            self._on_result(composite)
        except Exception:  # noqa: BLE001 - listener errors are reported, not raised
            logger.exception("Outfit preview listener failed")
