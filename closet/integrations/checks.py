"""Connectivity checks for external AI providers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

from closet.config.settings import Settings, get_settings
from closet.integrations.removebg import RemoveBgClient
from closet.nlp.vision import VisionClassifier


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except Exception as exc:  # noqa: BLE001 - any failure is reported, not raised
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_openai(settings: Settings | None = None) -> IntegrationCheckResult:
    """Ping the OpenAI API and return the result."""

    settings = settings or get_settings()

    async def _ping() -> bool:
        client = VisionClassifier(settings)
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="OpenAI",
        factory=_ping,
        success_message="OpenAI API is reachable.",
    )


async def check_removebg(settings: Settings | None = None) -> IntegrationCheckResult:
    """Ping the remove.bg account endpoint and return the result."""

    settings = settings or get_settings()

    async def _ping() -> bool:
        client = RemoveBgClient(settings)
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="remove.bg",
        factory=_ping,
        success_message="remove.bg API is reachable.",
    )


async def run_all_checks(settings: Settings | None = None) -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return list(await asyncio.gather(check_openai(settings), check_removebg(settings)))
