"""Async client for the remove.bg background removal API."""

from __future__ import annotations

import logging
from enum import Enum

import httpx

from closet.config.settings import Settings

logger = logging.getLogger(__name__)


class RemoveBgErrorKind(str, Enum):
    MISSING_KEY = "missing_key"
    BAD_REQUEST = "bad_request"
    QUOTA_EXCEEDED = "quota_exceeded"
    AUTH_ERROR = "auth_error"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"


_MESSAGES = {
    RemoveBgErrorKind.MISSING_KEY: "API key is missing",
    RemoveBgErrorKind.BAD_REQUEST: "Invalid image or request",
    RemoveBgErrorKind.QUOTA_EXCEEDED: "Insufficient API credits",
    RemoveBgErrorKind.AUTH_ERROR: "Invalid API key",
    RemoveBgErrorKind.RATE_LIMITED: "Too many requests. Please try again later",
    RemoveBgErrorKind.SERVER_ERROR: "Server error",
}

_STATUS_KINDS = {
    400: RemoveBgErrorKind.BAD_REQUEST,
    402: RemoveBgErrorKind.QUOTA_EXCEEDED,
    403: RemoveBgErrorKind.AUTH_ERROR,
    429: RemoveBgErrorKind.RATE_LIMITED,
}


class RemoveBgError(RuntimeError):
    """Raised when remove.bg cannot return a processed image."""

    def __init__(
        self,
        kind: RemoveBgErrorKind,
        message: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        super().__init__(message or _MESSAGES[kind])

    @classmethod
    def from_status(cls, status_code: int) -> "RemoveBgError":
        kind = _STATUS_KINDS.get(status_code, RemoveBgErrorKind.SERVER_ERROR)
        message = _MESSAGES[kind]
        if kind is RemoveBgErrorKind.SERVER_ERROR:
            message = f"{message}: {status_code}"
        return cls(kind, message, status_code=status_code)


class RemoveBgClient:
    """Strips the background from garment photos."""

    def __init__(self, settings: Settings, *, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._client = client or httpx.AsyncClient(
            base_url=settings.removebg_base_url.rstrip("/"),
            timeout=settings.request_timeout,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        if not self._settings.removebg_api_key:
            raise RemoveBgError(RemoveBgErrorKind.MISSING_KEY)
        return {"X-Api-Key": self._settings.removebg_api_key}

    async def remove_background(self, image_data: bytes) -> bytes:
        """Upload a JPEG and return the processed image bytes (PNG with alpha)."""

        headers = self._headers()
        files = [("image_file", ("image.jpg", image_data, "image/jpeg"))]
        data = {"size": self._settings.removebg_size}
        try:
            response = await self._client.post("/removebg", headers=headers, data=data, files=files)
        except httpx.TimeoutException as exc:  # pragma: no cover - network safeguard
            raise RemoveBgError(RemoveBgErrorKind.SERVER_ERROR, "Timed out waiting for remove.bg") from exc
        except httpx.TransportError as exc:  # pragma: no cover - network safeguard
            raise RemoveBgError(RemoveBgErrorKind.SERVER_ERROR, str(exc)) from exc

        if response.status_code != 200:
            logger.warning("remove.bg responded %s: %s", response.status_code, response.text[:200])
            raise RemoveBgError.from_status(response.status_code)
        return response.content

    async def ping(self) -> bool:
        """Return ``True`` when the account endpoint accepts our key."""

        response = await self._client.get("/account", headers=self._headers())
        return response.status_code == 200
