"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./data/closet.db"

    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_vision_model: str = "gpt-4o"

    removebg_api_key: str = ""
    removebg_base_url: str = "https://api.remove.bg/v1.0"
    removebg_size: str = "preview"

    request_timeout: float = 60.0

    canvas_width: int = 600
    canvas_height: int = 800
    preview_debounce_ms: int = 300
    jpeg_quality: float = 0.8
    outfit_name_max_length: int = 50

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self.canvas_width, self.canvas_height

    @property
    def preview_debounce(self) -> float:
        """Debounce window in seconds."""

        return self.preview_debounce_ms / 1000


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/closet.db"),
        openai_api_key=os.getenv("OPENAI_KEY", ""),
        openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        openai_vision_model=os.getenv("OPENAI_VISION_MODEL", "gpt-4o"),
        removebg_api_key=os.getenv("REMBG_KEY", ""),
        removebg_base_url=os.getenv("REMBG_BASE_URL", "https://api.remove.bg/v1.0"),
        removebg_size=os.getenv("REMBG_SIZE", "preview"),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "60")),
        canvas_width=int(os.getenv("CANVAS_WIDTH", "600")),
        canvas_height=int(os.getenv("CANVAS_HEIGHT", "800")),
        preview_debounce_ms=int(os.getenv("PREVIEW_DEBOUNCE_MS", "300")),
        jpeg_quality=float(os.getenv("JPEG_QUALITY", "0.8")),
        outfit_name_max_length=int(os.getenv("OUTFIT_NAME_MAX_LENGTH", "50")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
