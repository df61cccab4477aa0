"""Garment classification via an OpenAI vision model."""

from __future__ import annotations

import base64
import json
import logging
from enum import Enum
from typing import Any

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from closet.catalog.categories import SUBCATEGORIES, ClothingCategory
from closet.config.settings import Settings

logger = logging.getLogger(__name__)

_PLACEHOLDER_KEY = "YOUR_OPENAI_API_KEY"


class VisionErrorKind(str, Enum):
    MISSING_KEY = "missing_key"
    BAD_RESPONSE = "bad_response"
    PARSE_ERROR = "parse_error"


class VisionClassificationError(RuntimeError):
    """Raised when a garment photo could not be classified."""

    def __init__(self, kind: VisionErrorKind, message: str) -> None:
        self.kind = kind
        super().__init__(message)


class ClothingAnalysis(BaseModel):
    """Structured attributes returned by the vision model."""

    title: str
    category: str
    subcategory: str
    color: str

    @property
    def resolved_category(self) -> ClothingCategory | None:
        """Category as an enum member, ``None`` when the model strayed outside the set."""

        try:
            return ClothingCategory.parse(self.category)
        except ValueError:
            return None


_PROMPT_ORDER = (
    ClothingCategory.SHIRT,
    ClothingCategory.PANTS,
    ClothingCategory.JACKET,
    ClothingCategory.DRESS,
    ClothingCategory.SHOES,
    ClothingCategory.ACCESSORY,
)


def _system_prompt() -> str:
    category_names = ", ".join(category.value for category in _PROMPT_ORDER)
    subcategory_hints = " ".join(
        f"For {category.value} use ({', '.join(SUBCATEGORIES[category])})." for category in _PROMPT_ORDER
    )
    return (
        "You are a fashion expert analyzing clothing items. Respond ONLY with valid JSON in this exact "
        'format: {"title": "descriptive title", "category": "category", "subcategory": "subcategory", '
        '"color": "color"}. For title, provide a short descriptive name for the item (e.g., '
        "'Navy Blue Button-Down', 'Vintage Denim Jacket'). "
        f"For category, use only: {category_names}. "
        f"For subcategory, provide the specific type based on the category: {subcategory_hints}"
    )


class VisionClassifier:
    """Thin client that asks a chat-completions vision model to describe a garment."""

    def __init__(self, settings: Settings, *, client: AsyncOpenAI | None = None) -> None:
        key = settings.openai_api_key
        if not key or key == _PLACEHOLDER_KEY:
            raise VisionClassificationError(VisionErrorKind.MISSING_KEY, "OpenAI API key is missing")

        self._settings = settings
        self._client = client or AsyncOpenAI(
            api_key=key,
            base_url=settings.openai_base_url.rstrip("/"),
            timeout=settings.request_timeout,
        )

    def build_messages(self, image_data: bytes) -> list[dict[str, Any]]:
        encoded = base64.b64encode(image_data).decode("ascii")
        return [
            {"role": "system", "content": _system_prompt()},
            {
                "role": "user",
                "content": [
                    {
                        "type": "text",
                        "text": "Analyze this clothing item and provide its title, category, "
                        "subcategory, and primary color.",
                    },
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:image/jpeg;base64,{encoded}"},
                    },
                ],
            },
        ]

    async def classify(self, image_data: bytes) -> ClothingAnalysis:
        """Send a JPEG to the vision model and parse its JSON answer."""

        try:
            response = await self._client.chat.completions.create(
                model=self._settings.openai_vision_model,
                messages=self.build_messages(image_data),
                max_tokens=100,
                temperature=0.3,
            )
        except OpenAIError as exc:
            logger.error("OpenAI classification request failed: %s", exc)
            raise VisionClassificationError(
                VisionErrorKind.BAD_RESPONSE,
                f"Invalid response from OpenAI: {exc}",
            ) from exc

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content:
            raise VisionClassificationError(VisionErrorKind.BAD_RESPONSE, "Invalid response from OpenAI")
        return self._parse(content)

    def _parse(self, content: str) -> ClothingAnalysis:
        text = content.strip()
        # Models occasionally wrap JSON in a Markdown fence.
        if text.startswith("```"):
            text = text.strip("`")
            if text.lower().startswith("json"):
                text = text[4:]
        try:
            return ClothingAnalysis.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Failed to parse clothing analysis: %s", content)
            raise VisionClassificationError(
                VisionErrorKind.PARSE_ERROR,
                "Failed to parse clothing analysis",
            ) from exc

    async def ping(self) -> bool:
        """Return ``True`` if the upstream service responds to a model listing call."""

        models = await self._client.models.list()
        return bool(models.data)

    async def close(self) -> None:
        """Release HTTP resources."""

        await self._client.close()
