"""Tests for garment photo ingestion."""

from __future__ import annotations

from io import BytesIO

import pytest
import pytest_mock
from PIL import Image

from closet.integrations.removebg import RemoveBgError, RemoveBgErrorKind
from closet.nlp.vision import ClothingAnalysis, VisionClassificationError, VisionErrorKind
from closet.services.ingestion import ItemIngestionService
from tests.imaging import RED, png_bytes

ANALYSIS = ClothingAnalysis(title="Red Tee", category="Shirt", subcategory="T-Shirt", color="Red")


def _is_jpeg(data: bytes) -> bool:
    with Image.open(BytesIO(data)) as decoded:
        return decoded.format == "JPEG"


@pytest.fixture
def remover(mocker: pytest_mock.MockerFixture):
    client = mocker.MagicMock()
    client.remove_background = mocker.AsyncMock(return_value=b"cutout-png")
    return client


@pytest.fixture
def classifier(mocker: pytest_mock.MockerFixture):
    client = mocker.MagicMock()
    client.classify = mocker.AsyncMock(return_value=ANALYSIS)
    return client


@pytest.mark.asyncio
async def test_ingest_removes_background_then_classifies(remover, classifier) -> None:
    service = ItemIngestionService(remover, classifier)

    result = await service.ingest(png_bytes((120, 80), RED))

    assert result.background_removed
    assert result.image_data == b"cutout-png"
    assert result.analysis == ANALYSIS
    assert result.error is None
    uploaded = remover.remove_background.await_args.args[0]
    assert _is_jpeg(uploaded)
    classifier.classify.assert_awaited_once_with(b"cutout-png")


@pytest.mark.asyncio
async def test_removal_failure_keeps_original_jpeg(remover, classifier) -> None:
    remover.remove_background.side_effect = RemoveBgError(RemoveBgErrorKind.QUOTA_EXCEEDED)
    service = ItemIngestionService(remover, classifier)

    result = await service.ingest(png_bytes((120, 80), RED))

    assert not result.background_removed
    assert _is_jpeg(result.image_data)
    assert result.analysis == ANALYSIS
    classifier.classify.assert_awaited_once_with(result.image_data)


@pytest.mark.asyncio
async def test_classification_failure_is_reported(remover, classifier) -> None:
    classifier.classify.side_effect = VisionClassificationError(
        VisionErrorKind.PARSE_ERROR,
        "Failed to parse clothing analysis",
    )
    service = ItemIngestionService(remover, classifier)

    result = await service.ingest(png_bytes((120, 80), RED))

    assert result.background_removed
    assert result.analysis is None
    assert result.error == "Failed to parse clothing analysis"


@pytest.mark.asyncio
async def test_ingest_without_integrations() -> None:
    service = ItemIngestionService(None, None)

    result = await service.ingest(png_bytes((120, 80), RED))

    assert not result.background_removed
    assert _is_jpeg(result.image_data)
    assert result.error == "Classification is not configured"


@pytest.mark.asyncio
async def test_non_image_is_rejected(remover, classifier) -> None:
    service = ItemIngestionService(remover, classifier)

    with pytest.raises(ValueError, match="not a supported image"):
        await service.ingest(b"plain text")

    remover.remove_background.assert_not_awaited()
