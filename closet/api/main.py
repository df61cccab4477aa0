"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import asyncio

from fastapi import FastAPI, HTTPException, Request, Response
from starlette.datastructures import UploadFile

from closet import __version__
from closet.catalog.categories import ClothingCategory
from closet.compositor import CompositionError, GarmentLayer, OutfitCompositor
from closet.config.settings import Settings, get_settings
from closet.imgproc.encoding import encode_jpeg
from closet.monitoring.logging import configure_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = settings or get_settings()
    configure_logging()
    compositor = OutfitCompositor(settings.canvas_size)

    app = FastAPI(
        title="Digital Closet API",
        version=__version__,
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.post("/outfits/preview", tags=["outfits"])
    async def outfit_preview(request: Request) -> Response:
        """Compose garment uploads (one multipart file per category name) into a JPEG preview."""

        form = await request.form()
        selections: dict[ClothingCategory, GarmentLayer] = {}
        for field_name, value in form.multi_items():
            if not isinstance(value, UploadFile):
                continue
            try:
                category = ClothingCategory.parse(field_name)
            except ValueError as exc:
                raise HTTPException(status_code=422, detail=str(exc)) from exc
            selections[category] = GarmentLayer(category=category, image=await value.read())

        try:
            composite = await asyncio.to_thread(compositor.compose, selections)
        except CompositionError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc

        if composite is None:
            return Response(status_code=204)

        body = await asyncio.to_thread(encode_jpeg, composite.image, settings.jpeg_quality)
        return Response(
            content=body,
            media_type="image/jpeg",
            headers={"X-Skipped-Layers": ",".join(category.value for category in composite.skipped)},
        )

    return app


app = create_app()
