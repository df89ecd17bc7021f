"""Step builder API routes.

Loads step documents, applies field edits and returns every step's form
descriptors and resolved text.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from prompt_builder.api.deps import get_factory
from prompt_builder.api.schemas import BuilderResponse, PreviewRequest, RenderRequest
from prompt_builder.core.config import Settings, get_settings
from prompt_builder.core.factory import ComponentFactory
from prompt_builder.template_engine import (
    StepBuilder,
    UnknownFieldError,
    build,
    load_builder,
    normalize,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/builder", tags=["builder"])


def _apply_values(builder: StepBuilder, values: dict[int, dict[str, str]]) -> None:
    """Replay edits onto a builder, raising 422 for unknown steps or fields."""
    try:
        for step_index, edits in values.items():
            for name, value in edits.items():
                builder.on_field_changed(step_index, name, value)
    except (IndexError, UnknownFieldError) as e:
        logger.warning(f"Rejected edit: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e


@router.post("/render", response_model=BuilderResponse)
async def render_template(
    request: RenderRequest,
    settings: Settings = Depends(get_settings),
    factory: ComponentFactory = Depends(get_factory),
) -> BuilderResponse:
    """Load a template from a URL or path and render every step.

    Args:
        request: Location and optional field edits.
        settings: Application settings.
        factory: Source factory.

    Returns:
        The rendered builder.

    Raises:
        HTTPException: 400 for an unusable source type, 502 if the
            template cannot be loaded, 422 for edits to unknown fields.
    """
    try:
        source = factory.get_source(location=request.location)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    failures: list[str] = []
    builder = await load_builder(
        source,
        request.location,
        on_failure=failures.append,
        default_title=settings.default_title,
        failure_message=settings.load_failure_message,
    )
    if builder is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=failures[0] if failures else settings.load_failure_message,
        )

    _apply_values(builder, request.values)
    return BuilderResponse.from_builder(builder)


@router.post("/preview", response_model=BuilderResponse)
async def preview_template(
    request: PreviewRequest,
    settings: Settings = Depends(get_settings),
) -> BuilderResponse:
    """Render an inline document without fetching anything.

    Args:
        request: Decoded document and optional field edits.
        settings: Application settings.

    Returns:
        The rendered builder.
    """
    builder = build(normalize(request.document, default_title=settings.default_title))
    _apply_values(builder, request.values)
    return BuilderResponse.from_builder(builder)
