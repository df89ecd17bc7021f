"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from prompt_builder.template_engine import InputWidget, StepBuilder


# =============================================================================
# Requests
# =============================================================================


class _ValuesRequest(BaseModel):
    values: dict[int, dict[str, str]] = Field(
        default_factory=dict,
        description="Field edits keyed by step index, then field name; applied in order",
    )


class RenderRequest(_ValuesRequest):
    """Request schema for rendering a template fetched from a location."""

    location: str = Field(min_length=1, description="Template URL or local path")


class PreviewRequest(_ValuesRequest):
    """Request schema for rendering an inline, already decoded document."""

    document: Any = Field(description="Decoded template document of any shape")


# =============================================================================
# Responses
# =============================================================================


class StepResponse(BaseModel):
    """One rendered step."""

    index: int
    phase: str
    fields: list[InputWidget]
    resolved_text: str


class BuilderResponse(BaseModel):
    """A fully rendered builder."""

    title: str
    steps: list[StepResponse]

    @classmethod
    def from_builder(cls, builder: StepBuilder) -> "BuilderResponse":
        return cls(
            title=builder.title,
            steps=[
                StepResponse(
                    index=controller.index,
                    phase=controller.step.phase,
                    fields=list(builder.fields(controller.index)),
                    resolved_text=controller.resolved_text,
                )
                for controller in builder.steps
            ],
        )


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    error_code: str | None = None
