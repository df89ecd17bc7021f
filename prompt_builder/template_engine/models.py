"""Template engine domain models.

Immutable Pydantic models for a normalized step document. Field kinds are a
closed tagged union so renderers can match on ``tag`` instead of re-parsing
raw kind strings.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# Field kinds
# =============================================================================


class TextKind(_Frozen):
    """Single-line plain text input."""

    tag: Literal["text"] = "text"


class MultilineKind(_Frozen):
    """Multi-line text area."""

    tag: Literal["multiline"] = "multiline"


class DateKind(_Frozen):
    """Date input with an optional, purely cosmetic format hint."""

    tag: Literal["date"] = "date"
    hint: str | None = Field(default=None, description="Placeholder text such as YYYY-MM-DD")


class OtherKind(_Frozen):
    """Any other input type, passed through verbatim (email, number, ...)."""

    tag: Literal["other"] = "other"
    raw: str = Field(description="The input type exactly as written in the document")


FieldKind = Annotated[
    Union[TextKind, MultilineKind, DateKind, OtherKind],
    Field(discriminator="tag"),
]


# =============================================================================
# Document
# =============================================================================


class FieldSpec(_Frozen):
    """One input field of a step."""

    name: str = Field(description="Substitution key and form-control identifier")
    label: str = Field(description="Text shown next to the control")
    kind: FieldKind = Field(default_factory=TextKind)
    default_value: str = Field(default="", description="Initial binding value")

    @property
    def date_format_hint(self) -> str | None:
        """Return the date hint, if this is a date field that has one."""
        if isinstance(self.kind, DateKind):
            return self.kind.hint
        return None


class Step(_Frozen):
    """A form paired with the template rendered from it."""

    phase: str = ""
    fields: tuple[FieldSpec, ...] = ()
    template: str = ""

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)


class TemplateDocument(_Frozen):
    """Root of a normalized step document."""

    title: str
    steps: tuple[Step, ...] = ()


# =============================================================================
# Render descriptors
# =============================================================================


class InputWidget(_Frozen):
    """Everything a host needs to draw one form control."""

    name: str
    label: str
    element: Literal["input", "textarea"]
    input_type: str | None = Field(
        default=None,
        description="Native input type; None for textareas",
    )
    default_value: str = ""
    placeholder: str | None = Field(
        default=None,
        description="Guidance text only; never affects the stored value",
    )
