"""Template engine.

Schema normalization, field rendering, placeholder interpolation and the
reactive per-step controllers that tie them together.
"""

from prompt_builder.template_engine.builder import StepBuilder, build, load_builder
from prompt_builder.template_engine.controller import StepController, UnknownFieldError
from prompt_builder.template_engine.fields import parse_kind, resolve_field_spec, widget_for
from prompt_builder.template_engine.interpolator import interpolate, placeholders
from prompt_builder.template_engine.models import (
    DateKind,
    FieldSpec,
    InputWidget,
    MultilineKind,
    OtherKind,
    Step,
    TemplateDocument,
    TextKind,
)
from prompt_builder.template_engine.normalizer import normalize

__all__ = [
    "StepBuilder",
    "build",
    "load_builder",
    "StepController",
    "UnknownFieldError",
    "parse_kind",
    "resolve_field_spec",
    "widget_for",
    "interpolate",
    "placeholders",
    "DateKind",
    "FieldSpec",
    "InputWidget",
    "MultilineKind",
    "OtherKind",
    "Step",
    "TemplateDocument",
    "TextKind",
    "normalize",
]
