"""Schema normalizer.

Converts a decoded, human-authored step document into a TemplateDocument.
The expected source shape is::

    prompt_name: Demo
    templates:
      - template:
          phase: Intro
          form:
            - item: {name: x, input: text, default: hi, description: X}
          prompt: "Hello {{ x }}!"

Nothing in that shape is required. Missing or malformed parts fall back to
defaults; this module never raises on bad input.
"""

import logging
from typing import Any

from prompt_builder.template_engine.fields import resolve_field_spec
from prompt_builder.template_engine.interpolator import placeholders
from prompt_builder.template_engine.models import FieldSpec, Step, TemplateDocument

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Template"

_STEP_KEYS = {"phase", "form", "prompt"}


def _unwrap_step(entry: Any) -> dict[str, Any]:
    if not isinstance(entry, dict):
        return {}
    inner = entry.get("template")
    if isinstance(inner, dict):
        return inner
    if _STEP_KEYS & entry.keys():
        return entry
    return {}


def _normalize_fields(raw_fields: Any, step_index: int) -> tuple[FieldSpec, ...]:
    if not isinstance(raw_fields, list):
        if raw_fields:
            logger.warning(f"Step {step_index}: 'form' is not a list, ignoring it")
        return ()

    fields: dict[str, FieldSpec] = {}
    for entry in raw_fields:
        spec = resolve_field_spec(entry)
        if spec is None:
            continue
        if spec.name in fields:
            logger.warning(
                f"Step {step_index}: duplicate field '{spec.name}', keeping the first"
            )
            continue
        fields[spec.name] = spec
    return tuple(fields.values())


def normalize_step(entry: Any, step_index: int = 0) -> Step:
    """Normalize one element of the ``templates`` list.

    Args:
        entry: The raw entry, usually ``{"template": {...}}``.
        step_index: Position of the entry, used for log messages.

    Returns:
        The normalized Step.
    """
    raw = _unwrap_step(entry)
    phase = raw.get("phase")
    prompt = raw.get("prompt")

    step = Step(
        phase=str(phase) if phase else "",
        fields=_normalize_fields(raw.get("form"), step_index),
        template=str(prompt) if prompt else "",
    )

    unresolved = [name for name in placeholders(step.template) if name not in step.field_names]
    if unresolved:
        logger.debug(
            f"Step {step_index}: placeholders without a field will render empty: {unresolved}"
        )

    return step


def normalize(raw: Any, default_title: str = DEFAULT_TITLE) -> TemplateDocument:
    """Build a TemplateDocument from a decoded document of any shape.

    Args:
        raw: The decoded document.
        default_title: Title used when ``prompt_name`` is missing or empty.

    Returns:
        The normalized, immutable TemplateDocument.
    """
    doc = raw if isinstance(raw, dict) else {}
    if raw is not None and not isinstance(raw, dict):
        logger.warning(f"Template document is a {type(raw).__name__}, not a mapping")

    title = doc.get("prompt_name")
    entries = doc.get("templates")
    if not isinstance(entries, list):
        if entries is not None:
            logger.warning("'templates' is not a list, document has no steps")
        entries = []

    document = TemplateDocument(
        title=str(title) if title else default_title,
        steps=tuple(normalize_step(entry, idx) for idx, entry in enumerate(entries)),
    )

    logger.info(
        f"Normalized template '{document.title}': {len(document.steps)} steps, "
        f"{sum(len(s.fields) for s in document.steps)} fields"
    )
    return document
