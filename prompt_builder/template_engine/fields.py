"""Field renderer.

Turns raw field entries into ``FieldSpec`` objects and ``FieldSpec`` objects
into input widget descriptors.

Kind strings are matched in this order, first match wins:

1. ``multiline_text``          -> textarea
2. ``date`` / ``date(<hint>)`` -> date input, hint shown as placeholder
3. empty / ``text``            -> text input
4. anything else               -> input whose type is the kind string verbatim
"""

import logging
import re
from typing import Any

from prompt_builder.template_engine.models import (
    DateKind,
    FieldKind,
    FieldSpec,
    InputWidget,
    MultilineKind,
    OtherKind,
    TextKind,
)

logger = logging.getLogger(__name__)

MULTILINE_KIND = "multiline_text"
DATE_KIND_PATTERN = re.compile(r"date(?:\((.*)\))?")


def parse_kind(raw: Any) -> FieldKind:
    """Map a kind descriptor string onto the closed kind variant.

    Args:
        raw: The ``input`` value from the document. Non-strings are
            stringified and kept verbatim; falsy or blank values mean
            plain text. ``date()`` is a date with no format hint.

    Returns:
        One of TextKind, MultilineKind, DateKind or OtherKind.
    """
    kind = str(raw) if raw else ""

    if kind == MULTILINE_KIND:
        return MultilineKind()

    match = DATE_KIND_PATTERN.fullmatch(kind)
    if match:
        return DateKind(hint=match.group(1) or None)

    if not kind.strip() or kind == "text":
        return TextKind()

    return OtherKind(raw=kind)


def resolve_field_spec(entry: Any) -> FieldSpec | None:
    """Build a FieldSpec from one raw ``form`` entry.

    Entries are normally wrapped as ``{"item": {...}}``; a bare mapping is
    accepted too.

    Args:
        entry: One element of a step's ``form`` list.

    Returns:
        The FieldSpec, or None if the entry has no usable name.
    """
    item = entry.get("item", entry) if isinstance(entry, dict) else None
    if not isinstance(item, dict):
        logger.warning(f"Skipping field entry that is not a mapping: {entry!r}")
        return None

    name = item.get("name")
    if name is None or str(name).strip() == "":
        logger.warning(f"Skipping field entry without a name: {item!r}")
        return None
    name = str(name)

    description = item.get("description")
    default = item.get("default")

    return FieldSpec(
        name=name,
        label=str(description) if description else name,
        kind=parse_kind(item.get("input")),
        default_value=str(default) if default else "",
    )


def widget_for(spec: FieldSpec) -> InputWidget:
    """Describe the form control for a field.

    Args:
        spec: The field to render.

    Returns:
        An InputWidget carrying the control kind, label and default value.
    """
    kind = spec.kind
    element = "input"
    input_type: str | None
    placeholder = None

    if isinstance(kind, MultilineKind):
        element = "textarea"
        input_type = None
    elif isinstance(kind, DateKind):
        input_type = "date"
        placeholder = kind.hint
    elif isinstance(kind, OtherKind):
        input_type = kind.raw
    else:
        input_type = "text"

    return InputWidget(
        name=spec.name,
        label=spec.label,
        element=element,
        input_type=input_type,
        default_value=spec.default_value,
        placeholder=placeholder,
    )
