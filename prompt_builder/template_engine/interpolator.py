"""Flat ``{{ name }}`` placeholder substitution."""

import re
from collections.abc import Mapping

# ASCII word characters only, matching what template authors already rely on.
PLACEHOLDER_PATTERN = re.compile(r"{{\s*(\w+)\s*}}", re.ASCII)


def interpolate(template: str, bindings: Mapping[str, str]) -> str:
    """Substitute every placeholder in ``template`` from ``bindings``.

    Unknown names and falsy values resolve to the empty string, so a
    placeholder never survives into the output. Text that only resembles a
    placeholder (``{{ a b }}``, ``{{x``) is left untouched.

    Args:
        template: Template text.
        bindings: Current field values keyed by field name. Not modified.

    Returns:
        The resolved text.
    """

    def _substitute(match: re.Match[str]) -> str:
        value = bindings.get(match.group(1))
        return str(value) if value else ""

    return PLACEHOLDER_PATTERN.sub(_substitute, template)


def placeholders(template: str) -> list[str]:
    """Return placeholder names in order of first appearance."""
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(template):
        seen.setdefault(match.group(1), None)
    return list(seen)
