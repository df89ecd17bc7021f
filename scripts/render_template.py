"""Render a step document from the command line.

Loads a template, applies optional field edits and prints the resolved
prompt of every step.

Usage:
    python scripts/render_template.py demo.yaml
    python scripts/render_template.py https://example.com/steps.yaml 1.topic="Type hints"

Each edit has the form ``<step number>.<field name>=<value>`` with steps
numbered from 1, as shown in the builder UI.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from prompt_builder.core.config import get_settings
from prompt_builder.core.factory import ComponentFactory
from prompt_builder.core.logging_config import setup_logging
from prompt_builder.template_engine import UnknownFieldError, load_builder


def parse_edit(arg: str) -> tuple[int, str, str]:
    """Split ``2.name=value`` into (step index, field name, value)."""
    target, sep, value = arg.partition("=")
    step, dot, name = target.partition(".")
    if not sep or not dot or not step.isdigit() or int(step) < 1:
        raise ValueError(f"Invalid edit '{arg}', expected <step>.<field>=<value>")
    return int(step) - 1, name, value


async def main(argv: list[str]) -> int:
    """Render the template named in argv. Returns the exit code."""
    if not argv:
        print(__doc__)
        return 2

    settings = get_settings()
    setup_logging(settings)

    location, edits = argv[0], argv[1:]
    try:
        parsed = [parse_edit(arg) for arg in edits]
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    try:
        source = ComponentFactory(settings).get_source(location=location)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    builder = await load_builder(
        source,
        location,
        on_failure=lambda message: print(message, file=sys.stderr),
        default_title=settings.default_title,
        failure_message=settings.load_failure_message,
    )
    if builder is None:
        return 1

    try:
        for step_index, name, value in parsed:
            builder.on_field_changed(step_index, name, value)
    except (IndexError, UnknownFieldError) as e:
        print(e, file=sys.stderr)
        return 2

    print(f"# {builder.title}")
    for controller in builder.steps:
        print(f"\n## Step {controller.index + 1}: {controller.step.phase}\n")
        print(controller.resolved_text)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
