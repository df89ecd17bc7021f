"""Streamlit frontend for the Prompt Step Builder.

Loads a step document named by the ``template`` or ``url`` query parameter
(falling back to TEMPLATE_LOCATION) and renders every step as a form next to
its live resolved prompt.

Run with:
    streamlit run frontend/builder_ui.py

then open the page with ?template=<url-or-path>.
"""

import asyncio
import html
import logging
from collections.abc import Callable

import streamlit as st

from prompt_builder.core.config import get_settings
from prompt_builder.core.factory import ComponentFactory
from prompt_builder.template_engine import InputWidget, StepBuilder, load_builder

# Page config
st.set_page_config(
    page_title="Prompt Step Builder",
    page_icon="🧩",
    layout="wide",
)

logger = logging.getLogger(__name__)

PAGE_STYLE = """
<style>
.prompt-text {
    white-space: pre-wrap;
    background: #f1f1f1;
    padding: .5em;
    border-radius: 3px;
    font-family: sans-serif;
}
</style>
"""

# Input types Streamlit can render natively; everything else is a plain text box.
_STREAMLIT_TEXT_TYPES = {"default", "password"}


# =============================================================================
# Loading
# =============================================================================


def resolve_location() -> str | None:
    """Pick the template location from query parameters or settings."""
    params = st.query_params
    return params.get("template") or params.get("url") or get_settings().template_location


def load_into_session(location: str) -> None:
    """Load the builder for ``location`` once and keep it in session state."""
    if st.session_state.get("builder_location") == location:
        return

    settings = get_settings()
    factory = ComponentFactory(settings)
    failures: list[str] = []

    try:
        source = factory.get_source(location=location)
    except ValueError as e:
        logger.error(f"Cannot pick a template source: {e}")
        failures.append(settings.load_failure_message)
        builder = None
    else:
        builder = asyncio.run(
            load_builder(
                source,
                location,
                on_failure=failures.append,
                default_title=settings.default_title,
                failure_message=settings.load_failure_message,
            )
        )

    st.session_state.builder_location = location
    st.session_state.builder = builder
    st.session_state.load_error = failures[0] if failures else None


# =============================================================================
# UI Components
# =============================================================================


def _widget_key(step_index: int, name: str) -> str:
    return f"in-{step_index}-{name}"


def _on_widget_change(key: str, handler: Callable[[str], None]) -> None:
    handler(st.session_state[key])


def render_field(builder: StepBuilder, step_index: int, widget: InputWidget) -> None:
    """Render one form control wired to its step's change handler.

    Args:
        builder: The live builder.
        step_index: Index of the owning step.
        widget: The widget descriptor.
    """
    key = _widget_key(step_index, widget.name)
    current = builder.step(step_index).bindings[widget.name]
    callback_args = (key, builder.change_handler(step_index, widget.name))

    if widget.element == "textarea":
        st.text_area(
            widget.label,
            value=current,
            key=key,
            height=120,
            on_change=_on_widget_change,
            args=callback_args,
        )
        return

    st.text_input(
        widget.label,
        value=current,
        key=key,
        type=widget.input_type if widget.input_type in _STREAMLIT_TEXT_TYPES else "default",
        placeholder=widget.placeholder,
        help=f"Input type: {widget.input_type}" if widget.input_type != "text" else None,
        on_change=_on_widget_change,
        args=callback_args,
    )


def render_step(builder: StepBuilder, step_index: int) -> None:
    """Render one step as form | prompt columns.

    Args:
        builder: The live builder.
        step_index: Index of the step to render.
    """
    controller = builder.step(step_index)
    phase = controller.step.phase
    number = step_index + 1

    form_col, prompt_col = st.columns(2)

    with form_col:
        st.markdown(f"#### Step {number}: {html.escape(phase)}")
        for widget in builder.fields(step_index):
            render_field(builder, step_index, widget)

    with prompt_col:
        st.markdown(f"#### Step {number} prompt: {html.escape(phase)}")
        st.markdown(
            f"<div class='prompt-text'>{html.escape(controller.resolved_text)}</div>",
            unsafe_allow_html=True,
        )

    st.divider()


# =============================================================================
# Main App
# =============================================================================


def main() -> None:
    """Main application entry point."""
    st.markdown(PAGE_STYLE, unsafe_allow_html=True)

    location = resolve_location()
    if not location:
        st.info("Open this page with ?template=<url or path> to load a step document.")
        return

    load_into_session(location)

    if st.session_state.get("load_error"):
        st.error(st.session_state.load_error)
        return

    builder: StepBuilder = st.session_state.builder
    st.title(builder.title)

    for step_index in range(len(builder)):
        render_step(builder, step_index)


if __name__ == "__main__":
    main()
