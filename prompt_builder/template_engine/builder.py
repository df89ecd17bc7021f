"""Builder orchestrator.

Composes one StepController per step, routes field edits to the right
controller and exposes the async entry point that loads a document from a
template source.
"""

import logging
from collections.abc import Callable

from prompt_builder.interfaces.source import BaseTemplateSource, TemplateAcquisitionError
from prompt_builder.template_engine.controller import (
    OutputListener,
    StepController,
    UnknownFieldError,
)
from prompt_builder.template_engine.fields import widget_for
from prompt_builder.template_engine.models import InputWidget, TemplateDocument
from prompt_builder.template_engine.normalizer import DEFAULT_TITLE, normalize

logger = logging.getLogger(__name__)

StepOutputCallback = Callable[[int, str], None]
FailureCallback = Callable[[str], None]

DEFAULT_FAILURE_MESSAGE = "Failed to load template"


class StepBuilder:
    """A live multi-step builder over one TemplateDocument.

    Hosts draw forms from ``fields(i)``, forward user edits through
    ``on_field_changed`` (or a bound ``change_handler``), and read
    ``resolved_text(i)`` or subscribe to it. Steps never see each other's
    bindings.
    """

    def __init__(
        self,
        document: TemplateDocument,
        on_output: StepOutputCallback | None = None,
    ) -> None:
        """Create the step controllers and run the first recomputation pass.

        Args:
            document: The normalized document.
            on_output: Optional callback fired with ``(step_index, text)``
                after every recomputation of any step, starting with the
                initial pass.
        """
        self._document = document
        self._controllers = tuple(
            StepController(step, idx) for idx, step in enumerate(document.steps)
        )
        self._widgets = tuple(
            tuple(widget_for(spec) for spec in step.fields) for step in document.steps
        )

        if on_output is not None:
            for controller in self._controllers:
                controller.subscribe(self._forward(controller.index, on_output))

        self.refresh()

        logger.info(
            f"Built step builder '{document.title}' with {len(self._controllers)} steps"
        )

    @staticmethod
    def _forward(index: int, callback: StepOutputCallback) -> OutputListener:
        return lambda text: callback(index, text)

    @property
    def document(self) -> TemplateDocument:
        return self._document

    @property
    def title(self) -> str:
        return self._document.title

    @property
    def steps(self) -> tuple[StepController, ...]:
        return self._controllers

    def __len__(self) -> int:
        return len(self._controllers)

    def step(self, index: int) -> StepController:
        """Return the controller for a step.

        Raises:
            IndexError: If the index is out of range.
        """
        if not 0 <= index < len(self._controllers):
            raise IndexError(f"Step index {index} out of range (0..{len(self._controllers) - 1})")
        return self._controllers[index]

    def fields(self, index: int) -> tuple[InputWidget, ...]:
        """Widget descriptors for a step's form, in document order."""
        self.step(index)
        return self._widgets[index]

    def resolved_text(self, index: int) -> str:
        return self.step(index).resolved_text

    def resolved_texts(self) -> list[str]:
        return [controller.resolved_text for controller in self._controllers]

    def on_field_changed(self, index: int, name: str, value: str) -> None:
        """Apply a user edit to one field of one step.

        Raises:
            IndexError: If the step does not exist.
            UnknownFieldError: If the step has no such field.
        """
        self.step(index).on_field_changed(name, value)

    def change_handler(self, index: int, name: str) -> Callable[[str], None]:
        """Return a callable that feeds edits of one field into its own step."""
        controller = self.step(index)
        if name not in controller.bindings:
            raise UnknownFieldError(index, name)

        def handle(value: str) -> None:
            controller.on_field_changed(name, value)

        return handle

    def subscribe(
        self,
        index: int,
        listener: OutputListener,
        replay: bool = False,
    ) -> Callable[[], None]:
        """Subscribe to one step's resolved text. See StepController.subscribe."""
        return self.step(index).subscribe(listener, replay=replay)

    def refresh(self) -> list[str]:
        """Recompute every step and notify listeners.

        Returns:
            The resolved text of every step, in order.
        """
        return [controller.recompute() for controller in self._controllers]


def build(
    document: TemplateDocument,
    on_output: StepOutputCallback | None = None,
) -> StepBuilder:
    """Create a StepBuilder with defaults already applied.

    Args:
        document: The normalized document.
        on_output: Optional ``(step_index, text)`` callback.

    Returns:
        The live StepBuilder.
    """
    return StepBuilder(document, on_output=on_output)


async def load_builder(
    source: BaseTemplateSource,
    location: str,
    on_failure: FailureCallback | None = None,
    on_output: StepOutputCallback | None = None,
    default_title: str = DEFAULT_TITLE,
    failure_message: str = DEFAULT_FAILURE_MESSAGE,
) -> StepBuilder | None:
    """Acquire, normalize and build a document.

    This is the only await point of the builder. If acquisition fails, the
    error is logged, ``on_failure`` is called once with ``failure_message``
    and no builder is created.

    Args:
        source: Where to load the document from.
        location: URL or path passed to the source.
        on_failure: Called with a human-readable message on load failure.
        on_output: Forwarded to the StepBuilder.
        default_title: Title used when the document has none.
        failure_message: Message passed to ``on_failure``.

    Returns:
        The StepBuilder, or None if the document could not be loaded.
    """
    try:
        raw = await source.aload_document(location)
    except TemplateAcquisitionError as e:
        logger.error(f"Template load failed: {e}", exc_info=True)
        if on_failure is not None:
            on_failure(failure_message)
        return None

    document = normalize(raw, default_title=default_title)
    return build(document, on_output=on_output)
