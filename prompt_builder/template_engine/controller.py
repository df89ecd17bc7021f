"""Step controller.

Owns one step's bindings and keeps its resolved text in sync with them.
"""

import logging
from collections import deque
from collections.abc import Callable, Mapping
from types import MappingProxyType

from prompt_builder.template_engine.interpolator import interpolate
from prompt_builder.template_engine.models import Step

logger = logging.getLogger(__name__)

OutputListener = Callable[[str], None]


class UnknownFieldError(KeyError):
    """Raised when an edit names a field the step does not declare."""

    def __init__(self, step_index: int, name: str) -> None:
        self.step_index = step_index
        self.name = name
        super().__init__(f"Step {step_index} has no field named '{name}'")

    def __str__(self) -> str:
        return self.args[0]


class StepController:
    """Reactive state for a single step.

    Every edit re-interpolates the whole template from the full binding set
    and then notifies listeners synchronously. Edits issued from inside a
    listener are queued and applied once the current notification round has
    finished, so recomputations never overlap.
    """

    def __init__(self, step: Step, index: int = 0) -> None:
        """Initialize bindings from each field's default value.

        Args:
            step: The normalized step.
            index: Position of the step in its document.
        """
        self._step = step
        self._index = index
        self._bindings: dict[str, str] = {f.name: f.default_value for f in step.fields}
        self._listeners: list[OutputListener] = []
        self._pending: deque[tuple[str, str]] = deque()
        self._dispatching = False

    @property
    def step(self) -> Step:
        return self._step

    @property
    def index(self) -> int:
        return self._index

    @property
    def bindings(self) -> Mapping[str, str]:
        """Read-only view of the current field values."""
        return MappingProxyType(self._bindings)

    @property
    def resolved_text(self) -> str:
        """The step's template resolved against the current bindings."""
        return interpolate(self._step.template, self._bindings)

    def subscribe(self, listener: OutputListener, replay: bool = False) -> Callable[[], None]:
        """Register a listener fired with the resolved text after each recomputation.

        Args:
            listener: Called with the new resolved text.
            replay: Deliver the current text to the listener immediately.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)
        if replay:
            self._notify(listener, self.resolved_text)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_field_changed(self, name: str, value: str) -> None:
        """Apply one edit and recompute.

        Args:
            name: Field name within this step.
            value: The new value, stored verbatim.

        Raises:
            UnknownFieldError: If the step has no such field.
        """
        if name not in self._bindings:
            raise UnknownFieldError(self._index, name)

        self._pending.append((name, value))
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._pending:
                field_name, field_value = self._pending.popleft()
                self._bindings[field_name] = field_value
                logger.debug(f"Step {self._index}: '{field_name}' changed")
                self.recompute()
        finally:
            self._dispatching = False
            self._pending.clear()

    def recompute(self) -> str:
        """Re-interpolate the template and notify every listener.

        Returns:
            The freshly resolved text.
        """
        text = self.resolved_text
        for listener in list(self._listeners):
            self._notify(listener, text)
        return text

    def _notify(self, listener: OutputListener, text: str) -> None:
        try:
            listener(text)
        except Exception as e:
            logger.error(f"Step {self._index}: output listener failed: {e}", exc_info=True)
