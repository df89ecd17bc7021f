"""Component Factory for template source instantiation.

Picks the template source strategy at runtime from configuration or from
the shape of the location being loaded.
"""

import logging

from prompt_builder.core.config import Settings, get_settings
from prompt_builder.interfaces.source import BaseTemplateSource
from prompt_builder.strategies.sources import HttpTemplateSource, LocalFileTemplateSource

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating template sources based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())
        source = factory.get_source(location="https://example.com/steps.yaml")
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._source_cache: dict[str, BaseTemplateSource] = {}

    @staticmethod
    def source_type_for(location: str) -> str:
        """Infer the source type from a location string."""
        if location.lower().startswith(("http://", "https://")):
            return "http"
        return "local"

    def get_source(
        self,
        source_type: str | None = None,
        location: str | None = None,
    ) -> BaseTemplateSource:
        """Get a template source instance.

        Args:
            source_type: 'http', 'local' or 'auto'. If None, uses settings.
            location: Location to be loaded; required to resolve 'auto'.

        Returns:
            A BaseTemplateSource implementation instance.

        Raises:
            ValueError: If the source type is unknown, or 'auto' is requested
                without a location.
        """
        source_type = (source_type or self._settings.template_source_type).lower()

        if source_type == "auto":
            if location is None:
                raise ValueError("A location is required to pick a source in 'auto' mode")
            source_type = self.source_type_for(location)

        if source_type not in self._source_cache:
            logger.info(f"Instantiating template source: {source_type}")

            match source_type:
                case "http":
                    self._source_cache[source_type] = HttpTemplateSource(
                        timeout=self._settings.http_timeout,
                    )
                case "local":
                    self._source_cache[source_type] = LocalFileTemplateSource(
                        base_dir=self._settings.template_dir,
                        confine_to_base_dir=not self._settings.allow_outside_template_dir,
                    )
                case _:
                    raise ValueError(
                        f"Unknown template source type: {source_type}. "
                        f"Valid options: 'auto', 'http', 'local'"
                    )

        return self._source_cache[source_type]
