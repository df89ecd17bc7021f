"""Template source interface.

The Strategy Pattern lets the builder acquire its step document from
different places (HTTP, local files) without the core knowing how.
"""

import os
from abc import ABC, abstractmethod
from typing import Any


class TemplateAcquisitionError(Exception):
    """Raised when a template document cannot be retrieved or decoded."""

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"Could not load template from {location}: {reason}")


class BaseTemplateSource(ABC):
    """Abstract base class for template acquisition strategies.

    A source fetches the raw schema text and decodes it into plain Python
    objects. It never interprets the shape of the result; that is the
    normalizer's job.

    Example:
        ```python
        class S3TemplateSource(BaseTemplateSource):
            async def aload_document(self, location: str) -> Any:
                # Implementation here
                pass
        ```
    """

    @abstractmethod
    async def aload_document(self, location: str) -> Any:
        """Asynchronously fetch and decode a template document.

        Args:
            location: URL or path of the document.

        Returns:
            The decoded document (usually a dict, but any shape is allowed).

        Raises:
            TemplateAcquisitionError: If the document cannot be fetched or decoded.
        """
        ...

    @property
    @abstractmethod
    def supported_schemes(self) -> set[str]:
        """Return the location schemes this source accepts (e.g. {'https'})."""
        ...

    def supports_location(self, location: str) -> bool:
        """Check if this source can load the given location.

        Args:
            location: URL or path to check.

        Returns:
            True if the location's scheme is supported, False otherwise.
        """
        scheme, sep, _ = location.partition("://")
        if not sep or os.path.isabs(location):
            scheme = "file"
        return scheme.lower() in self.supported_schemes
