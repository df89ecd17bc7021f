"""Abstract base classes for builder collaborators."""

from prompt_builder.interfaces.source import BaseTemplateSource, TemplateAcquisitionError

__all__ = [
    "BaseTemplateSource",
    "TemplateAcquisitionError",
]
