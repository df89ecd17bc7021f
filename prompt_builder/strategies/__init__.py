"""Strategy implementations for the I/O side of the builder.

This module provides concrete implementations of the interfaces
defined in prompt_builder.interfaces.
"""

from prompt_builder.strategies.sources import HttpTemplateSource, LocalFileTemplateSource

__all__ = [
    "HttpTemplateSource",
    "LocalFileTemplateSource",
]
