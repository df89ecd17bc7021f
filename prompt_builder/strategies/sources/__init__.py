"""Concrete template source implementations."""

from prompt_builder.strategies.sources.http import HttpTemplateSource
from prompt_builder.strategies.sources.local import LocalFileTemplateSource

__all__ = [
    "HttpTemplateSource",
    "LocalFileTemplateSource",
]
