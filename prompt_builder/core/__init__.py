"""Core configuration and factory components."""

from prompt_builder.core.config import Settings, get_settings
from prompt_builder.core.factory import ComponentFactory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
]
