"""FastAPI dependencies for dependency injection."""

from fastapi import Depends

from prompt_builder.core.config import Settings, get_settings
from prompt_builder.core.factory import ComponentFactory

_factory: ComponentFactory | None = None
_factory_settings: Settings | None = None


def get_factory(settings: Settings = Depends(get_settings)) -> ComponentFactory:
    """Dependency returning the shared ComponentFactory for the current settings.

    Args:
        settings: Application settings.

    Returns:
        A ComponentFactory, rebuilt only when the settings object changes.
    """
    global _factory, _factory_settings
    if _factory is None or _factory_settings is not settings:
        _factory = ComponentFactory(settings)
        _factory_settings = settings
    return _factory
