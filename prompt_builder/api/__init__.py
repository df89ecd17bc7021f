"""API routes package."""

from prompt_builder.api.builder import router as builder_router

__all__ = [
    "builder_router",
]
