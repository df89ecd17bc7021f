"""Local file template source.

Reads a YAML (or JSON) step document from disk without blocking
the event loop.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any

import yaml

from prompt_builder.interfaces.source import BaseTemplateSource, TemplateAcquisitionError

logger = logging.getLogger(__name__)


class LocalFileTemplateSource(BaseTemplateSource):
    """Loads template documents from the local filesystem.

    Relative paths are resolved against ``base_dir``; ``file://`` URLs are
    accepted and treated as absolute paths.
    """

    def __init__(
        self,
        base_dir: Path | str | None = None,
        encoding: str = "utf-8",
        confine_to_base_dir: bool = False,
    ) -> None:
        """Initialize the local source.

        Args:
            base_dir: Directory that relative paths are resolved against.
                Defaults to the current working directory.
            encoding: The character encoding to use when reading files.
            confine_to_base_dir: Reject locations that resolve outside
                ``base_dir`` (absolute paths, ``..`` segments, symlinks).
        """
        self._base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self._encoding = encoding
        self._confine = confine_to_base_dir

    def resolve_path(self, location: str) -> Path:
        """Map a location string to a filesystem path."""
        if location.startswith("file://"):
            return Path(location[len("file://"):])
        path = Path(location).expanduser()
        if not path.is_absolute():
            path = self._base_dir / path
        return path

    def _locate(self, location: str) -> Path:
        """Resolve a location to an existing file or raise."""
        try:
            path = self.resolve_path(location)
            if self._confine and not path.resolve().is_relative_to(self._base_dir.resolve()):
                logger.error(f"Template path escapes {self._base_dir}: {location}")
                raise TemplateAcquisitionError(location, "outside template directory")
            exists = path.is_file()
        except (OSError, ValueError, RuntimeError) as e:
            logger.error(f"Invalid template path {location!r}: {e}")
            raise TemplateAcquisitionError(location, f"invalid path: {e}") from e

        if not exists:
            logger.error(f"Template file not found: {path}")
            raise TemplateAcquisitionError(location, "file not found")
        return path

    async def aload_document(self, location: str) -> Any:
        """Read and decode a template document.

        Args:
            location: Path (absolute, relative or file:// URL) of the document.

        Returns:
            The decoded YAML document.

        Raises:
            TemplateAcquisitionError: If the path is invalid, outside the
                template directory when confined, missing, unreadable or
                not valid YAML.
        """
        logger.info(f"Reading template file: {location}")
        path = self._locate(location)

        try:
            text = await asyncio.to_thread(path.read_text, encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise TemplateAcquisitionError(location, f"read failed: {e}") from e

        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            logger.error(f"Template file {path} is not valid YAML: {e}")
            raise TemplateAcquisitionError(location, "invalid YAML") from e

        logger.info(f"Read {len(text)} characters from {path}")
        return document

    @property
    def supported_schemes(self) -> set[str]:
        """Return supported location schemes."""
        return {"file"}
