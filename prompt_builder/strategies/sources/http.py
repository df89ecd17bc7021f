"""HTTP template source.

Fetches a YAML (or JSON) step document over HTTP with httpx.
"""

import logging
from typing import Any

import httpx
import yaml

from prompt_builder.interfaces.source import BaseTemplateSource, TemplateAcquisitionError

logger = logging.getLogger(__name__)


class HttpTemplateSource(BaseTemplateSource):
    """Loads template documents from HTTP(S) URLs.

    A single GET is issued per load. Retries are deliberately absent; a
    failed load is reported once and the caller decides whether to try again.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP source.

        Args:
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used to plug in mock transports).
        """
        self._timeout = timeout
        self._transport = transport

    async def aload_document(self, location: str) -> Any:
        """Fetch and decode a template document.

        Args:
            location: The document URL.

        Returns:
            The decoded YAML document.

        Raises:
            TemplateAcquisitionError: On transport errors, non-2xx responses
                or undecodable content.
        """
        logger.info(f"Fetching template: {location}")

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(location)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Template fetch failed: {e.response.status_code} - {location}")
            raise TemplateAcquisitionError(
                location, f"HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Template fetch error for {location}: {e}")
            raise TemplateAcquisitionError(location, str(e) or type(e).__name__) from e

        try:
            document = yaml.safe_load(response.text)
        except yaml.YAMLError as e:
            logger.error(f"Template at {location} is not valid YAML: {e}")
            raise TemplateAcquisitionError(location, "invalid YAML") from e

        logger.info(f"Fetched template from {location} ({len(response.content)} bytes)")
        return document

    @property
    def supported_schemes(self) -> set[str]:
        """Return supported URL schemes."""
        return {"http", "https"}
