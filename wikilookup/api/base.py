"""Shared HTTP plumbing for the API clients."""

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, Optional

import requests

from ..core.config import Config
from ..core.exceptions import ResponseFormatError, TransportError

logger = logging.getLogger(__name__)


class ApiClient:
    """Base client owning a ``requests.Session`` with the common headers."""

    def __init__(self, config: Optional[Config] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or Config()
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": self.config.user_agent,
            "Cache-Control": self.config.cache_control,
        })

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e
        return response

    def get_xml(self, url: str, params: Optional[Dict[str, Any]] = None) -> ET.Element:
        """Fetch ``url`` and return the parsed XML root element."""
        response = self._get(url, params)
        try:
            return ET.fromstring(response.content)
        except ET.ParseError as e:
            raise ResponseFormatError(f"Malformed XML from {url}: {e}") from e

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Fetch ``url`` and return the decoded JSON body."""
        response = self._get(url, params)
        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError(f"Malformed JSON from {url}: {e}") from e


def require(element: Optional[ET.Element], path: str) -> ET.Element:
    """Return the first child of ``element`` at ``path`` or raise."""
    if element is None:
        raise ResponseFormatError(f"Missing parent element for {path!r}")
    child = element.find(path)
    if child is None:
        raise ResponseFormatError(f"Response has no {path!r} element")
    return child


def attribute(element: ET.Element, name: str) -> str:
    """Return attribute ``name`` of ``element`` or raise."""
    value = element.get(name)
    if value is None:
        raise ResponseFormatError(f"<{element.tag}> has no {name!r} attribute")
    return value
