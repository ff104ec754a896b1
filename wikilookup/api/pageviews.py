"""Wikimedia REST API client for per-article pageviews."""

from typing import Any, Dict, List
from urllib.parse import quote

from .base import ApiClient
from ..core.exceptions import ResponseFormatError
from ..core.models import Reference


class PageviewsClient(ApiClient):
    """Client for ``metrics/pageviews/per-article``."""

    def _series_url(self, reference: Reference, start: str, end: str) -> str:
        return "/".join([
            self.config.pageviews_url,
            f"{reference.language}.wikipedia",
            "all-access",
            "user",
            quote(reference.api_title, safe=""),
            "daily",
            start,
            end,
        ])

    def daily_views(self, reference: Reference, start: str, end: str) -> List[Dict[str, Any]]:
        """
        Daily user pageviews between ``start`` and ``end`` (``YYYYMMDD``).

        Returns the raw items, oldest first as served.
        """
        data = self.get_json(self._series_url(reference, start, end))
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise ResponseFormatError(f"No pageview items for {reference}")
        return data["items"]
