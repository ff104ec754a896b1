"""Wikipedia (MediaWiki action API) client."""

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Tuple

from .base import ApiClient, attribute, require
from ..core.exceptions import ResponseFormatError
from ..core.models import Reference

ARTICLE_NAMESPACE = 0
CATEGORY_NAMESPACE = 14


class WikipediaClient(ApiClient):
    """Client for the per-language ``/w/api.php`` query endpoints (XML format)."""

    def _get_api_url(self, language: str) -> str:
        """Get Wikipedia API URL for a given language."""
        return self.config.wikipedia_api_url(language)

    def _query(self, language: str, params: Dict[str, Any]) -> ET.Element:
        """Run ``action=query`` and return the ``<query>`` element."""
        query_params = {"action": "query", "format": "xml"}
        query_params.update(params)
        root = self.get_xml(self._get_api_url(language), query_params)

        error = root.find("error")
        if error is not None:
            raise ResponseFormatError(
                f"API error {error.get('code')}: {error.get('info')}"
            )
        return require(root, "query")

    def _first_page(self, language: str, params: Dict[str, Any]) -> ET.Element:
        return require(self._query(language, params), "pages/page")

    def backlinks(self, reference: Reference, redirects_only: bool = False) -> List[str]:
        """
        Titles of main-namespace pages linking to ``reference``.

        With ``redirects_only`` the list is restricted to redirects, i.e. the
        synonyms of the article.
        """
        params = {
            "list": "backlinks",
            "blnamespace": ARTICLE_NAMESPACE,
            "bllimit": "max",
            "bltitle": reference.api_title,
        }
        if redirects_only:
            params["blfilterredir"] = "redirects"

        backlinks = require(self._query(reference.language, params), "backlinks")
        return [attribute(bl, "title") for bl in backlinks.findall("bl")]

    def links(self, reference: Reference) -> List[str]:
        """Titles of main-namespace pages ``reference`` links to."""
        page = self._first_page(reference.language, {
            "prop": "links",
            "plnamespace": ARTICLE_NAMESPACE,
            "pllimit": "max",
            "titles": reference.api_title,
        })
        links = page.find("links")
        if links is None:
            return []
        return [attribute(pl, "title") for pl in links.findall("pl")]

    def category_members(self, reference: Reference,
                         namespace: int = ARTICLE_NAMESPACE) -> List[str]:
        """Titles of the members of a category, filtered by namespace."""
        query = self._query(reference.language, {
            "list": "categorymembers",
            "cmlimit": "max",
            "cmprop": "title",
            "cmtype": "subcat|page",
            "cmnamespace": namespace,
            "cmtitle": reference.api_title,
        })
        members = require(query, "categorymembers")
        return [attribute(cm, "title") for cm in members.findall("cm")]

    def langlinks(self, reference: Reference) -> List[Tuple[str, str]]:
        """``(language, title)`` pairs of the article's interlanguage links."""
        page = self._first_page(reference.language, {
            "prop": "langlinks",
            "lllimit": "max",
            "titles": reference.api_title,
        })
        langlinks = page.find("langlinks")
        if langlinks is None:
            return []
        return [(attribute(ll, "lang"), ll.text or "") for ll in langlinks.findall("ll")]

    def coordinates(self, reference: Reference) -> Optional[Tuple[str, str]]:
        """
        Primary ``(latitude, longitude)`` of the article, as strings.

        Always asks the wiki configured as ``coordinates_language`` (English by
        default), whatever the language of ``reference``. Returns ``None`` when
        the page has no coordinates.
        """
        page = self._first_page(self.config.coordinates_language, {
            "prop": "coordinates",
            "colimit": "max",
            "coprimary": "primary",
            "titles": reference.api_title,
        })
        co = page.find("coordinates/co")
        if co is None:
            return None
        return attribute(co, "lat"), attribute(co, "lon")

    def revisions(self, reference: Reference, start: str, end: str) -> List[Tuple[str, int]]:
        """
        ``(timestamp, size)`` of revisions between ``start`` and ``end``.

        Revisions are listed newest first. In that direction MediaWiki's
        ``rvstart`` is the newer bound and ``rvend`` the older one, so ``end``
        goes to ``rvstart`` and ``start`` to ``rvend``.
        """
        page = self._first_page(reference.language, {
            "prop": "revisions",
            "rvprop": "size|timestamp",
            "rvlimit": "max",
            "rvstart": end,
            "rvend": start,
            "titles": reference.api_title,
        })
        revisions = page.find("revisions")
        if revisions is None:
            return []

        result = []
        for rev in revisions.findall("rev"):
            raw_size = attribute(rev, "size")
            try:
                size = int(raw_size)
            except ValueError as e:
                raise ResponseFormatError(f"Bad revision size: {e}") from e
            result.append((attribute(rev, "timestamp"), size))
        return result
