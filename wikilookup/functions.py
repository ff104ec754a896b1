"""
Spreadsheet-style lookup functions.

Each function returns a table (or a flat column) on success and ``EMPTY``
otherwise. They never raise: failures are logged and collapse to ``EMPTY``.
Use ``wikilookup.lookups.Lookups`` to tell "no data" apart from errors.
"""

import logging
from typing import Any, Callable, Optional

from .core.config import Config
from .core.models import EMPTY, DateInput, LookupResult
from .lookups import Languages, Lookups

logger = logging.getLogger(__name__)


def _to_cell(call: Callable[[Lookups], LookupResult], config: Optional[Config]) -> Any:
    try:
        with Lookups(config) as lookups:
            return call(lookups).to_cell()
    except Exception:
        logger.exception("Lookup raised an unexpected error")
        return EMPTY


def wiki_synonyms(article: str, config: Optional[Config] = None) -> Any:
    """Synonyms (redirects) of ``article`` (``"de:Berlin"``)."""
    return _to_cell(lambda lookups: lookups.synonyms(article), config)


def wiki_translate(article: str, target_languages: Languages = None,
                   as_object: bool = False, skip_header: bool = False,
                   config: Optional[Config] = None) -> Any:
    """
    Translations (interlanguage links) of ``article``.

    Returns ``[language, title]`` rows, a flat list of titles with
    ``skip_header``, or a ``{language: title}`` dict with ``as_object``.
    """
    return _to_cell(
        lambda lookups: lookups.translate(article, target_languages, as_object, skip_header),
        config,
    )


def wiki_expand(article: str, target_languages: Languages = None,
                as_object: bool = False, config: Optional[Config] = None) -> Any:
    """Translations of ``article`` followed by their synonyms."""
    return _to_cell(lambda lookups: lookups.expand(article, target_languages, as_object), config)


def wiki_category_members(category: str, config: Optional[Config] = None) -> Any:
    """Articles in ``category`` (``"en:Category:Visitor_attractions_in_Berlin"``)."""
    return _to_cell(lambda lookups: lookups.category_members(category), config)


def wiki_subcategories(category: str, config: Optional[Config] = None) -> Any:
    """Subcategories of ``category``."""
    return _to_cell(lambda lookups: lookups.subcategories(category), config)


def wiki_inbound_links(article: str, config: Optional[Config] = None) -> Any:
    return _to_cell(lambda lookups: lookups.inbound_links(article), config)


def wiki_outbound_links(article: str, config: Optional[Config] = None) -> Any:
    return _to_cell(lambda lookups: lookups.outbound_links(article), config)


def wiki_mutual_links(article: str, config: Optional[Config] = None) -> Any:
    """Articles that both link to and are linked from ``article``."""
    return _to_cell(lambda lookups: lookups.mutual_links(article), config)


def wiki_geocoordinates(article: str, config: Optional[Config] = None) -> Any:
    """``[[latitude, longitude]]`` of ``article``."""
    return _to_cell(lambda lookups: lookups.geocoordinates(article), config)


def wikidata_facts(article: str, multi_object_mode: Optional[str] = None,
                   config: Optional[Config] = None) -> Any:
    """Wikidata ``[property, value]`` facts; ``multi_object_mode`` is ``"first"`` or ``"all"``."""
    return _to_cell(lambda lookups: lookups.facts(article, multi_object_mode), config)


def wiki_pageviews(article: str, start: Optional[DateInput] = None,
                   end: Optional[DateInput] = None, config: Optional[Config] = None) -> Any:
    """Daily ``[timestamp, views]`` rows, newest first."""
    return _to_cell(lambda lookups: lookups.pageviews(article, start, end), config)


def wiki_pageedits(article: str, start: Optional[DateInput] = None,
                   end: Optional[DateInput] = None, config: Optional[Config] = None) -> Any:
    """``[timestamp, size delta]`` rows per revision, newest first."""
    return _to_cell(lambda lookups: lookups.pageedits(article, start, end), config)


def google_suggest(keyword: str, language: Optional[str] = None,
                   config: Optional[Config] = None) -> Any:
    """Google Suggest completions for ``keyword``."""
    return _to_cell(lambda lookups: lookups.suggest(keyword, language), config)
