"""Lookups combining the API clients, with typed results."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Union

import requests

from .api.pageviews import PageviewsClient
from .api.suggest import SuggestClient
from .api.wikidata import WikidataClient
from .api.wikipedia import ARTICLE_NAMESPACE, CATEGORY_NAMESPACE, WikipediaClient
from .core.config import Config
from .core.exceptions import InvalidReferenceError, WikiLookupError
from .core.models import DateInput, LanguageMap, LookupResult, parse_reference
from .processing.claims import fact_rows, ids_to_label, simplify_claims
from .processing.series import edit_window, pageview_points, pageview_window, size_deltas

logger = logging.getLogger(__name__)

Languages = Union[str, Iterable[str], None]


def normalize_languages(languages: Languages) -> List[str]:
    """Deduplicate target languages, keeping first occurrences and dropping blanks."""
    if not languages:
        return []
    if isinstance(languages, str):
        languages = [languages]
    return [lang for lang in dict.fromkeys(languages) if lang]


class Lookups:
    """
    All lookups, sharing one HTTP session.

    Every method returns a ``LookupResult``: ``OK`` with data, ``NO_DATA``
    when the remote side had nothing, ``INVALID_INPUT`` for a malformed
    reference, or ``FAILED`` with the transport or parse error attached.
    """

    def __init__(self, config: Optional[Config] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or Config()
        self.session = session or requests.Session()
        self.wikipedia = WikipediaClient(self.config, self.session)
        self.wikidata = WikidataClient(self.config, self.session)
        self.pageviews_api = PageviewsClient(self.config, self.session)
        self.suggest_api = SuggestClient(self.config, self.session)

    def __enter__(self) -> "Lookups":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _run(self, name: str, fetch: Callable[[], object]) -> LookupResult:
        try:
            return LookupResult.success(fetch())
        except WikiLookupError as e:
            logger.warning("%s lookup failed: %s", name, e)
            return LookupResult.failure(e)

    # Wikipedia link lists

    def synonyms(self, article: str) -> LookupResult:
        """Redirects to the article."""
        return self._run("synonyms", lambda: self.wikipedia.backlinks(
            parse_reference(article), redirects_only=True))

    def inbound_links(self, article: str) -> LookupResult:
        return self._run("inbound links", lambda: self.wikipedia.backlinks(
            parse_reference(article)))

    def outbound_links(self, article: str) -> LookupResult:
        return self._run("outbound links", lambda: self.wikipedia.links(
            parse_reference(article)))

    def mutual_links(self, article: str) -> LookupResult:
        """Inbound links that are also outbound links, in inbound order."""
        inbound = self.inbound_links(article)
        outbound = self.outbound_links(article)
        for side in (inbound, outbound):
            if not side.ok:
                return LookupResult(data=None, status=side.status, error=side.error)

        outbound_titles = set(outbound.data)
        return LookupResult.success(
            [title for title in inbound.data if title in outbound_titles]
        )

    def category_members(self, category: str) -> LookupResult:
        return self._run("category members", lambda: self.wikipedia.category_members(
            parse_reference(category), ARTICLE_NAMESPACE))

    def subcategories(self, category: str) -> LookupResult:
        return self._run("subcategories", lambda: self.wikipedia.category_members(
            parse_reference(category), CATEGORY_NAMESPACE))

    # Translations

    def translate(self, article: str, target_languages: Languages = None,
                  as_object: bool = False, skip_header: bool = False) -> LookupResult:
        """
        Titles of the article in other languages.

        Requested target languages start out mapped to the source title and
        are overwritten by real interlanguage links. With targets given, other
        languages are ignored. The source language is always added last
        (or updated in place).
        """
        try:
            reference = parse_reference(article)
        except InvalidReferenceError as e:
            return LookupResult.failure(e)

        targets = normalize_languages(target_languages)
        translations = LanguageMap()
        for language in targets:
            translations.seed(language, reference.display_title)

        def shaped():
            if as_object:
                return translations.to_dict()
            return translations.to_rows(skip_header=skip_header)

        try:
            langlinks = self.wikipedia.langlinks(reference)
        except WikiLookupError as e:
            logger.warning("translations lookup failed: %s", e)
            return LookupResult.failure(e, shaped())

        for language, title in langlinks:
            if targets and language not in targets:
                continue
            translations.record(language, title)
        translations.record(reference.language, reference.display_title)

        return LookupResult.success(shaped())

    def expand(self, article: str, target_languages: Languages = None,
               as_object: bool = False) -> LookupResult:
        """Translations, each followed by the synonyms in its language."""
        translated = self.translate(article, target_languages, as_object=True)
        if not translated.data:
            return LookupResult(data=None, status=translated.status, error=translated.error)

        expanded = {} if as_object else []
        for language, title in translated.data.items():
            synonyms = self.synonyms(f"{language}:{title}").data or []
            if as_object:
                expanded[language] = [title] + synonyms
            else:
                expanded.append([language, title] + synonyms)

        if translated.error is not None:
            return LookupResult.failure(translated.error, expanded)
        return LookupResult.success(expanded)

    # Single-page facts

    def geocoordinates(self, article: str) -> LookupResult:
        def fetch():
            coordinates = self.wikipedia.coordinates(parse_reference(article))
            return [list(coordinates)] if coordinates else []
        return self._run("geocoordinates", fetch)

    def facts(self, article: str, mode: Optional[str] = None) -> LookupResult:
        """
        Wikidata facts as ``[property, value]`` rows.

        ``mode`` controls multi-valued properties: ``"first"``, ``"all"`` or
        ``None`` to skip them.
        """
        def fetch():
            raw_claims = self.wikidata.get_claims(parse_reference(article))
            if not raw_claims:
                return []
            claims = simplify_claims(raw_claims)
            labels = self.wikidata.get_labels(ids_to_label(claims))
            return fact_rows(claims, labels, mode)
        return self._run("wikidata facts", fetch)

    # Time series

    def pageviews(self, article: str, start: Optional[DateInput] = None,
                  end: Optional[DateInput] = None) -> LookupResult:
        """Daily ``[timestamp, views]`` rows, newest first."""
        def fetch():
            reference = parse_reference(article)
            first, last = pageview_window(start, end, self.config.default_window_days)
            items = self.pageviews_api.daily_views(reference, first, last)
            return [point.to_row() for point in pageview_points(items)]
        return self._run("pageviews", fetch)

    def pageedits(self, article: str, start: Optional[DateInput] = None,
                  end: Optional[DateInput] = None) -> LookupResult:
        """``[timestamp, size delta]`` rows per revision, newest first."""
        def fetch():
            reference = parse_reference(article)
            first, last = edit_window(start, end, self.config.default_window_days)
            revisions = self.wikipedia.revisions(reference, first, last)
            return [point.to_row() for point in size_deltas(revisions)]
        return self._run("page edits", fetch)

    # Google

    def suggest(self, keyword: str, language: Optional[str] = None) -> LookupResult:
        def fetch():
            if not keyword:
                raise InvalidReferenceError("Empty keyword")
            return self.suggest_api.suggestions(keyword, language)
        return self._run("suggest", fetch)
