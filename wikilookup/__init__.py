"""wikilookup: Wikipedia, Wikidata and Google Suggest lookups as tables."""

from .core.config import Config
from .core.exceptions import (
    InvalidReferenceError,
    ResponseFormatError,
    TransportError,
    WikiLookupError,
)
from .core.models import (
    EMPTY,
    CalendarDate,
    LookupResult,
    LookupStatus,
    RawDate,
    Reference,
    parse_reference,
)
from .functions import (
    google_suggest,
    wiki_category_members,
    wiki_expand,
    wiki_geocoordinates,
    wiki_inbound_links,
    wiki_mutual_links,
    wiki_outbound_links,
    wiki_pageedits,
    wiki_pageviews,
    wiki_subcategories,
    wiki_synonyms,
    wiki_translate,
    wikidata_facts,
)
from .lookups import Lookups

__all__ = [
    "Config",
    "Lookups",
    "LookupResult",
    "LookupStatus",
    "EMPTY",
    "Reference",
    "parse_reference",
    "RawDate",
    "CalendarDate",
    "WikiLookupError",
    "InvalidReferenceError",
    "TransportError",
    "ResponseFormatError",
    "google_suggest",
    "wiki_category_members",
    "wiki_expand",
    "wiki_geocoordinates",
    "wiki_inbound_links",
    "wiki_mutual_links",
    "wiki_outbound_links",
    "wiki_pageedits",
    "wiki_pageviews",
    "wiki_subcategories",
    "wiki_synonyms",
    "wiki_translate",
    "wikidata_facts",
]

__version__ = "0.1.0"
