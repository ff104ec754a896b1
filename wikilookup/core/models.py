"""Request-scoped data models shared by the clients and lookups."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union
import re

from .exceptions import InvalidReferenceError

# Value returned in place of an empty table, matching an empty spreadsheet cell.
EMPTY = ""

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class Reference:
    """A language-qualified Wikipedia title such as ``de:Berlin``."""
    language: str
    title: str

    @property
    def api_title(self) -> str:
        """Title as transmitted to the APIs (whitespace becomes underscores)."""
        return _WHITESPACE.sub("_", self.title)

    @property
    def display_title(self) -> str:
        """Title for display (underscores become spaces)."""
        return self.title.replace("_", " ")

    def __str__(self) -> str:
        return f"{self.language}:{self.title}"


def parse_reference(article: Optional[str]) -> Reference:
    """
    Split ``"language:Title"`` on its first colon.

    The title may itself contain colons (``en:Category:Foo``). Raises
    ``InvalidReferenceError`` when there is no colon or either part is empty.
    """
    if not article:
        raise InvalidReferenceError("Empty reference")

    language, sep, title = article.partition(":")
    if not sep or not language or not title:
        raise InvalidReferenceError(f"Not a 'language:Title' reference: {article!r}")

    return Reference(language=language, title=title)


class LookupStatus(Enum):
    """Outcome of a single lookup."""
    OK = "ok"
    NO_DATA = "no_data"
    INVALID_INPUT = "invalid_input"
    FAILED = "failed"


@dataclass
class LookupResult:
    """
    Typed outcome of a lookup.

    ``data`` is a table (list of rows), a flat column (list of strings) or a
    dictionary for the object-shaped translation outputs. A failed lookup may
    still carry data when the adapter had placeholders before it failed.
    """
    data: Any = None
    status: LookupStatus = LookupStatus.NO_DATA
    error: Optional[Exception] = None

    @classmethod
    def success(cls, data: Any) -> "LookupResult":
        status = LookupStatus.OK if data else LookupStatus.NO_DATA
        return cls(data=data, status=status)

    @classmethod
    def failure(cls, error: Exception, data: Any = None) -> "LookupResult":
        status = (
            LookupStatus.INVALID_INPUT
            if isinstance(error, InvalidReferenceError)
            else LookupStatus.FAILED
        )
        return cls(data=data, status=status, error=error)

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.OK

    def to_cell(self) -> Any:
        """Return the data, or ``EMPTY`` when there is nothing to show."""
        return self.data if self.data else EMPTY


class LanguageMap:
    """
    Ordered language -> title mapping.

    Keys keep the position of their first insertion; ``record`` overwrites the
    value in place, ``seed`` only fills keys that are not present yet.
    """

    def __init__(self) -> None:
        self._titles: Dict[str, str] = {}

    def seed(self, language: str, title: str) -> None:
        self._titles.setdefault(language, title)

    def record(self, language: str, title: str) -> None:
        self._titles[language] = title

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._titles.items()))

    def to_dict(self) -> Dict[str, str]:
        return dict(self._titles)

    def to_rows(self, skip_header: bool = False) -> List[Any]:
        if skip_header:
            return [title for title in self._titles.values()]
        return [[language, title] for language, title in self._titles.items()]

    def __contains__(self, language: object) -> bool:
        return language in self._titles

    def __len__(self) -> int:
        return len(self._titles)


class ValueKind(Enum):
    """Kinds of simplified Wikidata statement values."""
    LITERAL = "literal"
    TIME = "time"
    QUANTITY = "quantity"
    ENTITY = "entity"


@dataclass(frozen=True)
class SimpleValue:
    """A Wikidata statement value reduced to a single string."""
    kind: ValueKind
    value: str

    @property
    def is_entity(self) -> bool:
        return self.kind is ValueKind.ENTITY


@dataclass
class Claim:
    """All simplified values a Wikidata entity holds for one property."""
    property_id: str
    values: List[SimpleValue] = field(default_factory=list)

    def entity_ids(self) -> List[str]:
        return [v.value for v in self.values if v.is_entity]


class LabelMap(Dict[str, Union[str, bool]]):
    """
    Mapping of Wikidata ids to English labels.

    A resolved id without a label maps to ``False``; an id that was never
    resolved is simply absent.
    """

    def is_resolved(self, item_id: str) -> bool:
        return item_id in self

    def label(self, item_id: str) -> Union[str, bool]:
        return self.get(item_id, False)


@dataclass(frozen=True)
class TimeSeriesPoint:
    """One value of a time series at a UTC instant."""
    timestamp: datetime
    value: int

    def to_row(self) -> List[Any]:
        return [self.timestamp, self.value]


@dataclass(frozen=True)
class RawDate:
    """A date already in the format the remote API expects; sent verbatim."""
    value: str

    def compact(self) -> str:
        return self.value

    def timestamp(self, time_of_day: str) -> str:
        return self.value


@dataclass(frozen=True)
class CalendarDate:
    """A structured date formatted by the lookup that uses it."""
    value: date

    def compact(self) -> str:
        """``YYYYMMDD`` as used by the pageviews API."""
        return self.value.strftime("%Y%m%d")

    def timestamp(self, time_of_day: str) -> str:
        """``YYYY-MM-DD`` followed by ``time_of_day`` (e.g. ``T00:00:00``)."""
        return self.value.strftime("%Y-%m-%d") + time_of_day


DateInput = Union[RawDate, CalendarDate]
