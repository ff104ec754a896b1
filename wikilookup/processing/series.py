"""Time series helpers for pageviews and page edits."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from ..core.exceptions import ResponseFormatError
from ..core.models import CalendarDate, DateInput, TimeSeriesPoint


def parse_hourly_timestamp(timestamp: str) -> datetime:
    """Parse a pageviews ``YYYYMMDDHH`` timestamp to a UTC datetime on the hour."""
    try:
        parsed = datetime.strptime(timestamp[:10], "%Y%m%d%H")
    except (TypeError, ValueError) as e:
        raise ResponseFormatError(f"Bad pageview timestamp {timestamp!r}") from e
    return parsed.replace(tzinfo=timezone.utc)


def parse_revision_timestamp(timestamp: str) -> datetime:
    """Parse a MediaWiki ``YYYY-MM-DDTHH:MM:SSZ`` timestamp to a UTC datetime."""
    try:
        parsed = datetime.strptime(timestamp, "%Y-%m-%dT%H:%M:%SZ")
    except (TypeError, ValueError) as e:
        raise ResponseFormatError(f"Bad revision timestamp {timestamp!r}") from e
    return parsed.replace(tzinfo=timezone.utc)


def pageview_points(items: List[Dict[str, Any]]) -> List[TimeSeriesPoint]:
    """Convert pageview items to points, newest first."""
    if not isinstance(items, list):
        raise ResponseFormatError(f"Pageview items are not a list: {items!r}")
    points = []
    for item in items:
        try:
            points.append(TimeSeriesPoint(
                timestamp=parse_hourly_timestamp(item["timestamp"]),
                value=item["views"],
            ))
        except KeyError as e:
            raise ResponseFormatError(f"Pageview item without {e}") from e
        except TypeError as e:
            raise ResponseFormatError(f"Malformed pageview item: {item!r}") from e
    points.reverse()
    return points


def size_deltas(revisions: List[Tuple[str, int]]) -> List[TimeSeriesPoint]:
    """
    Size change of each revision relative to the next (older) one.

    ``revisions`` is newest first. The oldest revision has nothing to compare
    against and produces no point.
    """
    points = []
    for (timestamp, size), (_, older_size) in zip(revisions, revisions[1:]):
        points.append(TimeSeriesPoint(
            timestamp=parse_revision_timestamp(timestamp),
            value=size - older_size,
        ))
    return points


def pageview_window(start: Optional[DateInput], end: Optional[DateInput],
                    days: int, now: Optional[datetime] = None) -> Tuple[str, str]:
    """``YYYYMMDD`` bounds; defaults to ``days`` ago until yesterday."""
    now = now or datetime.now(timezone.utc)
    start = start or CalendarDate((now - timedelta(days=days)).date())
    end = end or CalendarDate((now - timedelta(days=1)).date())
    return start.compact(), end.compact()


def edit_window(start: Optional[DateInput], end: Optional[DateInput],
                days: int, now: Optional[datetime] = None) -> Tuple[str, str]:
    """ISO bounds; defaults to ``days`` ago at midnight until the end of today."""
    now = now or datetime.now(timezone.utc)
    start = start or CalendarDate((now - timedelta(days=days)).date())
    end = end or CalendarDate(now.date())
    return start.timestamp("T00:00:00"), end.timestamp("T23:59:59")
