"""Article normalization: trims each article down to what the page displays."""

from dataclasses import replace
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Optional

from .models import Article

MAX_DESCRIPTION_LENGTH = 200
ELLIPSIS = "…"


def _parse_date_str(date_str: Optional[str]) -> Optional[datetime]:
    """Best-effort parse of a date string into a datetime object."""
    if not date_str or not date_str.strip():
        return None
    value = date_str.strip()
    # Naver sends RFC 822: "Mon, 23 Feb 2026 10:00:00 +0900"
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        pass
    for fmt in ("%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M:%SZ",
                "%Y-%m-%d %H:%M:%S", "%Y-%m-%d"):
        try:
            return datetime.strptime(value[:25], fmt)
        except ValueError:
            continue
    return None


def format_date(date_str: str) -> str:
    """Return ``YYYY-MM-DD`` for a parseable date, else the input unchanged.

    The calendar date is taken in the string's own timezone, so a Korean
    late-evening timestamp stays on its Korean day.
    """
    parsed = _parse_date_str(date_str)
    if parsed is None:
        return date_str
    return parsed.strftime("%Y-%m-%d")


def truncate_description(text: str, limit: int = MAX_DESCRIPTION_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def normalize_article(article: Article) -> Article:
    originallink = article.originallink
    if not originallink or originallink == article.link:
        originallink = None
    return replace(
        article,
        description=truncate_description(article.description),
        pub_date=format_date(article.pub_date),
        originallink=originallink,
    )
