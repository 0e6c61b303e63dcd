import os
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from dotenv import load_dotenv


load_dotenv()


DEFAULT_COUNT_PER_CATEGORY = 10
DEFAULT_OVER_FETCH_BUFFER = 10


@dataclass(frozen=True)
class Settings:
    naver_client_id: str
    naver_client_secret: str
    notion_api_key: str
    notion_parent_page_id: str
    categories: Tuple[str, ...]
    count_per_category: int = DEFAULT_COUNT_PER_CATEGORY
    only_korean: bool = True
    whitelist_domains: Tuple[str, ...] = ()
    blacklist_domains: Tuple[str, ...] = ()
    exclude_notices: bool = False
    over_fetch_buffer: int = DEFAULT_OVER_FETCH_BUFFER
    http_timeout: float = 10.0

    @property
    def today_str(self) -> str:
        return date.today().isoformat()


def _split_list(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _parse_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise RuntimeError(f"{name} must be a boolean (true/false), got {raw!r}")


def _parse_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def get_settings() -> Settings:
    naver_id = os.getenv("NAVER_CLIENT_ID", "")
    naver_secret = os.getenv("NAVER_CLIENT_SECRET", "")
    notion_key = os.getenv("NOTION_API_KEY", "")
    notion_parent = os.getenv("NOTION_PARENT_PAGE_ID", "")
    if not naver_id:
        raise RuntimeError("Missing NAVER_CLIENT_ID in environment or .env")
    if not naver_secret:
        raise RuntimeError("Missing NAVER_CLIENT_SECRET in environment or .env")
    if not notion_key:
        raise RuntimeError("Missing NOTION_API_KEY in environment or .env")
    if not notion_parent:
        raise RuntimeError("Missing NOTION_PARENT_PAGE_ID in environment or .env")

    categories = _split_list(os.getenv("NEWS_CATEGORIES"))
    if not categories:
        raise RuntimeError("NEWS_CATEGORIES must be a non-empty comma-separated list")

    count = _parse_int("NEWS_COUNT_PER_CATEGORY", DEFAULT_COUNT_PER_CATEGORY)
    if not 1 <= count <= 100:
        raise RuntimeError("NEWS_COUNT_PER_CATEGORY must be a number between 1 and 100")

    buffer = _parse_int("NEWS_OVER_FETCH_BUFFER", DEFAULT_OVER_FETCH_BUFFER)
    if buffer < 0:
        raise RuntimeError("NEWS_OVER_FETCH_BUFFER must not be negative")

    try:
        timeout = float(os.getenv("HTTP_TIMEOUT") or "10")
    except ValueError:
        raise RuntimeError("HTTP_TIMEOUT must be a number of seconds") from None

    return Settings(
        naver_client_id=naver_id,
        naver_client_secret=naver_secret,
        notion_api_key=notion_key,
        notion_parent_page_id=notion_parent,
        categories=categories,
        count_per_category=count,
        only_korean=_parse_bool("NEWS_ONLY_KOREAN", True),
        whitelist_domains=_split_list(os.getenv("NEWS_WHITELIST_DOMAINS")),
        blacklist_domains=_split_list(os.getenv("NEWS_BLACKLIST_DOMAINS")),
        exclude_notices=_parse_bool("NEWS_EXCLUDE_NOTICES", False),
        over_fetch_buffer=buffer,
        http_timeout=timeout,
    )
