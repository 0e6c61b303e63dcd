import logging
import re
from typing import Iterable, List, Optional

import requests

from .errors import (
    AuthError,
    InvalidQuery,
    InvalidRequest,
    RateLimited,
    RemoteError,
    Unavailable,
)
from .models import Article, SearchMeta, SearchPage

log = logging.getLogger(__name__)


NAVER_NEWS_URL = "https://openapi.naver.com/v1/search/news.json"
SERVICE = "Naver"

MAX_DISPLAY = 100
# The API refuses any start offset past this point.
MAX_START = 1000

_TAG_RE = re.compile(r"<[^>]*>")
_ENTITY_RE = re.compile(r"&#?[a-zA-Z0-9]+;")
_LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")
_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
}

_HANGUL = "가-힣ㄱ-ㅎㅏ-ㅣ"
_HANGUL_RE = re.compile(f"[{_HANGUL}]")
_UNSAFE_QUERY_RE = re.compile(rf"[^\w\s{_HANGUL}\-]")
# "[알림] 서비스 점검", "[공고] 채용" ... press notices, not news
_NOTICE_RE = re.compile(r"^\s*\[[^\]]*\]")


# ── Helpers ──


def strip_markup(text: Optional[str]) -> str:
    """Remove tags, fold line breaks and decode the handful of entities the API emits."""
    if not text:
        return ""
    text = _LINE_BREAK_RE.sub(" ", _TAG_RE.sub("", text))
    return _ENTITY_RE.sub(lambda m: _ENTITIES.get(m.group(0), m.group(0)), text)


def sanitize_category(category: str) -> str:
    return _UNSAFE_QUERY_RE.sub("", category.strip())


def _target_link(article: Article) -> str:
    return article.originallink or article.link


def _filter_by_language(articles: List[Article]) -> List[Article]:
    """Keep articles with at least one Hangul character in title or description."""
    return [
        a for a in articles
        if _HANGUL_RE.search(a.title) or _HANGUL_RE.search(a.description)
    ]


def _filter_whitelist(articles: List[Article], domains: Iterable[str]) -> List[Article]:
    domains = [d for d in domains if d]
    if not domains:
        return articles
    return [a for a in articles if any(d in _target_link(a) for d in domains)]


def _filter_blacklist(articles: List[Article], domains: Iterable[str]) -> List[Article]:
    domains = [d for d in domains if d]
    if not domains:
        return articles
    return [a for a in articles if not any(d in _target_link(a) for d in domains)]


def _filter_notices(articles: List[Article]) -> List[Article]:
    """Drop titles that open with a bracketed tag; brackets later in the title are fine."""
    return [a for a in articles if not _NOTICE_RE.match(a.title)]


def _parse_item(item: dict) -> Article:
    return Article(
        title=strip_markup(item.get("title")),
        link=item.get("link", ""),
        originallink=item.get("originallink") or None,
        description=strip_markup(item.get("description")),
        pub_date=item.get("pubDate", ""),
    )


# ── Naver search ──


class NaverSearchClient:
    """Thin client for the Naver news search endpoint.

    One call fetches one window (``display`` items starting at ``start``)
    and applies the local content filters to it.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def headers(self) -> dict:
        return {
            "X-Naver-Client-Id": self.client_id,
            "X-Naver-Client-Secret": self.client_secret,
        }

    def search(
        self,
        category: str,
        count: int,
        start: int = 1,
        only_korean: bool = False,
        whitelist_domains: Iterable[str] = (),
        blacklist_domains: Iterable[str] = (),
        exclude_notices: bool = False,
    ) -> SearchPage:
        query = sanitize_category(category)
        if not query:
            raise InvalidQuery(f'Invalid category: "{category}"')
        if count < 1:
            raise InvalidRequest(f"display must be at least 1, got {count}")

        display = min(count, MAX_DISPLAY)
        start = max(1, min(MAX_START, start))
        params = {
            "query": query,
            "display": display,
            "start": start,
            "sort": "date",
        }

        try:
            resp = self.session.get(
                NAVER_NEWS_URL, params=params, headers=self.headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise Unavailable(SERVICE, f"Network error calling Naver API: {exc}") from exc

        if resp.status_code == 401:
            raise AuthError(
                SERVICE,
                "Naver API authentication failed. Check your client_id and client_secret.",
                status=401,
            )
        if resp.status_code == 429:
            raise RateLimited(
                SERVICE, "Naver API rate limit exceeded. Please try again later.", status=429
            )
        if not 200 <= resp.status_code < 300:
            raise RemoteError(
                SERVICE, f"Naver API error {resp.status_code}: {resp.text}", status=resp.status_code
            )

        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            raise RemoteError(
                SERVICE,
                f"Naver API returned an invalid body: {resp.text[:200]}",
                status=resp.status_code,
            )
        items = data.get("items") or []
        articles = [_parse_item(item) for item in items]

        # Filter order matters: language, then whitelist, then blacklist.
        if only_korean:
            articles = _filter_by_language(articles)
        articles = _filter_whitelist(articles, whitelist_domains)
        articles = _filter_blacklist(articles, blacklist_domains)
        if exclude_notices:
            articles = _filter_notices(articles)

        log.debug(
            "Naver search %r start=%d display=%d: kept %d of %d",
            query, start, display, len(articles), len(items),
        )

        meta = SearchMeta(
            last_build_date=data.get("lastBuildDate", ""),
            total=int(data.get("total") or 0),
            start=int(data.get("start") or start),
            display=int(data.get("display") or 0),
        )
        return SearchPage(meta=meta, articles=articles[:display], fetched=len(items))
