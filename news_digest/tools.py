"""Request/response operations shared by the CLI and the HTTP handlers.

Each one is all-or-nothing: any error aborts the call and nothing partial
is returned.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from .aggregate import aggregate
from .assemble import DEFAULT_TEMPLATE, render_markdown
from .config import Settings
from .errors import InvalidRequest
from .models import AggregationRequest, CategoryResult
from .notion import NotionClient
from .search import NaverSearchClient

log = logging.getLogger(__name__)

DEFAULT_TITLE_PREFIX = "뉴스 요약"
CATEGORY_RESULTS_ERROR = "categoryResults must be an array of {category, articles} objects"


def search_client(settings: Settings) -> NaverSearchClient:
    return NaverSearchClient(
        settings.naver_client_id,
        settings.naver_client_secret,
        timeout=settings.http_timeout,
    )


def notion_client(settings: Settings) -> NotionClient:
    return NotionClient(
        settings.notion_api_key,
        settings.notion_parent_page_id,
        timeout=settings.http_timeout,
    )


def default_title(today: Optional[date] = None) -> str:
    return f"{DEFAULT_TITLE_PREFIX} – {(today or date.today()).isoformat()}"


def fetch_news(
    settings: Settings,
    categories: Optional[Sequence[str]] = None,
    count_per_category: Optional[int] = None,
    only_korean: Optional[bool] = None,
    client: Optional[NaverSearchClient] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    request = AggregationRequest(
        categories=list(settings.categories if categories is None else categories),
        count_per_category=(
            settings.count_per_category if count_per_category is None else count_per_category
        ),
        only_korean=settings.only_korean if only_korean is None else only_korean,
        whitelist_domains=list(settings.whitelist_domains),
        blacklist_domains=list(settings.blacklist_domains),
        exclude_notices=settings.exclude_notices,
    )
    results = aggregate(request, client or search_client(settings), settings.over_fetch_buffer)
    return {"results": [r.to_dict() for r in results]}


def _parse_category_results(raw: Any) -> List[CategoryResult]:
    if not isinstance(raw, list):
        raise InvalidRequest(CATEGORY_RESULTS_ERROR)
    results = []
    for item in raw:
        if isinstance(item, CategoryResult):
            results.append(item)
            continue
        if not isinstance(item, dict) or not isinstance(item.get("category"), str):
            raise InvalidRequest(CATEGORY_RESULTS_ERROR)
        articles = item.get("articles", [])
        if not isinstance(articles, list) or not all(isinstance(a, dict) for a in articles):
            raise InvalidRequest(CATEGORY_RESULTS_ERROR)
        results.append(CategoryResult.from_dict(item))
    return results


def publish_page(
    settings: Settings,
    title: str,
    content: Optional[str] = None,
    category_results: Optional[List[Union[CategoryResult, Dict[str, Any]]]] = None,
    template: str = DEFAULT_TEMPLATE,
    client: Optional[NotionClient] = None,
) -> Dict[str, str]:
    if not isinstance(title, str) or not title.strip():
        raise InvalidRequest("title must be a non-empty string")

    if category_results is not None:
        results = _parse_category_results(category_results)
        content = render_markdown(results, template=template)
    if not isinstance(content, str) or not content.strip():
        raise InvalidRequest("content must be a non-empty string")

    page = (client or notion_client(settings)).create_page_with_content(title.strip(), content)
    log.info("Published %r -> %s", title.strip(), page["page_url"])
    return page


def news_to_page(
    settings: Settings,
    title: Optional[str] = None,
    categories: Optional[Sequence[str]] = None,
    count_per_category: Optional[int] = None,
    only_korean: Optional[bool] = None,
    template: str = DEFAULT_TEMPLATE,
    search: Optional[NaverSearchClient] = None,
    notion: Optional[NotionClient] = None,
) -> Dict[str, str]:
    fetched = fetch_news(
        settings,
        categories=categories,
        count_per_category=count_per_category,
        only_korean=only_korean,
        client=search,
    )
    page_title = title.strip() if title and title.strip() else default_title()
    return publish_page(
        settings,
        page_title,
        category_results=fetched["results"],
        template=template,
        client=notion,
    )
