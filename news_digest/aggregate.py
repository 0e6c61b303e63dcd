"""Category aggregation: paginates the search API until each category has
enough articles nobody else in the run has claimed.

A single ``seen_links`` set is created per :func:`aggregate` call and handed
to every category in turn, so a link emitted for an earlier category never
shows up again for a later one. Pages are fetched strictly one after another
because each fetch decision depends on the set as updated by the previous one.
"""

import enum
import logging
from typing import List, Set

from .errors import InvalidRequest
from .models import AggregationRequest, Article, CategoryResult
from .normalize import normalize_article
from .search import MAX_DISPLAY, MAX_START, NaverSearchClient

log = logging.getLogger(__name__)

# Extra items asked for per page to absorb filter and dedup losses.
OVER_FETCH_BUFFER = 10


class FetchState(enum.Enum):
    FETCHING = "fetching"
    QUOTA_MET = "quota_met"
    EXHAUSTED = "exhausted"
    CEILING_REACHED = "ceiling_reached"


def batch_size(quota: int, over_fetch_buffer: int = OVER_FETCH_BUFFER) -> int:
    return min(quota + over_fetch_buffer, MAX_DISPLAY)


def next_state(collected: int, quota: int, fetched: int, requested: int, next_start: int) -> FetchState:
    """Decide what happens after a page has been consumed."""
    if collected >= quota:
        return FetchState.QUOTA_MET
    if fetched < requested:
        return FetchState.EXHAUSTED
    if next_start > MAX_START:
        return FetchState.CEILING_REACHED
    return FetchState.FETCHING


def collect_category(
    client: NaverSearchClient,
    category: str,
    request: AggregationRequest,
    seen_links: Set[str],
    over_fetch_buffer: int = OVER_FETCH_BUFFER,
) -> CategoryResult:
    quota = request.count_per_category
    size = batch_size(quota, over_fetch_buffer)
    unique: List[Article] = []
    start = 1
    state = FetchState.FETCHING

    while state is FetchState.FETCHING:
        page = client.search(
            category,
            size,
            start,
            only_korean=request.only_korean,
            whitelist_domains=request.whitelist_domains,
            blacklist_domains=request.blacklist_domains,
            exclude_notices=request.exclude_notices,
        )
        for article in page.articles:
            if len(unique) >= quota:
                break
            if article.link in seen_links:
                continue
            seen_links.add(article.link)
            unique.append(article)

        start += size
        state = next_state(len(unique), quota, page.fetched, size, start)

    log.info("Category %r: %d/%d articles (%s)", category, len(unique), quota, state.value)
    articles = [normalize_article(a) for a in unique]
    return CategoryResult(category=category, articles=articles[:quota])


def validate_request(request: AggregationRequest) -> None:
    if not isinstance(request.categories, (list, tuple)) or not request.categories:
        raise InvalidRequest("categories must be a non-empty array")
    count = request.count_per_category
    if isinstance(count, bool) or not isinstance(count, int) or not 1 <= count <= 100:
        raise InvalidRequest("count_per_category must be between 1 and 100")


def aggregate(
    request: AggregationRequest,
    client: NaverSearchClient,
    over_fetch_buffer: int = OVER_FETCH_BUFFER,
) -> List[CategoryResult]:
    validate_request(request)
    seen_links: Set[str] = set()
    results: List[CategoryResult] = []
    for category in request.categories:
        results.append(
            collect_category(client, category, request, seen_links, over_fetch_buffer)
        )
    return results
