import json
import logging
import sys
from typing import List, Optional

import click

from .assemble import DEFAULT_TEMPLATE
from .config import get_settings
from .errors import InvalidRequest, NewsDigestError
from .tools import fetch_news, news_to_page, publish_page


def _split_categories(raw: Optional[str]) -> Optional[List[str]]:
    if raw is None:
        return None
    return [c.strip() for c in raw.split(",") if c.strip()]


def _emit(result: dict) -> None:
    click.echo(json.dumps(result, ensure_ascii=False))


def _fail(exc: Exception) -> None:
    click.echo(json.dumps({"error": str(exc)}, ensure_ascii=False), err=True)
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def main(verbose):
    """Aggregate Naver news by category and publish it to Notion."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--categories", default=None, help="Comma-separated categories (overrides config).")
@click.option("--count", "count_per_category", default=None, type=int, help="Articles per category (1-100).")
@click.option("--only-korean/--all-languages", "only_korean", default=None,
              help="Keep only articles containing Korean text.")
def fetch(categories, count_per_category, only_korean):
    """Fetch deduplicated articles per category and print them as JSON."""
    try:
        settings = get_settings()
        result = fetch_news(
            settings,
            categories=_split_categories(categories),
            count_per_category=count_per_category,
            only_korean=only_korean,
        )
    except (NewsDigestError, RuntimeError) as exc:
        _fail(exc)
    else:
        _emit(result)


@main.command()
@click.option("--title", required=True, help="Page title.")
@click.option("--from-json", is_flag=True, default=False,
              help="Read `fetch` output from stdin and render it with the page template.")
@click.option("--template", default=DEFAULT_TEMPLATE, help="Page template name (with --from-json).")
def publish(title, from_json, template):
    """Create a Notion page from markdown (or fetch JSON) read on stdin."""
    try:
        raw = click.get_text_stream("stdin").read()
        settings = get_settings()
        if from_json:
            try:
                results = json.loads(raw)["results"]
            except (ValueError, KeyError, TypeError):
                raise InvalidRequest("stdin must hold the JSON printed by `fetch`") from None
            result = publish_page(settings, title, category_results=results, template=template)
        else:
            result = publish_page(settings, title, content=raw)
    except (NewsDigestError, RuntimeError) as exc:
        _fail(exc)
    else:
        _emit(result)


@main.command()
@click.option("--categories", default=None, help="Comma-separated categories (overrides config).")
@click.option("--count", "count_per_category", default=None, type=int, help="Articles per category (1-100).")
@click.option("--title", default=None, help="Page title (defaults to today's date).")
@click.option("--template", default=DEFAULT_TEMPLATE, help="Page template name.")
@click.option("--only-korean/--all-languages", "only_korean", default=None,
              help="Keep only articles containing Korean text.")
def digest(categories, count_per_category, title, template, only_korean):
    """Fetch news and publish it as a single Notion page."""
    try:
        settings = get_settings()
        result = news_to_page(
            settings,
            title=title,
            categories=_split_categories(categories),
            count_per_category=count_per_category,
            only_korean=only_korean,
            template=template,
        )
    except (NewsDigestError, RuntimeError) as exc:
        _fail(exc)
    else:
        _emit(result)


if __name__ == "__main__":
    main()
