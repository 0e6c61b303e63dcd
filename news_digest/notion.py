import logging
from typing import Any, Dict, List, Optional

import requests

from .blocks import markdown_to_blocks, plain_text
from .errors import AuthError, NotFound, RateLimited, RemoteError, Unavailable

log = logging.getLogger(__name__)


NOTION_API_BASE = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
SERVICE = "Notion"

# Notion accepts at most this many children per append request.
MAX_BLOCKS_PER_REQUEST = 100


def chunk_blocks(blocks: List[Dict], size: int = MAX_BLOCKS_PER_REQUEST) -> List[List[Dict]]:
    return [blocks[i:i + size] for i in range(0, len(blocks), size)]


class NotionClient:
    def __init__(
        self,
        api_key: str,
        parent_page_id: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.parent_page_id = parent_page_id
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Notion-Version": NOTION_VERSION,
        }

    def _request(self, method: str, path: str, body: Optional[Dict] = None) -> Dict[str, Any]:
        try:
            resp = self.session.request(
                method,
                f"{NOTION_API_BASE}{path}",
                headers=self.headers,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise Unavailable(SERVICE, f"Network error calling Notion API: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            data = None

        if 200 <= resp.status_code < 300:
            if not isinstance(data, dict):
                raise RemoteError(SERVICE, "Notion API returned an invalid body", status=resp.status_code)
            return data

        if resp.status_code == 401:
            raise AuthError(SERVICE, "Notion API authentication failed. Check your api_key.", status=401)
        if resp.status_code == 404:
            raise NotFound(
                SERVICE,
                "Notion page not found. Check your parent_page_id and integration permissions.",
                status=404,
            )
        if resp.status_code == 429:
            raise RateLimited(SERVICE, "Notion API rate limit exceeded. Please try again later.", status=429)

        message = (data.get("message") if isinstance(data, dict) else None) or resp.reason
        raise RemoteError(SERVICE, f"Notion API error {resp.status_code}: {message}", status=resp.status_code)

    def create_page(self, title: str) -> Dict[str, str]:
        data = self._request("POST", "/pages", {
            "parent": {"page_id": self.parent_page_id},
            "properties": {
                "title": {"title": plain_text(title)},
            },
        })
        if not data.get("id") or not data.get("url"):
            raise RemoteError(SERVICE, "Notion API returned a page without id or url")
        log.info("Created Notion page %s", data["id"])
        return {"id": data["id"], "url": data["url"]}

    def append_blocks(self, page_id: str, blocks: List[Dict]) -> None:
        batches = chunk_blocks(blocks)
        for i, batch in enumerate(batches, start=1):
            log.debug("Appending batch %d/%d (%d blocks) to %s", i, len(batches), len(batch), page_id)
            self._request("PATCH", f"/blocks/{page_id}/children", {"children": batch})

    def create_page_with_content(self, title: str, content: str) -> Dict[str, str]:
        page = self.create_page(title)
        self.append_blocks(page["id"], markdown_to_blocks(content))
        return {"page_url": page["url"], "page_id": page["id"]}
