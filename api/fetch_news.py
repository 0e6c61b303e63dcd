"""GET /api/fetch_news?categories=AI,경제&count=5&only_korean=true

Runs one aggregation pass and returns ``{"results": [...]}``.
"""
import json
import sys
import os
from http.server import BaseHTTPRequestHandler
from urllib.parse import urlparse, parse_qs

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from news_digest.config import get_settings
from news_digest.errors import NewsDigestError, http_status
from news_digest.tools import fetch_news


class handler(BaseHTTPRequestHandler):
    def _send_json(self, status: int, payload: dict) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json.dumps(payload, ensure_ascii=False).encode("utf-8"))

    def do_GET(self):
        params = parse_qs(urlparse(self.path).query)

        raw_categories = params.get("categories", [None])[0]
        categories = (
            [c.strip() for c in raw_categories.split(",") if c.strip()]
            if raw_categories is not None else None
        )
        raw_count = params.get("count", [None])[0]
        raw_korean = params.get("only_korean", [None])[0]
        only_korean = raw_korean.lower() in ("1", "true", "yes") if raw_korean is not None else None

        try:
            count = int(raw_count) if raw_count is not None else None
        except ValueError:
            self._send_json(400, {"error": f"Invalid 'count': {raw_count}"})
            return

        try:
            settings = get_settings()
            result = fetch_news(
                settings,
                categories=categories,
                count_per_category=count,
                only_korean=only_korean,
            )
        except NewsDigestError as exc:
            self._send_json(http_status(exc), {"error": str(exc)})
            return
        except RuntimeError as exc:
            self._send_json(500, {"error": str(exc)})
            return

        self._send_json(200, result)

    def do_OPTIONS(self):
        self.send_response(204)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()
