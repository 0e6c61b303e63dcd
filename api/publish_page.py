"""POST /api/publish_page

Body: ``{"title": ..., "content": "<markdown>"}`` or
``{"title": ..., "categoryResults": [...], "template": "default"}``.
Returns ``{"page_url": ..., "page_id": ...}``.
"""
import json
import sys
import os
from http.server import BaseHTTPRequestHandler

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from news_digest.assemble import DEFAULT_TEMPLATE
from news_digest.config import get_settings
from news_digest.errors import NewsDigestError, http_status
from news_digest.tools import publish_page


class handler(BaseHTTPRequestHandler):
    def _send_json(self, status: int, payload: dict) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json.dumps(payload, ensure_ascii=False).encode("utf-8"))

    def do_POST(self):
        content_length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(content_length)

        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            self._send_json(400, {"error": "Invalid JSON body"})
            return
        if not isinstance(data, dict):
            self._send_json(400, {"error": "JSON body must be an object"})
            return

        try:
            settings = get_settings()
            result = publish_page(
                settings,
                data.get("title", ""),
                content=data.get("content"),
                category_results=data.get("categoryResults"),
                template=data.get("template") or DEFAULT_TEMPLATE,
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
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()
