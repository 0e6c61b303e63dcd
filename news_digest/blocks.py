"""Markdown-ish text to Notion block payloads.

Only the handful of constructs the page template emits are recognised:
``#``/``##``/``###`` headings, ``-``/``*`` bullets, ``---`` dividers and
inline links. Everything else becomes a paragraph, one block per line.
"""

import re
from typing import Dict, List, Optional

# Notion rejects a single rich_text run longer than this.
MAX_TEXT_LENGTH = 2000

_LINK_RE = re.compile(
    r"\[(?P<label>(?:[^\[\]]|\[[^\[\]]*\])+)\]\((?P<url>https?://[^\s)]+)\)"
    # trailing sentence punctuation stays outside a bare URL
    r"|(?P<bare>https?://\S+?)(?=[.,;:!?)\]]*(?:\s|$))"
)

_HEADINGS = (
    ("### ", "heading_3"),
    ("## ", "heading_2"),
    ("# ", "heading_1"),
)


def _text_run(content: str, url: Optional[str] = None) -> Dict:
    text: Dict = {"content": content}
    if url:
        text["link"] = {"url": url}
    return {"type": "text", "text": text}


def chunk_text(text: str, limit: int = MAX_TEXT_LENGTH) -> List[str]:
    return [text[i:i + limit] for i in range(0, len(text), limit)]


def plain_text(text: str) -> List[Dict]:
    """Chunked runs with no link detection, for page titles."""
    return [_text_run(chunk) for chunk in chunk_text(text)]


def to_rich_text(text: str) -> List[Dict]:
    """Split ``text`` into plain and hyperlinked runs, each at most 2000 chars."""
    runs: List[Dict] = []

    def emit(content: str, url: Optional[str] = None) -> None:
        for chunk in chunk_text(content):
            runs.append(_text_run(chunk, url))

    pos = 0
    for match in _LINK_RE.finditer(text):
        if match.start() > pos:
            emit(text[pos:match.start()])
        if match.group("bare"):
            emit(match.group("bare"), match.group("bare"))
        else:
            emit(match.group("label"), match.group("url"))
        pos = match.end()
    if pos < len(text):
        emit(text[pos:])
    return runs


def _block(block_type: str, text: str) -> Dict:
    return {
        "object": "block",
        "type": block_type,
        block_type: {"rich_text": to_rich_text(text)},
    }


def line_to_block(line: str) -> Dict:
    if line == "---":
        return {"object": "block", "type": "divider", "divider": {}}
    for prefix, block_type in _HEADINGS:
        if line.startswith(prefix):
            return _block(block_type, line[len(prefix):])
    if line.startswith("- ") or line.startswith("* "):
        return _block("bulleted_list_item", line[2:])
    return _block("paragraph", line)


def markdown_to_blocks(content: str) -> List[Dict]:
    return [line_to_block(line.rstrip("\r")) for line in content.split("\n")]
