import re
from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import CategoryResult
from .normalize import format_date


TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

DEFAULT_TEMPLATE = "default"

TEMPLATES: Dict[str, str] = {
    DEFAULT_TEMPLATE: "page.md.j2",
}

DEFAULT_ICON = "📰"

_LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")

# First keyword found (case-insensitive, substring) picks the heading icon.
TOPIC_ICONS: Dict[str, str] = {
    "ai": "🤖",
    "인공지능": "🤖",
    "반도체": "💾",
    "경제": "💰",
    "economy": "💰",
    "주식": "📈",
    "증시": "📈",
    "stock": "📈",
    "부동산": "🏠",
    "정치": "🏛️",
    "politics": "🏛️",
    "국제": "🌏",
    "world": "🌏",
    "사회": "👥",
    "스포츠": "⚽",
    "sports": "⚽",
    "과학": "🔬",
    "science": "🔬",
    "기술": "💻",
    "tech": "💻",
    "건강": "🏥",
    "health": "🏥",
    "문화": "🎭",
    "연예": "🎬",
    "날씨": "🌤️",
}


def topic_icon(category: str) -> str:
    lowered = category.lower()
    for keyword, icon in TOPIC_ICONS.items():
        if keyword in lowered:
            return icon
    return DEFAULT_ICON


def one_line(text: str) -> str:
    """Fold line breaks so a field cannot start a new block."""
    return _LINE_BREAK_RE.sub(" ", str(text))


def _get_env() -> Environment:
    loader = FileSystemLoader(str(TEMPLATE_DIR))
    env = Environment(
        loader=loader,
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["topic_icon"] = topic_icon
    env.filters["display_date"] = format_date
    env.filters["one_line"] = one_line
    return env


def render_markdown(results: List[CategoryResult], template: str = DEFAULT_TEMPLATE) -> str:
    """Lay the aggregated categories out as page markdown.

    Unknown template names fall back to the default layout.
    """
    env = _get_env()
    name = TEMPLATES.get(template, TEMPLATES[DEFAULT_TEMPLATE])
    return env.get_template(name).render(results=results).strip()
