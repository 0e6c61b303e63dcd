from news_digest.assemble import DEFAULT_ICON, render_markdown, topic_icon
from news_digest.models import Article, CategoryResult


def _sample():
    return [
        CategoryResult(
            category="AI",
            articles=[
                Article(
                    title="AI 혁신 뉴스",
                    link="https://news.naver.com/1",
                    originallink="https://orig.com/1",
                    description="AI 기술이 빠르게 발전하고 있습니다.",
                    pub_date="2026-02-23",
                )
            ],
        ),
        CategoryResult(
            category="경제",
            articles=[
                Article(
                    title="주식 시장 동향",
                    link="https://news.naver.com/2",
                    originallink="https://news.naver.com/2",
                    description="오늘 주식 시장은 상승세를 보였습니다.",
                    pub_date="Mon, 23 Feb 2026 09:00:00 +0900",
                )
            ],
        ),
    ]


def test_render_exact_layout_for_one_article():
    results = [CategoryResult(category="AI", articles=[_sample()[0].articles[0]])]
    assert render_markdown(results) == "\n".join([
        "## 🤖 AI",
        "",
        "### [AI 혁신 뉴스](https://news.naver.com/1)",
        "",
        "🕒 2026-02-23",
        "",
        "AI 기술이 빠르게 발전하고 있습니다.",
        "",
        "- 출처: https://news.naver.com/1",
        "- 원본: https://orig.com/1",
        "",
        "---",
    ])


def test_render_includes_category_headings_with_icons():
    output = render_markdown(_sample())
    assert "## 🤖 AI" in output
    assert "## 💰 경제" in output


def test_render_formats_raw_pub_date():
    output = render_markdown(_sample())
    assert "🕒 2026-02-23" in output
    assert "Mon, 23 Feb" not in output


def test_render_omits_original_when_same_as_link():
    output = render_markdown(_sample())
    assert "- 원본: https://news.naver.com/2" not in output


def test_render_omits_original_when_absent():
    results = [CategoryResult(category="tech", articles=[
        Article(title="Tech News", link="https://example.com/t", description="Tech desc", pub_date=""),
    ])]
    output = render_markdown(results)
    assert "원본" not in output
    assert "🕒" not in output


def test_render_unknown_template_falls_back_to_default():
    assert render_markdown(_sample(), "nonexistent-template") == render_markdown(_sample())


def test_render_empty_category():
    output = render_markdown([CategoryResult(category="empty")])
    assert output == "## 📰 empty"


def test_render_divider_after_each_article():
    articles = [
        Article(title=f"Article {i}", link=f"https://example.com/{i}", description="d", pub_date="")
        for i in range(2)
    ]
    output = render_markdown([CategoryResult(category="AI", articles=articles)])
    assert output.splitlines().count("---") == 2


def test_render_does_not_escape_markup_characters():
    results = [CategoryResult(category="AI", articles=[
        Article(title="R&D <투자>", link="https://example.com/1", description="", pub_date=""),
    ])]
    assert "### [R&D <투자>](https://example.com/1)" in render_markdown(results)


def test_topic_icon_case_insensitive_substring():
    assert topic_icon("Generative ai") == "🤖"
    assert topic_icon("반도체 산업") == "💾"
    assert topic_icon("날씨") == "🌤️"
    assert topic_icon("zzz") == DEFAULT_ICON


def test_render_folds_line_breaks_in_fields():
    results = [
        CategoryResult(
            category="AI",
            articles=[
                Article(
                    title="제목\n# 가짜 헤딩",
                    link="https://news.naver.com/9",
                    description="첫 줄\n- 가짜 항목\n---\n끝",
                    pub_date="",
                )
            ],
        )
    ]
    lines = render_markdown(results).split("\n")
    assert "### [제목 # 가짜 헤딩](https://news.naver.com/9)" in lines
    assert "첫 줄 - 가짜 항목 --- 끝" in lines
    assert lines.count("---") == 1
