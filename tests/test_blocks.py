from news_digest.blocks import (
    MAX_TEXT_LENGTH,
    chunk_text,
    line_to_block,
    markdown_to_blocks,
    plain_text,
    to_rich_text,
)


def _contents(runs):
    return [r["text"]["content"] for r in runs]


# ── line_to_block ──


def test_divider_has_empty_payload():
    block = line_to_block("---")
    assert block == {"object": "block", "type": "divider", "divider": {}}


def test_heading_levels():
    assert line_to_block("# Title")["type"] == "heading_1"
    assert _contents(line_to_block("# Title")["heading_1"]["rich_text"]) == ["Title"]
    assert line_to_block("## Sub")["type"] == "heading_2"
    assert _contents(line_to_block("### Small")["heading_3"]["rich_text"]) == ["Small"]


def test_bullets_strip_prefix():
    for line in ("- item", "* item"):
        block = line_to_block(line)
        assert block["type"] == "bulleted_list_item"
        assert _contents(block["bulleted_list_item"]["rich_text"]) == ["item"]


def test_other_lines_are_paragraphs():
    assert line_to_block("plain text")["type"] == "paragraph"
    assert line_to_block("#no space")["type"] == "paragraph"
    assert line_to_block("-- not a divider")["type"] == "paragraph"
    assert line_to_block("----")["type"] == "paragraph"


def test_empty_line_is_empty_paragraph():
    assert line_to_block("") == {"object": "block", "type": "paragraph", "paragraph": {"rich_text": []}}


# ── to_rich_text ──


def test_plain_text_single_run():
    runs = to_rich_text("hello")
    assert runs == [{"type": "text", "text": {"content": "hello"}}]


def test_markdown_link_becomes_link_run():
    runs = to_rich_text("### [제목](https://n.news.naver.com/1) 끝")
    assert _contents(runs) == ["### ", "제목", " 끝"]
    assert runs[1]["text"]["link"] == {"url": "https://n.news.naver.com/1"}
    assert "link" not in runs[0]["text"]
    assert "link" not in runs[2]["text"]


def test_label_with_brackets():
    runs = to_rich_text("[[알림] 안내](https://a.com/x)")
    assert _contents(runs) == ["[알림] 안내"]
    assert runs[0]["text"]["link"]["url"] == "https://a.com/x"


def test_bare_url_becomes_link_run():
    runs = to_rich_text("출처: https://example.com/a?b=1&c=2")
    assert _contents(runs) == ["출처: ", "https://example.com/a?b=1&c=2"]
    assert runs[1]["text"]["link"]["url"] == "https://example.com/a?b=1&c=2"


def test_long_plain_text_is_chunked():
    runs = to_rich_text("a" * 4500)
    assert [len(c) for c in _contents(runs)] == [2000, 2000, 500]


def test_long_link_label_chunks_keep_link():
    runs = to_rich_text("[" + "b" * 2500 + "](https://x.com)")
    assert [len(c) for c in _contents(runs)] == [2000, 500]
    assert all(r["text"]["link"]["url"] == "https://x.com" for r in runs)


def test_chunk_text_boundaries():
    assert chunk_text("") == []
    assert chunk_text("a" * MAX_TEXT_LENGTH) == ["a" * MAX_TEXT_LENGTH]


def test_plain_text_ignores_urls():
    runs = plain_text("뉴스 https://example.com")
    assert runs == [{"type": "text", "text": {"content": "뉴스 https://example.com"}}]


# ── markdown_to_blocks ──


def test_markdown_to_blocks_one_block_per_line():
    blocks = markdown_to_blocks("Some text\n---\nOther text")
    assert [b["type"] for b in blocks] == ["paragraph", "divider", "paragraph"]


def test_markdown_to_blocks_handles_crlf():
    blocks = markdown_to_blocks("# Title\r\n---\r\n")
    assert [b["type"] for b in blocks] == ["heading_1", "divider", "paragraph"]


def test_bare_url_leaves_trailing_punctuation_out():
    runs = to_rich_text("(see https://x.com/a).")
    assert _contents(runs) == ["(see ", "https://x.com/a", ")."]
    assert runs[1]["text"]["link"]["url"] == "https://x.com/a"


def test_bare_url_keeps_inner_punctuation():
    runs = to_rich_text("원문: https://x.com/a?b=1, 끝")
    assert _contents(runs) == ["원문: ", "https://x.com/a?b=1", ", 끝"]
