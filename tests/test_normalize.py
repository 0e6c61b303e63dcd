from news_digest.models import Article
from news_digest.normalize import format_date, normalize_article, truncate_description


def _article(**overrides):
    fields = dict(
        title="Test Article",
        link="https://example.com",
        originallink="https://orig.com",
        description="Test description",
        pub_date="Mon, 23 Feb 2026 10:00:00 +0900",
    )
    fields.update(overrides)
    return Article(**fields)


def test_truncates_description_longer_than_200():
    result = normalize_article(_article(description="a" * 250))
    assert result.description == "a" * 200 + "…"


def test_keeps_description_of_200_or_less():
    desc = "a" * 200
    assert normalize_article(_article(description=desc)).description == desc


def test_pub_date_shortened_to_calendar_date():
    assert normalize_article(_article()).pub_date == "2026-02-23"


def test_pub_date_uses_its_own_timezone():
    # 23:30 KST is still the 23rd in Korea even though it is the 23rd 14:30 UTC
    assert format_date("Mon, 23 Feb 2026 23:30:00 +0900") == "2026-02-23"


def test_pub_date_iso_inputs():
    assert format_date("2026-02-23T10:00:00+09:00") == "2026-02-23"
    assert format_date("2026-02-23") == "2026-02-23"


def test_unparseable_pub_date_passes_through():
    assert normalize_article(_article(pub_date="어제")).pub_date == "어제"
    assert normalize_article(_article(pub_date="")).pub_date == ""


def test_originallink_dropped_when_same_as_link():
    result = normalize_article(_article(originallink="https://example.com"))
    assert result.originallink is None
    assert "originallink" not in result.to_dict()


def test_originallink_kept_when_different():
    result = normalize_article(_article())
    assert result.originallink == "https://orig.com"
    assert result.to_dict()["originallink"] == "https://orig.com"


def test_normalize_is_idempotent():
    samples = [
        _article(description="가" * 201),
        _article(description="짧은 설명", pub_date="garbage"),
        _article(originallink="https://example.com", pub_date="2026-02-23T01:00:00+09:00"),
        _article(originallink=None, description=""),
    ]
    for article in samples:
        once = normalize_article(article)
        assert normalize_article(once) == once


def test_normalize_keeps_identity():
    article = _article()
    assert normalize_article(article).link == article.link
    assert article.pub_date == "Mon, 23 Feb 2026 10:00:00 +0900"


def test_truncate_description_custom_limit():
    assert truncate_description("abcdef", limit=3) == "abc…"
