from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Article:
    title: str
    link: str  # identity key for deduplication
    description: str
    pub_date: str
    originallink: Optional[str] = None  # None when identical to link

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"title": self.title, "link": self.link}
        if self.originallink is not None:
            data["originallink"] = self.originallink
        data["description"] = self.description
        data["pubDate"] = self.pub_date
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        return cls(
            title=str(data.get("title") or ""),
            link=str(data.get("link") or ""),
            description=str(data.get("description") or ""),
            pub_date=str(data.get("pubDate") or ""),
            originallink=str(data.get("originallink")) if data.get("originallink") else None,
        )


@dataclass
class SearchMeta:
    last_build_date: str
    total: int
    start: int
    display: int


@dataclass
class SearchPage:
    meta: SearchMeta
    articles: List[Article]
    fetched: int = 0  # raw items returned by the API before local filtering


@dataclass
class CategoryResult:
    category: str
    articles: List[Article] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "articles": [a.to_dict() for a in self.articles],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryResult":
        return cls(
            category=data.get("category", ""),
            articles=[Article.from_dict(a) for a in data.get("articles", [])],
        )


@dataclass
class AggregationRequest:
    categories: List[str]
    count_per_category: int
    only_korean: bool = False
    whitelist_domains: List[str] = field(default_factory=list)
    blacklist_domains: List[str] = field(default_factory=list)
    exclude_notices: bool = False  # drop "[알림] ..." style notice titles
