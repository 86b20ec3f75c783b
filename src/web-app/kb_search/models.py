"""Shared data models for knowledge search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_SEARCH_LIMIT = 10
ARTICLE_ENTITY_TYPE = "Knowledge_Article"


@dataclass(frozen=True)
class RawArticleRecord:
    """An article record as returned by the remote search procedure."""

    id: str
    primary_title: str | None = None
    secondary_title: str | None = None
    view_count: int = 0

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> RawArticleRecord:
        """Build a record from a JSON object.

        Accepts the platform field names (``Id``, ``Name``, ``Title__c``,
        ``View_Count__c``) as well as plain camelCase names.  A null view
        count is read as 0; a missing id or malformed count raises
        ``ValueError``.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"article record must be an object, got {type(payload).__name__}")

        article_id = _first_present(payload, "Id", "id")
        if article_id is None or article_id == "":
            raise ValueError("article record has no id")

        count = _first_present(payload, "View_Count__c", "viewCount")
        return cls(
            id=str(article_id),
            primary_title=_first_present(payload, "Name", "primaryTitle"),
            secondary_title=_first_present(payload, "Title__c", "secondaryTitle"),
            view_count=0 if count is None else to_view_count(count),
        )


def _first_present(payload: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def to_view_count(value: Any) -> int:
    """Convert a JSON number to a non-negative integer view count.

    Integral floats such as ``6.0`` are accepted; booleans, fractions,
    negatives and non-numbers raise ``ValueError``.
    """
    if isinstance(value, bool):
        raise ValueError(f"view count must be a number, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise ValueError(f"view count must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"view count must be non-negative, got {value}")
    return value


@dataclass(frozen=True)
class Article:
    """A renderable result row."""

    id: str
    display_name: str
    view_count: int

    @classmethod
    def from_record(cls, record: RawArticleRecord) -> Article:
        """Map a raw record, falling back from primary to secondary title."""
        return cls(
            id=record.id,
            display_name=record.primary_title or record.secondary_title or "",
            view_count=record.view_count,
        )


@dataclass(frozen=True)
class SearchQuery:
    """Parameters of one remote search."""

    term: str = ""
    limit: int = DEFAULT_SEARCH_LIMIT

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit <= 0:
            raise ValueError(f"limit must be a positive integer, got {self.limit!r}")


@dataclass(frozen=True)
class UIState:
    """Snapshot of the renderable search state."""

    loading: bool = False
    rows: tuple[Article, ...] = field(default_factory=tuple)

    @property
    def show_no_results(self) -> bool:
        return not self.loading and not self.rows


@dataclass(frozen=True)
class Notification:
    """A user-visible toast."""

    title: str
    message: str
    severity: str = "error"


@dataclass(frozen=True)
class NavigationRequest:
    """A request to open an article's detail view."""

    record_id: str
    target_type: str = "recordDetail"
    entity_type: str = ARTICLE_ENTITY_TYPE
    action: str = "view"
