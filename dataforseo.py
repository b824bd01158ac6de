"""
Typed results for DataForSEO responses.

Every provider response shares the ``{"tasks": [{"result": [...]}]}``
envelope. Each call site gets an explicit parser that returns either
``Found`` with typed data or ``NoResult`` naming what was missing, so
callers handle the empty branch instead of chaining through untyped dicts.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, Union

from models import SavedKeyword
from scoring import round_half_up

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NoResult:
    reason: str


Result = Union[Found[T], NoResult]


@dataclass
class OnPageSummary:
    pages_crawled: int = 0
    onpage_score: Optional[float] = None
    checks: dict[str, int] = field(default_factory=dict)


@dataclass
class KeywordData:
    keyword: str
    search_volume: Optional[int] = None
    cpc: Optional[float] = None
    competition: Optional[float] = None
    categories: list[Any] = field(default_factory=list)


@dataclass
class ContentAnalysis:
    keyword_density: float = 0.0
    total_count: int = 0


@dataclass
class ReadabilityMetrics:
    readability_score: float = 0.0
    readability_level: str = "N/A"
    sentence_count: int = 0
    word_count: int = 0


def _number(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return value
    return None


def first_result(payload) -> Result[list]:
    """Return the first task's ``result`` list, or why there is none."""
    if not isinstance(payload, dict):
        return NoResult("response is not an object")
    tasks = payload.get("tasks")
    if not isinstance(tasks, list) or not tasks:
        return NoResult("response has no tasks")
    task = tasks[0]
    if not isinstance(task, dict):
        return NoResult("task is not an object")
    result = task.get("result")
    if not isinstance(result, list) or not result:
        message = task.get("status_message")
        return NoResult(f"task has no result ({message})" if message else "task has no result")
    return Found(result)


def parse_on_page_summary(payload) -> Result[OnPageSummary]:
    found = first_result(payload)
    if isinstance(found, NoResult):
        return found
    item = found.value[0]
    if not isinstance(item, dict):
        return NoResult("summary item is not an object")
    page_metrics = item.get("page_metrics") or {}
    crawl_status = item.get("crawl_status") or {}
    checks = page_metrics.get("checks") if isinstance(page_metrics, dict) else None
    return Found(OnPageSummary(
        pages_crawled=int(_number(crawl_status.get("pages_crawled")) or 0) if isinstance(crawl_status, dict) else 0,
        onpage_score=_number(page_metrics.get("onpage_score")) if isinstance(page_metrics, dict) else None,
        checks={k: v for k, v in checks.items() if _number(v) is not None} if isinstance(checks, dict) else {},
    ))


def _keyword_data(item) -> Optional[KeywordData]:
    if not isinstance(item, dict) or not isinstance(item.get("keyword"), str):
        return None
    volume = _number(item.get("search_volume"))
    categories = item.get("categories")
    return KeywordData(
        keyword=item["keyword"],
        search_volume=int(volume) if volume is not None else None,
        cpc=_number(item.get("cpc")),
        competition=_number(item.get("competition")),
        categories=list(categories) if isinstance(categories, list) else [],
    )


def parse_keyword_data(payload) -> Result[KeywordData]:
    found = first_result(payload)
    if isinstance(found, NoResult):
        return found
    data = _keyword_data(found.value[0])
    if data is None:
        return NoResult("keyword item has no keyword")
    return Found(data)


def parse_keyword_suggestions(payload) -> Result[list[KeywordData]]:
    found = first_result(payload)
    if isinstance(found, NoResult):
        return found
    suggestions = [d for d in (_keyword_data(item) for item in found.value) if d is not None]
    if not suggestions:
        return NoResult("no usable keyword suggestions")
    return Found(suggestions)


def parse_content_analysis(payload) -> Result[ContentAnalysis]:
    found = first_result(payload)
    if isinstance(found, NoResult):
        return found
    item = found.value[0]
    if not isinstance(item, dict):
        return NoResult("content analysis item is not an object")
    density = _number(item.get("keyword_density"))
    total = _number(item.get("total_count"))
    return Found(ContentAnalysis(
        keyword_density=density or 0.0,
        total_count=int(total) if total is not None else 0,
    ))


def parse_readability(payload) -> Result[ReadabilityMetrics]:
    """Text metrics from the readability endpoint; absent fields fall back to 0 or "N/A"."""
    found = first_result(payload)
    if isinstance(found, NoResult):
        return found
    item = found.value[0]
    if not isinstance(item, dict):
        return NoResult("readability item is not an object")
    score = _number(item.get("readability_score"))
    level = item.get("readability_level")
    sentences = _number(item.get("sentence_count"))
    words = _number(item.get("word_count"))
    return Found(ReadabilityMetrics(
        readability_score=score or 0.0,
        readability_level=level if isinstance(level, str) and level else "N/A",
        sentence_count=int(sentences) if sentences is not None else 0,
        word_count=int(words) if words is not None else 0,
    ))


def keyword_from_data(data: KeywordData, keyword_id: str) -> SavedKeyword:
    difficulty = round_half_up(data.competition * 100) if data.competition else None
    return SavedKeyword(
        id=keyword_id,
        keyword=data.keyword,
        volume=data.search_volume,
        cpc=data.cpc,
        difficulty=difficulty,
    )
