"""
Analysis pipeline: raw page signals, content snippets and provider results
go through the scoring engine and land in the local store.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import yaml

from dataforseo import Found, KeywordData, NoResult, ReadabilityMetrics, Result, keyword_from_data
from models import AnalysisResult, CompetitorAnalysis, SavedContent, SavedKeyword
from scoring import (
    ScoreReport,
    build_report,
    calculate_content_score,
    calculate_description_score,
    calculate_headings_score,
    calculate_keyword_density_score,
    calculate_title_score,
    extract_domain,
    score_content_snippet,
)
from storage import LocalStore, generate_id

logger = logging.getLogger(__name__)


@dataclass
class PageSignals:
    """What is known about a page. ``None`` means the signal was not measured."""
    url: str = ""
    title: Optional[str] = None
    description: Optional[str] = None
    headings: Optional[list[dict]] = None
    content: Optional[str] = None
    keywords: list[str] = field(default_factory=list)
    # Factor scores measured elsewhere, e.g. pageSpeed or security.
    measured: dict[str, float] = field(default_factory=dict)


def parse_frontmatter(content: str) -> tuple[dict, str]:
    frontmatter = {}
    body = content
    fm_match = re.match(r'^---\s*\n(.*?)\n---\s*\n(.*)$', content, re.DOTALL)
    if fm_match:
        try:
            frontmatter = yaml.safe_load(fm_match.group(1)) or {}
        except yaml.YAMLError as e:
            logger.warning("Ignoring unparseable frontmatter: %s", e)
            frontmatter = {}
        if not isinstance(frontmatter, dict):
            frontmatter = {}
        body = fm_match.group(2)
    return frontmatter, body


def extract_headings(body: str) -> list[dict]:
    headings = []
    for line in body.split("\n"):
        match = re.match(r'^(#{1,4})\s+(.+)$', line.strip())
        if match:
            headings.append({"type": f"h{len(match.group(1))}", "content": match.group(2).strip()})
    return headings


def _keyword_list(value) -> list[str]:
    if isinstance(value, str):
        return [k.strip() for k in value.split(",") if k.strip()]
    if isinstance(value, list):
        return [str(k).strip() for k in value if str(k).strip()]
    return []


def page_from_markdown(text: str, keywords: Optional[list[str]] = None, url: str = "") -> PageSignals:
    """Build page signals from a markdown document with optional YAML frontmatter.

    Title and description come from the frontmatter; when no keywords are
    passed, the frontmatter ``keywords`` field is used.
    """
    frontmatter, body = parse_frontmatter(text)
    title = frontmatter.get("title")
    description = frontmatter.get("description")
    return PageSignals(
        url=url,
        title=str(title) if title is not None else None,
        description=str(description) if description is not None else None,
        headings=extract_headings(body),
        content=body,
        keywords=keywords if keywords is not None else _keyword_list(frontmatter.get("keywords")),
    )


def analyze_page(page: PageSignals) -> ScoreReport:
    factors = {}
    if page.title is not None:
        factors["metaTitle"] = calculate_title_score(page.title, page.keywords)
    if page.description is not None:
        factors["metaDescription"] = calculate_description_score(page.description, page.keywords)
    if page.headings is not None:
        factors["headings"] = calculate_headings_score(page.headings)
    if page.content is not None:
        factors["contentQuality"] = calculate_content_score(page.content)
        if page.keywords:
            factors["keywordDensity"] = calculate_keyword_density_score(page.content, page.keywords[0])
    for name, score in page.measured.items():
        factors.setdefault(name, score)
    report = build_report(factors)
    logger.info("Scored %s: %d/100 from %d factors", page.url or "page", report.overall, len(report.details))
    return report


def analyze_content(store: LocalStore, title: str, content: str,
                    target_keyword: str = "", additional_keywords: str = "",
                    readability: Optional[Result[ReadabilityMetrics]] = None) -> SavedContent:
    """Score a content snippet and save it.

    A ``Found`` readability result supplies the provider's readability
    score; ``NoResult`` or no result at all falls back to the local estimate.
    """
    keywords = ([target_keyword] if target_keyword else []) + _keyword_list(additional_keywords)
    provider_score = None
    if isinstance(readability, Found):
        provider_score = readability.value.readability_score
    elif isinstance(readability, NoResult):
        logger.info("Estimating readability locally: %s", readability.reason)
    score = score_content_snippet(content, target_keyword, readability_score=provider_score)
    saved = SavedContent(
        id=generate_id(),
        title=title,
        content=content,
        target_keywords=keywords,
        score=score,
    )
    return store.save_content(saved)


def record_site_analysis(store: LocalStore, url: str, report: ScoreReport,
                         task_id: Optional[str] = None) -> AnalysisResult:
    analysis = AnalysisResult(
        id=generate_id(),
        url=url,
        date_analyzed=store.clock(),
        score=report.overall,
        task_id=task_id,
        summary_data=report.to_dict(),
    )
    return store.save_analysis_result(analysis)


def record_competitor_analysis(store: LocalStore, main_domain: str, competitor_domains: list[str],
                               results=None, task_ids: Optional[list[str]] = None) -> CompetitorAnalysis:
    competitors = [d for d in competitor_domains if d]
    analysis = CompetitorAnalysis(
        id=generate_id(),
        main_domain=main_domain,
        competitor_domains=competitors,
        task_ids=task_ids,
        results=results,
    )
    logger.info("Comparing %s against %d competitors", extract_domain(main_domain), len(competitors))
    return store.save_competitor_analysis(analysis)


def save_keyword_result(store: LocalStore, result: Result[KeywordData]) -> Optional[SavedKeyword]:
    if isinstance(result, NoResult):
        logger.warning("No keyword data to save: %s", result.reason)
        return None
    if isinstance(result, Found):
        return store.save_keyword(keyword_from_data(result.value, generate_id()))
    raise TypeError(f"Unexpected result type: {type(result).__name__}")
