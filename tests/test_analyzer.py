import logging

from analyzer import (
    PageSignals,
    analyze_content,
    analyze_page,
    extract_headings,
    page_from_markdown,
    parse_frontmatter,
    record_competitor_analysis,
    record_site_analysis,
    save_keyword_result,
)
from dataforseo import Found, KeywordData, NoResult, ReadabilityMetrics

DOCUMENT = """---
title: "Best SEO Tools for Small Business Owners in 2026 Ranked"
description: Short description.
keywords: [seo tools, rank tracking]
---
# Best SEO Tools

## Rank tracking

Some body text about seo tools.
"""


def test_parse_frontmatter():
    frontmatter, body = parse_frontmatter(DOCUMENT)
    assert frontmatter["keywords"] == ["seo tools", "rank tracking"]
    assert body.startswith("# Best SEO Tools")


def test_parse_frontmatter_bad_yaml(caplog):
    with caplog.at_level(logging.WARNING, logger="analyzer"):
        frontmatter, body = parse_frontmatter("---\ntitle: [unclosed\n---\nBody\n")
    assert frontmatter == {}
    assert body == "Body\n"
    assert "frontmatter" in caplog.text


def test_parse_frontmatter_absent():
    assert parse_frontmatter("Plain text") == ({}, "Plain text")


def test_extract_headings():
    assert extract_headings("# One\ntext\n## Two\n#### Four\n##### Five") == [
        {"type": "h1", "content": "One"},
        {"type": "h2", "content": "Two"},
        {"type": "h4", "content": "Four"},
    ]


def test_page_from_markdown():
    page = page_from_markdown(DOCUMENT, url="https://example.com/tools")
    assert page.title.startswith("Best SEO Tools")
    assert page.keywords == ["seo tools", "rank tracking"]
    assert [h["type"] for h in page.headings] == ["h1", "h2"]


def test_analyze_page_title_only():
    report = analyze_page(PageSignals(title="x" * 55))
    assert report.overall == 100
    assert report.factors() == {"metaTitle": 100}


def test_analyze_page_with_measured_factors():
    report = analyze_page(PageSignals(title="x" * 55, measured={"pageSpeed": 40}))
    assert report.factors() == {"metaTitle": 100, "pageSpeed": 40}
    assert report.overall == 70


def test_analyze_page_from_markdown():
    report = analyze_page(page_from_markdown(DOCUMENT))
    factors = report.factors()
    assert factors["metaTitle"] == 100
    assert factors["metaDescription"] == 20
    assert factors["headings"] == 100
    assert set(factors) == {"metaTitle", "metaDescription", "headings", "contentQuality", "keywordDensity"}
    assert 0 <= report.overall <= 100


def test_analyze_content_saves_scored_content(store):
    saved = analyze_content(store, "Draft", "The cat sat. The dog ran.", "cat", "pets, animals ,")
    assert saved.score == 43
    assert saved.target_keywords == ["cat", "pets", "animals"]
    [stored] = store.get_saved_content()
    assert stored.id == saved.id
    assert stored.date_created == "2026-01-01T00:00:00.000Z"


def test_analyze_content_uses_provider_readability(store):
    readability = Found(ReadabilityMetrics(readability_score=70, readability_level="Fairly Easy"))
    saved = analyze_content(store, "Draft", "The cat sat. The dog ran.", "cat", readability=readability)
    assert saved.score == 33


def test_analyze_content_falls_back_without_provider_readability(store, caplog):
    with caplog.at_level(logging.INFO, logger="analyzer"):
        saved = analyze_content(store, "Draft", "The cat sat. The dog ran.", "cat",
                                readability=NoResult("task has no result"))
    assert saved.score == 43
    assert "task has no result" in caplog.text


def test_record_site_analysis(store):
    report = analyze_page(PageSignals(title="x" * 55))
    saved = record_site_analysis(store, "https://example.com", report, task_id="t-1")
    [stored] = store.get_recent_analyses()
    assert stored.id == saved.id
    assert stored.score == 100
    assert stored.task_id == "t-1"
    assert stored.summary_data["score"] == 100


def test_record_site_analysis_keeps_ten(store):
    report = analyze_page(PageSignals(title="x" * 55))
    for i in range(12):
        record_site_analysis(store, f"https://site{i}.com", report)
    analyses = store.get_recent_analyses()
    assert len(analyses) == 10
    assert analyses[0].url == "https://site11.com"


def test_record_competitor_analysis(store):
    saved = record_competitor_analysis(store, "example.com", ["rival.com", "", "other.com"], results=[])
    assert saved.competitor_domains == ["rival.com", "other.com"]
    assert store.get_competitor_analyses()[0].main_domain == "example.com"


def test_save_keyword_result(store, caplog):
    with caplog.at_level(logging.WARNING, logger="analyzer"):
        assert save_keyword_result(store, NoResult("task has no result")) is None
    assert store.get_saved_keywords() == []
    assert "task has no result" in caplog.text

    saved = save_keyword_result(store, Found(KeywordData(keyword="seo", competition=0.3)))
    assert saved.difficulty == 30
    assert [k.keyword for k in store.get_saved_keywords()] == ["seo"]
