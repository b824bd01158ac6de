"""
SEO Scoring Engine: normalized 0-100 scores for page and content signals.

Every function here is total. Missing or malformed input scores 0 (or the
documented default) instead of raising, so a caller can always render a
result.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse

from config import SCORING
from recommendations import generate_recommendation


@dataclass
class FactorScore:
    factor: str
    score: int
    category: str
    css_class: str
    recommendation: str


@dataclass
class ScoreReport:
    overall: int
    details: list[FactorScore] = field(default_factory=list)

    @property
    def category(self) -> str:
        return get_score_category(self.overall)

    @property
    def level(self) -> "ScoreLevel":
        return get_score_level(self.overall)

    def factors(self) -> dict[str, int]:
        return {d.factor: d.score for d in self.details}

    def to_dict(self) -> dict:
        level = self.level
        return {
            "score": self.overall,
            "category": self.category,
            "level": {"label": level.label, "color": level.color},
            "factors": [
                {
                    "name": d.factor,
                    "score": d.score,
                    "category": d.category,
                    "class": d.css_class,
                    "recommendation": d.recommendation,
                }
                for d in self.details
            ],
        }

    def summary(self) -> str:
        lines = [
            f"═══ SEO SCORE: {self.overall}/100 ({self.level.label}) ═══",
            "",
        ]
        for d in sorted(self.details, key=lambda x: x.score):
            bar_len = int(d.score / 5)
            bar = "█" * bar_len + "░" * (20 - bar_len)
            lines.append(f"  {d.factor:<22} {bar} {d.score}/100 ({d.category})")
        lines.append("")
        worst = [d for d in sorted(self.details, key=lambda x: x.score)[:3] if d.score < 70]
        if worst:
            lines.append("  TOP IMPROVEMENT AREAS:")
            for d in worst:
                lines.append(f"    → {d.factor}: {d.recommendation}")
        return "\n".join(lines)


@dataclass(frozen=True)
class ScoreLevel:
    label: str
    color: str


@dataclass(frozen=True)
class Readability:
    score: int
    label: str


def round_half_up(value: float) -> int:
    # Half-up, unlike round(); stored scores were rounded this way.
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> float:
    return max(0, min(100, value))


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (math.isnan(value) or math.isinf(value))


def _words(text: str) -> list[str]:
    return text.split()


# ── Length + keyword scorers ──────────────────────────────────────────


def _length_points(length: int, band: dict) -> int:
    points = SCORING["length_points"]
    if band["ideal_min"] <= length <= band["ideal_max"]:
        return points["ideal"]
    if band["acceptable_min"] <= length <= band["acceptable_max"]:
        return points["acceptable"]
    if length > 0:
        return points["present"]
    return 0


def _contains_any_keyword(text: str, keywords: list) -> bool:
    text_lower = text.lower()
    return any(
        isinstance(kw, str) and kw.lower() in text_lower
        for kw in keywords
    )


def _length_and_keyword_score(text, target_keywords, band: dict) -> int:
    if not text or not isinstance(text, str):
        return 0
    score = _length_points(len(text), band)
    keywords = list(target_keywords) if isinstance(target_keywords, (list, tuple)) else []
    if keywords:
        if _contains_any_keyword(text, keywords):
            score += 100
        return round_half_up(score / 2)
    return score


def calculate_title_score(title: Optional[str], target_keywords: Optional[list[str]] = None) -> int:
    """Score a title tag on length (50-60 ideal) and keyword presence.

    With no target keywords the length subscore is returned as-is; with
    keywords the result is the average of the length and keyword subscores,
    so a title that misses every keyword scores lower than one scored
    without keywords at all.
    """
    return _length_and_keyword_score(title, target_keywords, SCORING["title"])


def calculate_description_score(description: Optional[str], target_keywords: Optional[list[str]] = None) -> int:
    """Score a meta description on length (150-160 ideal) and keyword presence."""
    return _length_and_keyword_score(description, target_keywords, SCORING["description"])


# ── Structure scorers ─────────────────────────────────────────────────


def _heading_type(heading) -> Optional[str]:
    if isinstance(heading, dict):
        return heading.get("type")
    return getattr(heading, "type", None)


def calculate_headings_score(headings) -> int:
    if not headings or not isinstance(headings, (list, tuple)):
        return 0
    types = [_heading_type(h) for h in headings]
    score = 0
    if "h1" in types:
        score += 50
    if "h2" in types:
        score += 25
    h1_count = types.count("h1")
    if h1_count == 1:
        score += 25
    elif h1_count > 1:
        score -= 25
    return int(clamp_score(score))


def calculate_content_score(content: Optional[str], min_words: int = SCORING["content"]["min_words"]) -> int:
    """Rough content quality estimate from length, paragraphs and sentence variety."""
    if not content or not isinstance(content, str):
        return 0
    cfg = SCORING["content"]
    score = 0

    word_count = len(_words(content))
    if word_count >= min_words:
        score += 60
    elif word_count >= min_words / 2:
        score += 30

    paragraphs = re.split(r'\n\s*\n', content)
    if len(paragraphs) >= cfg["min_paragraphs"]:
        score += 20

    sentences = [s for s in re.split(r'[.!?]+', content) if s]
    lengths = [len(_words(s)) for s in sentences]
    has_variety = (
        any(n <= cfg["short_sentence_max"] for n in lengths)
        and any(n > cfg["long_sentence_min"] for n in lengths)
    )
    if has_variety:
        score += 20

    return score


def count_occurrences(haystack: str, needle: str) -> int:
    """Count overlapping substring matches; not word-boundary aware."""
    if not needle:
        return 0
    count = 0
    index = haystack.find(needle)
    while index != -1:
        count += 1
        index = haystack.find(needle, index + 1)
    return count


def keyword_density(content: Optional[str], keyword: Optional[str]) -> float:
    if not content or not keyword or not isinstance(content, str) or not isinstance(keyword, str):
        return 0.0
    content_lower = content.lower()
    keyword_lower = keyword.lower()
    total_words = len(_words(content_lower))
    if total_words == 0:
        return 0.0
    occurrences = count_occurrences(content_lower, keyword_lower)
    return occurrences * len(_words(keyword_lower)) / total_words * 100


def calculate_keyword_density_score(content: Optional[str], keyword: Optional[str]) -> int:
    cfg = SCORING["keyword_density"]
    density = keyword_density(content, keyword)
    if cfg["target_min"] <= density <= cfg["target_max"]:
        return 100
    if 0 < density < cfg["target_min"]:
        return 70
    if cfg["target_max"] < density <= cfg["over_max"]:
        return 50
    if density > cfg["over_max"]:
        return 30  # over-optimized
    return 0


def count_syllables(word: str) -> int:
    word = re.sub(r'[^a-z]', '', word.lower())
    if not word:
        return 0
    if len(word) <= 3:
        return 1
    word = re.sub(r'(?:[^laeiouy]es|ed|[^laeiouy]e)$', '', word)
    word = re.sub(r'^y', '', word)
    return max(1, len(re.findall(r'[aeiouy]+', word)))


def calculate_readability_score(content: Optional[str]) -> Readability:
    """Flesch reading ease, clamped to 0-100, with a display label."""
    cfg = SCORING["readability"]
    if not content or not isinstance(content, str):
        return Readability(score=0, label="Difficult")
    words = _words(content)
    sentences = [s for s in re.split(r'[.!?]+', content) if s.strip()]
    if not words or not sentences:
        return Readability(score=0, label="Difficult")
    syllables = sum(count_syllables(w) for w in words)
    flesch = 206.835 - 1.015 * (len(words) / len(sentences)) - 84.6 * (syllables / len(words))
    score = round_half_up(clamp_score(flesch))
    if score > cfg["easy_min"]:
        label = "Easy to read"
    elif score > cfg["moderate_min"]:
        label = "Moderately difficult"
    else:
        label = "Difficult"
    return Readability(score=score, label=label)


def score_content_snippet(content: Optional[str], keyword: Optional[str],
                          readability_score: Optional[float] = None) -> int:
    """Combined content score: mean of quality, keyword density and readability.

    A provider-measured ``readability_score`` is used when given; otherwise
    readability is estimated locally with the Flesch formula.
    """
    quality = calculate_content_score(content)
    density = calculate_keyword_density_score(content, keyword)
    if _is_number(readability_score):
        readability = clamp_score(readability_score)
    else:
        readability = calculate_readability_score(content).score
    return round_half_up((quality + density + readability) / 3)


# ── Aggregation + labels ──────────────────────────────────────────────


def calculate_seo_score(factors: dict) -> int:
    """Weighted overall score from per-factor scores.

    Unknown factor names and non-numeric scores are ignored. When only part
    of the weight table is present (total weight below 1) the sum is
    renormalized by the weight applied. The full table sums to 1.0, so a
    complete factor set is a plain weighted average. The result is clamped
    to 0-100.
    """
    if not isinstance(factors, dict):
        return 0
    weights = SCORING["weights"]
    weighted = 0.0
    applied = 0.0
    for name, score in factors.items():
        if name in weights and _is_number(score):
            weighted += clamp_score(score) * weights[name]
            applied += weights[name]
    if 0 < applied < 1:
        weighted = weighted / applied
    return int(clamp_score(round_half_up(weighted)))


def get_score_category(score) -> str:
    thresholds = SCORING["category_thresholds"]
    if not _is_number(score):
        return "critical"
    for label in ("excellent", "good", "average", "poor"):
        if score >= thresholds[label]:
            return label
    return "critical"


def get_score_class(score) -> str:
    thresholds = SCORING["class_thresholds"]
    if not _is_number(score):
        return "score-low"
    for css_class in ("score-high", "score-medium"):
        if score >= thresholds[css_class]:
            return css_class
    return "score-low"


def get_score_level(score) -> ScoreLevel:
    if _is_number(score):
        for threshold, label, color in SCORING["level_thresholds"]:
            if score >= threshold:
                return ScoreLevel(label=label, color=color)
    return ScoreLevel(label="Critical", color="red")


def build_report(factors: dict) -> ScoreReport:
    details = []
    if isinstance(factors, dict):
        for name, score in factors.items():
            if name not in SCORING["weights"] or not _is_number(score):
                continue
            value = round_half_up(clamp_score(score))
            details.append(FactorScore(
                factor=name, score=value,
                category=get_score_category(value),
                css_class=get_score_class(value),
                recommendation=generate_recommendation(name, value),
            ))
    return ScoreReport(overall=calculate_seo_score(factors), details=details)


# ── Display helpers ───────────────────────────────────────────────────


def extract_domain(url: str) -> str:
    if not url or not isinstance(url, str):
        return ""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        hostname = None
    if hostname and "://" in url:
        return hostname
    match = re.match(r'^(?:https?://)?(?:[^@\n]+@)?(?:www\.)?([^:/\n?]+)', url, re.IGNORECASE)
    return match.group(1) if match else url


def format_number(num) -> str:
    if isinstance(num, float) and num.is_integer():
        num = int(num)
    text = str(num)
    whole, dot, frac = text.partition(".")
    sign = "-" if whole.startswith("-") else ""
    digits = whole.lstrip("-")
    grouped = re.sub(r'\B(?=(\d{3})+(?!\d))', ",", digits)
    return f"{sign}{grouped}{dot}{frac}"
