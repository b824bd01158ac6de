import pytest

from recommendations import FALLBACK, RECOMMENDATIONS, generate_recommendation, recommendation_bucket
from config import SCORING


def test_every_weighted_factor_has_all_buckets():
    assert set(RECOMMENDATIONS) == set(SCORING["weights"])
    for texts in RECOMMENDATIONS.values():
        assert set(texts) == {"low", "medium", "high"}


@pytest.mark.parametrize("score,bucket", [(0, "low"), (49, "low"), (50, "medium"), (69.9, "medium"), (70, "high"), (100, "high")])
def test_buckets(score, bucket):
    assert recommendation_bucket(score) == bucket


def test_generate_recommendation():
    assert generate_recommendation("metaTitle", 90) == "Great job! Your title tag is well-optimized."
    assert generate_recommendation("security", 10).startswith("Your page is not secure")


@pytest.mark.parametrize("factor", ["unknown", "", None, 5])
def test_unknown_factor_falls_back(factor):
    assert generate_recommendation(factor, 80) == FALLBACK


def test_non_numeric_score_is_low():
    assert generate_recommendation("headings", None) == RECOMMENDATIONS["headings"]["low"]
