"""Tests for risk scoring."""

import pytest

from linkvet.analyzer.scoring import NO_RISK_REASON, RiskScorer, ScoreFlags, score_link
from linkvet.constants import RiskLabel


def test_no_flags():
    result = score_link(ScoreFlags())
    assert result.score == 0
    assert result.label == RiskLabel.LOW
    assert result.reasons == [NO_RISK_REASON]


def test_default_argument():
    assert score_link().reasons == ["No significant risk factors detected"]


def test_young_domain_risky_tld_and_brand():
    result = score_link(ScoreFlags(age_days=5, tld=".xyz", brand_mismatch=True, typosquat=False))
    assert result.score == 50
    assert result.label == RiskLabel.MEDIUM
    assert result.reasons == [
        "Domain registered only 5 days ago",
        "Uses risky top-level domain (.xyz)",
        "Domain does not match expected brand",
    ]


def test_all_signals_stack():
    result = score_link(ScoreFlags(age_days=0, tld=".TOP", brand_mismatch=True, typosquat=True))
    assert result.score == 65
    assert result.label == RiskLabel.MEDIUM
    assert result.reasons[2] == "Potential typosquatting or homoglyph attack"
    assert result.reasons[3] == "Domain does not match expected brand"


@pytest.mark.parametrize(
    "age,points",
    [(0, 30), (29, 30), (30, 15), (89, 15), (90, 0), (3650, 0)],
)
def test_age_bands(age, points):
    assert score_link(ScoreFlags(age_days=age)).score == points


def test_relatively_new_reason():
    assert score_link(ScoreFlags(age_days=45)).reasons == ["Domain is relatively new (45 days old)"]


def test_unknown_age_adds_nothing():
    assert score_link(ScoreFlags(age_days=None, tld=".com")).score == 0


def test_tld_needs_leading_dot_match():
    assert score_link(ScoreFlags(tld="xyz")).score == 0
    assert score_link(ScoreFlags(tld=".Info")).score == 10


def test_label_thresholds():
    scorer = RiskScorer()
    scorer.VERY_NEW_DOMAIN_POINTS = 70
    assert scorer.score(ScoreFlags(age_days=1)).label == RiskLabel.HIGH
    assert RiskLabel.from_score(69) == RiskLabel.MEDIUM
    assert RiskLabel.from_score(40) == RiskLabel.MEDIUM
    assert RiskLabel.from_score(39) == RiskLabel.LOW


def test_custom_risky_tlds():
    scorer = RiskScorer(risky_tlds=["zip", ".MOV"])
    assert scorer.score(ScoreFlags(tld=".zip")).score == 10
    assert scorer.score(ScoreFlags(tld=".mov")).score == 10
    assert scorer.score(ScoreFlags(tld=".xyz")).score == 0
