"""Risk scoring for resolved links."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..constants import DEFAULT_RISKY_TLDS, RiskLabel

NO_RISK_REASON = "No significant risk factors detected"


@dataclass(frozen=True)
class ScoreFlags:
    age_days: Optional[int] = None
    tld: Optional[str] = None
    brand_mismatch: bool = False
    typosquat: bool = False


@dataclass
class ScoreResult:
    score: int
    label: RiskLabel
    reasons: list[str] = field(default_factory=list)


class RiskScorer:
    """Additive scoring over independent checks.

    Checks run in a fixed order (age, TLD, typosquat, brand) and reasons are
    appended in that order.
    """

    VERY_NEW_DOMAIN_DAYS = 30
    NEW_DOMAIN_DAYS = 90

    VERY_NEW_DOMAIN_POINTS = 30
    NEW_DOMAIN_POINTS = 15
    RISKY_TLD_POINTS = 10
    TYPOSQUAT_POINTS = 15
    BRAND_MISMATCH_POINTS = 10

    def __init__(self, risky_tlds: Iterable[str] = DEFAULT_RISKY_TLDS):
        self.risky_tlds = {self._normalize_tld(t) for t in risky_tlds if t}

    @staticmethod
    def _normalize_tld(tld: str) -> str:
        tld = tld.strip().lower()
        return tld if tld.startswith(".") else f".{tld}"

    def score(self, flags: ScoreFlags) -> ScoreResult:
        score = 0
        reasons: list[str] = []

        if flags.age_days is not None:
            if flags.age_days < self.VERY_NEW_DOMAIN_DAYS:
                score += self.VERY_NEW_DOMAIN_POINTS
                reasons.append(f"Domain registered only {flags.age_days} days ago")
            elif flags.age_days < self.NEW_DOMAIN_DAYS:
                score += self.NEW_DOMAIN_POINTS
                reasons.append(f"Domain is relatively new ({flags.age_days} days old)")

        if flags.tld and flags.tld.lower() in self.risky_tlds:
            score += self.RISKY_TLD_POINTS
            reasons.append(f"Uses risky top-level domain ({flags.tld})")

        if flags.typosquat:
            score += self.TYPOSQUAT_POINTS
            reasons.append("Potential typosquatting or homoglyph attack")

        if flags.brand_mismatch:
            score += self.BRAND_MISMATCH_POINTS
            reasons.append("Domain does not match expected brand")

        if not reasons:
            reasons.append(NO_RISK_REASON)

        return ScoreResult(score=score, label=RiskLabel.from_score(score), reasons=reasons)


_default_scorer = RiskScorer()


def score_link(flags: ScoreFlags | None = None) -> ScoreResult:
    return _default_scorer.score(flags or ScoreFlags())
