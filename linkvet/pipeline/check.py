"""Link check pipeline: unwrap, classify, enrich, score."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..analyzer.brands import BrandMatcher
from ..analyzer.classify import HostClassification, HostClassifier
from ..analyzer.scoring import RiskScorer, ScoreFlags, ScoreResult
from ..analyzer.unwrap import GatewayUnwrapper, UnwrapResult
from ..config import Config
from ..enrichment.domain_age import DomainAgeResolver
from ..errors import InputError
from ..utils.domains import extract_hostname, parse_absolute_url, public_suffix_split

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    target: UnwrapResult
    classification: HostClassification
    score: ScoreResult
    age_days: Optional[int] = None
    mismatched_brands: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "label": self.score.label.value,
            "score": self.score.score,
            "target": self.target.to_dict(),
            "reasons": list(self.score.reasons),
            "meta": {
                "ageDays": self.age_days,
                "isGateway": self.classification.is_gateway,
                "isVendorAsset": self.classification.is_vendor_asset,
            },
        }


def validate_check_input(url: object, context: object = None) -> tuple[str, Optional[str]]:
    """Validate raw request fields, raising InputError on bad input."""
    if not url or not isinstance(url, str):
        raise InputError("Invalid URL provided")
    try:
        parse_absolute_url(url)
    except ValueError as exc:
        raise InputError("Invalid URL format") from exc
    if context is not None and not isinstance(context, str):
        raise InputError("Invalid context provided", field="context")
    return url, context


class LinkChecker:
    """Sequences the analyzers for a single link check."""

    def __init__(
        self,
        *,
        unwrapper: GatewayUnwrapper | None = None,
        classifier: HostClassifier | None = None,
        brand_matcher: BrandMatcher | None = None,
        domain_age: DomainAgeResolver | None = None,
        scorer: RiskScorer | None = None,
        use_brand_mismatch: bool = True,
    ):
        self.unwrapper = unwrapper or GatewayUnwrapper()
        self.classifier = classifier or HostClassifier()
        self.brand_matcher = brand_matcher or BrandMatcher()
        self.domain_age = domain_age or DomainAgeResolver()
        self.scorer = scorer or RiskScorer()
        self.use_brand_mismatch = use_brand_mismatch

    @classmethod
    def from_config(cls, config: Config) -> "LinkChecker":
        return cls(
            brand_matcher=BrandMatcher(config.brands),
            domain_age=DomainAgeResolver(
                enabled=config.use_domain_age,
                rdap_base_url=config.rdap_base_url,
                timeout=config.rdap_timeout_seconds,
                cache_ttl_seconds=config.domain_age_cache_ttl_seconds,
            ),
            scorer=RiskScorer(config.risky_tlds),
            use_brand_mismatch=config.use_brand_mismatch,
        )

    async def check(self, url: object, context: object = None) -> CheckResult:
        """Run the full pipeline for ``url``.

        Raises InputError for bad input and ResolutionError when a gateway
        target cannot be parsed. Enrichment failures only reduce signal.
        """
        url, context = validate_check_input(url, context)

        target = self.unwrapper.unwrap(url)
        classification = self.classifier.classify(extract_hostname(target.display), target.display)
        age_days: Optional[int] = None
        # mailto: and javascript: targets have no host to look up.
        if target.base_domain:
            age_days = await self.domain_age.get_age_days(target.base_domain)

        mismatched: list[str] = []
        if self.use_brand_mismatch and context:
            mismatched = self.brand_matcher.mismatched_brands(context, target.base_domain)

        suffix = public_suffix_split(target.base_domain).public_suffix
        tld = f".{suffix}" if suffix else None

        score = self.scorer.score(
            ScoreFlags(
                age_days=age_days,
                tld=tld,
                brand_mismatch=bool(mismatched),
                # Homoglyph detection is not implemented.
                typosquat=False,
            )
        )

        logger.info(
            "Checked link on %s (score=%d, label=%s, via=%s)",
            target.base_domain,
            score.score,
            score.label.value,
            ",".join(target.via) or "-",
        )
        return CheckResult(
            target=target,
            classification=classification,
            score=score,
            age_days=age_days,
            mismatched_brands=mismatched,
        )
