"""Pure link analysis: unwrapping, classification, brand matching and scoring."""

from .brands import DEFAULT_BRANDS, BrandConfig, BrandMatcher, detect_brands, is_brand_allowed_domain
from .classify import HostClassification, HostClassifier, classify_host
from .scoring import RiskScorer, ScoreFlags, ScoreResult, score_link
from .unwrap import (
    DEFAULT_DECODERS,
    GatewayDecoder,
    GatewayUnwrapper,
    MimecastDecoder,
    ProofpointDecoder,
    SafeLinksDecoder,
    UnwrapResult,
    UnwrapState,
    unwrap,
)

__all__ = [
    "DEFAULT_BRANDS",
    "BrandConfig",
    "BrandMatcher",
    "detect_brands",
    "is_brand_allowed_domain",
    "HostClassification",
    "HostClassifier",
    "classify_host",
    "RiskScorer",
    "ScoreFlags",
    "ScoreResult",
    "score_link",
    "DEFAULT_DECODERS",
    "GatewayDecoder",
    "GatewayUnwrapper",
    "MimecastDecoder",
    "ProofpointDecoder",
    "SafeLinksDecoder",
    "UnwrapResult",
    "UnwrapState",
    "unwrap",
]
