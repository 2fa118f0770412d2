"""Centralized constants for LinkVet.

Static pattern tables shared by the unwrapper, classifier and scorer. They are
defaults only: components take their tables as constructor arguments so tests
and heuristics.yaml can substitute alternates.
"""

from enum import Enum


class RiskLabel(str, Enum):
    """Risk label derived from the total score."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @classmethod
    def from_score(cls, score: int) -> "RiskLabel":
        if score >= HIGH_RISK_THRESHOLD:
            return cls.HIGH
        if score >= MEDIUM_RISK_THRESHOLD:
            return cls.MEDIUM
        return cls.LOW

    def __str__(self) -> str:
        return self.value


HIGH_RISK_THRESHOLD = 70
MEDIUM_RISK_THRESHOLD = 40

# Hard cap on gateway hops followed by the unwrapper.
MAX_UNWRAP_ITERATIONS = 5

SAFELINKS = "SafeLinks"
MIMECAST = "Mimecast"
PROOFPOINT = "Proofpoint"

SAFELINKS_HOSTS: tuple[str, ...] = ("safelinks.protection.outlook.com",)
MIMECAST_HOSTS: tuple[str, ...] = ("mimecast.com", "mimecast-offshore.com")
PROOFPOINT_HOSTS: tuple[str, ...] = ("urldefense.proofpoint.com", "urldefense.com")

GATEWAY_HOSTS: tuple[str, ...] = SAFELINKS_HOSTS + MIMECAST_HOSTS + PROOFPOINT_HOSTS

# (host substring, vendor name), checked in order.
VENDOR_ASSET_PATTERNS: tuple[tuple[str, str], ...] = (
    ("zendesk.com", "Zendesk"),
    ("force.com", "Salesforce"),
    ("salesforce.com", "Salesforce"),
    ("cloudfront.net", "CloudFront"),
)

# Vendors that only count as an asset when the URL points at a static file.
FILE_ONLY_VENDORS: frozenset[str] = frozenset({"cloudfront.net"})
ASSET_FILE_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".gif", ".pdf", ".zip", ".svg")

DEFAULT_RISKY_TLDS: tuple[str, ...] = (".xyz", ".top", ".click", ".monster", ".club", ".work", ".info")

DOMAIN_AGE_CACHE_TTL_SECONDS = 24 * 60 * 60
RDAP_TIMEOUT_SECONDS = 3.0
DEFAULT_RDAP_BASE_URL = "https://rdap.org/domain/"
