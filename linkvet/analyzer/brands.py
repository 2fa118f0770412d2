"""Brand detection in free-text context and approved-domain validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True)
class BrandConfig:
    name: str
    keywords: tuple[str, ...]
    allowed_domains: tuple[str, ...]

    @classmethod
    def create(cls, name: str, keywords: Iterable[str], allowed_domains: Iterable[str]) -> "BrandConfig":
        """Build a normalized (lowercased, deduplicated) brand entry."""
        return cls(
            name=name.strip(),
            keywords=tuple(dict.fromkeys(k.strip().lower() for k in keywords if k and k.strip())),
            allowed_domains=tuple(
                dict.fromkeys(d.strip().lower().strip(".") for d in allowed_domains if d and d.strip())
            ),
        )


DEFAULT_BRANDS: tuple[BrandConfig, ...] = (
    BrandConfig.create(
        "Microsoft",
        ["microsoft", "office", "outlook", "teams", "azure", "windows"],
        [
            "microsoft.com",
            "office.com",
            "live.com",
            "microsoftonline.com",
            "office365.com",
            "outlook.com",
            "sharepoint.com",
        ],
    ),
    BrandConfig.create(
        "Google",
        ["google", "gmail", "drive", "docs", "meet"],
        [
            "google.com",
            "gmail.com",
            "youtube.com",
            "gstatic.com",
            "googleapis.com",
            "googleusercontent.com",
        ],
    ),
    BrandConfig.create(
        "Amazon",
        ["amazon", "aws", "prime"],
        ["amazon.com", "aws.amazon.com", "amazonaws.com", "awsstatic.com"],
    ),
)


class BrandMatcher:
    """Matches brand keywords against context text and validates domains."""

    def __init__(self, brands: Sequence[BrandConfig] = DEFAULT_BRANDS):
        self.brands = tuple(brands)
        self._by_name = {b.name: b for b in self.brands}

    def detect_brands(self, text: str) -> list[str]:
        """Return brand names mentioned in ``text`` (registry order, no duplicates)."""
        if not text:
            return []
        lower = text.lower()
        detected: list[str] = []
        for brand in self.brands:
            if brand.name in detected:
                continue
            if any(keyword in lower for keyword in brand.keywords):
                detected.append(brand.name)
        return detected

    def is_brand_allowed_domain(self, brand: str, base_domain: str) -> bool:
        """True when ``base_domain`` is (a subdomain of) an approved domain for ``brand``.

        Unknown brands are allowed: a missing registry entry never raises risk.
        """
        config = self._by_name.get(brand)
        if config is None:
            return True
        lower = (base_domain or "").lower()
        return any(lower == allowed or lower.endswith(f".{allowed}") for allowed in config.allowed_domains)

    def mismatched_brands(self, text: str, base_domain: str) -> list[str]:
        """Brands mentioned in ``text`` that ``base_domain`` does not belong to."""
        return [b for b in self.detect_brands(text) if not self.is_brand_allowed_domain(b, base_domain)]


_default_matcher = BrandMatcher()


def detect_brands(text: str) -> list[str]:
    return _default_matcher.detect_brands(text)


def is_brand_allowed_domain(brand: str, base_domain: str) -> bool:
    return _default_matcher.is_brand_allowed_domain(brand, base_domain)
