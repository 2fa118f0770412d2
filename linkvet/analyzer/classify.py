"""Host classification against gateway and vendor-asset patterns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..constants import ASSET_FILE_EXTENSIONS, FILE_ONLY_VENDORS, GATEWAY_HOSTS, VENDOR_ASSET_PATTERNS


@dataclass
class HostClassification:
    is_gateway: bool = False
    is_vendor_asset: bool = False
    flags: list[str] = field(default_factory=list)


class HostClassifier:
    """Tags a hostname as a known gateway and/or vendor-hosted asset.

    Matching is case-insensitive substring containment, not suffix matching.
    """

    def __init__(
        self,
        gateway_hosts: Sequence[str] = GATEWAY_HOSTS,
        vendor_patterns: Sequence[tuple[str, str]] = VENDOR_ASSET_PATTERNS,
        file_only_vendors: frozenset[str] | set[str] = FILE_ONLY_VENDORS,
        asset_extensions: Sequence[str] = ASSET_FILE_EXTENSIONS,
    ):
        self.gateway_hosts = tuple(h.lower() for h in gateway_hosts)
        self.vendor_patterns = tuple((p.lower(), name) for p, name in vendor_patterns)
        self.file_only_vendors = frozenset(p.lower() for p in file_only_vendors)
        self.asset_extensions = tuple(e.lower() for e in asset_extensions)

    def _looks_like_file(self, href: str) -> bool:
        lower = (href or "").lower()
        return any(ext in lower for ext in self.asset_extensions)

    def classify(self, hostname: str, full_href: str) -> HostClassification:
        host = (hostname or "").lower()
        result = HostClassification()

        for gateway in self.gateway_hosts:
            if gateway in host:
                result.is_gateway = True
                break

        for pattern, name in self.vendor_patterns:
            if pattern not in host:
                continue
            # A file-only vendor without a file extension still ends the scan.
            if pattern in self.file_only_vendors and not self._looks_like_file(full_href):
                break
            result.is_vendor_asset = True
            result.flags.append(f"{name} asset")
            break

        return result


_default_classifier = HostClassifier()


def classify_host(hostname: str, full_href: str) -> HostClassification:
    return _default_classifier.classify(hostname, full_href)
