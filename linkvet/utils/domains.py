"""URL and domain normalization utilities."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

import tldextract

# Bundled public suffix snapshot; no network fetch on first use.
_extract = tldextract.TLDExtract(suffix_list_urls=())

_HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


@dataclass(frozen=True)
class SuffixSplit:
    registrable_domain: str | None
    public_suffix: str | None


def public_suffix_split(hostname: str) -> SuffixSplit:
    """Split a hostname into its registrable domain and public suffix."""
    host = (hostname or "").strip().lower().strip(".")
    if not host:
        return SuffixSplit(None, None)
    extracted = _extract(host)
    suffix = extracted.suffix or None
    if extracted.domain and extracted.suffix:
        return SuffixSplit(f"{extracted.domain}.{extracted.suffix}", suffix)
    return SuffixSplit(None, suffix)


def registered_domain(hostname: str) -> str:
    """Return the registrable domain for a host, falling back to the host itself."""
    host = (hostname or "").strip().lower()
    return public_suffix_split(host).registrable_domain or host


def parse_absolute_url(value: str) -> SplitResult:
    """
    Parse ``value`` as an absolute URL.

    Any scheme is accepted; ``mailto:`` and ``javascript:`` URLs parse with an
    empty hostname. Web schemes must carry a host.

    Raises ValueError when there is no scheme, when a web URL has no host, or
    when the authority is malformed (for example a non-numeric port).
    """
    if not isinstance(value, str):
        raise ValueError("URL must be a string")
    candidate = value.strip()
    if not candidate:
        raise ValueError("URL is empty")
    parsed = urlsplit(candidate)
    if not parsed.scheme or any(ch.isspace() for ch in parsed.netloc):
        raise ValueError(f"Invalid URL: {value!r}")
    # Accessing .port validates it.
    parsed.port
    if parsed.scheme in _HOST_REQUIRED_SCHEMES and not parsed.hostname:
        raise ValueError(f"Invalid URL: {value!r}")
    return parsed


def is_absolute_url(value: object) -> bool:
    try:
        parse_absolute_url(value)  # type: ignore[arg-type]
    except ValueError:
        return False
    return True


def extract_hostname(url: str) -> str:
    """Lowercased hostname of an absolute URL (port stripped)."""
    return (parse_absolute_url(url).hostname or "").lower()
