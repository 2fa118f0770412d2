"""Domain registration age via RDAP.

Lookups are cached per base domain for a day, failures included, so a
registry that is down or slow is asked at most once per domain per TTL.
"""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx

from ..cache import TTLCache, create_domain_age_cache
from ..constants import DEFAULT_RDAP_BASE_URL, DOMAIN_AGE_CACHE_TTL_SECONDS, RDAP_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

# Only "registration" is ever adopted; the other kinds are scanned and skipped.
_SCANNED_EVENT_ACTIONS = ("registration", "last changed", "expiration")

# fromisoformat on 3.10 only takes 3 or 6 fractional digits and "+HH:MM" offsets.
_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")
_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")


def _parse_event_date(value: object) -> Optional[datetime]:
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    raw = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), raw)
    if "T" in raw:
        raw = _COMPACT_OFFSET.sub(r"\1:\2", raw)
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_registration_date(data: object) -> Optional[datetime]:
    """Return the earliest registration date from RDAP JSON (best-effort)."""
    if not isinstance(data, dict):
        return None
    events = data.get("events")
    if not isinstance(events, list):
        return None

    earliest: Optional[datetime] = None
    for event in events:
        if not isinstance(event, dict):
            continue
        action = event.get("eventAction")
        if action not in _SCANNED_EVENT_ACTIONS:
            continue
        event_date = _parse_event_date(event.get("eventDate"))
        if event_date is None:
            continue
        if earliest is None or event_date < earliest:
            if action == "registration":
                earliest = event_date
    return earliest


def age_in_days(registered_at: datetime, now: datetime) -> int:
    """Whole days elapsed, floored."""
    return (now - registered_at).days


class DomainAgeResolver:
    """Looks up domain age in days, caching results (and failures) per base domain."""

    def __init__(
        self,
        *,
        enabled: bool = True,
        cache: TTLCache | None = None,
        rdap_base_url: str = DEFAULT_RDAP_BASE_URL,
        timeout: float = RDAP_TIMEOUT_SECONDS,
        cache_ttl_seconds: float = DOMAIN_AGE_CACHE_TTL_SECONDS,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.enabled = enabled
        self.cache = cache if cache is not None else create_domain_age_cache(ttl_seconds=cache_ttl_seconds)
        self.rdap_base_url = rdap_base_url if rdap_base_url.endswith("/") else f"{rdap_base_url}/"
        self.timeout = timeout
        self._now = now

    def rdap_url(self, base_domain: str) -> str:
        return f"{self.rdap_base_url}{base_domain}"

    async def get_age_days(self, base_domain: str) -> Optional[int]:
        """Registration age of ``base_domain`` in days, or None when unknown."""
        if not self.enabled:
            return None
        key = (base_domain or "").strip().lower()
        if not key:
            return None
        return await self.cache.get_or_fetch(key, lambda: self._fetch_age_days(key))

    async def _request(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            return await client.get(url, headers={"Accept": "application/rdap+json, application/json"})

    async def _fetch_age_days(self, domain: str) -> Optional[int]:
        url = self.rdap_url(domain)
        try:
            # httpx applies its timeout per phase; this bounds the whole lookup.
            resp = await asyncio.wait_for(self._request(url), timeout=self.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.debug("RDAP lookup timed out for %s", domain)
            return None
        except Exception as e:
            logger.debug("RDAP lookup failed for %s: %s", domain, e)
            return None

        if resp.status_code != 200:
            logger.debug("RDAP lookup failed for %s (%s)", domain, resp.status_code)
            return None

        try:
            data = resp.json()
        except Exception:
            logger.debug("RDAP returned non-JSON response for %s", domain)
            return None

        registered_at = parse_registration_date(data)
        if registered_at is None:
            logger.debug("RDAP record for %s has no registration event", domain)
            return None

        return age_in_days(registered_at, self._now())
