"""Link gateway unwrapping.

Mail-security products rewrite links so clicks pass through their scanners
first. The unwrapper peels those layers off one hop at a time until the URL
no longer points at a known gateway, a gateway hop carries no target, or the
hop limit is reached.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence
from urllib.parse import SplitResult, parse_qs, unquote

from ..constants import (
    MAX_UNWRAP_ITERATIONS,
    MIMECAST,
    MIMECAST_HOSTS,
    PROOFPOINT,
    PROOFPOINT_HOSTS,
    SAFELINKS,
    SAFELINKS_HOSTS,
)
from ..errors import ResolutionError
from ..utils.domains import parse_absolute_url, registered_domain

logger = logging.getLogger(__name__)

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class GatewayDecodeError(ValueError):
    """A gateway target parameter could not be decoded."""


def strict_unquote(value: str) -> str:
    """Percent-decode ``value``, rejecting malformed escapes and invalid UTF-8."""
    if _BAD_ESCAPE.search(value):
        raise GatewayDecodeError(f"Malformed percent-escape in {value!r}")
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as exc:
        raise GatewayDecodeError(f"Invalid UTF-8 sequence in {value!r}") from exc


def _query_param(parsed: SplitResult, name: str) -> Optional[str]:
    values = parse_qs(parsed.query, keep_blank_values=True).get(name)
    if not values:
        return None
    return values[0]


class GatewayDecoder:
    """Strategy for one gateway family."""

    name: str = ""
    hosts: Sequence[str] = ()
    param: str = "url"
    # When set, an undecodable target ends the walk instead of failing the request.
    stop_on_decode_error: bool = False

    def matches(self, hostname: str) -> bool:
        host = hostname.lower()
        return any(pattern in host for pattern in self.hosts)

    def decode(self, value: str) -> str:
        return strict_unquote(value)

    def extract_target(self, parsed: SplitResult) -> Optional[str]:
        """Return the wrapped target, or None when the hop carries none."""
        value = _query_param(parsed, self.param)
        if not value:
            return None
        return self.decode(value)


class SafeLinksDecoder(GatewayDecoder):
    name = SAFELINKS
    hosts = SAFELINKS_HOSTS


class MimecastDecoder(GatewayDecoder):
    name = MIMECAST
    hosts = MIMECAST_HOSTS


class ProofpointDecoder(GatewayDecoder):
    """URL Defense v1/v2: ``-`` stands in for ``%`` and ``_`` for ``/``."""

    name = PROOFPOINT
    hosts = PROOFPOINT_HOSTS
    param = "u"
    stop_on_decode_error = True

    def decode(self, value: str) -> str:
        return strict_unquote(value.replace("-", "%").replace("_", "/"))


DEFAULT_DECODERS: tuple[GatewayDecoder, ...] = (
    SafeLinksDecoder(),
    MimecastDecoder(),
    ProofpointDecoder(),
)


class UnwrapState(str, Enum):
    DECODING = "decoding"
    TERMINAL = "terminal"
    FAILED = "failed"


@dataclass(frozen=True)
class UnwrapResult:
    """Resolved link: the submitted URL, the final target and the gateways crossed."""

    original: str
    display: str
    base_domain: str
    via: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "original": self.original,
            "display": self.display,
            "baseDomain": self.base_domain,
            "via": list(self.via),
        }


class GatewayUnwrapper:
    """Bounded state machine over a pluggable list of gateway decoders."""

    def __init__(
        self,
        decoders: Sequence[GatewayDecoder] = DEFAULT_DECODERS,
        max_iterations: int = MAX_UNWRAP_ITERATIONS,
    ):
        self.decoders = tuple(decoders)
        self.max_iterations = max_iterations

    def _parse(self, url: str, gateway: str | None) -> SplitResult:
        try:
            return parse_absolute_url(url)
        except ValueError as exc:
            raise ResolutionError(url, gateway) from exc

    def _step(self, current: str, gateway: str | None, via: list[str]) -> tuple[UnwrapState, str, str | None]:
        """Run one hop. Returns (state, next url, gateway that produced it)."""
        parsed = self._parse(current, gateway)
        hostname = (parsed.hostname or "").lower()

        for decoder in self.decoders:
            if not decoder.matches(hostname):
                continue
            via.append(decoder.name)
            try:
                target = decoder.extract_target(parsed)
            except GatewayDecodeError as exc:
                if decoder.stop_on_decode_error:
                    logger.debug("Stopping unwrap at %s: %s", decoder.name, exc)
                    return UnwrapState.FAILED, current, gateway
                raise ResolutionError(current, decoder.name, "Malformed gateway target") from exc
            if target:
                return UnwrapState.DECODING, target, decoder.name

        return UnwrapState.TERMINAL, current, gateway

    def unwrap(self, url: str) -> UnwrapResult:
        """Follow gateway wrappers from ``url`` to the final display URL."""
        via: list[str] = []
        current = url
        gateway: str | None = None
        state = UnwrapState.DECODING
        iterations = 0

        while state is UnwrapState.DECODING and iterations < self.max_iterations:
            iterations += 1
            state, current, gateway = self._step(current, gateway, via)

        if state is UnwrapState.DECODING:
            logger.info("Unwrap hop limit (%d) reached; keeping last decoded URL", self.max_iterations)

        final = self._parse(current, gateway)
        base_domain = registered_domain(final.hostname or "")
        return UnwrapResult(original=url, display=current, base_domain=base_domain, via=tuple(via))


_default_unwrapper = GatewayUnwrapper()


def unwrap(url: str) -> UnwrapResult:
    """Unwrap ``url`` with the default gateway decoders."""
    return _default_unwrapper.unwrap(url)
