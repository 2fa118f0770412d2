"""Configuration management for LinkVet."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .analyzer.brands import DEFAULT_BRANDS, BrandConfig
from .constants import (
    DEFAULT_RDAP_BASE_URL,
    DEFAULT_RISKY_TLDS,
    DOMAIN_AGE_CACHE_TTL_SECONDS,
    RDAP_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


def env_flag(name: str, default: str = "true") -> bool:
    """Feature toggle: enabled unless set to the literal ``false``."""
    return os.getenv(name, default) != "false"


@dataclass
class Config:
    """Application configuration."""

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Feature toggles
    use_domain_age: bool = True
    use_brand_mismatch: bool = True

    # RDAP
    rdap_base_url: str = DEFAULT_RDAP_BASE_URL
    rdap_timeout_seconds: float = RDAP_TIMEOUT_SECONDS
    domain_age_cache_ttl_seconds: int = DOMAIN_AGE_CACHE_TTL_SECONDS

    # Heuristics
    config_dir: Path = field(default_factory=lambda: Path("./config"))
    brands: tuple[BrandConfig, ...] = DEFAULT_BRANDS
    risky_tlds: tuple[str, ...] = DEFAULT_RISKY_TLDS


def _load_heuristics(config_dir: Path) -> dict:
    """Load heuristic overrides from config/heuristics.yaml (optional)."""
    path = Path(config_dir or ".") / "heuristics.yaml"
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except Exception as exc:
        logger.warning("Failed to parse heuristics.yaml: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring heuristics.yaml: expected a mapping at top level")
        return {}

    def _coerce_str_list(raw) -> list[str]:
        if not isinstance(raw, (list, tuple)):
            return []
        return [str(item).strip() for item in raw if str(item or "").strip()]

    def _coerce_brands(raw) -> tuple[BrandConfig, ...]:
        brands: list[BrandConfig] = []
        for entry in raw or []:
            if not isinstance(entry, dict):
                continue
            name = str(entry.get("name") or "").strip()
            keywords = _coerce_str_list(entry.get("keywords"))
            allowed = _coerce_str_list(entry.get("allowed_domains"))
            if not name or not keywords:
                continue
            brands.append(BrandConfig.create(name, keywords, allowed))
        return tuple(brands)

    result: dict = {}
    brands = _coerce_brands(data.get("brands"))
    if brands:
        result["brands"] = brands
    tlds = _coerce_str_list(data.get("risky_tlds"))
    if tlds:
        result["risky_tlds"] = tuple(t if t.startswith(".") else f".{t}" for t in tlds)
    return result


def load_config() -> Config:
    """Load configuration from environment variables."""
    load_dotenv()

    config_dir = Path(os.getenv("CONFIG_DIR", "./config"))
    heuristics = _load_heuristics(config_dir)

    return Config(
        host=os.getenv("LINKVET_HOST", "127.0.0.1"),
        port=int(os.getenv("LINKVET_PORT", "3000")),
        use_domain_age=env_flag("USE_DOMAIN_AGE"),
        use_brand_mismatch=env_flag("USE_BRAND_MISMATCH"),
        rdap_base_url=os.getenv("RDAP_BASE_URL", DEFAULT_RDAP_BASE_URL),
        rdap_timeout_seconds=float(os.getenv("RDAP_TIMEOUT_SECONDS", str(RDAP_TIMEOUT_SECONDS))),
        domain_age_cache_ttl_seconds=int(
            os.getenv("DOMAIN_AGE_CACHE_TTL_SECONDS", str(DOMAIN_AGE_CACHE_TTL_SECONDS))
        ),
        config_dir=config_dir,
        brands=heuristics.get("brands", DEFAULT_BRANDS),
        risky_tlds=heuristics.get("risky_tlds", DEFAULT_RISKY_TLDS),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of error messages."""
    errors: list[str] = []
    if not 0 < int(config.port) < 65536:
        errors.append(f"LINKVET_PORT out of range: {config.port}")
    if config.rdap_timeout_seconds <= 0:
        errors.append("RDAP_TIMEOUT_SECONDS must be positive")
    if config.domain_age_cache_ttl_seconds <= 0:
        errors.append("DOMAIN_AGE_CACHE_TTL_SECONDS must be positive")
    if not config.rdap_base_url.startswith(("http://", "https://")):
        errors.append("RDAP_BASE_URL must be an http(s) URL")
    if not config.use_domain_age:
        logger.info("Domain age lookups disabled (USE_DOMAIN_AGE=false)")
    return errors
