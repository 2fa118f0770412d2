"""External enrichment lookups for LinkVet."""

from .domain_age import DomainAgeResolver, parse_registration_date

__all__ = ["DomainAgeResolver", "parse_registration_date"]
