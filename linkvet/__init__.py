"""LinkVet: gateway-aware phishing risk scoring for links."""

__version__ = "0.1.0"
