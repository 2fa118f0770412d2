"""HTTP surface for LinkVet."""

from .app import CheckServer, create_app

__all__ = ["CheckServer", "create_app"]
