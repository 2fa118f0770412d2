"""Request pipeline for LinkVet."""

from .check import CheckResult, LinkChecker, validate_check_input

__all__ = ["CheckResult", "LinkChecker", "validate_check_input"]
