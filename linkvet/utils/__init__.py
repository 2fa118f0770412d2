"""Utility helpers for LinkVet."""
