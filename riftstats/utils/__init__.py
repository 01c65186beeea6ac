"""Shared helpers."""

from .statistics import round_half_up, safe_divide

__all__ = ["round_half_up", "safe_divide"]
