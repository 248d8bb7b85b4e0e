"""Utility modules for rift_counter."""

from rift_counter.utils.numbers import clamp, round_half_up, safe_number

__all__ = [
    "clamp",
    "round_half_up",
    "safe_number",
]
