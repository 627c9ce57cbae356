# This file makes the 'utils' directory a Python package.

"""Stackette utilities."""

from .ids import snake_case, logical_id, pascal_case

__all__ = [
    "snake_case",
    "logical_id",
    "pascal_case",
]
