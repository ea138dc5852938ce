"""Hypothesis strategies for matrix pencil testing."""

from ._complex_numbers import complex_numbers
from ._hessenberg_pencils import hessenberg_pencils
from ._poles import poles

__all__ = [
    # Complex strategies
    "complex_numbers",
    # Pencil strategies
    "hessenberg_pencils",
    "poles",
]
