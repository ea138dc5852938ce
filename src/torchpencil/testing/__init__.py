"""Testing utilities for matrix pencils.

Example usage:

    import hypothesis

    from torchpencil.testing.strategies import hessenberg_pencils, poles

    @hypothesis.given(pencil=hessenberg_pencils(), xi=poles(max_size=1))
    def test_something(pencil, xi):
        K, H = pencil
        ...
"""

from .strategies import (
    # Complex strategies
    complex_numbers,
    # Pencil strategies
    hessenberg_pencils,
    poles,
)

__all__ = [
    "complex_numbers",
    "hessenberg_pencils",
    "poles",
]
