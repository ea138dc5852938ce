"""Tests for the pencil hypothesis strategies."""

import cmath

import hypothesis
import torch

from torchpencil.rational_krylov import is_upper_hessenberg
from torchpencil.testing.strategies import (
    complex_numbers,
    hessenberg_pencils,
    poles,
)


class TestHessenbergPencils:
    @hypothesis.given(pencil=hessenberg_pencils(min_n=2, max_n=5))
    def test_shape_and_structure(self, pencil):
        K, H = pencil
        n = K.shape[1]

        assert 2 <= n <= 5
        assert K.shape == (n + 1, n)
        assert H.shape == (n + 1, n)
        assert is_upper_hessenberg(K)
        assert is_upper_hessenberg(H)

    @hypothesis.given(pencil=hessenberg_pencils(dtype=torch.complex64))
    def test_dtype(self, pencil):
        K, H = pencil

        assert K.dtype == torch.complex64
        assert H.dtype == torch.complex64


class TestPoles:
    @hypothesis.given(xi=poles(max_size=3, allow_infinite=False))
    def test_finite(self, xi):
        assert len(xi) <= 3
        assert all(not cmath.isinf(p) and not cmath.isnan(p) for p in xi)

    @hypothesis.given(xi=poles(min_size=1, max_size=4))
    def test_values(self, xi):
        assert 1 <= len(xi) <= 4
        for p in xi:
            assert cmath.isinf(p) or (abs(p.real) <= 5.0 and abs(p.imag) <= 5.0)


class TestComplexNumbers:
    @hypothesis.given(z=complex_numbers(avoiding=[0j], min_distance=0.5))
    def test_avoiding(self, z):
        assert abs(z) > 0.5
