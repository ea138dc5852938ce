"""Tests for reading the poles of a Hessenberg pencil."""

import math

import pytest
import torch

from torchpencil.rational_krylov import move_poles, pencil_poles


class TestPencilPoles:
    """Tests for pencil_poles."""

    def test_finite(self):
        K = torch.tensor([[1.0, 0.0], [2.0, 1.0], [0.0, 4.0]])
        H = torch.tensor([[0.0, 1.0], [4.0, 0.0], [0.0, 2.0]])

        poles = pencil_poles(K, H)

        torch.testing.assert_close(
            poles, torch.tensor([2.0 + 0j, 0.5 + 0j], dtype=torch.complex64)
        )

    def test_infinite_and_undefined(self):
        """Zero K entries give inf, or nan when H vanishes too."""
        K = torch.tensor(
            [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0], [0.0, 0.0, 0.0]],
            dtype=torch.float64,
        )
        H = torch.tensor(
            [[1.0, 0.0, 0.0], [3.0, 1.0, 0.0], [0.0, 0.0, 1.0], [0.0, 0.0, 0.0]],
            dtype=torch.float64,
        )

        poles = pencil_poles(K, H)

        assert poles.dtype == torch.complex128
        assert math.isinf(poles[0].real)
        assert math.isnan(poles[1].real)
        assert math.isnan(poles[2].real)

    def test_complex(self):
        K = torch.tensor([[1.0], [1.0j]], dtype=torch.complex128)
        H = torch.tensor([[0.0], [2.0]], dtype=torch.complex128)

        poles = pencil_poles(K, H)

        torch.testing.assert_close(
            poles, torch.tensor([-2.0j], dtype=torch.complex128)
        )

    def test_reads_moved_poles(self):
        """The trailing poles after move_poles are the requested ones."""
        generator = torch.Generator().manual_seed(0)
        K = torch.triu(
            torch.randn(5, 4, dtype=torch.complex128, generator=generator), -1
        )
        H = torch.triu(
            torch.randn(5, 4, dtype=torch.complex128, generator=generator), -1
        )
        xi = [1.0 + 1.0j, -3.0]

        KT, HT, _, _ = move_poles(K, H, xi)

        torch.testing.assert_close(
            pencil_poles(KT, HT)[2:],
            torch.tensor(xi, dtype=torch.complex128),
            rtol=1e-8,
            atol=1e-8,
        )

    def test_invalid_shape(self):
        with pytest.raises(ValueError):
            pencil_poles(torch.eye(2), torch.eye(2))
