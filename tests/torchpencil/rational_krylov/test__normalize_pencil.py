"""Tests for the initial reduction of a pencil to Hessenberg form."""

import pytest
import torch

from torchpencil.linear_algebra.decomposition import generalized_schur
from torchpencil.rational_krylov import (
    ScipyGeneralizedSchurBackend,
    is_upper_hessenberg,
    normalize_pencil,
    pencil_poles,
)


class RecordingBackend(ScipyGeneralizedSchurBackend):
    def __init__(self):
        self.decompose_calls = []

    def decompose(self, a, b):
        self.decompose_calls.append((a.clone(), b.clone()))
        return super().decompose(a, b)


def _random_pencil(n, seed, dtype=torch.complex128):
    generator = torch.Generator().manual_seed(seed)
    K = torch.randn(n + 1, n, dtype=dtype, generator=generator)
    H = torch.randn(n + 1, n, dtype=dtype, generator=generator)
    return K, H


class TestNormalizePencil:
    """Tests for normalize_pencil."""

    def test_shapes(self):
        K, H = _random_pencil(4, seed=0)

        KT, HT, QT, ZT = normalize_pencil(K, H)

        assert KT.shape == (5, 4)
        assert HT.shape == (5, 4)
        assert QT.shape == (5, 5)
        assert ZT.shape == (4, 4)

    def test_hessenberg(self):
        """A dense pencil becomes upper Hessenberg."""
        K, H = _random_pencil(5, seed=1)

        KT, HT, _, _ = normalize_pencil(K, H)

        assert is_upper_hessenberg(KT, tol=1e-12)
        assert is_upper_hessenberg(HT, tol=1e-12)

    def test_equivalence(self):
        """KT = QT @ K @ ZT and HT = QT @ H @ ZT."""
        K, H = _random_pencil(4, seed=2)

        KT, HT, QT, ZT = normalize_pencil(K, H)

        torch.testing.assert_close(QT @ K @ ZT, KT, rtol=1e-10, atol=1e-10)
        torch.testing.assert_close(QT @ H @ ZT, HT, rtol=1e-10, atol=1e-10)

    def test_unitary(self):
        K, H = _random_pencil(4, seed=3)

        _, _, QT, ZT = normalize_pencil(K, H)

        torch.testing.assert_close(
            QT @ QT.mH,
            torch.eye(5, dtype=QT.dtype),
            rtol=1e-10,
            atol=1e-10,
        )
        torch.testing.assert_close(
            ZT @ ZT.mH,
            torch.eye(4, dtype=ZT.dtype),
            rtol=1e-10,
            atol=1e-10,
        )

    def test_first_row_of_qt_untouched(self):
        """QT is block diagonal with a leading 1."""
        K, H = _random_pencil(3, seed=4)

        _, _, QT, _ = normalize_pencil(K, H)

        assert QT[0, 0] == 1
        assert torch.all(QT[0, 1:] == 0)
        assert torch.all(QT[1:, 0] == 0)

    def test_poles_are_eigenvalues_of_trailing_block(self):
        """The subdiagonal ratios are the eigenvalues of (H[1:], K[1:])."""
        K, H = _random_pencil(4, seed=5)

        KT, HT, _, _ = normalize_pencil(K, H)
        poles = pencil_poles(KT, HT)

        reference = torch.linalg.eigvals(torch.linalg.solve(K[1:], H[1:]))
        distances = (poles[:, None] - reference[None, :]).abs()
        assert distances.min(dim=1).values.max() < 1e-8
        assert distances.min(dim=0).values.max() < 1e-8

    def test_real_input(self):
        """Real input is promoted to complex128."""
        K, H = _random_pencil(3, seed=6, dtype=torch.float64)

        KT, HT, QT, ZT = normalize_pencil(K, H)

        assert KT.dtype == torch.complex128
        torch.testing.assert_close(
            QT @ H.to(torch.complex128) @ ZT, HT, rtol=1e-10, atol=1e-10
        )

    def test_single_precision(self):
        K, H = _random_pencil(3, seed=7, dtype=torch.float32)

        KT, _, _, _ = normalize_pencil(K, H)

        assert KT.dtype == torch.complex64

    def test_mixed_precision_matches_decomposition(self):
        """Pencil and decomposition promote mixed inputs the same way."""
        K, _ = _random_pencil(3, seed=7, dtype=torch.float32)
        _, H = _random_pencil(3, seed=7, dtype=torch.float64)

        KT, HT, QT, ZT = normalize_pencil(K, H)
        schur = generalized_schur(H[1:], K[1:])

        assert KT.dtype == HT.dtype == QT.dtype == ZT.dtype == torch.complex128
        assert schur.S.dtype == torch.complex128

    def test_inputs_not_modified(self):
        K, H = _random_pencil(3, seed=8)
        K_copy, H_copy = K.clone(), H.clone()

        normalize_pencil(K, H)

        assert torch.equal(K, K_copy)
        assert torch.equal(H, H_copy)

    def test_backend_receives_trailing_blocks(self):
        """The backend decomposes (H[1:], K[1:]) exactly once."""
        K, H = _random_pencil(3, seed=9)
        backend = RecordingBackend()

        normalize_pencil(K, H, backend=backend)

        assert len(backend.decompose_calls) == 1
        a, b = backend.decompose_calls[0]
        torch.testing.assert_close(a, H[1:])
        torch.testing.assert_close(b, K[1:])

    def test_n_equals_one(self):
        K = torch.tensor([[1.0], [2.0]], dtype=torch.complex128)
        H = torch.tensor([[3.0], [4.0]], dtype=torch.complex128)

        KT, HT, QT, ZT = normalize_pencil(K, H)

        torch.testing.assert_close(HT[1, 0] / KT[1, 0], torch.tensor(2.0 + 0j, dtype=torch.complex128))
        torch.testing.assert_close(QT @ K @ ZT, KT)

    def test_invalid_shape(self):
        K = torch.randn(3, 3, dtype=torch.float64)
        H = torch.randn(3, 3, dtype=torch.float64)

        with pytest.raises(ValueError, match=r"\(n\+1\)-by-n"):
            normalize_pencil(K, H)

    def test_invalid_backend(self):
        K, H = _random_pencil(2, seed=10)

        with pytest.raises(TypeError, match="backend"):
            normalize_pencil(K, H, backend=object())
