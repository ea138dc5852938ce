"""Generalized Schur (QZ) decomposition."""

import warnings

import numpy
import scipy.linalg
import torch
from torch import Tensor

from torchpencil.linear_algebra.decomposition._exceptions import (
    ConvergenceError,
)
from torchpencil.linear_algebra.decomposition._result_types import (
    GeneralizedSchurResult,
)


def working_dtype(*tensors: Tensor) -> torch.dtype:
    """Complex dtype with the precision of the inputs.

    float32 and complex64 map to complex64; everything else, including
    integer dtypes, maps to complex128.
    """
    dtype = tensors[0].dtype
    for tensor in tensors[1:]:
        dtype = torch.promote_types(dtype, tensor.dtype)
    if dtype in (torch.float32, torch.complex64):
        return torch.complex64
    return torch.complex128


def _to_numpy(a: Tensor, dtype: torch.dtype) -> numpy.ndarray:
    return a.detach().resolve_conj().to(dtype).cpu().numpy()


def generalized_schur(a: Tensor, b: Tensor) -> GeneralizedSchurResult:
    r"""
    Complex generalized Schur (QZ) decomposition.

    Computes the generalized Schur decomposition of matrix pencil (A, B):

    .. math::

        A = Q S Z^H \\
        B = Q T Z^H

    where S and T are upper triangular and Q and Z are unitary.

    The generalized eigenvalues of the pencil (A, B) are given by
    :math:`\lambda_i = \alpha_i / \beta_i` where :math:`\alpha_i = S_{ii}`
    and :math:`\beta_i = T_{ii}`.

    Parameters
    ----------
    a : Tensor
        First input matrix of shape (n, n).
    b : Tensor
        Second input matrix of shape (n, n). Must be the same size as a.

    Returns
    -------
    GeneralizedSchurResult
        Named tuple containing:

        - S : Tensor of shape (n, n), complex
            Upper triangular Schur form of A.
        - T : Tensor of shape (n, n), complex
            Upper triangular Schur form of B.
        - alpha : Tensor of shape (n,), complex
            Eigenvalue numerators.
        - beta : Tensor of shape (n,), complex
            Eigenvalue denominators.
        - Q : Tensor of shape (n, n), complex
            Left unitary transformation matrix.
        - Z : Tensor of shape (n, n), complex
            Right unitary transformation matrix.

    Raises
    ------
    ValueError
        If a or b is not a square 2D matrix, or their sizes differ.
    ConvergenceError
        If the QZ iteration does not converge.

    Examples
    --------
    >>> import torch
    >>> from torchpencil.linear_algebra.decomposition import generalized_schur
    >>> a = torch.randn(3, 3, dtype=torch.float64)
    >>> b = torch.randn(3, 3, dtype=torch.float64)
    >>> result = generalized_schur(a, b)
    >>> reconstructed_a = result.Q @ result.S @ result.Z.mH
    >>> torch.allclose(reconstructed_a, a.to(torch.complex128), atol=1e-10)
    True

    Notes
    -----
    The decomposition is delegated to LAPACK ``?gges`` through
    :func:`scipy.linalg.qz`. Inputs are moved to the CPU for the call and
    the results are returned on the device of ``a``.

    When beta[i] = 0, the corresponding generalized eigenvalue is infinite.
    """
    if a.dim() != 2:
        raise ValueError(f"a must be 2D, got {a.dim()}D")
    if b.dim() != 2:
        raise ValueError(f"b must be 2D, got {b.dim()}D")
    if a.shape[-2] != a.shape[-1]:
        raise ValueError(f"a must be square, got shape {a.shape}")
    if b.shape[-2] != b.shape[-1]:
        raise ValueError(f"b must be square, got shape {b.shape}")
    if a.shape[-1] != b.shape[-1]:
        raise ValueError(
            f"a and b must have the same size, got a: {a.shape} and b: {b.shape}"
        )

    dtype = working_dtype(a, b)

    # scipy reports a non-converged QZ iteration as a LinAlgWarning
    with warnings.catch_warnings():
        warnings.simplefilter("error", scipy.linalg.LinAlgWarning)
        try:
            S_np, T_np, Q_np, Z_np = scipy.linalg.qz(
                _to_numpy(a, dtype),
                _to_numpy(b, dtype),
                output="complex",
            )
        except (
            scipy.linalg.LinAlgError,
            scipy.linalg.LinAlgWarning,
        ) as error:
            raise ConvergenceError(
                f"QZ iteration failed for pencil of size {a.shape[-1]}: {error}"
            ) from error

    S = torch.from_numpy(S_np).to(dtype=dtype, device=a.device)
    T = torch.from_numpy(T_np).to(dtype=dtype, device=a.device)
    Q = torch.from_numpy(Q_np).to(dtype=dtype, device=a.device)
    Z = torch.from_numpy(Z_np).to(dtype=dtype, device=a.device)

    return GeneralizedSchurResult(
        S=S,
        T=T,
        alpha=S.diagonal().clone(),
        beta=T.diagonal().clone(),
        Q=Q,
        Z=Z,
    )
