"""Reordering of a complex generalized Schur form."""

from typing import Optional, Sequence, Union

import numpy
import scipy.linalg
import torch
from torch import Tensor

from torchpencil.linear_algebra.decomposition._exceptions import (
    ReorderingError,
)
from torchpencil.linear_algebra.decomposition._generalized_schur import (
    working_dtype,
    _to_numpy,
)
from torchpencil.linear_algebra.decomposition._result_types import (
    GeneralizedSchurResult,
)


def reorder_generalized_schur(
    s: Tensor,
    t: Tensor,
    select: Union[Tensor, Sequence[bool]],
    q: Optional[Tensor] = None,
    z: Optional[Tensor] = None,
) -> GeneralizedSchurResult:
    r"""
    Reorder the eigenvalues of a complex generalized Schur form.

    Given an upper triangular pencil (S, T) with

    .. math::

        A = Q S Z^H \\
        B = Q T Z^H

    computes unitary :math:`Q_s, Z_s` such that
    :math:`S' = Q_s^H S Z_s` and :math:`T' = Q_s^H T Z_s` are upper
    triangular and the eigenvalues flagged in ``select`` occupy the leading
    diagonal positions. The relative order of the selected eigenvalues, and
    of the unselected ones, is preserved.

    Parameters
    ----------
    s : Tensor
        Upper triangular matrix of shape (n, n). Entries below the diagonal
        are ignored.
    t : Tensor
        Upper triangular matrix of shape (n, n). Entries below the diagonal
        are ignored.
    select : Tensor or sequence of bool
        Boolean flags of length n. Eigenvalue ``s[i, i] / t[i, i]`` is moved
        to the leading block when ``select[i]`` is true.
    q : Tensor, optional
        Left unitary matrix of shape (n, n) to update. Default is the
        identity, in which case the returned Q is :math:`Q_s` itself.
    z : Tensor, optional
        Right unitary matrix of shape (n, n) to update. Default is the
        identity, in which case the returned Z is :math:`Z_s` itself.

    Returns
    -------
    GeneralizedSchurResult
        Named tuple containing the reordered S and T, the reordered
        eigenvalue numerators alpha and denominators beta, and the updated
        Q = q @ Q_s and Z = z @ Z_s.

    Raises
    ------
    ValueError
        If shapes are not conformant, or LAPACK reports an illegal argument.
    ReorderingError
        If a swap is rejected because the eigenvalues involved are
        numerically coincident.

    Examples
    --------
    >>> import torch
    >>> from torchpencil.linear_algebra.decomposition import (
    ...     reorder_generalized_schur,
    ... )
    >>> s = torch.tensor([[1.0, 2.0], [0.0, 3.0]], dtype=torch.complex128)
    >>> t = torch.eye(2, dtype=torch.complex128)
    >>> result = reorder_generalized_schur(s, t, [False, True])
    >>> eigenvalues = result.alpha / result.beta
    >>> torch.allclose(eigenvalues, torch.tensor([3.0, 1.0], dtype=torch.complex128))
    True

    Notes
    -----
    Delegates to LAPACK ``?tgsen`` with ``ijob=0`` (no condition estimates).
    """
    if s.dim() != 2 or s.shape[-2] != s.shape[-1]:
        raise ValueError(f"s must be a square 2D matrix, got shape {s.shape}")
    if t.shape != s.shape:
        raise ValueError(
            f"s and t must have the same shape, got s: {s.shape} and t: {t.shape}"
        )

    n = s.shape[-1]

    if isinstance(select, Tensor):
        select_np = select.detach().cpu().numpy().astype(bool)
    else:
        select_np = numpy.asarray(select, dtype=bool)

    if select_np.shape != (n,):
        raise ValueError(
            f"select must have shape ({n},), got {tuple(select_np.shape)}"
        )

    tensors = [s, t] + [x for x in (q, z) if x is not None]
    dtype = working_dtype(*tensors)

    for name, x in (("q", q), ("z", z)):
        if x is not None and x.shape != s.shape:
            raise ValueError(
                f"{name} must have shape {tuple(s.shape)}, got {tuple(x.shape)}"
            )

    s_np = numpy.triu(_to_numpy(s, dtype))
    t_np = numpy.triu(_to_numpy(t, dtype))

    if q is None:
        q_np = numpy.eye(n, dtype=s_np.dtype)
    else:
        q_np = _to_numpy(q, dtype)

    if z is None:
        z_np = numpy.eye(n, dtype=s_np.dtype)
    else:
        z_np = _to_numpy(z, dtype)

    tgsen = scipy.linalg.get_lapack_funcs("tgsen", (s_np, t_np))

    S_np, T_np, alpha_np, beta_np, Q_np, Z_np, *_, info = tgsen(
        select_np,
        s_np,
        t_np,
        q_np,
        z_np,
        ijob=0,
        lwork=1,
        liwork=1,
    )

    if info < 0:
        raise ValueError(f"Illegal value in argument {-info} of tgsen")
    if info == 1:
        raise ReorderingError(
            f"Reordering of a pencil of size {n} failed: the swapped pencil "
            f"would be too far from generalized Schur form, the eigenvalues "
            f"involved are too close to each other"
        )

    def _tensor(array: numpy.ndarray) -> Tensor:
        return torch.from_numpy(array).to(dtype=dtype, device=s.device)

    return GeneralizedSchurResult(
        S=_tensor(S_np),
        T=_tensor(T_np),
        alpha=_tensor(alpha_np),
        beta=_tensor(beta_np),
        Q=_tensor(Q_np),
        Z=_tensor(Z_np),
    )
