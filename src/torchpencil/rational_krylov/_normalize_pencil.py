from typing import Optional

import torch
from torch import Tensor

from torchpencil.rational_krylov._backend import (
    GeneralizedSchurBackend,
    resolve_backend,
)
from torchpencil.rational_krylov._result_types import MovePolesResult
from torchpencil.rational_krylov._validation import (
    check_pencil,
    working_dtype,
)


def normalize_pencil(
    K: Tensor,
    H: Tensor,
    *,
    backend: Optional[GeneralizedSchurBackend] = None,
) -> MovePolesResult:
    r"""
    Reduce an (n+1)-by-n pencil to upper-Hessenberg form.

    The trailing n-by-n blocks of H and K are brought to complex generalized
    Schur form, :math:`H_{2:n+1} = Q S Z^H`, :math:`K_{2:n+1} = Q T Z^H`,
    and the unitary factors are folded into

    .. math::

        Q_T = \begin{pmatrix} 1 & 0 \\ 0 & Q^H \end{pmatrix}, \quad
        Z_T = Z,

    so that :math:`K_T = Q_T K Z_T` and :math:`H_T = Q_T H Z_T`. The first
    rows of H and K only pick up the right factor Z. Since the trailing
    blocks of :math:`H_T` and :math:`K_T` are upper triangular, both
    matrices are upper Hessenberg and their subdiagonal ratios are the
    poles of the pencil.

    Parameters
    ----------
    K : Tensor
        Matrix of shape (n+1, n).
    H : Tensor
        Matrix of shape (n+1, n).
    backend : GeneralizedSchurBackend, optional
        Provider of the generalized Schur decomposition. Default uses
        SciPy/LAPACK.

    Returns
    -------
    MovePolesResult
        Named tuple (KT, HT, QT, ZT) of complex tensors.

    Raises
    ------
    ValueError
        If K and H are not conformant (n+1)-by-n matrices.
    ConvergenceError
        If the QZ iteration does not converge.
    """
    n = check_pencil(K, H)
    backend = resolve_backend(backend)
    dtype = working_dtype(K, H)
    device = K.device

    KT = K.detach().to(dtype=dtype, device=device, copy=True)
    HT = H.detach().to(dtype=dtype, device=device, copy=True)

    schur = backend.decompose(HT[1:], KT[1:])

    HT[1:] = schur.S.to(dtype=dtype, device=device)
    KT[1:] = schur.T.to(dtype=dtype, device=device)

    QT = torch.eye(n + 1, dtype=dtype, device=device)
    QT[1:, 1:] = schur.Q.mH.to(dtype=dtype, device=device)
    ZT = schur.Z.to(dtype=dtype, device=device).clone()

    HT[0] = HT[0] @ ZT
    KT[0] = KT[0] @ ZT

    return MovePolesResult(KT=KT, HT=HT, QT=QT, ZT=ZT)
