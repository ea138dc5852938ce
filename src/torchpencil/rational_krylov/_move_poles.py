import warnings
from typing import Optional

import torch
from torch import Tensor

from torchpencil.linear_algebra.decomposition import ReorderingError
from torchpencil.rational_krylov._backend import (
    GeneralizedSchurBackend,
    resolve_backend,
)
from torchpencil.rational_krylov._compute_angle import compute_angle
from torchpencil.rational_krylov._exceptions import (
    DegenerateRotationError,
    PoleReorderingError,
)
from torchpencil.rational_krylov._is_upper_hessenberg import (
    is_upper_hessenberg,
)
from torchpencil.rational_krylov._normalize_pencil import normalize_pencil
from torchpencil.rational_krylov._result_types import MovePolesResult
from torchpencil.rational_krylov._tolerance import (
    default_tol,
    structure_tol,
)
from torchpencil.rational_krylov._validation import (
    Poles,
    as_pole_list,
    check_pencil,
    working_dtype,
)


def move_poles(
    K: Tensor,
    H: Tensor,
    xi: Poles,
    *,
    normalize: bool = True,
    tol: Optional[float] = None,
    backend: Optional[GeneralizedSchurBackend] = None,
    verbose: int = 0,
) -> MovePolesResult:
    r"""
    Replace poles of an upper-Hessenberg pencil.

    For (n+1)-by-n upper-Hessenberg matrices K and H and k < n+1 requested
    poles :math:`\xi_1, \dots, \xi_k`, computes upper-Hessenberg
    :math:`K_T, H_T` and unitary :math:`Q_T, Z_T` with

    .. math::

        K_T = Q_T K Z_T, \quad H_T = Q_T H Z_T,

    such that the poles of :math:`(K_T, H_T)` at the trailing k subdiagonal
    positions are the requested ones, in order:

    .. math::

        \frac{(H_T)_{n-k+j+1,\, n-k+j}}{(K_T)_{n-k+j+1,\, n-k+j}} = \xi_{j+1},
        \quad j = 0, \dots, k-1

    (0-based indices). The leading n-k poles are poles of the original
    pencil.

    Parameters
    ----------
    K : Tensor
        Matrix of shape (n+1, n).
    H : Tensor
        Matrix of shape (n+1, n).
    xi : Tensor or sequence of complex
        Requested poles, of length k <= n. Infinite poles are given as
        ``float("inf")``.
    normalize : bool, optional
        If True (default), first reduce the trailing n-by-n blocks of H and
        K to generalized Schur form (see :func:`normalize_pencil`). If
        False, K and H must already be upper Hessenberg and QT, ZT start
        from the identity.
    tol : float, optional
        Relative tolerance for deciding that a requested pole is already
        realised at the top of the pencil (see :func:`compute_angle`).
        Default: dtype-aware.
    backend : GeneralizedSchurBackend, optional
        Provider of the generalized Schur decomposition and reordering.
        Default uses SciPy/LAPACK.
    verbose : int
        Verbosity level. 0 = silent, 1 = summary, 2 = per-iteration.
        Uses warnings.warn() for messages (not print).

    Returns
    -------
    MovePolesResult
        Named tuple (KT, HT, QT, ZT) of complex tensors.

    Raises
    ------
    ValueError
        If K and H are not conformant (n+1)-by-n matrices, if more than n
        poles are requested, if a pole is NaN, or if ``normalize=False``
        and the pencil is not upper Hessenberg.
    DegenerateRotationError
        If the pole of iteration ``error.iteration`` cannot be set by a
        plane rotation.
    PoleReorderingError
        If the pole of iteration ``error.iteration`` cannot be reordered
        past the remaining poles.
    ConvergenceError
        If the initial QZ iteration does not converge.

    Examples
    --------
    >>> K = torch.tensor(
    ...     [[1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, 0.5, 1.0], [0.0, 0.0, 0.25]]
    ... )
    >>> H = torch.tensor(
    ...     [[2.0, 1.0, 0.0], [1.0, 3.0, 1.0], [0.0, 3.0, 4.0], [0.0, 0.0, 1.0]]
    ... )
    >>> KT, HT, QT, ZT = move_poles(K, H, [2.0])
    >>> torch.allclose(HT[3, 2] / KT[3, 2], torch.tensor(2.0, dtype=HT.dtype))
    True

    Notes
    -----
    The poles are processed last to first. In each iteration a plane
    rotation of the first two rows sets the pole at position (1, 0) to the
    requested value, and a generalized Schur reordering of the active
    trailing block pushes it to the bottom of that block, out of reach of
    the following iterations.

    References
    ----------
    M. Berljafa and S. Güttel. Generalized rational Krylov decompositions
    with an application to rational approximation. SIAM J. Matrix Anal.
    Appl., 36(2):894-916, 2015.
    """
    n = check_pencil(K, H)
    poles = as_pole_list(xi)
    k = len(poles)
    if k > n:
        raise ValueError(
            f"at most n = {n} poles can be moved, got {k} (xi must have "
            f"fewer than n + 1 entries)"
        )

    backend = resolve_backend(backend)
    dtype = working_dtype(K, H)
    device = K.device

    if tol is None:
        tol = default_tol(dtype)

    if normalize:
        KT, HT, QT, ZT = normalize_pencil(K, H, backend=backend)
    else:
        KT = K.detach().to(dtype=dtype, device=device, copy=True)
        HT = H.detach().to(dtype=dtype, device=device, copy=True)
        for name, x in (("K", KT), ("H", HT)):
            if not is_upper_hessenberg(x, tol=structure_tol(dtype)):
                raise ValueError(
                    f"{name} must be upper Hessenberg when normalize=False"
                )
        QT = torch.eye(n + 1, dtype=dtype, device=device)
        ZT = torch.eye(n, dtype=dtype, device=device)

    for i, pole in enumerate(reversed(poles), start=1):
        # Active block: rows 1..m, columns 0..m-1.
        m = n - i + 1

        try:
            rotation = compute_angle(HT[0:2, 0], KT[0:2, 0], pole, tol=tol)
        except DegenerateRotationError as error:
            raise DegenerateRotationError(
                f"cannot place pole {pole} in iteration {i}: {error}",
                iteration=i,
                pole=pole,
            ) from error

        G = rotation.matrix(dtype=dtype, device=device)
        KT[0:2] = G @ KT[0:2]
        HT[0:2] = G @ HT[0:2]
        QT[0:2] = G @ QT[0:2]

        select = [False] + [True] * (m - 1)
        try:
            schur = backend.reorder(HT[1 : m + 1, 0:m], KT[1 : m + 1, 0:m], select)
        except ReorderingError as error:
            raise PoleReorderingError(
                f"cannot move pole {pole} past the remaining {m - 1} poles "
                f"in iteration {i}: {error}",
                iteration=i,
                pole=pole,
            ) from error

        QS = schur.Q.mH.to(dtype=dtype, device=device)
        ZS = schur.Z.to(dtype=dtype, device=device)

        HT[0, 0:m] = HT[0, 0:m] @ ZS
        KT[0, 0:m] = KT[0, 0:m] @ ZS
        HT[1 : m + 1, 0:m] = schur.S.to(dtype=dtype, device=device)
        KT[1 : m + 1, 0:m] = schur.T.to(dtype=dtype, device=device)
        HT[1 : m + 1, m:] = QS @ HT[1 : m + 1, m:]
        KT[1 : m + 1, m:] = QS @ KT[1 : m + 1, m:]

        QT[1 : m + 1] = QS @ QT[1 : m + 1]
        ZT[:, 0:m] = ZT[:, 0:m] @ ZS

        if verbose > 1:
            branch = "swap" if rotation.c == 0 else "rotation"
            warnings.warn(
                f"Iteration {i}: placed pole {pole} at row {m} ({branch}, "
                f"|s| = {abs(rotation.s):.3e}, c = {rotation.c:.3e})",
                RuntimeWarning,
                stacklevel=2,
            )

    if verbose > 0:
        warnings.warn(
            f"Moved {k} pole{'' if k == 1 else 's'} of a {n + 1}-by-{n} pencil",
            RuntimeWarning,
            stacklevel=2,
        )

    return MovePolesResult(KT=KT, HT=HT, QT=QT, ZT=ZT)
