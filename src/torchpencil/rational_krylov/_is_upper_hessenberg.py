import torch
from torch import Tensor


def is_upper_hessenberg(a: Tensor, *, tol: float = 0.0) -> bool:
    r"""
    Check whether a matrix is upper Hessenberg.

    A (possibly rectangular) matrix :math:`A` is upper Hessenberg when
    :math:`A_{ij} = 0` for :math:`i > j + 1`.

    Parameters
    ----------
    a : Tensor
        Matrix of shape (m, n).
    tol : float, optional
        Relative tolerance. Entries strictly below the first subdiagonal are
        accepted as zero when their modulus is at most
        ``tol * max(1, max|a|)``. Default is 0 (exact zeros).

    Returns
    -------
    bool
        True if ``a`` is upper Hessenberg within ``tol``.

    Examples
    --------
    >>> a = torch.tensor([[1.0, 2.0], [3.0, 4.0], [0.0, 5.0]])
    >>> is_upper_hessenberg(a)
    True
    >>> is_upper_hessenberg(torch.ones(3, 2))
    False
    """
    if a.dim() != 2:
        raise ValueError(f"a must be 2D, got {a.dim()}D")

    below = torch.tril(a, diagonal=-2)
    if below.numel() == 0:
        return True

    scale = max(1.0, a.abs().max().item()) if a.numel() > 0 else 1.0
    return bool(below.abs().max().item() <= tol * scale)
