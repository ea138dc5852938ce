import torch
from torch import Tensor

from torchpencil.rational_krylov._validation import (
    check_pencil,
    working_dtype,
)


def pencil_poles(K: Tensor, H: Tensor) -> Tensor:
    r"""
    Poles of an upper-Hessenberg pencil.

    For (n+1)-by-n upper-Hessenberg K and H the poles are the ratios of
    the subdiagonal entries,

    .. math::

        \xi_j = \frac{H_{j+1, j}}{K_{j+1, j}}, \quad j = 0, \dots, n-1.

    Parameters
    ----------
    K : Tensor
        Upper-Hessenberg matrix of shape (n+1, n).
    H : Tensor
        Upper-Hessenberg matrix of shape (n+1, n).

    Returns
    -------
    Tensor
        Complex tensor of shape (n,). Entries are ``inf`` where the
        subdiagonal entry of K is zero and that of H is not, and ``nan``
        where both are zero.

    Examples
    --------
    >>> K = torch.tensor([[1.0, 0.0], [2.0, 1.0], [0.0, 0.0]])
    >>> H = torch.tensor([[0.0, 1.0], [4.0, 0.0], [0.0, 1.0]])
    >>> pencil_poles(K, H)
    tensor([2.+0.j, inf+0.j])
    """
    check_pencil(K, H)
    dtype = working_dtype(K, H)

    h = torch.diagonal(H.to(dtype), offset=-1)
    k = torch.diagonal(K.to(dtype), offset=-1)

    finite = k != 0
    ratio = h / torch.where(finite, k, torch.ones_like(k))

    infinite = torch.full_like(h, complex(float("inf"), 0.0))
    undefined = torch.full_like(h, complex(float("nan"), 0.0))

    return torch.where(
        finite,
        ratio,
        torch.where(h != 0, infinite, undefined),
    )
