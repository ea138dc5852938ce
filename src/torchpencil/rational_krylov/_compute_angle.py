import cmath
import math
from typing import Optional, Sequence, Tuple, Union

import torch
from torch import Tensor

from torchpencil.rational_krylov._exceptions import DegenerateRotationError
from torchpencil.rational_krylov._result_types import PlaneRotation
from torchpencil.rational_krylov._tolerance import default_tol

Pair = Union[Tensor, Sequence[Union[complex, float]]]


def _as_pair(x: Pair, name: str) -> Tuple[complex, complex]:
    if isinstance(x, Tensor):
        if x.numel() != 2:
            raise ValueError(
                f"{name} must have 2 elements, got shape {tuple(x.shape)}"
            )
        values = x.detach().cpu().reshape(-1).tolist()
    else:
        values = list(x)
        if len(values) != 2:
            raise ValueError(f"{name} must have 2 elements, got {len(values)}")
    return complex(values[0]), complex(values[1])


def compute_angle(
    h: Pair,
    k: Pair,
    xi: Union[complex, float, Tensor],
    *,
    tol: Optional[float] = None,
) -> PlaneRotation:
    r"""
    Plane rotation that sets the pole of a 2-by-2 pencil.

    For vectors :math:`h = (h_1, h_2)` and :math:`k = (k_1, k_2)` computes
    :math:`s` and :math:`c` such that the rotation

    .. math::

        G = \begin{pmatrix} c & -s \\ \bar{s} & c \end{pmatrix}

    satisfies :math:`(Gh)_2 / (Gk)_2 = \xi`.

    Parameters
    ----------
    h : Tensor or sequence
        First two entries of the first column of H.
    k : Tensor or sequence
        First two entries of the first column of K.
    xi : complex, float or Tensor
        Target pole. May be infinite.
    tol : float, optional
        Relative tolerance for deciding that :math:`\xi = h_1 / k_1`
        already holds, tested as
        :math:`|h_1 - \xi k_1| \le tol (|h_1| + |\xi| |k_1|)`.
        Default: dtype-aware (about 1e-6 for single precision, 2e-15 for
        double precision). Pass 0 for an exact comparison.

    Returns
    -------
    PlaneRotation
        Named tuple with complex ``s`` and real ``c >= 0`` such that
        :math:`|s|^2 + c^2 = 1`.

    Raises
    ------
    DegenerateRotationError
        If :math:`h_1 = k_1 = 0`, so that the ratio of the second row cannot
        be influenced by the rotation.

    Notes
    -----
    An infinite :math:`\xi` is handled by exchanging the roles of
    :math:`h` and :math:`k` and targeting 0, which drives the second entry
    of :math:`Gk` to zero.

    When :math:`\xi = h_1 / k_1` the rotation is the fixed swap
    :math:`s = 1, c = 0`, which moves the first row, and with it the ratio
    :math:`h_1 / k_1`, into the second row.

    Otherwise

    .. math::

        t = \frac{\xi k_2 - h_2}{h_1 - \xi k_1}, \quad
        c = \frac{1}{\sqrt{1 + |t|^2}}, \quad
        s = \bar{t} c.

    Examples
    --------
    >>> h = torch.tensor([1.0, 2.0], dtype=torch.complex128)
    >>> k = torch.tensor([1.0, 1.0], dtype=torch.complex128)
    >>> s, c = compute_angle(h, k, 3.0)
    >>> g = PlaneRotation(s, c).matrix()
    >>> ratio = (g @ h)[1] / (g @ k)[1]
    >>> torch.allclose(ratio, torch.tensor(3.0, dtype=torch.complex128))
    True
    """
    h1, h2 = _as_pair(h, "h")
    k1, k2 = _as_pair(k, "k")

    if isinstance(xi, Tensor):
        xi = xi.item()
    xi = complex(xi)

    if tol is None:
        dtype = h.dtype if isinstance(h, Tensor) else torch.float64
        tol = default_tol(dtype)

    if cmath.isinf(xi):
        h1, h2, k1, k2 = k1, k2, h1, h2
        xi = 0j

    if h1 == 0 and k1 == 0:
        raise DegenerateRotationError(
            "Cannot set the pole of a 2-by-2 pencil whose first row is zero"
        )

    denominator = h1 - xi * k1

    if abs(denominator) <= tol * (abs(h1) + abs(xi) * abs(k1)):
        return PlaneRotation(s=1 + 0j, c=0.0)

    t = (xi * k2 - h2) / denominator
    c = 1.0 / math.hypot(1.0, abs(t))
    s = t.conjugate() * c

    return PlaneRotation(s=s, c=c)
