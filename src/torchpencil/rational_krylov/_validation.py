import cmath
import numbers
from typing import List, Sequence, Union

from torch import Tensor

from torchpencil.linear_algebra.decomposition._generalized_schur import (
    working_dtype,
)

Poles = Union[Tensor, Sequence[Union[complex, float, int]]]


def check_pencil(k: Tensor, h: Tensor) -> int:
    """Validate an (n+1)-by-n pencil and return n."""
    if k.dim() != 2:
        raise ValueError(f"K must be 2D, got {k.dim()}D")
    if h.dim() != 2:
        raise ValueError(f"H must be 2D, got {h.dim()}D")
    if k.shape != h.shape:
        raise ValueError(
            f"K and H must have the same shape, got K: {tuple(k.shape)} "
            f"and H: {tuple(h.shape)}"
        )
    n = k.shape[1]
    if n < 1 or k.shape[0] != n + 1:
        raise ValueError(
            f"K and H must be (n+1)-by-n with n >= 1, got shape {tuple(k.shape)}"
        )
    return n


def as_pole_list(xi: Poles) -> List[complex]:
    """Convert requested poles to Python complex numbers.

    Infinite poles are represented by ``complex(inf)``.
    """
    if isinstance(xi, Tensor):
        if xi.dim() > 1:
            raise ValueError(f"xi must be 1D, got {xi.dim()}D")
        values = xi.detach().cpu().reshape(-1).tolist()
    elif isinstance(xi, numbers.Number):
        raise ValueError(
            f"xi must be a sequence of poles, got scalar {xi!r}"
        )
    else:
        values = list(xi)

    poles = []
    for index, value in enumerate(values):
        if isinstance(value, Tensor):
            value = value.item()
        if not isinstance(value, numbers.Number) or isinstance(value, bool):
            raise ValueError(
                f"xi[{index}] must be a number, got {type(value).__name__}"
            )
        pole = complex(value)
        if cmath.isnan(pole):
            raise ValueError(f"xi[{index}] is NaN")
        if cmath.isinf(pole):
            pole = complex(float("inf"))
        poles.append(pole)
    return poles
