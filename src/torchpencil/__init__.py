"""torchpencil: PyTorch operators for rational Krylov matrix pencils."""

from . import (
    linear_algebra,
    rational_krylov,
)

__all__ = [
    "linear_algebra",
    "rational_krylov",
]

__version__ = "0.1.0"
