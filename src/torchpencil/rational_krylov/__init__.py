"""Pole relocation for rational Krylov decompositions.

A rational Krylov decomposition is encoded by a pencil (K, H) of
(n+1)-by-n upper-Hessenberg matrices. Its poles are the ratios
H[j+1, j] / K[j+1, j] of the subdiagonal entries.

Functions
---------
move_poles
    Replaces poles of the pencil with requested values by unitary
    equivalence, KT = QT @ K @ ZT and HT = QT @ H @ ZT, keeping both
    matrices upper Hessenberg.

normalize_pencil
    Reduces an (n+1)-by-n pencil to upper-Hessenberg form through a
    generalized Schur decomposition of its trailing n-by-n blocks.

compute_angle
    Computes the plane rotation that sets the pole of a 2-by-2 pencil to a
    prescribed, possibly infinite, value.

pencil_poles
    Reads the poles off the subdiagonals of an upper-Hessenberg pencil.

is_upper_hessenberg
    Checks whether a matrix has zeros below its first subdiagonal.

Backends
--------
GeneralizedSchurBackend
    Abstract provider of generalized Schur decomposition and reordering.

ScipyGeneralizedSchurBackend
    Default provider based on LAPACK through SciPy.

Result Types
------------
MovePolesResult
    Named tuple with KT, HT, QT, ZT.

PlaneRotation
    Named tuple with s, c.

Exceptions
----------
RationalKrylovError
    Base class for pole relocation errors.

DegenerateRotationError
    The local 2-by-2 pencil cannot be rotated to the requested pole.

PoleReorderingError
    A placed pole cannot be reordered past the remaining poles.
"""

from torchpencil.rational_krylov._backend import (
    GeneralizedSchurBackend,
    ScipyGeneralizedSchurBackend,
)
from torchpencil.rational_krylov._compute_angle import compute_angle
from torchpencil.rational_krylov._exceptions import (
    DegenerateRotationError,
    PoleReorderingError,
    RationalKrylovError,
)
from torchpencil.rational_krylov._is_upper_hessenberg import (
    is_upper_hessenberg,
)
from torchpencil.rational_krylov._move_poles import move_poles
from torchpencil.rational_krylov._normalize_pencil import normalize_pencil
from torchpencil.rational_krylov._pencil_poles import pencil_poles
from torchpencil.rational_krylov._result_types import (
    MovePolesResult,
    PlaneRotation,
)

__all__ = [
    "DegenerateRotationError",
    "GeneralizedSchurBackend",
    "MovePolesResult",
    "PlaneRotation",
    "PoleReorderingError",
    "RationalKrylovError",
    "ScipyGeneralizedSchurBackend",
    "compute_angle",
    "is_upper_hessenberg",
    "move_poles",
    "normalize_pencil",
    "pencil_poles",
]
