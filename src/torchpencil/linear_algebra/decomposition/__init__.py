"""Matrix decompositions for complex matrix pencils.

This module wraps the LAPACK generalized Schur routines exposed by SciPy so
that they take and return PyTorch tensors.

Functions
---------
generalized_schur
    Computes the complex generalized Schur (QZ) decomposition of matrix
    pencil (A, B) such that A = Q @ S @ Z.H and B = Q @ T @ Z.H.

reorder_generalized_schur
    Reorders a complex generalized Schur form so that selected eigenvalues
    occupy the leading diagonal positions.

Result Types
------------
GeneralizedSchurResult
    Named tuple with S, T, alpha, beta, Q, Z.

Exceptions
----------
GeneralizedSchurError
    Base class for decomposition errors.

ConvergenceError
    The QZ iteration did not converge.

ReorderingError
    A requested eigenvalue swap was rejected.
"""

from torchpencil.linear_algebra.decomposition._exceptions import (
    ConvergenceError,
    GeneralizedSchurError,
    ReorderingError,
)
from torchpencil.linear_algebra.decomposition._generalized_schur import (
    generalized_schur,
)
from torchpencil.linear_algebra.decomposition._reorder_generalized_schur import (
    reorder_generalized_schur,
)
from torchpencil.linear_algebra.decomposition._result_types import (
    GeneralizedSchurResult,
)

__all__ = [
    "ConvergenceError",
    "GeneralizedSchurError",
    "GeneralizedSchurResult",
    "ReorderingError",
    "generalized_schur",
    "reorder_generalized_schur",
]
