"""Exceptions for generalized Schur decompositions."""


class GeneralizedSchurError(Exception):
    """Base exception for generalized Schur decomposition errors."""

    pass


class ConvergenceError(GeneralizedSchurError):
    """Raised when the QZ iteration fails to converge.

    This occurs when:
    - LAPACK ``?gges`` reports that the QZ iteration did not converge
    - The pencil is too close to singular (A and B share a common null space)
    """

    pass


class ReorderingError(GeneralizedSchurError):
    """Raised when eigenvalues of a generalized Schur form cannot be reordered.

    This occurs when LAPACK ``?tgsen`` rejects a swap of two adjacent
    diagonal entries because the swapped pencil would be too far from
    generalized Schur form, typically because the eigenvalues being swapped
    are numerically coincident.
    """

    pass
