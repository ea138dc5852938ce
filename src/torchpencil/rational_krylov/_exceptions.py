"""Exceptions for rational Krylov pencil transformations."""

from typing import Optional

from torchpencil.linear_algebra.decomposition import ReorderingError


class RationalKrylovError(Exception):
    """Base exception for rational Krylov pencil errors."""

    pass


class PoleReorderingError(RationalKrylovError, ReorderingError):
    """Raised when a freshly placed pole cannot be pushed down the pencil.

    This occurs when the generalized Schur reordering rejects a swap, which
    happens when the requested pole numerically coincides with one of the
    poles it has to move past.

    Attributes
    ----------
    iteration : int
        1-based pole-move iteration in which the failure happened.
    pole : complex
        The requested pole that could not be moved.
    """

    def __init__(self, message: str, *, iteration: int, pole: complex):
        super().__init__(message)
        self.iteration = iteration
        self.pole = pole


class DegenerateRotationError(RationalKrylovError):
    """Raised when no plane rotation can realise the requested pole.

    This occurs when the leading entries h1 and k1 of the first column of
    the pencil both vanish, so the local 2-by-2 pencil is rank deficient and
    the ratio of its second row cannot be set.

    Attributes
    ----------
    iteration : int or None
        1-based pole-move iteration in which the failure happened, or None
        when raised outside of :func:`move_poles`.
    pole : complex or None
        The requested pole that could not be placed.
    """

    def __init__(
        self,
        message: str,
        *,
        iteration: Optional[int] = None,
        pole: Optional[complex] = None,
    ):
        super().__init__(message)
        self.iteration = iteration
        self.pole = pole
