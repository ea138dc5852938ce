from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

from torch import Tensor

from torchpencil.linear_algebra.decomposition import (
    GeneralizedSchurResult,
    generalized_schur,
    reorder_generalized_schur,
)


class GeneralizedSchurBackend(ABC):
    """Generalized Schur primitive used by the pole relocation routines.

    Implementations must return factors in the convention
    ``A = Q @ S @ Z.mH``, ``B = Q @ T @ Z.mH`` with S and T upper
    triangular.
    """

    @abstractmethod
    def decompose(self, a: Tensor, b: Tensor) -> GeneralizedSchurResult:
        """Complex generalized Schur decomposition of the pencil (a, b)."""
        raise NotImplementedError

    @abstractmethod
    def reorder(
        self,
        s: Tensor,
        t: Tensor,
        select: Union[Tensor, Sequence[bool]],
    ) -> GeneralizedSchurResult:
        """Move the selected eigenvalues of the triangular pencil (s, t) to
        the leading positions.

        Q and Z start from the identity and no outer factors are
        accumulated, so the returned Q and Z are the reordering
        transformations themselves: ``S = Q.mH @ s @ Z`` and
        ``T = Q.mH @ t @ Z``. Callers fold them into their own factors.
        """
        raise NotImplementedError


class ScipyGeneralizedSchurBackend(GeneralizedSchurBackend):
    """Backend based on LAPACK ``?gges`` and ``?tgsen`` through SciPy."""

    def decompose(self, a: Tensor, b: Tensor) -> GeneralizedSchurResult:
        return generalized_schur(a, b)

    def reorder(
        self,
        s: Tensor,
        t: Tensor,
        select: Union[Tensor, Sequence[bool]],
    ) -> GeneralizedSchurResult:
        return reorder_generalized_schur(s, t, select)


def resolve_backend(
    backend: Optional[GeneralizedSchurBackend],
) -> GeneralizedSchurBackend:
    if backend is None:
        return ScipyGeneralizedSchurBackend()
    if not isinstance(backend, GeneralizedSchurBackend):
        raise TypeError(
            f"backend must be a GeneralizedSchurBackend, got {type(backend).__name__}"
        )
    return backend
