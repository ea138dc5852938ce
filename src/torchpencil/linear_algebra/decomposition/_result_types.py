from typing import NamedTuple

from torch import Tensor


class GeneralizedSchurResult(NamedTuple):
    """Result of a complex generalized Schur (QZ) decomposition or reordering.

    Factors matrix pencil (A, B) such that:
    - A = Q @ S @ Z.mH
    - B = Q @ T @ Z.mH

    where S and T are upper triangular and Q and Z are unitary.

    The generalized eigenvalues are alpha[i] / beta[i].
    """

    S: Tensor  # (n, n) - Schur form of A
    T: Tensor  # (n, n) - Schur form of B
    alpha: Tensor  # (n,) - complex, eigenvalue numerators
    beta: Tensor  # (n,) - complex, eigenvalue denominators
    Q: Tensor  # (n, n) - Left unitary matrix
    Z: Tensor  # (n, n) - Right unitary matrix
