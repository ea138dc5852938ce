"""Linear algebra operations with full PyTorch integration.

Submodules
----------
decomposition
    Generalized Schur decomposition and reordering of matrix pencils.
"""

from torchpencil.linear_algebra import decomposition

__all__ = ["decomposition"]
