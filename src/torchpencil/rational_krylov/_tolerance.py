import torch


def _real_dtype(dtype: torch.dtype) -> torch.dtype:
    if dtype == torch.complex64:
        return torch.float32
    if dtype == torch.complex128:
        return torch.float64
    if dtype.is_floating_point:
        return dtype
    return torch.float64


def default_tol(dtype: torch.dtype) -> float:
    """Get dtype-aware default tolerance for pole equality tests.

    Two ratios h1/k1 and xi are treated as equal when
    ``|h1 - xi*k1| <= tol * (|h1| + |xi|*|k1|)``. The default is a small
    multiple of machine epsilon:
    - float32 / complex64: ~9.5e-7
    - float64 / complex128: ~1.8e-15
    """
    return 8 * torch.finfo(_real_dtype(dtype)).eps


def structure_tol(dtype: torch.dtype) -> float:
    """Relative tolerance for zero entries below the first subdiagonal."""
    if _real_dtype(dtype) == torch.float32:
        return 1e-5
    return 1e-12
