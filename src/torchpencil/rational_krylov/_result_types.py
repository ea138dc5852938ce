from typing import NamedTuple, Optional

import torch
from torch import Tensor


class MovePolesResult(NamedTuple):
    """Result of a pole relocation of an (n+1)-by-n pencil (K, H).

    Satisfies KT = QT @ K @ ZT and HT = QT @ H @ ZT, with KT and HT upper
    Hessenberg and QT, ZT unitary.
    """

    KT: Tensor  # (n+1, n) - transformed K
    HT: Tensor  # (n+1, n) - transformed H
    QT: Tensor  # (n+1, n+1) - left unitary factor
    ZT: Tensor  # (n, n) - right unitary factor


class PlaneRotation(NamedTuple):
    """Sine and cosine of the plane rotation G = [[c, -s], [conj(s), c]].

    c is real and nonnegative and |s|^2 + c^2 = 1.
    """

    s: complex
    c: float

    def matrix(
        self,
        dtype: torch.dtype = torch.complex128,
        device: Optional[torch.device] = None,
    ) -> Tensor:
        return torch.tensor(
            [[self.c, -self.s], [self.s.conjugate(), self.c]],
            dtype=dtype,
            device=device,
        )
