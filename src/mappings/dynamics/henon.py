"""
Henon map.

The canonical two-dimensional dissipative map with a strange attractor for
the classic parameters a = 1.4, b = 0.3.
"""

import torch

from .base import MappingAutonomousEndogenous


class Henon(MappingAutonomousEndogenous):
    """
    Henon map (autonomous, endogenous, discrete):
    x0[i+1] = x1[i] + 1 - a * x0[i]^2
    x1[i+1] = b * x0[i]
    """

    def __init__(self, a: float = 1.4, b: float = 0.3):
        super().__init__(state_dim=2, name="Henon")
        self.a = a
        self.b = b

    def compute_rhs(self, x: torch.Tensor, rhs: torch.Tensor) -> None:
        rhs[..., 0] = x[..., 1] + 1.0 - self.a * x[..., 0] * x[..., 0]
        rhs[..., 1] = self.b * x[..., 0]


if __name__ == "__main__":
    henon = Henon()
    x = torch.zeros(2, dtype=torch.float64)
    assert torch.equal(henon(x), torch.tensor([1.0, 0.0], dtype=torch.float64))
    print("Henon tests passed.")
