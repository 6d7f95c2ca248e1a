"""
Planar Three-Body Problem
Newtonian gravity with a softening length
"""

import torch
from ..base import BaseODE


class ThreeBodySystem(BaseODE):
    """
    Planar Newtonian 3-body problem.

    State (D=12) y = [r1; r2; r3; v1; v2; v3], each r_i, v_i in R^2.

    Dynamics:
        r_i' = v_i
        v_i' = sum_{j != i} G m_j (r_j - r_i) / (|r_j - r_i|^2 + eps^2)^(3/2)

    Args:
        G: Gravitational constant (default: 1.0)
        masses: Body masses (default: (1, 1, 1))
        softening: Softening length eps (default: 1e-3)
        r0: Initial positions, 3 pairs
        v0: Initial velocities, 3 pairs
        domain_t: Time domain (default: (0, 20))
    """

    def __init__(
        self,
        G: float = 1.0,
        masses=(1.0, 1.0, 1.0),
        softening: float = 1e-3,
        r0=((-1.0, 0.0), (1.0, 0.0), (0.0, 0.8)),
        v0=((0.0, 0.25), (0.0, -0.25), (-0.30, 0.0)),
        domain_t=(0.0, 20.0)
    ):
        masses = tuple(float(m) for m in masses)
        if len(masses) != 3:
            raise ValueError(f"three-body system needs 3 masses, got {len(masses)}")
        r0 = torch.as_tensor(r0, dtype=torch.float64).reshape(-1)
        v0 = torch.as_tensor(v0, dtype=torch.float64).reshape(-1)
        if r0.numel() != 6 or v0.numel() != 6:
            raise ValueError("r0 and v0 must each hold 3 planar vectors")

        super().__init__(
            name="Three-body (planar)",
            order=2,
            state_dim=12,
            domain_t=domain_t,
            y0=torch.cat([r0, v0]),
            params={'G': G, 'masses': masses, 'softening': softening}
        )

    def _pairwise_acceleration(self, x):
        G = self.params['G']
        m = self.params['masses']
        eps = self.params['softening']

        r1, r2, r3 = x[0:2], x[2:4], x[4:6]
        dr12 = r2 - r1
        dr13 = r3 - r1
        dr23 = r3 - r2

        d12 = torch.sqrt((dr12 ** 2).sum(dim=0) + eps ** 2) ** 3
        d13 = torch.sqrt((dr13 ** 2).sum(dim=0) + eps ** 2) ** 3
        d23 = torch.sqrt((dr23 ** 2).sum(dim=0) + eps ** 2) ** 3

        a1 = G * (m[1] * dr12 / d12 + m[2] * dr13 / d13)
        a2 = G * (-m[0] * dr12 / d12 + m[2] * dr23 / d23)
        a3 = G * (-m[0] * dr13 / d13 - m[1] * dr23 / d23)
        return torch.cat([a1, a2, a3])

    def derivative(self, t, y):
        return torch.cat([y[6:12], self._pairwise_acceleration(y[0:6])])

    def acceleration(self, t, x, v):
        return self._pairwise_acceleration(x)
