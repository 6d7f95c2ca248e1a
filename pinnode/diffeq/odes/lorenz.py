"""
Lorenz System
First-order chaotic benchmark
"""

import torch
from ..base import BaseODE


class LorenzSystem(BaseODE):
    """
    Lorenz convection model, state [x; y; z]:
    - dx/dt = sigma * (y - x)
    - dy/dt = x * (rho - z) - y
    - dz/dt = x * y - beta * z

    Trajectories on the attractor diverge exponentially, so long-horizon
    comparisons mostly measure how fast each method loses the phase.

    Args:
        sigma: Prandtl number (default: 10.0)
        rho: Rayleigh number (default: 28.0)
        beta: Geometric factor (default: 8/3)
        domain_t: Time domain (default: (0, 40))
        y0: Initial state (default: [1, 1, 1])
    """

    def __init__(
        self,
        sigma: float = 10.0,
        rho: float = 28.0,
        beta: float = 8.0/3.0,
        domain_t=(0.0, 40.0),
        y0=(1.0, 1.0, 1.0)
    ):
        self.sigma = sigma
        self.rho = rho
        self.beta = beta
        super().__init__(
            name="Lorenz",
            order=1,
            state_dim=3,
            domain_t=domain_t,
            y0=y0,
            params={'sigma': sigma, 'rho': rho, 'beta': beta}
        )

    def derivative(self, t, state):
        x, y, z = state[0], state[1], state[2]
        return torch.stack([
            self.sigma * (y - x),
            x * (self.rho - z) - y,
            x * y - self.beta * z,
        ])

    def is_chaotic(self) -> bool:
        """Check if parameters are in chaotic regime."""
        return self.rho > 24.74
