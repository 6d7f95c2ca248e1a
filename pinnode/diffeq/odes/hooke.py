"""
Hooke's Law
Linear spring-mass oscillator
"""

import torch
from ..base import BaseODE


class HookeSystem(BaseODE):
    """
    Linear spring-mass system: m x'' + k x = 0.

    State y = [x; v]:
    - dx/dt = v
    - dv/dt = -(k/m) x

    Exact solution for y0 = [1; 0] is x(t) = cos(sqrt(k/m) t).

    Args:
        m: Mass (default: 1.0)
        k: Spring constant (default: 1.0)
        domain_t: Time domain (default: (0, 10))
        y0: Initial state [x0, v0] (default: [1, 0])
    """

    def __init__(
        self,
        m: float = 1.0,
        k: float = 1.0,
        domain_t=(0.0, 10.0),
        y0=(1.0, 0.0)
    ):
        self.omega_sq = k / m
        super().__init__(
            name="Hooke",
            order=2,
            state_dim=2,
            domain_t=domain_t,
            y0=y0,
            params={'m': m, 'k': k}
        )

    def derivative(self, t, y):
        return torch.stack([y[1], -self.omega_sq * y[0]])

    def acceleration(self, t, x, v):
        return -self.omega_sq * x

    def energy(self, y: torch.Tensor) -> torch.Tensor:
        """Total energy 0.5 m v^2 + 0.5 k x^2 per column."""
        m, k = self.params['m'], self.params['k']
        return 0.5 * m * y[1] ** 2 + 0.5 * k * y[0] ** 2

    def exact_solution(self, t: torch.Tensor) -> torch.Tensor:
        """Closed form trajectory [2, N] for the configured initial state."""
        w = self.omega_sq ** 0.5
        x0, v0 = self.y0
        x = x0 * torch.cos(w * t) + (v0 / w) * torch.sin(w * t)
        v = -x0 * w * torch.sin(w * t) + v0 * torch.cos(w * t)
        return torch.stack([x, v])
