"""
Van der Pol Oscillator
Nonlinear oscillator with a stable limit cycle
"""

import torch
from ..base import BaseODE


class VanDerPolOscillator(BaseODE):
    """
    Van der Pol oscillator: x'' - mu (1 - x^2) x' + x = 0.

    State y = [x; v]:
    - dx/dt = v
    - dv/dt = mu (1 - x^2) v - x

    Args:
        mu: Nonlinearity / damping strength (default: 3.0)
        domain_t: Time domain (default: (0, 20))
        y0: Initial state (default: [1, 0])
    """

    def __init__(self, mu: float = 3.0, domain_t=(0.0, 20.0), y0=(1.0, 0.0)):
        self.mu = mu
        super().__init__(
            name="Van der Pol",
            order=2,
            state_dim=2,
            domain_t=domain_t,
            y0=y0,
            params={'mu': mu}
        )

    def derivative(self, t, y):
        x, v = y[0], y[1]
        return torch.stack([v, self.mu * (1 - x ** 2) * v - x])

    def acceleration(self, t, x, v):
        return self.mu * (1 - x ** 2) * v - x
