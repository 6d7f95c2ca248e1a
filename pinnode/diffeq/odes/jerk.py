"""
Jerk Equation
Third-order nonlinear ODE in first-order form
"""

import torch
from ..base import BaseODE


class JerkSystem(BaseODE):
    """
    Jerk equation: y''' = -a y'' - y - (y')^2.

    State [y; y'; y'']:
    - y1' = y2
    - y2' = y3
    - y3' = -a y3 - y1 - y2^2

    Args:
        a: Damping of the second derivative (default: 1.0)
        domain_t: Time domain (default: (0, 20))
        y0: Initial state (default: [1, 0, 0])
    """

    def __init__(self, a: float = 1.0, domain_t=(0.0, 20.0), y0=(1.0, 0.0, 0.0)):
        self.a = a
        super().__init__(
            name="Jerk (third order)",
            order=3,
            state_dim=3,
            domain_t=domain_t,
            y0=y0,
            params={'a': a}
        )

    def derivative(self, t, y):
        return torch.stack([y[1], y[2], -self.a * y[2] - y[0] - y[1] ** 2])
