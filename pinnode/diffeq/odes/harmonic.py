"""
Damped Harmonic Oscillator
"""

import torch
from ..base import BaseODE


class HarmonicOscillator(BaseODE):
    """
    Damped harmonic oscillator: m x'' + c x' + k x = 0.

    State y = [x; v]:
    - dx/dt = v
    - dv/dt = -(k/m) x - (c/m) v

    With c = 0 the system is Hamiltonian and conserves 0.5 m v^2 + 0.5 k x^2.

    Args:
        m: Mass (default: 1.0)
        c: Damping coefficient (default: 0.2)
        k: Spring constant (default: 1.0)
        domain_t: Time domain (default: (0, 20))
        y0: Initial state [x0, v0] (default: [1, 0])
    """

    def __init__(
        self,
        m: float = 1.0,
        c: float = 0.2,
        k: float = 1.0,
        domain_t=(0.0, 20.0),
        y0=(1.0, 0.0)
    ):
        self.k_over_m = k / m
        self.c_over_m = c / m
        super().__init__(
            name="Damped harmonic oscillator",
            order=2,
            state_dim=2,
            domain_t=domain_t,
            y0=y0,
            params={'m': m, 'c': c, 'k': k}
        )

    def derivative(self, t, y):
        return torch.stack([y[1], -self.k_over_m * y[0] - self.c_over_m * y[1]])

    def acceleration(self, t, x, v):
        return -self.k_over_m * x - self.c_over_m * v

    def energy(self, y: torch.Tensor) -> torch.Tensor:
        m, k = self.params['m'], self.params['k']
        return 0.5 * m * y[1] ** 2 + 0.5 * k * y[0] ** 2

    def is_damped(self) -> bool:
        return self.params['c'] != 0
