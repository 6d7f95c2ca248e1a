"""
Blasius Boundary Layer
Third-order boundary value problem solved as an IVP by shooting
"""

import torch
from ..base import BaseODE


class BlasiusEquation(BaseODE):
    """
    Blasius boundary-layer equation: f''' + 0.5 f f'' = 0.

    Boundary conditions f(0) = 0, f'(0) = 0, f'(inf) = 1. The far-field
    condition is replaced by a guess s = f''(0) (the shooting parameter)
    and the problem is integrated on the truncated domain [0, eta_max].

    State [f; f'; f'']:
    - y1' = y2
    - y2' = y3
    - y3' = -0.5 y1 y3

    Args:
        s: Shooting parameter f''(0) (default: 0.4696)
        eta_max: Truncation of the semi-infinite domain (default: 10.0)
    """

    def __init__(self, s: float = 0.4696, eta_max: float = 10.0):
        super().__init__(
            name="Blasius boundary layer",
            order=3,
            state_dim=3,
            domain_t=(0.0, eta_max),
            y0=(0.0, 0.0, s),
            params={'s': s, 'eta_max': eta_max}
        )

    def derivative(self, t, y):
        return torch.stack([y[1], y[2], -0.5 * y[0] * y[2]])

    def far_field_error(self, h: float = 1e-2) -> float:
        """f'(eta_max) - 1 for the current shooting parameter, via RK4."""
        from ...integrators.rk4 import runge_kutta

        eta_max = self.params['eta_max']
        n = max(int(round(eta_max / h)), 1) + 1
        eta = torch.linspace(0.0, eta_max, n, dtype=torch.float64)
        Y = runge_kutta(self.derivative, eta, self.initial_condition())
        return float(Y[1, -1]) - 1.0

    def shoot(
        self,
        s1: float = None,
        h: float = 1e-2,
        tol: float = 1e-10,
        maxit: int = 50
    ) -> 'BlasiusEquation':
        """
        Refine the shooting parameter with the secant method.

        Args:
            s1: Second starting guess (default: 1.1 * s)
            h: RK4 step used for each shot
            tol: Stop when |f'(eta_max) - 1| < tol
            maxit: Maximum secant iterations

        Returns:
            New BlasiusEquation with the refined s
        """
        eta_max = self.params['eta_max']
        s0 = self.params['s']
        s1 = 1.1 * s0 if s1 is None else s1
        g0 = BlasiusEquation(s0, eta_max).far_field_error(h)
        g1 = BlasiusEquation(s1, eta_max).far_field_error(h)

        for _ in range(maxit):
            if abs(g1) < tol or g1 == g0:
                break
            s0, s1 = s1, s1 - g1 * (s1 - s0) / (g1 - g0)
            g0, g1 = g1, BlasiusEquation(s1, eta_max).far_field_error(h)

        return BlasiusEquation(s1, eta_max)
