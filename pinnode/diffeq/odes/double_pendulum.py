"""
Double Pendulum
Planar double pendulum, chaotic for large amplitudes
"""

import math

import torch
from ..base import BaseODE


class DoublePendulum(BaseODE):
    """
    Planar double pendulum with angles theta1, theta2.

    State y = [theta1; theta2; omega1; omega2] (positions then velocities).

    Args:
        m1, m2: Bob masses (default: 1.0)
        l1, l2: Rod lengths (default: 1.0)
        g: Gravity (default: 9.81)
        domain_t: Time domain (default: (0, 20))
        y0: Initial state (default: both arms horizontal, at rest)
    """

    def __init__(
        self,
        m1: float = 1.0,
        m2: float = 1.0,
        l1: float = 1.0,
        l2: float = 1.0,
        g: float = 9.81,
        domain_t=(0.0, 20.0),
        y0=(math.pi / 2, math.pi / 2, 0.0, 0.0)
    ):
        super().__init__(
            name="Double pendulum",
            order=2,
            state_dim=4,
            domain_t=domain_t,
            y0=y0,
            params={'m1': m1, 'm2': m2, 'l1': l1, 'l2': l2, 'g': g}
        )

    def _angular_acceleration(self, th1, th2, w1, w2):
        p = self.params
        m1, m2, l1, l2, g = p['m1'], p['m2'], p['l1'], p['l2'], p['g']
        d = th2 - th1

        den1 = (m1 + m2) * l1 - m2 * l1 * torch.cos(d) ** 2
        den2 = (l2 / l1) * den1

        w1dot = (
            m2 * l1 * w1 ** 2 * torch.sin(d) * torch.cos(d)
            + m2 * g * torch.sin(th2) * torch.cos(d)
            + m2 * l2 * w2 ** 2 * torch.sin(d)
            - (m1 + m2) * g * torch.sin(th1)
        ) / den1

        w2dot = (
            -m2 * l2 * w2 ** 2 * torch.sin(d) * torch.cos(d)
            + (m1 + m2) * (
                g * torch.sin(th1) * torch.cos(d)
                - l1 * w1 ** 2 * torch.sin(d)
                - g * torch.sin(th2)
            )
        ) / den2

        return w1dot, w2dot

    def derivative(self, t, y):
        th1, th2, w1, w2 = y[0], y[1], y[2], y[3]
        w1dot, w2dot = self._angular_acceleration(th1, th2, w1, w2)
        return torch.stack([w1, w2, w1dot, w2dot])

    def acceleration(self, t, x, v):
        w1dot, w2dot = self._angular_acceleration(x[0], x[1], v[0], v[1])
        return torch.stack([w1dot, w2dot])
