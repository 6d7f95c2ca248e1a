"""
RK4 Integrator - 4th order Runge-Kutta method.

    k1 = f(t_n, y_n)
    k2 = f(t_n + h/2, y_n + h/2 * k1)
    k3 = f(t_n + h/2, y_n + h/2 * k2)
    k4 = f(t_n + h, y_n + h * k3)
    y_{n+1} = y_n + h/6 * (k1 + 2*k2 + 2*k3 + k4)
"""

import torch

from .base import as_vector_field, prepare_grid


def runge_kutta(f, t, y0) -> torch.Tensor:
    """
    Classic RK4 for y' = f(t, y) on an arbitrary increasing grid.

    Args:
        f: Batched right-hand side f(t, Y[D, N]) -> [D, N]
        t: Time grid [N]
        y0: Initial state [D]

    Returns:
        Trajectory [D, N]
    """
    t, Y = prepare_grid(t, y0)
    field = as_vector_field(f)

    for n in range(t.numel() - 1):
        h = float(t[n + 1] - t[n])
        tn = float(t[n])
        yn = Y[:, n]
        k1 = field(tn, yn)
        k2 = field(tn + 0.5 * h, yn + 0.5 * h * k1)
        k3 = field(tn + 0.5 * h, yn + 0.5 * h * k2)
        k4 = field(tn + h, yn + h * k3)
        Y[:, n + 1] = yn + (h / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)
    return Y
