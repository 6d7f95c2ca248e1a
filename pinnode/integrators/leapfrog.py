"""
Leapfrog (Kick-Drift-Kick) Symplectic Integrator.

Velocity Verlet for second-order systems with state y = [x; v]:
    v_half = v + h/2 * a(t_n, x, v)
    x_new  = x + h * v_half
    v_new  = v_half + h/2 * a(t_{n+1}, x_new, v_half)
"""

import torch

from .base import prepare_grid


def leapfrog(accel, t, y0) -> torch.Tensor:
    """
    Velocity-Verlet integration of x'' = a(t, x, v).

    Args:
        accel: Acceleration a(t, X[d, N], V[d, N]) -> [d, N]
        t: Time grid [N]
        y0: Initial state [x0; v0] with 2d entries

    Returns:
        Trajectory [2d, N]
    """
    t, Y = prepare_grid(t, y0)
    D = Y.shape[0]
    if D % 2 != 0:
        raise ValueError(f"leapfrog expects an even-sized state y=[x; v], got D={D}")
    d = D // 2

    def a(tt, x, v):
        out = accel(tt, x.reshape(-1, 1), v.reshape(-1, 1))
        return torch.as_tensor(out, dtype=torch.float64).reshape(-1)

    x = Y[:d, 0].clone()
    v = Y[d:, 0].clone()

    for n in range(t.numel() - 1):
        h = float(t[n + 1] - t[n])
        v_half = v + 0.5 * h * a(float(t[n]), x, v)
        x = x + h * v_half
        # velocity-dependent forces see the half-step velocity
        v = v_half + 0.5 * h * a(float(t[n + 1]), x, v_half)
        Y[:d, n + 1] = x
        Y[d:, n + 1] = v
    return Y
