"""
Euler Integrators - 1st order explicit and implicit methods.

Forward:   y_{n+1} = y_n + h f(t_n, y_n)
Backward:  y_{n+1} = y_n + h f(t_{n+1}, y_{n+1})   (Newton-solved)
"""

import logging

import torch

from .base import as_vector_field, prepare_grid, report_nonconvergence
from .newton import newton_solve

logger = logging.getLogger(__name__)


def euler_explicit(f, t, y0) -> torch.Tensor:
    """
    Classic forward Euler on y' = f(t, y).

    The step h is taken from the first interval and applied to every step,
    so t must be uniform.

    Args:
        f: Batched right-hand side f(t, Y[D, N]) -> [D, N]
        t: Uniform time grid [N]
        y0: Initial state [D]

    Returns:
        Trajectory [D, N]
    """
    t, Y = prepare_grid(t, y0)
    field = as_vector_field(f)
    if t.numel() < 2:
        return Y

    h = float(t[1] - t[0])
    for n in range(t.numel() - 1):
        Y[:, n + 1] = Y[:, n] + h * field(float(t[n]), Y[:, n])
    return Y


def euler_implicit(f, t, y0, tol: float = 1e-8, maxit: int = 20, strict: bool = False) -> torch.Tensor:
    """
    Backward Euler for y' = f(t, y) using Newton iterations.

    Each step solves F(y) = y - y_n - h f(t_{n+1}, y) = 0 starting from the
    explicit Euler guess. Steps that exhaust maxit keep their last iterate.

    Args:
        f: Batched right-hand side f(t, Y[D, N]) -> [D, N]
        t: Time grid [N] (uniform or not)
        y0: Initial state [D]
        tol: Newton tolerance (default: 1e-8)
        maxit: Newton iterations per step (default: 20)
        strict: Raise RuntimeError instead of warning on non-convergence

    Returns:
        Trajectory [D, N]
    """
    t, Y = prepare_grid(t, y0)
    field = as_vector_field(f)
    failures = 0

    for n in range(t.numel() - 1):
        h = float(t[n + 1] - t[n])
        tn1 = float(t[n + 1])
        yn = Y[:, n]

        guess = yn + h * field(float(t[n]), yn)
        result = newton_solve(lambda y: y - yn - h * field(tn1, y), guess, tol, maxit)
        failures += not result.converged
        Y[:, n + 1] = result.y

    report_nonconvergence("euler_implicit", failures, t.numel() - 1, strict, logger)
    return Y
