"""
Crank-Nicolson (trapezoidal rule) - 2nd order implicit method.

y_{n+1} = y_n + h/2 (f(t_n, y_n) + f(t_{n+1}, y_{n+1}))
"""

import logging

import torch

from .base import as_vector_field, prepare_grid, report_nonconvergence
from .newton import newton_solve

logger = logging.getLogger(__name__)


def crank_nicolson(f, t, y0, tol: float = 1e-8, maxit: int = 20, strict: bool = False) -> torch.Tensor:
    """
    Trapezoidal rule for y' = f(t, y), Newton-solved at every step.

    The initial guess is the explicit step y_n + h f(t_n, y_n).

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
        fn = field(float(t[n]), yn)

        guess = yn + h * fn
        result = newton_solve(lambda y: y - yn - 0.5 * h * (fn + field(tn1, y)), guess, tol, maxit)
        failures += not result.converged
        Y[:, n + 1] = result.y

    report_nonconvergence("crank_nicolson", failures, t.numel() - 1, strict, logger)
    return Y
