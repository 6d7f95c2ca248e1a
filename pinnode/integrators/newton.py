"""
Newton corrector used by the implicit integrators.

jacobian() approximates dF/dy by central differences; newton_solve()
iterates y <- y - J^-1 F(y) with a fixed iteration budget. Reaching the
budget is not an error: the last iterate is returned and the caller can
inspect NewtonResult.converged.
"""

from typing import Callable, NamedTuple

import torch


class NewtonResult(NamedTuple):
    y: torch.Tensor
    converged: bool
    iterations: int


def jacobian(F: Callable[[torch.Tensor], torch.Tensor], y: torch.Tensor) -> torch.Tensor:
    """
    Central-difference Jacobian of F at y.

    Column i is (F(y + h_i e_i) - F(y - h_i e_i)) / (2 h_i) with
    h_i = eps0 * (1 + |y_i|) and eps0 = 1e-6 * max(1, ||y||_2).
    Costs 2D evaluations of F.

    Args:
        F: Map from a 1-D tensor [D] to a 1-D tensor [D]
        y: Evaluation point [D]

    Returns:
        J: [D, D]
    """
    y = torch.as_tensor(y, dtype=torch.float64).reshape(-1)
    D = y.numel()
    J = torch.zeros(D, D, dtype=torch.float64)
    eps0 = 1e-6 * max(1.0, float(torch.linalg.norm(y)))

    for i in range(D):
        h = eps0 * (1.0 + abs(float(y[i])))
        e = torch.zeros(D, dtype=torch.float64)
        e[i] = h
        J[:, i] = (F(y + e) - F(y - e)) / (2.0 * h)

    return J


def newton_solve(
    F: Callable[[torch.Tensor], torch.Tensor],
    y_guess: torch.Tensor,
    tol: float = 1e-8,
    maxit: int = 20
) -> NewtonResult:
    """
    Solve F(y) = 0 by Newton iteration with a finite-difference Jacobian.

    Stops when ||F(y)||_2 < tol or ||dy||_2 < tol, otherwise after maxit
    iterations.

    Args:
        F: Residual function [D] -> [D]
        y_guess: Initial guess [D]
        tol: Tolerance on the residual and on the update
        maxit: Iteration budget

    Returns:
        NewtonResult(y, converged, iterations)
    """
    y = torch.as_tensor(y_guess, dtype=torch.float64).reshape(-1).clone()

    for it in range(1, maxit + 1):
        Fy = F(y)
        if torch.linalg.norm(Fy) < tol:
            return NewtonResult(y, True, it)

        J = jacobian(F, y)
        dy = -torch.linalg.solve(J, Fy)
        y = y + dy

        if torch.linalg.norm(dy) < tol:
            return NewtonResult(y, True, it)

    return NewtonResult(y, False, maxit)
