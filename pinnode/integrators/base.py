"""
Shared pieces of the integrator suite.

Every integrator has the signature

    integrator(func, t, y0, **options) -> Y

where t is an increasing time grid of length N, y0 the initial state of
length D and Y the [D, N] trajectory with Y[:, 0] == y0. Trajectories are
float64 torch tensors.
"""

from typing import Callable, Tuple

import torch

Integrator = Callable[..., torch.Tensor]


def prepare_grid(t, y0) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Normalize a time grid and initial state and allocate the trajectory.

    Args:
        t: Time grid, row, column or 1-D (N entries)
        y0: Initial state, row, column or 1-D (D entries)

    Returns:
        t: 1-D float64 grid [N]
        Y: Trajectory buffer [D, N] with the first column set to y0
    """
    t = torch.as_tensor(t, dtype=torch.float64).detach().reshape(-1)
    y0 = torch.as_tensor(y0, dtype=torch.float64).detach().reshape(-1)
    if t.numel() < 1:
        raise ValueError("time grid must not be empty")

    Y = torch.zeros(y0.numel(), t.numel(), dtype=torch.float64)
    Y[:, 0] = y0
    return t, Y


def as_vector_field(f: Callable) -> Callable:
    """Wrap a batched f(t, Y[D, N]) so it maps a 1-D state to a 1-D derivative."""
    def field(t, y: torch.Tensor) -> torch.Tensor:
        return torch.as_tensor(f(t, y.reshape(-1, 1)), dtype=torch.float64).reshape(-1)
    return field


def report_nonconvergence(method: str, failures: int, steps: int, strict: bool, logger) -> None:
    """Log (or raise, when strict) the number of steps whose Newton solve hit its budget."""
    if failures == 0:
        return
    msg = f"{method}: Newton did not converge on {failures}/{steps} steps; last iterates kept"
    if strict:
        raise RuntimeError(msg)
    logger.warning(msg)
