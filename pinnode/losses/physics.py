"""
Physics Loss
ODE residual loss to enforce physics constraints
"""

import torch

from .residual import compute_residual


class PhysicsLoss:
    """
    Physics-informed loss that enforces ODE satisfaction.

    Computes the residual of the ODE at collocation points and
    penalizes deviations from zero: mean(R^2).

    Args:
        system: ODE system with derivative(t, y)
        mode: Forward mode used for the residual (default: 'train')

    Example:
        >>> from pinnode.diffeq import HookeSystem
        >>> loss_fn = PhysicsLoss(HookeSystem())
        >>> loss = loss_fn(model, t_collocation)
    """

    def __init__(self, system, mode: str = 'train'):
        self.system = system
        self.mode = mode

    def __call__(self, model, t: torch.Tensor) -> torch.Tensor:
        R, _, _ = compute_residual(self.system, model, t, self.mode)
        return torch.mean(R ** 2)

    def compute_stats(self, model, t: torch.Tensor) -> dict:
        """
        Compute detailed residual statistics.

        Returns:
            dict with mean, std, max, min, rms of residuals
        """
        R, _, _ = compute_residual(self.system, model, t, 'eval')
        R = R.detach()
        return {
            'mean': R.mean().item(),
            'std': R.std().item(),
            'max': R.max().item(),
            'min': R.min().item(),
            'rms': torch.sqrt(torch.mean(R ** 2)).item()
        }
