"""
Combined Loss
Weighted combination of residual, initial-condition and data losses

Total = λ_res * Residual + λ_ic * IC + λ_data * Data
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

import torch

from ..data import LabeledBatch
from .data import DataLoss, InitialConditionLoss
from .physics import PhysicsLoss


@dataclass(frozen=True)
class LossWeights:
    """Non-negative loss weights; the data term is off by default."""
    lambda_res: float = 1.0
    lambda_ic: float = 1.0
    lambda_data: float = 0.0

    def __post_init__(self):
        for name in ('lambda_res', 'lambda_ic', 'lambda_data'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")


class LossTerms(NamedTuple):
    residual: torch.Tensor
    initial_condition: torch.Tensor
    data: torch.Tensor


class CombinedLoss:
    """
    Weighted combination of all PINN loss components.

    Total Loss = λ_res * mean(R^2) + λ_ic * mean((Y(t0) - y0)^2) + λ_data * mean((Y(t_d) - y_d)^2)

    The data term is exactly zero when no labeled batch is given.

    Args:
        system: ODE system with derivative() and an initial state
        weights: LossWeights (default: res=1, ic=1, data=0)
        t0: Initial time (default: start of the system's time domain)
        y0: Initial state (default: the system's initial state)

    Example:
        >>> loss_fn = CombinedLoss(HookeSystem(), LossWeights(lambda_data=0.5))
        >>> total, terms = loss_fn(model, t_batch, data)
    """

    def __init__(
        self,
        system,
        weights: Optional[LossWeights] = None,
        t0: Optional[float] = None,
        y0=None
    ):
        self.system = system
        self.weights = weights or LossWeights()
        t0 = system.domain_t[0] if t0 is None else t0
        y0 = system.initial_condition() if y0 is None else y0

        self.physics_loss = PhysicsLoss(system, mode='train')
        self.ic_loss = InitialConditionLoss(t0, y0)
        self.data_loss = DataLoss()

    def __call__(
        self,
        model,
        t_collocation: torch.Tensor,
        data: Optional[LabeledBatch] = None
    ) -> Tuple[torch.Tensor, LossTerms]:
        """
        Compute total weighted loss.

        Args:
            model: PINN surrogate
            t_collocation: Collocation batch [1, N]
            data: Optional labeled batch for the data term

        Returns:
            total_loss: Weighted sum
            terms: LossTerms with the unweighted components
        """
        loss_res = self.physics_loss(model, t_collocation)
        loss_ic = self.ic_loss(model)
        loss_data = self.data_loss(model, data)
        if loss_data is None:
            loss_data = torch.zeros((), dtype=loss_res.dtype)

        w = self.weights
        total = (
            w.lambda_res * loss_res +
            w.lambda_ic * loss_ic +
            w.lambda_data * loss_data
        )
        return total, LossTerms(loss_res, loss_ic, loss_data)

    def get_weights(self) -> dict:
        """Get current loss weights."""
        return {
            'lambda_res': self.weights.lambda_res,
            'lambda_ic': self.weights.lambda_ic,
            'lambda_data': self.weights.lambda_data
        }
