"""
Supervised Loss Terms
Initial-condition and data-fit penalties
"""

from typing import Optional

import torch

from ..data import LabeledBatch


class InitialConditionLoss:
    """
    mean((Y(t0) - y0)^2) with the model in eval mode.

    Args:
        t0: Initial time
        y0: Initial state [D] or [D, 1]
    """

    def __init__(self, t0: float, y0):
        self.t0 = float(t0)
        self.y0 = torch.as_tensor(y0, dtype=torch.float64).reshape(-1, 1)

    def __call__(self, model) -> torch.Tensor:
        t0 = torch.full((1, 1), self.t0, dtype=model.dtype)
        Y0 = model(t0, mode='eval')
        return torch.mean((Y0 - self.y0.to(Y0.dtype)) ** 2)


class DataLoss:
    """mean((Y(t_data) - y_data)^2) over a labeled batch, model in eval mode."""

    def __call__(self, model, data: Optional[LabeledBatch]) -> Optional[torch.Tensor]:
        if data is None or data.is_empty:
            return None
        Yd = model(data.t, mode='eval')
        return torch.mean((Yd - data.y.to(Yd.dtype)) ** 2)
