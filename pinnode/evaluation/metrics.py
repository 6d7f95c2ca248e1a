"""
Error Metrics
MSE, RMSE, MAE and R² with per-dimension and overall aggregation
"""

import math
from typing import Dict, List, Union

import numpy as np
import torch

ArrayLike = Union[torch.Tensor, np.ndarray]

METRIC_NAMES = ('mse', 'rmse', 'mae', 'r2')

# floor for the total sum of squares, keeps R² finite on constant targets
_SST_FLOOR = float(torch.finfo(torch.float64).eps)


def _as_matrix(x: ArrayLike) -> torch.Tensor:
    """Coerce to a detached float64 [D, N] tensor (1-D input is one row)."""
    if isinstance(x, torch.Tensor):
        x = x.detach().to(torch.float64)
    else:
        x = torch.as_tensor(np.asarray(x, dtype=np.float64))
    if x.dim() == 1:
        x = x.reshape(1, -1)
    if x.dim() != 2:
        raise ValueError(f"Expected a [D, N] array, got shape {tuple(x.shape)}")
    return x


def _masked_scores(pred: torch.Tensor, target: torch.Tensor) -> Dict[str, float]:
    """Scores over entries where neither prediction nor target is NaN."""
    keep = ~(torch.isnan(pred) | torch.isnan(target))
    if not bool(keep.any()):
        return {name: float('nan') for name in METRIC_NAMES}

    err = pred[keep] - target[keep]
    y = target[keep]

    sse = torch.sum(err ** 2).item()
    sst = torch.sum((y - y.mean()) ** 2).item()
    mse = sse / err.numel()
    return {
        'mse': mse,
        'rmse': math.sqrt(mse),
        'mae': torch.mean(torch.abs(err)).item(),
        'r2': 1.0 - sse / max(sst, _SST_FLOOR),
    }


def compute_metrics(y_pred: ArrayLike, y_true: ArrayLike) -> Dict[str, Dict]:
    """
    Regression metrics between predictions and targets.

    NaN entries in either array are excluded, both per dimension and
    globally. A dimension with no valid entries scores NaN everywhere.

    Args:
        y_pred: Predictions [D, N]
        y_true: Targets [D, N]

    Returns:
        {'per_dim': {'mse': [D], 'rmse': [D], 'mae': [D], 'r2': [D]},
         'overall': {'mse', 'rmse', 'mae', 'r2'}}
    """
    pred = _as_matrix(y_pred)
    target = _as_matrix(y_true)
    if pred.shape != target.shape:
        raise ValueError(
            f"Shape mismatch: prediction {tuple(pred.shape)} vs target {tuple(target.shape)}"
        )

    per_dim: Dict[str, List[float]] = {name: [] for name in METRIC_NAMES}
    with torch.no_grad():
        for i in range(pred.shape[0]):
            scores = _masked_scores(pred[i], target[i])
            for name in METRIC_NAMES:
                per_dim[name].append(scores[name])
        overall = _masked_scores(pred, target)

    return {'per_dim': per_dim, 'overall': overall}


def compute_mse(pred: ArrayLike, target: ArrayLike) -> float:
    """Overall Mean Squared Error."""
    return compute_metrics(pred, target)['overall']['mse']


def compute_rmse(pred: ArrayLike, target: ArrayLike) -> float:
    return compute_metrics(pred, target)['overall']['rmse']


def compute_mae(pred: ArrayLike, target: ArrayLike) -> float:
    """Overall Mean Absolute Error."""
    return compute_metrics(pred, target)['overall']['mae']


def compute_r2_score(pred: ArrayLike, target: ArrayLike) -> float:
    """
    Overall R² score (coefficient of determination).

    R² = 1 - SS_res / max(SS_tot, eps)
    """
    return compute_metrics(pred, target)['overall']['r2']
