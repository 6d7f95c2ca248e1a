"""
Evaluation Module

Submodules:
- metrics: MSE, RMSE, MAE, R² per dimension and overall
- comparison: PINN vs numerical integrator score table
"""

from .metrics import (
    METRIC_NAMES,
    compute_metrics,
    compute_mse,
    compute_rmse,
    compute_mae,
    compute_r2_score,
)
from .comparison import best_method, compare_methods, format_table

__all__ = [
    'METRIC_NAMES',
    'compute_metrics',
    'compute_mse',
    'compute_rmse',
    'compute_mae',
    'compute_r2_score',
    'best_method',
    'compare_methods',
    'format_table',
]
