"""
PINN Loss Functions

- compute_residual: physics residual dY/dt - f(t, Y)
- PhysicsLoss: mean squared residual
- InitialConditionLoss, DataLoss: supervised penalties
- CombinedLoss: Weighted combination of all losses
"""

from .residual import compute_residual
from .physics import PhysicsLoss
from .data import InitialConditionLoss, DataLoss
from .combined import CombinedLoss, LossTerms, LossWeights

__all__ = [
    'compute_residual',
    'PhysicsLoss',
    'InitialConditionLoss',
    'DataLoss',
    'CombinedLoss',
    'LossTerms',
    'LossWeights',
]
