"""
Models

- PINN: Column-wise MLP surrogate t -> y(t)
- PINNConfig: Validated network configuration
"""

from .pinn import PINN, PINNConfig

__all__ = [
    'PINN',
    'PINNConfig',
]
