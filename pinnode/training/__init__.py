"""
Training Module

Components:
- Trainer, TrainConfig, TrainState: mini-batch training loop
- Optimizers: MomentumSGD, Adam
- Callbacks: Callback, ProgressCallback
- Samplers: collocation point sampling
"""

from .trainer import HISTORY_KEYS, Trainer, TrainConfig, TrainState
from .callbacks import Callback, ProgressCallback
from .optimizers import Adam, MomentumSGD, OptimizerKind, build_optimizer
from .samplers import GridSampler, SamplingMode, UniformSampler, sample_collocation

__all__ = [
    'HISTORY_KEYS',
    'Trainer',
    'TrainConfig',
    'TrainState',
    'Callback',
    'ProgressCallback',
    'Adam',
    'MomentumSGD',
    'OptimizerKind',
    'build_optimizer',
    'GridSampler',
    'SamplingMode',
    'UniformSampler',
    'sample_collocation',
]
