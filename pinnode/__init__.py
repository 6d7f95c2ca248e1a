"""
PINNODE: Physics-Informed Neural Networks vs classical ODE integrators

A modular library for fitting physics-informed surrogates to ODE systems
and benchmarking them against classical time-stepping schemes.

Modules:
- diffeq: ODE systems (Hooke, harmonic, Van der Pol, Lorenz, ...)
- integrators: Euler, Crank-Nicolson, RK4, leapfrog, Newton solver
- models: PINN
- losses: PhysicsLoss, InitialConditionLoss, DataLoss, CombinedLoss
- data: observations, CSV loading, synthetic data, train/test split
- training: Trainer, optimizers, callbacks, samplers
- evaluation: metrics and method comparison
"""

__version__ = "0.1.0"

from .diffeq import BaseODE, SystemKind, get_system
from .integrators import IntegratorKind, get_integrator, integrate, integrate_at, run_solvers
from .models import PINN, PINNConfig
from .losses import PhysicsLoss, CombinedLoss, LossWeights
from .data import LabeledBatch, TimeSeries, load_csv, synthesize, split_train_test
from .training import Trainer, TrainConfig
from .evaluation import compute_metrics, compare_methods, best_method

__all__ = [
    # DiffEq
    'BaseODE',
    'SystemKind',
    'get_system',
    # Integrators
    'IntegratorKind',
    'get_integrator',
    'integrate',
    'integrate_at',
    'run_solvers',
    # Models
    'PINN',
    'PINNConfig',
    # Losses
    'PhysicsLoss',
    'CombinedLoss',
    'LossWeights',
    # Data
    'LabeledBatch',
    'TimeSeries',
    'load_csv',
    'synthesize',
    'split_train_test',
    # Training
    'Trainer',
    'TrainConfig',
    # Evaluation
    'compute_metrics',
    'compare_methods',
    'best_method',
]
