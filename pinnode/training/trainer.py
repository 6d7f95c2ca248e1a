"""
PINN Trainer
Mini-batch training loop for physics-informed surrogates
"""

import logging
import math
import weakref
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import torch
import torch.nn as nn
from torch.optim import Optimizer
from torch.optim.lr_scheduler import StepLR
from tqdm import tqdm

from ..data import LabeledBatch
from ..evaluation.metrics import compute_metrics
from ..losses import CombinedLoss, LossWeights
from .callbacks import Callback, ProgressCallback, is_report_epoch
from .optimizers import Adam, OptimizerKind, build_optimizer
from .samplers import SamplingMode, sample_collocation

logger = logging.getLogger(__name__)

HISTORY_KEYS = (
    'epoch', 'lr', 'loss', 'residual_term', 'ic_term', 'data_term',
    'mse', 'rmse', 'mae', 'r2',
)

# models currently inside Trainer.train(), shared by all trainers
_ACTIVE_MODELS = weakref.WeakSet()


@dataclass
class TrainConfig:
    """
    Training configuration, resolved and validated once at construction.

    Args:
        epochs: Number of epochs (the loop always runs all of them)
        batch_size: Collocation points per mini-batch
        collocation_n: Size of the collocation pool sampled before training
        seed: Seed for the pool, initial shuffles and dropout (None keeps the RNG state)
        lr: Initial learning rate
        momentum: Momentum for 'sgd'
        grad_clip: Global L2 gradient norm limit (0 disables)
        loss_weights: Weights of the residual, IC and data terms
        optimizer: 'sgd' (momentum) or 'adam'
        beta1, beta2, eps: Adam hyper-parameters
        lr_decay: Multiplicative LR decay factor (None disables)
        decay_every: Epochs between LR decays (None disables)
        print_every: Reporting cadence in epochs
        adam_step_unit: Adam bias-correction counter advances per 'epoch' or per 'batch'
        collocation_mode: 'random' or 'grid' collocation pool
    """
    epochs: int = 2000
    batch_size: int = 128
    collocation_n: int = 4096
    seed: Optional[int] = 42
    lr: float = 1e-3
    momentum: float = 0.9
    grad_clip: float = 5.0
    loss_weights: LossWeights = field(default_factory=LossWeights)
    optimizer: str = 'sgd'
    beta1: float = 0.9
    beta2: float = 0.999
    eps: float = 1e-8
    lr_decay: Optional[float] = None
    decay_every: Optional[int] = None
    print_every: int = 50
    adam_step_unit: str = 'epoch'
    collocation_mode: str = 'random'

    def __post_init__(self):
        if isinstance(self.loss_weights, dict):
            self.loss_weights = LossWeights(**self.loss_weights)
        try:
            self.optimizer = OptimizerKind(self.optimizer).value
            self.collocation_mode = SamplingMode(self.collocation_mode).value
        except ValueError as e:
            raise ValueError(f"Invalid training configuration: {e}") from None

        if self.epochs < 1:
            raise ValueError(f"epochs must be >= 1, got {self.epochs}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.collocation_n < 1:
            raise ValueError(f"collocation_n must be >= 1, got {self.collocation_n}")
        if self.lr <= 0:
            raise ValueError(f"lr must be positive, got {self.lr}")
        if self.grad_clip < 0:
            raise ValueError(f"grad_clip must be >= 0, got {self.grad_clip}")
        if self.adam_step_unit not in ('epoch', 'batch'):
            raise ValueError(f"adam_step_unit must be 'epoch' or 'batch', got {self.adam_step_unit!r}")
        if self.lr_decay is not None and not 0 < self.lr_decay <= 1:
            raise ValueError(f"lr_decay must be in (0, 1], got {self.lr_decay}")
        if self.decay_every is not None and self.decay_every < 1:
            raise ValueError(f"decay_every must be >= 1, got {self.decay_every}")

    @property
    def uses_lr_schedule(self) -> bool:
        return self.lr_decay is not None and self.decay_every is not None


@dataclass
class TrainState:
    """
    Mutable state of one training run.

    Holds the model's parameter collection and the optimizer buffers. It is
    created at the start of Trainer.train() and dropped when it returns.
    """
    params: Dict[str, nn.Parameter]
    optimizer: Optimizer
    scheduler: Optional[StepLR] = None

    @property
    def lr(self) -> float:
        return self.optimizer.param_groups[0]['lr']


class Trainer:
    """
    Physics-Informed Neural Network Trainer.

    Handles:
    - ODE residual loss on a fixed, pre-sampled collocation pool
    - Initial condition loss
    - Optional data loss on labeled observations
    - Momentum SGD or Adam updates with global gradient clipping
    - Optional step learning-rate decay

    Only one training run per model may be active at a time, across all
    trainers sharing that model.

    Args:
        model: PINN surrogate
        system: ODE system (derivative, time domain, initial state)
        config: TrainConfig (default: TrainConfig())
        callbacks: Extra callbacks
        verbose: Add a ProgressCallback when none is given (default: True)
    """

    def __init__(
        self,
        model: nn.Module,
        system,
        config: Optional[TrainConfig] = None,
        callbacks: Optional[List[Callback]] = None,
        verbose: bool = True
    ):
        self.model = model
        self.system = system
        self.config = config or TrainConfig()
        self.loss_fn = CombinedLoss(system, self.config.loss_weights)

        self.callbacks: List[Callback] = list(callbacks or [])
        if verbose and not any(isinstance(c, ProgressCallback) for c in self.callbacks):
            self.callbacks.append(ProgressCallback(print_every=self.config.print_every))

        self.history: Dict[str, List[float]] = {}

    def add_callback(self, callback: Callback) -> None:
        """Add a training callback."""
        self.callbacks.append(callback)

    def init_state(self) -> TrainState:
        """Allocate zeroed optimizer buffers for the model's parameters."""
        cfg = self.config
        params = self.model.params
        optimizer = build_optimizer(
            list(params.values()),
            cfg.optimizer,
            lr=cfg.lr,
            momentum=cfg.momentum,
            beta1=cfg.beta1,
            beta2=cfg.beta2,
            eps=cfg.eps,
            adam_step_unit=cfg.adam_step_unit
        )
        scheduler = None
        if cfg.uses_lr_schedule:
            scheduler = StepLR(optimizer, step_size=cfg.decay_every, gamma=cfg.lr_decay)
        return TrainState(params=params, optimizer=optimizer, scheduler=scheduler)

    def train_step(
        self,
        state: TrainState,
        t_batch: torch.Tensor,
        data: Optional[LabeledBatch] = None
    ) -> Tuple[TrainState, Dict[str, float]]:
        """
        One mini-batch update.

        Args:
            state: Current training state
            t_batch: Collocation batch [1, B]
            data: Optional labeled batch for the data term

        Returns:
            state: The updated state
            logs: loss, residual_term, ic_term, data_term and grad_norm
                (pre-clip global norm, NaN when clipping is disabled)
        """
        state.optimizer.zero_grad()

        total, terms = self.loss_fn(self.model, t_batch, data)
        total.backward()

        grad_norm = float('nan')
        if self.config.grad_clip > 0:
            grad_norm = nn.utils.clip_grad_norm_(
                list(state.params.values()), self.config.grad_clip
            ).item()
        state.optimizer.step()

        return state, {
            'loss': total.item(),
            'residual_term': terms.residual.item(),
            'ic_term': terms.initial_condition.item(),
            'data_term': terms.data.item(),
            'grad_norm': grad_norm,
        }

    def evaluate(self, data: LabeledBatch) -> Dict[str, float]:
        """Overall regression metrics of the model on a labeled batch."""
        Yhat = self.model.predict(data.t)
        return compute_metrics(Yhat, data.y.to(torch.float64))['overall']

    def train(
        self,
        data: Optional[LabeledBatch] = None,
        eval_data: Optional[LabeledBatch] = None,
        progress_bar: bool = False
    ) -> Dict[str, List[float]]:
        """
        Train the model.

        Args:
            data: Labeled observations for the data term (optional)
            eval_data: Labeled set scored on reporting epochs (default: data)
            progress_bar: Show tqdm progress bar (default: False)

        Returns:
            Training history dict, one entry per epoch for every key in
            HISTORY_KEYS; metric entries are NaN on non-reporting epochs or
            without an evaluation set.
        """
        if self.model in _ACTIVE_MODELS:
            raise RuntimeError("Trainer.train() is already running on this model")
        _ACTIVE_MODELS.add(self.model)
        try:
            return self._train(self._as_batch(data), self._as_batch(eval_data), progress_bar)
        finally:
            _ACTIVE_MODELS.discard(self.model)

    def _as_batch(self, data) -> Optional[LabeledBatch]:
        if data is None:
            return None
        if hasattr(data, 'to_batch'):
            data = data.to_batch(self.model.dtype)
        if data.is_empty:
            return None
        return data

    def _train(self, data, eval_data, progress_bar):
        cfg = self.config
        if eval_data is None:
            eval_data = data

        if cfg.seed is not None:
            torch.manual_seed(cfg.seed)

        # the pool is sampled once; epochs only reshuffle it
        pool = sample_collocation(
            self.system.domain_t, cfg.collocation_n, cfg.collocation_mode, dtype=self.model.dtype
        )
        n_pool = pool.shape[1]
        n_batches = math.ceil(n_pool / cfg.batch_size)

        state = self.init_state()
        epoch_adam = isinstance(state.optimizer, Adam) and state.optimizer.step_unit == 'epoch'

        history: Dict[str, List[float]] = {k: [] for k in HISTORY_KEYS}
        self.history = history
        self.model.train()

        logger.info(
            "Training on %s: %d epochs x %d batches, optimizer=%s, lr=%.2e",
            self.system.name, cfg.epochs, n_batches, cfg.optimizer, cfg.lr
        )
        for cb in self.callbacks:
            cb.on_train_start(self)

        iterator = range(1, cfg.epochs + 1)
        if progress_bar:
            iterator = tqdm(iterator, desc='Training')

        for epoch in iterator:
            for cb in self.callbacks:
                cb.on_epoch_start(epoch, self)

            lr = state.lr
            if epoch_adam:
                state.optimizer.advance_step()

            perm = torch.randperm(n_pool)
            sums = {'loss': 0.0, 'residual_term': 0.0, 'ic_term': 0.0, 'data_term': 0.0}
            for b in range(n_batches):
                idx = perm[b * cfg.batch_size:(b + 1) * cfg.batch_size]
                state, step_logs = self.train_step(state, pool[:, idx], data)
                for key in sums:
                    sums[key] += step_logs[key]

            logs = {'epoch': epoch, 'lr': lr}
            logs.update({key: value / n_batches for key, value in sums.items()})

            metrics = {'mse': float('nan'), 'rmse': float('nan'), 'mae': float('nan'), 'r2': float('nan')}
            if eval_data is not None and is_report_epoch(epoch, cfg.epochs, cfg.print_every):
                metrics = self.evaluate(eval_data)
            logs.update(metrics)

            for key in HISTORY_KEYS:
                history[key].append(logs[key])

            if state.scheduler is not None:
                state.scheduler.step()

            for cb in self.callbacks:
                cb.on_epoch_end(epoch, self, logs)

            if progress_bar:
                iterator.set_postfix(loss=logs['loss'], res=logs['residual_term'])

        for cb in self.callbacks:
            cb.on_train_end(self, history)

        logger.info("Training complete. Final loss: %.3e", history['loss'][-1])
        return history
