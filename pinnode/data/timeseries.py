"""
Time-series datasets: CSV loading, synthetic trajectories and splitting.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
import torch

from ..diffeq.base import BaseODE
from ..integrators.runner import IntegratorKind, integrate, time_grid
from .batch import LabeledBatch

logger = logging.getLogger(__name__)


class SplitMode(str, Enum):
    CHRONOLOGICAL = 'chronological'


@dataclass
class TimeSeries:
    """
    Observations of a D-dimensional state.

    Args:
        t: Times [N]
        y: States [D, N]
    """
    t: np.ndarray
    y: np.ndarray

    def __post_init__(self):
        self.t = np.asarray(self.t, dtype=np.float64).reshape(-1)
        self.y = np.asarray(self.y, dtype=np.float64)
        if self.y.ndim == 1:
            self.y = self.y.reshape(1, -1)
        if self.y.shape[1] != self.t.size:
            raise ValueError(f"y has {self.y.shape[1]} samples but t has {self.t.size}")

    def __len__(self) -> int:
        return self.t.size

    @property
    def state_dim(self) -> int:
        return self.y.shape[0]

    def sort(self) -> 'TimeSeries':
        """Chronologically sorted copy."""
        order = np.argsort(self.t, kind='stable')
        return TimeSeries(self.t[order], self.y[:, order])

    def to_batch(self, dtype: torch.dtype = torch.float32) -> LabeledBatch:
        return LabeledBatch.from_arrays(self.t, self.y, dtype=dtype)


def load_csv(path: Union[str, Path], state_dim: int, delimiter: str = ',') -> TimeSeries:
    """
    Load a CSV with columns t, y1, ..., yD.

    A non-numeric header line is skipped. Rows are sorted by time.

    Args:
        path: CSV file
        state_dim: Expected number of state columns D
        delimiter: Column separator

    Returns:
        TimeSeries sorted by time
    """
    table = np.genfromtxt(path, delimiter=delimiter, dtype=np.float64, ndmin=2)
    table = table[~np.all(np.isnan(table), axis=1)]
    if table.ndim != 2 or table.shape[1] != state_dim + 1:
        found = table.shape[1] - 1 if table.ndim == 2 else 0
        raise ValueError(
            f"CSV must have 1 time column + {state_dim} state columns. Found {found}."
        )
    logger.info("Loaded %d samples from %s", table.shape[0], path)
    return TimeSeries(table[:, 0], table[:, 1:].T).sort()


def add_noise(series: TimeSeries, noise_std: float, seed: Optional[int] = None) -> TimeSeries:
    """Copy of the series with i.i.d. Gaussian noise of std noise_std on the states."""
    if noise_std <= 0:
        return TimeSeries(series.t.copy(), series.y.copy())
    rng = np.random.default_rng(seed)
    return TimeSeries(series.t.copy(), series.y + noise_std * rng.standard_normal(series.y.shape))


def synthesize(
    system: BaseODE,
    kind: Union[IntegratorKind, str] = IntegratorKind.RUNGE_KUTTA,
    h: float = 1e-3,
    n_obs: int = 200,
    noise_std: float = 0.0,
    seed: Optional[int] = None
) -> TimeSeries:
    """
    Synthetic observations of a system.

    Integrates on a dense grid of step h over the system's time domain,
    keeps n_obs evenly spaced samples and adds Gaussian noise.

    Args:
        system: ODE system
        kind: Integrator producing the ground truth
        h: Dense integration step
        n_obs: Number of observations kept
        noise_std: Noise standard deviation (0 for clean data)
        seed: Noise seed

    Returns:
        TimeSeries with n_obs samples
    """
    t_dense = time_grid(system.domain_t, h)
    Y_dense = integrate(system, kind, t_dense).numpy()

    n = t_dense.numel()
    idx = np.unique(np.round(np.linspace(0, n - 1, min(n_obs, n))).astype(int))
    series = TimeSeries(t_dense.numpy()[idx], Y_dense[:, idx])
    return add_noise(series, noise_std, seed)


def split_train_test(
    series: TimeSeries,
    train_ratio: float = 0.9,
    mode: Union[SplitMode, str] = SplitMode.CHRONOLOGICAL
) -> Tuple[TimeSeries, TimeSeries]:
    """
    Split a series into train and test parts.

    The train part holds floor(N * train_ratio) samples, clamped so both
    parts keep at least one sample.

    Args:
        series: Observations (N >= 2)
        train_ratio: Fraction of samples used for training
        mode: Split policy; only 'chronological' is supported

    Returns:
        (train, test)
    """
    try:
        mode = SplitMode(mode)
    except ValueError:
        raise ValueError(f"Unsupported split mode: {mode}") from None

    N = len(series)
    if N < 2:
        raise ValueError(f"need at least 2 samples to split, got {N}")
    n_train = min(max(int(np.floor(N * train_ratio)), 1), N - 1)

    ordered = series.sort()
    train = TimeSeries(ordered.t[:n_train], ordered.y[:, :n_train])
    test = TimeSeries(ordered.t[n_train:], ordered.y[:, n_train:])
    return train, test
