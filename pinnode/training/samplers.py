"""
Collocation Point Samplers
Strategies for sampling time points in PINN training
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Tuple, Union

import torch


class SamplingMode(str, Enum):
    RANDOM = 'random'
    GRID = 'grid'


class BaseSampler(ABC):
    """
    Base class for collocation samplers over a time span.

    Args:
        time_span: Tuple (t0, t1)
        dtype: Dtype of the sampled points
    """

    def __init__(self, time_span: Tuple[float, float], dtype: torch.dtype = torch.float32):
        t0, t1 = float(time_span[0]), float(time_span[1])
        if not t1 >= t0:
            raise ValueError(f"time span must be increasing, got ({t0}, {t1})")
        self.time_span = (t0, t1)
        self.dtype = dtype

    @abstractmethod
    def sample(self, n_points: int) -> torch.Tensor:
        """Sample collocation points as a row [1, n_points]."""
        pass


class UniformSampler(BaseSampler):
    """
    Uniform random sampling in [t0, t1].

    The first point is always t0 so the initial condition region is
    covered. With a seed, every call draws from a freshly seeded local
    generator and is therefore reproducible; without one the global torch
    RNG is used.
    """

    def __init__(
        self,
        time_span: Tuple[float, float],
        seed: Optional[int] = None,
        dtype: torch.dtype = torch.float32
    ):
        super().__init__(time_span, dtype)
        self.seed = seed

    def sample(self, n_points: int) -> torch.Tensor:
        generator = None
        if self.seed is not None:
            generator = torch.Generator().manual_seed(self.seed)

        t0, t1 = self.time_span
        u = torch.rand(1, n_points, generator=generator, dtype=self.dtype)
        t = t0 + (t1 - t0) * u
        if n_points > 0:
            t[0, 0] = t0
        return t


class GridSampler(BaseSampler):
    """
    Evenly spaced points including both endpoints.

    Useful for evaluation and visualization.
    """

    def sample(self, n_points: int) -> torch.Tensor:
        t0, t1 = self.time_span
        return torch.linspace(t0, t1, n_points, dtype=self.dtype).reshape(1, -1)


def sample_collocation(
    time_span: Tuple[float, float],
    n_points: int,
    mode: Union[SamplingMode, str] = SamplingMode.RANDOM,
    seed: Optional[int] = None,
    dtype: torch.dtype = torch.float32
) -> torch.Tensor:
    """
    Generate collocation time points.

    Args:
        time_span: (t0, t1)
        n_points: Number of points
        mode: 'random' (uniform, first point t0) or 'grid'
        seed: Makes the random draw reproducible for this call
        dtype: Output dtype

    Returns:
        Row of time points [1, n_points]
    """
    try:
        mode = SamplingMode(mode)
    except ValueError:
        raise ValueError(f"Unknown sampling mode {mode}") from None
    if n_points < 0:
        raise ValueError(f"n_points must be non-negative, got {n_points}")

    if mode is SamplingMode.GRID:
        return GridSampler(time_span, dtype).sample(n_points)
    return UniformSampler(time_span, seed, dtype).sample(n_points)
