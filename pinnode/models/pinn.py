"""
Base PINN Module
Feed-forward surrogate that maps time t to the state y(t)
"""

import math
from dataclasses import dataclass, replace
from typing import Dict, Optional, Sequence, Tuple

import torch
import torch.nn as nn
import torch.nn.functional as F

ACTIVATIONS = ('tanh', 'relu', 'swish')
MODES = ('train', 'eval')
_DTYPES = {'float32': torch.float32, 'float64': torch.float64}


@dataclass(frozen=True)
class PINNConfig:
    """
    Network configuration, validated once at construction.

    Args:
        input_dim: Input dimension, fixed at 1 (scalar time)
        output_dim: State dimension D
        hidden_sizes: Widths of the hidden layers
        activation: 'tanh', 'relu' or 'swish'
        dropout: Dropout probability in [0, 1], active in train mode only
        dtype: 'float32' or 'float64'
        init_scale: Scale applied to the Glorot-uniform limit
    """
    input_dim: int = 1
    output_dim: int = 2
    hidden_sizes: Tuple[int, ...] = (64, 64, 64)
    activation: str = 'tanh'
    dropout: float = 0.0
    dtype: str = 'float32'
    init_scale: float = 0.1

    def __post_init__(self):
        object.__setattr__(self, 'hidden_sizes', tuple(int(h) for h in self.hidden_sizes))

        if self.input_dim != 1:
            raise ValueError(f"input_dim must be 1 (scalar time), got {self.input_dim}")
        if self.output_dim < 1:
            raise ValueError(f"output_dim must be positive, got {self.output_dim}")
        if not self.hidden_sizes or any(h < 1 for h in self.hidden_sizes):
            raise ValueError(f"hidden_sizes must be non-empty positive widths, got {self.hidden_sizes}")
        if self.activation not in ACTIVATIONS:
            raise ValueError(f"activation must be one of: {' | '.join(ACTIVATIONS)}, got {self.activation!r}")
        if not 0.0 <= self.dropout <= 1.0:
            raise ValueError(f"dropout must be in [0, 1], got {self.dropout}")
        if self.dtype not in _DTYPES:
            raise ValueError(f"dtype must be float32 or float64, got {self.dtype!r}")
        if self.init_scale <= 0:
            raise ValueError(f"init_scale must be positive, got {self.init_scale}")

    @property
    def torch_dtype(self) -> torch.dtype:
        return _DTYPES[self.dtype]

    @property
    def layer_sizes(self) -> Tuple[int, ...]:
        return (self.input_dim,) + self.hidden_sizes + (self.output_dim,)


class PINN(nn.Module):
    """
    Physics-Informed Neural Network surrogate y(t).

    Column-wise MLP: a time batch t [1, N] is mapped to states Y [D, N]
    through hidden layers act(W A + b) and a final affine layer. Sample j of
    the output depends only on t[j] (no batch coupling), which the physics
    residual relies on.

    Parameters are named W1, b1, ..., W{L+1}, b{L+1}; W_l has shape
    [fan_out, fan_in] and b_l [fan_out, 1].

    Args:
        config: PINNConfig (keyword overrides are applied on top of it)

    Example:
        >>> pinn = PINN(PINNConfig(output_dim=2, hidden_sizes=(32, 32)))
        >>> t = torch.linspace(0, 1, 100)
        >>> y = pinn(t)
        >>> assert y.shape == (2, 100)
    """

    def __init__(self, config: Optional[PINNConfig] = None, **overrides):
        super().__init__()
        if config is None:
            config = PINNConfig(**overrides)
        elif overrides:
            config = replace(config, **overrides)
        self.config = config

        sizes = config.layer_sizes
        self.num_layers = len(sizes) - 1
        for l in range(1, self.num_layers + 1):
            self.register_parameter(
                f'W{l}', nn.Parameter(torch.empty(sizes[l], sizes[l - 1], dtype=config.torch_dtype))
            )
            self.register_parameter(
                f'b{l}', nn.Parameter(torch.empty(sizes[l], 1, dtype=config.torch_dtype))
            )
        self.reset_parameters()

    @property
    def output_dim(self) -> int:
        return self.config.output_dim

    @property
    def dtype(self) -> torch.dtype:
        return self.config.torch_dtype

    @property
    def params(self) -> Dict[str, nn.Parameter]:
        """Parameter collection, keyed by layer identifier."""
        return dict(self.named_parameters())

    def reset_parameters(self, scale: Optional[float] = None) -> None:
        """Glorot-uniform weights with limit scale * sqrt(6 / (fan_in + fan_out)), zero biases."""
        scale = self.config.init_scale if scale is None else scale
        with torch.no_grad():
            for l in range(1, self.num_layers + 1):
                W = getattr(self, f'W{l}')
                fan_out, fan_in = W.shape
                limit = scale * math.sqrt(6.0 / (fan_in + fan_out))
                W.uniform_(-limit, limit)
                getattr(self, f'b{l}').zero_()

    def _activate(self, z: torch.Tensor) -> torch.Tensor:
        act = self.config.activation
        if act == 'tanh':
            return torch.tanh(z)
        if act == 'relu':
            return F.relu(z)
        return F.silu(z)

    def _as_row(self, t) -> torch.Tensor:
        if not isinstance(t, torch.Tensor):
            t = torch.as_tensor(t)
        t = t.to(self.dtype)
        if t.dim() == 0:
            return t.reshape(1, 1)
        if t.dim() == 1:
            return t.reshape(1, -1)
        if t.dim() == 2 and t.shape[0] == 1:
            return t
        if t.dim() == 2 and t.shape[1] == 1:
            return t.transpose(0, 1)
        raise ValueError(f"time input must be a row, column or 1-D batch, got shape {tuple(t.shape)}")

    def forward(self, t, mode: Optional[str] = None) -> torch.Tensor:
        """
        Forward pass: time batch -> states.

        Args:
            t: Time samples as [1, N], [N, 1] or [N]
            mode: 'train' (dropout active) or 'eval'; None follows self.training

        Returns:
            Y: Predicted states [D, N]
        """
        if mode is None:
            training = self.training
        elif mode in MODES:
            training = mode == 'train'
        else:
            raise ValueError(f"mode must be 'train' or 'eval', got {mode!r}")

        A = self._as_row(t)
        p = self.config.dropout
        for l in range(1, self.num_layers):
            A = self._activate(getattr(self, f'W{l}') @ A + getattr(self, f'b{l}'))
            if training and p > 0:
                # inverted dropout, fresh mask on every call
                A = F.dropout(A, p=p, training=True)

        L = self.num_layers
        return getattr(self, f'W{L}') @ A + getattr(self, f'b{L}')

    def predict(self, t) -> torch.Tensor:
        """Evaluation-mode prediction without gradients, as float64 [D, N]."""
        with torch.no_grad():
            return self(t, mode='eval').to(torch.float64)

    def evaluate_on_grid(self, time_span: Sequence[float], n_points: int = 1001):
        """
        Evaluate on a uniform grid, e.g. for plotting.

        Returns:
            t: Grid [n_points] (float64)
            Y: Predictions [D, n_points] (float64)
        """
        t = torch.linspace(float(time_span[0]), float(time_span[1]), n_points, dtype=torch.float64)
        return t, self.predict(t)

    def count_parameters(self) -> int:
        """Count total trainable parameters."""
        return sum(p.numel() for p in self.parameters() if p.requires_grad)

    def __repr__(self) -> str:
        c = self.config
        return (
            f"PINN(output_dim={c.output_dim}, hidden_sizes={list(c.hidden_sizes)}, "
            f"activation={c.activation!r}, dropout={c.dropout}, dtype={c.dtype})"
        )
