"""
Labeled batch passed to the data loss and to evaluation metrics.
"""

from typing import NamedTuple

import torch


class LabeledBatch(NamedTuple):
    """Observed states y [D, N] at times t [1, N]."""
    t: torch.Tensor
    y: torch.Tensor

    @classmethod
    def from_arrays(cls, t, y, dtype: torch.dtype = torch.float32) -> 'LabeledBatch':
        t = torch.as_tensor(t, dtype=dtype).reshape(1, -1)
        y = torch.as_tensor(y, dtype=dtype)
        if y.dim() == 1:
            y = y.reshape(1, -1)
        if y.shape[1] != t.shape[1]:
            raise ValueError(f"y has {y.shape[1]} samples but t has {t.shape[1]}")
        return cls(t, y)

    @property
    def is_empty(self) -> bool:
        return self.t.numel() == 0

    def __len__(self) -> int:
        return self.t.shape[1]
