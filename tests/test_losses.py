import math

import pytest
import torch
import torch.nn as nn

from pinnode.data import LabeledBatch
from pinnode.diffeq import HarmonicOscillator, HookeSystem
from pinnode.losses import CombinedLoss, DataLoss, InitialConditionLoss, LossWeights


class SinCos(nn.Module):
    """Solves the Hooke equations but starts from [0, 1] instead of [1, 0]."""

    dtype = torch.float64

    def forward(self, t, mode=None):
        t = torch.as_tensor(t, dtype=self.dtype).reshape(1, -1)
        return torch.cat([torch.sin(t), torch.cos(t)], dim=0)


def _exact_batch(offset=0.0):
    t = torch.tensor([0.0, math.pi / 2, math.pi], dtype=torch.float64)
    y = torch.stack([torch.sin(t), torch.cos(t)]) + offset
    return LabeledBatch.from_arrays(t, y, dtype=torch.float64)


def test_loss_weights_validation():
    with pytest.raises(ValueError):
        LossWeights(lambda_ic=-1.0)
    assert LossWeights() == LossWeights(1.0, 1.0, 0.0)


def test_initial_condition_loss():
    loss = InitialConditionLoss(0.0, [1.0, 0.0])(SinCos())
    assert float(loss) == pytest.approx(1.0)


def test_data_loss_is_none_without_data():
    assert DataLoss()(SinCos(), None) is None
    assert float(DataLoss()(SinCos(), _exact_batch())) == pytest.approx(0.0, abs=1e-12)


def test_combined_loss_without_data_has_exact_zero_data_term():
    loss_fn = CombinedLoss(HookeSystem())
    t = torch.linspace(0.0, 5.0, 11, dtype=torch.float64)
    total, terms = loss_fn(SinCos(), t)
    assert float(terms.data) == 0.0
    assert float(terms.residual) == pytest.approx(0.0, abs=1e-12)
    assert float(terms.initial_condition) == pytest.approx(1.0)
    assert float(total) == pytest.approx(1.0)


def test_combined_loss_weights_each_term():
    loss_fn = CombinedLoss(HookeSystem(), LossWeights(2.0, 3.0, 5.0))
    t = torch.linspace(0.0, 5.0, 11, dtype=torch.float64)
    total, terms = loss_fn(SinCos(), t, _exact_batch(offset=1.0))
    assert float(terms.data) == pytest.approx(1.0)
    assert float(total) == pytest.approx(3.0 * 1.0 + 5.0 * 1.0)
    assert loss_fn.get_weights() == {'lambda_res': 2.0, 'lambda_ic': 3.0, 'lambda_data': 5.0}


def test_data_only_weights_ignore_residual_and_initial_condition():
    # damping makes the sin/cos trajectory violate the equations
    loss_fn = CombinedLoss(HarmonicOscillator(c=0.2), LossWeights(0.0, 0.0, 1.0))
    t = torch.linspace(0.0, 5.0, 11, dtype=torch.float64)
    total, terms = loss_fn(SinCos(), t, _exact_batch(offset=1.0))
    assert float(terms.residual) > 0.0
    assert float(terms.initial_condition) > 0.0
    assert float(total) == float(terms.data)
