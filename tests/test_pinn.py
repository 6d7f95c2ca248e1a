import math

import pytest
import torch

from pinnode.models import PINN, PINNConfig


@pytest.mark.parametrize('overrides', [
    {'activation': 'sigmoid'},
    {'dropout': 1.5},
    {'dtype': 'float16'},
    {'hidden_sizes': ()},
    {'input_dim': 2},
])
def test_config_validation(overrides):
    with pytest.raises(ValueError):
        PINNConfig(**overrides)


def test_parameter_layout():
    model = PINN(hidden_sizes=(8, 4), output_dim=3)
    params = model.params
    assert list(params) == ['W1', 'b1', 'W2', 'b2', 'W3', 'b3']
    assert params['W1'].shape == (8, 1)
    assert params['W2'].shape == (4, 8)
    assert params['W3'].shape == (3, 4)
    assert params['b3'].shape == (3, 1)
    assert torch.count_nonzero(params['b1']) == 0


def test_count_parameters_default_network():
    model = PINN()
    assert model.count_parameters() == 8578


@pytest.mark.parametrize('shape', [(1, 7), (7, 1), (7,)])
def test_forward_accepts_row_column_and_flat_time(shape):
    model = PINN(output_dim=2)
    Y = model(torch.rand(shape))
    assert Y.shape == (2, 7)
    assert Y.dtype == torch.float32


def test_dropout_only_active_in_train_mode():
    torch.manual_seed(0)
    model = PINN(hidden_sizes=(32, 32), dropout=0.5)
    t = torch.linspace(0.0, 1.0, 10)
    assert torch.equal(model(t, mode='eval'), model(t, mode='eval'))
    assert not torch.equal(model(t, mode='train'), model(t, mode='train'))
    with pytest.raises(ValueError):
        model(t, mode='test')


def test_predict_returns_float64_without_graph():
    model = PINN(dtype='float64', output_dim=3)
    Y = model.predict([0.0, 0.5, 1.0])
    assert Y.shape == (3, 3)
    assert Y.dtype == torch.float64
    assert not Y.requires_grad


def test_evaluate_on_grid():
    t, Y = PINN().evaluate_on_grid((0.0, 2.0), n_points=21)
    assert t.shape == (21,)
    assert Y.shape == (2, 21)


@pytest.mark.parametrize('init_scale', [0.1, 1.0])
def test_weights_respect_scaled_glorot_bound(init_scale):
    model = PINN(hidden_sizes=(32, 16), output_dim=3, init_scale=init_scale)
    for l in range(1, 4):
        W = model.params[f'W{l}']
        fan_out, fan_in = W.shape
        limit = init_scale * math.sqrt(6.0 / (fan_in + fan_out))
        assert float(W.abs().max()) <= limit * (1 + 1e-6)
