import math

import pytest
import torch

from pinnode.diffeq import (
    BaseODE,
    BlasiusEquation,
    DoublePendulum,
    HookeSystem,
    LorenzSystem,
    SystemKind,
    ThreeBodySystem,
    get_system,
)


@pytest.mark.parametrize('kind', list(SystemKind))
def test_every_system_builds_and_evaluates_batches(kind):
    system = get_system(kind)
    D = system.state_dim
    assert system.initial_condition().shape == (D, 1)
    Y = torch.rand(D, 5, dtype=torch.float64)
    assert system.derivative(0.0, Y).shape == (D, 5)
    assert system.domain_t[1] > system.domain_t[0]


def test_get_system_unknown_name():
    with pytest.raises(ValueError, match='Unknown system'):
        get_system('pendulum')


def test_get_system_passes_overrides():
    system = get_system('harmonic', c=0.0)
    assert not system.is_damped()


def test_descriptor_validation():
    with pytest.raises(ValueError, match='initial state'):
        HookeSystem(y0=(1.0, 0.0, 0.0))
    with pytest.raises(ValueError, match='increasing'):
        HookeSystem(domain_t=(1.0, 0.0))

    class OddSecondOrder(BaseODE):
        def __init__(self):
            super().__init__('odd', order=2, state_dim=3, domain_t=(0, 1), y0=(0, 0, 0))

        def derivative(self, t, y):
            return y

    with pytest.raises(ValueError, match='even'):
        OddSecondOrder()


def test_params_are_read_only():
    system = HookeSystem()
    with pytest.raises(TypeError):
        system.params['k'] = 2.0
    assert system.get_params() == {'m': 1.0, 'k': 1.0}


def test_lorenz_derivative_at_unit_state():
    system = LorenzSystem()
    dy = system.derivative(0.0, torch.ones(3, 1, dtype=torch.float64)).reshape(-1)
    expected = torch.tensor([0.0, 26.0, 1.0 - 8.0 / 3.0], dtype=torch.float64)
    assert torch.allclose(dy, expected)
    assert not system.is_symplectic_compatible


def test_double_pendulum_derivative_agrees_with_acceleration():
    system = DoublePendulum()
    y = torch.tensor([[0.3], [-0.4], [1.2], [0.5]], dtype=torch.float64)
    dy = system.derivative(0.0, y)
    acc = system.acceleration(0.0, y[:2], y[2:])
    assert torch.allclose(dy[:2], y[2:])
    assert torch.allclose(dy[2:], acc)
    assert system.is_symplectic_compatible


def test_three_body_conserves_momentum():
    system = ThreeBodySystem(masses=(1.0, 2.0, 0.5))
    y = system.initial_condition()
    a = system.acceleration(0.0, y[:6], y[6:])
    m = system.params['masses']
    total = m[0] * a[0:2] + m[1] * a[2:4] + m[2] * a[4:6]
    assert torch.allclose(total, torch.zeros_like(total), atol=1e-12)


def test_hooke_exact_solution():
    system = HookeSystem()
    t = torch.linspace(0.0, 3.0, 7, dtype=torch.float64)
    Y = system.exact_solution(t)
    assert torch.allclose(Y[0], torch.cos(t))
    assert torch.allclose(system.energy(Y), torch.full_like(t, 0.5))


def test_blasius_shooting_hits_far_field_condition():
    refined = BlasiusEquation().shoot()
    assert abs(refined.far_field_error()) < 1e-6
    assert abs(refined.params['s'] - 0.332) < 1e-3
    assert refined.y0[:2] == (0.0, 0.0)
