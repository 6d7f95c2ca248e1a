import pytest
import torch

from pinnode.training import GridSampler, UniformSampler, sample_collocation


def test_random_sampling_starts_at_t0_and_stays_in_span():
    t = sample_collocation((2.0, 5.0), 200, 'random', seed=3)
    assert t.shape == (1, 200)
    assert float(t[0, 0]) == 2.0
    assert float(t.min()) >= 2.0
    assert float(t.max()) <= 5.0


def test_seeded_random_sampling_is_reproducible():
    a = sample_collocation((0.0, 1.0), 50, seed=7)
    b = sample_collocation((0.0, 1.0), 50, seed=7)
    c = sample_collocation((0.0, 1.0), 50, seed=8)
    assert torch.equal(a, b)
    assert not torch.equal(a, c)


def test_grid_sampling_includes_endpoints():
    t = sample_collocation((0.0, 10.0), 11, 'grid')
    assert t.shape == (1, 11)
    assert torch.allclose(t.reshape(-1), torch.arange(11, dtype=torch.float32))


def test_sampler_dtype_and_unknown_mode():
    t = sample_collocation((0.0, 1.0), 4, dtype=torch.float64)
    assert t.dtype == torch.float64
    with pytest.raises(ValueError):
        sample_collocation((0.0, 1.0), 4, 'sobol')


def test_sampler_classes():
    assert UniformSampler((0.0, 1.0), seed=1).sample(3).shape == (1, 3)
    assert GridSampler((0.0, 1.0)).sample(2).tolist() == [[0.0, 1.0]]
    with pytest.raises(ValueError):
        GridSampler((1.0, 0.0))
