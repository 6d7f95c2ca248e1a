import numpy as np
import pytest
import torch

from pinnode.data import LabeledBatch, TimeSeries, add_noise, load_csv, split_train_test, synthesize
from pinnode.diffeq import HookeSystem


def _series(n=10):
    t = np.arange(n, dtype=float)
    return TimeSeries(t, np.vstack([t, -t]))


@pytest.mark.parametrize('ratio, n_train', [(0.9, 9), (0.55, 5), (1.0, 9), (0.0, 1)])
def test_chronological_split_sizes(ratio, n_train):
    train, test = split_train_test(_series(), ratio)
    assert len(train) == n_train
    assert len(test) == 10 - n_train
    assert train.t.max() < test.t.min()


def test_split_sorts_by_time():
    series = TimeSeries([3.0, 1.0, 2.0, 0.0], [[30.0, 10.0, 20.0, 0.0]])
    train, test = split_train_test(series, 0.5)
    assert train.t.tolist() == [0.0, 1.0]
    assert test.y.tolist() == [[20.0, 30.0]]


def test_split_rejects_unknown_mode():
    with pytest.raises(ValueError, match='Unsupported split mode'):
        split_train_test(_series(), 0.5, mode='random')


def test_load_csv_with_header(tmp_path):
    path = tmp_path / 'obs.csv'
    path.write_text('t,x,v\n1.0,0.5,0.1\n0.0,1.0,0.0\n')
    series = load_csv(path, state_dim=2)
    assert series.t.tolist() == [0.0, 1.0]
    assert series.y.shape == (2, 2)
    assert series.y[0].tolist() == [1.0, 0.5]


def test_load_csv_rejects_wrong_column_count(tmp_path):
    path = tmp_path / 'obs.csv'
    path.write_text('0.0,1.0\n1.0,0.5\n')
    with pytest.raises(ValueError, match='state columns'):
        load_csv(path, state_dim=2)


def test_synthesize_clean_observations():
    series = synthesize(HookeSystem(), h=1e-2, n_obs=50)
    assert len(series) == 50
    assert series.t[0] == 0.0
    assert np.allclose(series.y[0], np.cos(series.t), atol=1e-6)


def test_noise_is_reproducible_with_seed():
    series = _series()
    a = add_noise(series, 0.1, seed=5)
    b = add_noise(series, 0.1, seed=5)
    assert np.array_equal(a.y, b.y)
    assert not np.array_equal(a.y, series.y)
    assert np.array_equal(add_noise(series, 0.0).y, series.y)


def test_labeled_batch_conversion():
    batch = _series(4).to_batch(torch.float64)
    assert isinstance(batch, LabeledBatch)
    assert batch.t.shape == (1, 4)
    assert batch.y.shape == (2, 4)
    assert batch.y.dtype == torch.float64
    assert len(batch) == 4
    assert not batch.is_empty


def test_timeseries_shape_mismatch():
    with pytest.raises(ValueError):
        TimeSeries([0.0, 1.0], [[1.0, 2.0, 3.0]])
