import logging
import math

import pytest
import torch

from pinnode.data import LabeledBatch
from pinnode.diffeq import HookeSystem
from pinnode.losses import LossWeights
from pinnode.models import PINN
from pinnode.training import HISTORY_KEYS, Callback, Trainer, TrainConfig


def _hooke_data(n=20):
    system = HookeSystem()
    t = torch.linspace(0.0, 10.0, n, dtype=torch.float64)
    return LabeledBatch.from_arrays(t, system.exact_solution(t))


def _trainer(epochs=10, **overrides):
    params = dict(
        epochs=epochs, batch_size=64, collocation_n=64, optimizer='adam',
        lr=5e-3, print_every=5, seed=0
    )
    params.update(overrides)
    torch.manual_seed(1)
    model = PINN(hidden_sizes=(16, 16), output_dim=2)
    return Trainer(model, HookeSystem(), TrainConfig(**params))


@pytest.mark.parametrize('overrides', [
    {'epochs': 0},
    {'batch_size': 0},
    {'lr': 0.0},
    {'optimizer': 'rmsprop'},
    {'collocation_mode': 'sobol'},
    {'adam_step_unit': 'iteration'},
    {'lr_decay': 1.5},
])
def test_train_config_validation(overrides):
    with pytest.raises(ValueError):
        TrainConfig(**overrides)


def test_train_config_accepts_weight_dict():
    cfg = TrainConfig(loss_weights={'lambda_data': 0.5})
    assert cfg.loss_weights == LossWeights(1.0, 1.0, 0.5)


def test_training_reduces_loss_and_records_history():
    trainer = _trainer()
    history = trainer.train()

    assert set(history) == set(HISTORY_KEYS)
    assert all(len(v) == 10 for v in history.values())
    assert history['epoch'] == list(range(1, 11))
    assert all(math.isfinite(v) for v in history['loss'])
    assert history['loss'][-1] < history['loss'][0]
    # no labeled data, no metrics
    assert all(math.isnan(v) for v in history['mse'])
    assert all(v == 0.0 for v in history['data_term'])


def test_metrics_are_recorded_on_reporting_epochs_only():
    trainer = _trainer(loss_weights=LossWeights(1.0, 1.0, 1.0))
    history = trainer.train(data=_hooke_data())

    reported = [i for i, v in enumerate(history['mse']) if not math.isnan(v)]
    assert reported == [0, 4, 9]
    assert all(history['data_term'][i] > 0.0 for i in range(10))


def test_learning_rate_decays_in_steps():
    trainer = _trainer(epochs=4, optimizer='sgd', lr=1e-3, lr_decay=0.5, decay_every=2)
    history = trainer.train()
    assert history['lr'] == pytest.approx([1e-3, 1e-3, 5e-4, 5e-4])


def test_seeded_runs_are_reproducible():
    a = _trainer(epochs=3).train()
    b = _trainer(epochs=3).train()
    assert a['loss'] == b['loss']


def test_callbacks_see_every_epoch():
    class Recorder(Callback):
        def __init__(self):
            self.epochs = []
            self.finished = False

        def on_epoch_end(self, epoch, trainer, logs):
            self.epochs.append(epoch)

        def on_train_end(self, trainer, history):
            self.finished = True

    recorder = Recorder()
    trainer = _trainer(epochs=3)
    trainer.add_callback(recorder)
    trainer.train()
    assert recorder.epochs == [1, 2, 3]
    assert recorder.finished


def test_reentrant_train_is_rejected():
    class Reenter(Callback):
        def on_epoch_start(self, epoch, trainer):
            trainer.train()

    trainer = _trainer(epochs=2)
    trainer.add_callback(Reenter())
    with pytest.raises(RuntimeError, match='already running'):
        trainer.train()

    trainer.callbacks = [c for c in trainer.callbacks if not isinstance(c, Reenter)]
    assert len(trainer.train()['loss']) == 2


def test_progress_is_logged_on_reporting_epochs(caplog):
    trainer = _trainer()
    with caplog.at_level(logging.INFO, logger='pinnode'):
        trainer.train()
    progress = [r for r in caplog.records if r.name == 'pinnode.training.callbacks']
    assert len(progress) == 3
    assert '[  10/  10]' in progress[-1].getMessage()


def _global_grad_norm(params):
    return torch.sqrt(sum(torch.sum(p.grad ** 2) for p in params)).item()


def test_train_step_clips_large_gradients():
    trainer = _trainer(grad_clip=1e-3)
    state = trainer.init_state()
    t = torch.linspace(0.0, 10.0, 32).reshape(1, -1)
    _, logs = trainer.train_step(state, t)
    assert logs['grad_norm'] > 1e-3
    assert _global_grad_norm(state.params.values()) <= 1e-3 * (1 + 1e-6)


def test_train_step_leaves_small_gradients_untouched():
    trainer = _trainer(grad_clip=1e6)
    state = trainer.init_state()
    t = torch.linspace(0.0, 10.0, 32).reshape(1, -1)

    total, _ = trainer.loss_fn(trainer.model, t)
    total.backward()
    expected = [p.grad.clone() for p in state.params.values()]
    state.optimizer.zero_grad()

    _, logs = trainer.train_step(state, t)
    assert logs['grad_norm'] == pytest.approx(math.sqrt(sum(float(torch.sum(g ** 2)) for g in expected)))
    for p, g in zip(state.params.values(), expected):
        assert torch.equal(p.grad, g)


def test_train_step_without_clipping_reports_nan_norm():
    trainer = _trainer(grad_clip=0.0)
    _, logs = trainer.train_step(trainer.init_state(), torch.linspace(0.0, 1.0, 8).reshape(1, -1))
    assert math.isnan(logs['grad_norm'])


def test_residual_strictly_decreases_under_gradient_descent():
    # plain full-batch descent on the residual alone, from a far-from-solved network
    torch.manual_seed(1)
    model = PINN(hidden_sizes=(16, 16), output_dim=2, dtype='float64', init_scale=1.0)
    config = TrainConfig(
        epochs=10, batch_size=256, collocation_n=256, optimizer='sgd',
        lr=1e-4, momentum=0.0, seed=0, loss_weights=LossWeights(1.0, 0.0, 0.0)
    )
    history = Trainer(model, HookeSystem(), config, verbose=False).train()

    residual = history['residual_term']
    assert residual[0] > 1e-3
    assert all(b < a for a, b in zip(residual, residual[1:]))


def test_two_trainers_cannot_train_one_model_at_once():
    torch.manual_seed(1)
    model = PINN(hidden_sizes=(8,), output_dim=2)
    config = TrainConfig(epochs=2, batch_size=16, collocation_n=16, seed=0)
    other = Trainer(model, HookeSystem(), config, verbose=False)

    class StartOther(Callback):
        def on_epoch_start(self, epoch, trainer):
            other.train()

    trainer = Trainer(model, HookeSystem(), config, callbacks=[StartOther()], verbose=False)
    with pytest.raises(RuntimeError, match='already running'):
        trainer.train()
    assert len(other.train()['loss']) == 2
