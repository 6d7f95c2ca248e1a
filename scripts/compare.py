#!/usr/bin/env python
"""
PINN vs ODE Comparison Script

Fits a PINN to observations of a system and scores it against a
classical integrator on the held-out (later) part of the trajectory.

Usage:
    python compare.py --system hooke --solver runge_kutta --epochs 2000
    python compare.py --system lorenz --csv data/lorenz.csv --optimizer adam --lr 1e-3
"""

import argparse
import json
import logging
from datetime import datetime
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import torch

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from pinnode.data import add_noise, load_csv, split_train_test, synthesize
from pinnode.diffeq import SystemKind, get_system
from pinnode.evaluation import compare_methods, format_table
from pinnode.integrators import IntegratorKind, integrate_at
from pinnode.losses import LossWeights
from pinnode.models import PINN, PINNConfig
from pinnode.training import Trainer, TrainConfig


def plot_comparison(t_train, y_train, t_test, y_test, t_grid, y_pinn, y_ode, out_path, title):
    """One panel per state channel with data, PINN and integrator curves."""
    D = y_test.shape[0]
    fig, axes = plt.subplots(D, 1, figsize=(9, 2.4 * D), sharex=True, squeeze=False)
    for d in range(D):
        ax = axes[d, 0]
        ax.plot(t_train, y_train[d], '.', ms=3, color='0.6', label='train data')
        ax.plot(t_test, y_test[d], '.', ms=3, color='k', label='test data')
        ax.plot(t_grid, y_pinn[d], '-', lw=1.5, label='PINN')
        ax.plot(t_grid, y_ode[d], '--', lw=1.2, label='ODE')
        ax.axvline(t_test[0], color='r', lw=0.8, ls=':')
        ax.set_ylabel(f'y[{d}]')
    axes[0, 0].legend(loc='upper right', fontsize=8)
    axes[0, 0].set_title(title)
    axes[-1, 0].set_xlabel('t')
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)


def main():
    parser = argparse.ArgumentParser(description='Compare a PINN with a classical ODE integrator')

    # System and reference solver
    parser.add_argument('--system', type=str, default='hooke',
                        choices=[k.value for k in SystemKind],
                        help='ODE system')
    parser.add_argument('--solver', type=str, default='runge_kutta',
                        choices=[k.value for k in IntegratorKind],
                        help='Integrator used as the ODE baseline')
    parser.add_argument('--h', type=float, default=1e-3,
                        help='Integrator step size')

    # Data
    parser.add_argument('--csv', type=str, default=None,
                        help='CSV with columns t, y1..yD (default: synthesize from the system)')
    parser.add_argument('--n_obs', type=int, default=200,
                        help='Number of synthetic observations')
    parser.add_argument('--noise_std', type=float, default=0.0,
                        help='Gaussian observation noise')
    parser.add_argument('--train_ratio', type=float, default=0.9,
                        help='Fraction of observations used for training')

    # Model
    parser.add_argument('--hidden_sizes', type=int, nargs='+', default=[64, 64, 64],
                        help='Hidden layer widths')
    parser.add_argument('--activation', type=str, default='tanh',
                        choices=['tanh', 'relu', 'swish'],
                        help='Activation function')
    parser.add_argument('--dropout', type=float, default=0.0,
                        help='Dropout probability in training mode')
    parser.add_argument('--dtype', type=str, default='float32',
                        choices=['float32', 'float64'],
                        help='Network precision')

    # Training
    parser.add_argument('--epochs', type=int, default=2000,
                        help='Number of training epochs')
    parser.add_argument('--batch_size', type=int, default=128,
                        help='Collocation points per batch')
    parser.add_argument('--collocation_n', type=int, default=4096,
                        help='Collocation pool size')
    parser.add_argument('--collocation_mode', type=str, default='random',
                        choices=['random', 'grid'],
                        help='Collocation sampling')
    parser.add_argument('--optimizer', type=str, default='sgd',
                        choices=['sgd', 'adam'],
                        help='Optimizer')
    parser.add_argument('--lr', type=float, default=1e-3,
                        help='Learning rate')
    parser.add_argument('--momentum', type=float, default=0.9,
                        help='SGD momentum')
    parser.add_argument('--lr_decay', type=float, default=None,
                        help='Learning rate decay factor')
    parser.add_argument('--decay_every', type=int, default=None,
                        help='Epochs between learning rate decays')
    parser.add_argument('--grad_clip', type=float, default=5.0,
                        help='Global gradient norm limit (0 disables)')
    parser.add_argument('--print_every', type=int, default=50,
                        help='Reporting cadence in epochs')

    # Loss weights
    parser.add_argument('--w_res', type=float, default=1.0,
                        help='Residual loss weight')
    parser.add_argument('--w_ic', type=float, default=1.0,
                        help='Initial condition loss weight')
    parser.add_argument('--w_data', type=float, default=1.0,
                        help='Data loss weight')

    # Output
    parser.add_argument('--output_dir', type=str, default='./results',
                        help='Output directory')
    parser.add_argument('--seed', type=int, default=42,
                        help='Random seed')
    parser.add_argument('--no_plot', action='store_true',
                        help='Skip the comparison figure')

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format='%(message)s')

    torch.manual_seed(args.seed)
    np.random.seed(args.seed)

    system = get_system(args.system)
    print(f"System: {system.name} (dim={system.state_dim}, t={system.domain_t})")

    # Observations
    if args.csv:
        series = load_csv(args.csv, system.state_dim)
        if args.noise_std > 0:
            series = add_noise(series, args.noise_std, seed=args.seed)
    else:
        series = synthesize(
            system, h=args.h, n_obs=args.n_obs, noise_std=args.noise_std, seed=args.seed
        )
    train_set, test_set = split_train_test(series, args.train_ratio)
    print(f"Observations: {len(series)} ({len(train_set)} train / {len(test_set)} test)")

    # Model
    model = PINN(PINNConfig(
        output_dim=system.state_dim,
        hidden_sizes=tuple(args.hidden_sizes),
        activation=args.activation,
        dropout=args.dropout,
        dtype=args.dtype
    ))
    print(f"Model: {model} ({model.count_parameters()} params)")

    config = TrainConfig(
        epochs=args.epochs,
        batch_size=args.batch_size,
        collocation_n=args.collocation_n,
        collocation_mode=args.collocation_mode,
        seed=args.seed,
        lr=args.lr,
        momentum=args.momentum,
        grad_clip=args.grad_clip,
        optimizer=args.optimizer,
        lr_decay=args.lr_decay,
        decay_every=args.decay_every,
        print_every=args.print_every,
        loss_weights=LossWeights(args.w_res, args.w_ic, args.w_data)
    )
    trainer = Trainer(model, system, config)

    # Output directory
    output_dir = Path(args.output_dir) / f"{args.system}_{args.solver}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    output_dir.mkdir(parents=True, exist_ok=True)

    with open(output_dir / 'config.json', 'w') as f:
        json.dump(vars(args), f, indent=2)

    print(f"Output: {output_dir}")
    print(f"Training for {args.epochs} epochs...")

    history = trainer.train(
        data=train_set.to_batch(model.dtype),
        eval_data=train_set.to_batch(model.dtype),
        progress_bar=False
    )

    with open(output_dir / 'history.json', 'w') as f:
        # NaN is not valid JSON
        json.dump({k: [None if np.isnan(v) else v for v in vals] for k, vals in history.items()}, f)

    # Held-out comparison
    pinn_pred = model.predict(torch.as_tensor(test_set.t)).numpy()
    ode_pred = integrate_at(system, args.solver, test_set.t, args.h).numpy()
    table = compare_methods(pinn_pred, ode_pred, test_set.y)

    print(f"\nComparison on held-out data ({args.solver}):")
    print(format_table(table))

    with open(output_dir / 'comparison.json', 'w') as f:
        json.dump(table, f, indent=2)

    if not args.no_plot:
        t_grid = np.linspace(series.t[0], series.t[-1], 1000)
        y_pinn = model.predict(torch.as_tensor(t_grid)).numpy()
        y_ode = integrate_at(system, args.solver, t_grid, args.h).numpy()
        plot_comparison(
            train_set.t, train_set.y, test_set.t, test_set.y,
            t_grid, y_pinn, y_ode,
            output_dir / 'comparison.png',
            f"{system.name}: PINN vs {args.solver}"
        )
        print(f"Saved figure to {output_dir / 'comparison.png'}")


if __name__ == '__main__':
    main()
