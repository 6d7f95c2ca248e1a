#!/usr/bin/env python
"""
Integrator Suite Script

Runs every integrator on one system and plots the trajectories.

Usage:
    python run_solvers.py --system harmonic --h 0.01
    python run_solvers.py --system double_pendulum --h 1e-3 --t_end 10
"""

import argparse
import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from pinnode.diffeq import SystemKind, get_system
from pinnode.integrators import IntegratorKind, run_solvers


def main():
    parser = argparse.ArgumentParser(description='Run the integrator suite on an ODE system')
    parser.add_argument('--system', type=str, default='harmonic',
                        choices=[k.value for k in SystemKind],
                        help='ODE system')
    parser.add_argument('--h', type=float, default=1e-2,
                        help='Step size')
    parser.add_argument('--t_end', type=float, default=None,
                        help='End time (default: system domain)')
    parser.add_argument('--strict', action='store_true',
                        help='Fail when a Newton solve does not converge')
    parser.add_argument('--output', type=str, default='solvers.png',
                        help='Figure path')
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')

    system = get_system(args.system)
    time_span = None
    if args.t_end is not None:
        time_span = (system.domain_t[0], args.t_end)

    results = run_solvers(system, args.h, time_span=time_span, strict=args.strict)
    t = results['t'].numpy()
    print(f"System: {system.name}, {t.size} grid points, h={args.h}")

    D = system.state_dim
    fig, axes = plt.subplots(D, 1, figsize=(9, 2.2 * D), sharex=True, squeeze=False)
    for kind in IntegratorKind:
        Y = results[kind.value].numpy()
        if np.isnan(Y).all():
            print(f"  {kind.value:<16} not applicable")
            continue
        print(f"  {kind.value:<16} y(t_end) = {np.array2string(Y[:, -1], precision=6)}")
        for d in range(D):
            axes[d, 0].plot(t, Y[d], lw=1.0, label=kind.value)

    for d in range(D):
        axes[d, 0].set_ylabel(f'y[{d}]')
    axes[0, 0].legend(loc='upper right', fontsize=8)
    axes[0, 0].set_title(system.name)
    axes[-1, 0].set_xlabel('t')
    fig.tight_layout()
    fig.savefig(args.output, dpi=150)
    print(f"Saved figure to {args.output}")


if __name__ == '__main__':
    main()
