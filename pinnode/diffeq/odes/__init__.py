"""
Benchmark ODE systems

Second-order systems (leapfrog compatible):
- HookeSystem: Linear spring-mass oscillator
- HarmonicOscillator: Damped harmonic oscillator
- VanDerPolOscillator: Limit-cycle oscillator
- DoublePendulum: Chaotic planar double pendulum
- ThreeBodySystem: Planar gravitational 3-body problem

Other systems:
- LorenzSystem: Classic chaotic attractor (first order)
- JerkSystem: Third-order jerk equation
- BlasiusEquation: Boundary layer, solved by shooting
"""

from .hooke import HookeSystem
from .harmonic import HarmonicOscillator
from .van_der_pol import VanDerPolOscillator
from .lorenz import LorenzSystem
from .double_pendulum import DoublePendulum
from .three_body import ThreeBodySystem
from .jerk import JerkSystem
from .blasius import BlasiusEquation

__all__ = [
    'HookeSystem',
    'HarmonicOscillator',
    'VanDerPolOscillator',
    'LorenzSystem',
    'DoublePendulum',
    'ThreeBodySystem',
    'JerkSystem',
    'BlasiusEquation',
]
