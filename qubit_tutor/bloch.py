# qubit_tutor/bloch.py
"""Projection of a normalized single-qubit state onto the Bloch sphere.

theta is the polar angle measured from |0> (north pole), phi the relative
phase arg(b) - arg(a). phi is not wrapped into (-pi, pi]; callers that care
about a canonical range should wrap it themselves.
"""
import math
from dataclasses import dataclass, asdict
from typing import Dict, Tuple

from .complexmath import arg, abs2
from .state import State


@dataclass(frozen=True)
class BlochPoint:
    theta: float
    phi: float
    x: float
    y: float
    z: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def vector(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


def bloch_angles(state: State) -> Tuple[float, float]:
    a, b = state.a, state.b
    ra = math.sqrt(abs2(a))
    # rounding can push |a| slightly past 1
    theta = 2.0 * math.acos(min(1.0, max(-1.0, ra)))
    phi = arg(b) - arg(a)
    return theta, phi

def bloch_vector(theta: float, phi: float) -> Tuple[float, float, float]:
    x = math.sin(theta) * math.cos(phi)
    y = math.sin(theta) * math.sin(phi)
    z = math.cos(theta)
    return x, y, z

def compute_bloch_point(state: State) -> BlochPoint:
    theta, phi = bloch_angles(state)
    x, y, z = bloch_vector(theta, phi)
    return BlochPoint(theta=theta, phi=phi, x=x, y=y, z=z)
