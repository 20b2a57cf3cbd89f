# qubit_tutor/state.py
import numpy as np
from dataclasses import dataclass

from .complexmath import abs2
from .linalg import normalize

def format_amplitude(z: complex) -> str:
    """Short human-readable amplitude, e.g. '0.707', '-1i', '0.5 - 0.5i'."""
    re = round(float(z.real), 3) + 0.0
    im = round(float(z.imag), 3) + 0.0
    if abs(im) < 1e-6:
        return f"{re:g}"
    if abs(re) < 1e-6:
        return f"{im:g}i"
    sign = "+" if im >= 0 else "-"
    return f"{re:g} {sign} {abs(im):g}i"

@dataclass
class State:
    psi: np.ndarray  # shape (2,), complex128: amplitudes of |0> and |1>

    def __post_init__(self):
        # own a read-only copy so recorded history cannot change under us
        self.psi = np.array(self.psi, dtype=np.complex128)
        if self.psi.shape != (2,):
            raise ValueError(f"Single-qubit state needs 2 amplitudes, got shape {self.psi.shape}")
        self.psi.setflags(write=False)

    @staticmethod
    def zero() -> "State":
        return State(np.array([1.0 + 0.0j, 0.0j]))

    @staticmethod
    def one() -> "State":
        return State(np.array([0.0j, 1.0 + 0.0j]))

    @staticmethod
    def from_amplitudes(a: complex, b: complex, renorm: bool = True) -> "State":
        if renorm:
            a, b = normalize((complex(a), complex(b)))
        return State(np.array([a, b], dtype=np.complex128))

    @property
    def a(self) -> complex:
        return complex(self.psi[0])

    @property
    def b(self) -> complex:
        return complex(self.psi[1])

    def norm2(self) -> float:
        return abs2(self.a) + abs2(self.b)

    def check_normalized(self, tol=1e-6):
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise AssertionError(f"Normalization failed: ||psi||^2={n2}")

    def probabilities(self) -> np.ndarray:
        return np.abs(self.psi)**2

    def isclose(self, other: "State", tol=1e-6) -> bool:
        return bool(np.allclose(self.psi, other.psi, atol=tol, rtol=0))

    def copy(self) -> "State":
        return State(self.psi.copy())

    def ket(self) -> str:
        return f"({format_amplitude(self.a)}) |0> + ({format_amplitude(self.b)}) |1>"
