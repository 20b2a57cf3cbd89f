# qubit_tutor/gates.py
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional
import numpy as np

def _frozen(rows, dtype=np.complex128) -> np.ndarray:
    mat = np.array(rows, dtype=dtype)
    mat.setflags(write=False)
    return mat

def I(dtype=np.complex128) -> np.ndarray:
    return _frozen([[1, 0],
                    [0, 1]], dtype)

def X(dtype=np.complex128) -> np.ndarray:
    return _frozen([[0, 1],
                    [1, 0]], dtype)

def Z(dtype=np.complex128) -> np.ndarray:
    return _frozen([[1, 0],
                    [0, -1]], dtype)

def H(dtype=np.complex128) -> np.ndarray:
    s = np.sqrt(0.5)
    return _frozen([[s, s],
                    [s, -s]], dtype)

def H_observed(dtype=np.complex128) -> np.ndarray:
    # bottom-right entry is 0 rather than -1/sqrt(2); not unitary
    s = np.sqrt(0.5)
    return _frozen([[s, 0],
                    [s, 0]], dtype)

def S(dtype=np.complex128) -> np.ndarray:
    return _frozen([[1, 0],
                    [0, 1j]], dtype)

def T(dtype=np.complex128) -> np.ndarray:
    return _frozen([[1, 0],
                    [0, complex(np.cos(np.pi/4), np.sin(np.pi/4))]], dtype)


@dataclass(frozen=True, eq=False)
class Gate:
    name: str
    matrix: np.ndarray  # shape (2,2), read-only
    description: str

    def __post_init__(self):
        if self.matrix.shape != (2, 2):
            raise ValueError(f"Gate {self.name} must be 2x2, got {self.matrix.shape}")

    def is_unitary(self, tol: float = 1e-9) -> bool:
        prod = self.matrix.conj().T @ self.matrix
        return bool(np.allclose(prod, np.eye(2), atol=tol, rtol=0))


def _table(h: np.ndarray) -> Mapping[str, Gate]:
    gates = [
        Gate("I", I(), "Identity - does nothing"),
        Gate("X", X(), "Pauli-X (bit-flip)"),
        Gate("Z", Z(), "Pauli-Z (phase flip)"),
        Gate("H", h, "Hadamard - makes superposition"),
        Gate("S", S(), "Phase gate S (90°)"),
        Gate("T", T(), "T gate (45°)"),
    ]
    return MappingProxyType({g.name: g for g in gates})

# Default table keeps the Hadamard entry exactly as the tutor has always shipped it.
GATES: Mapping[str, Gate] = _table(H_observed())
CORRECTED_GATES: Mapping[str, Gate] = _table(H())

HADAMARD_VARIANTS = ("observed", "standard")

def gate_table(hadamard: str = "observed") -> Mapping[str, Gate]:
    if hadamard == "observed":
        return GATES
    if hadamard == "standard":
        return CORRECTED_GATES
    raise ValueError(f"Unknown Hadamard variant {hadamard!r}; expected one of {HADAMARD_VARIANTS}")

def get_gate(name: str, table: Mapping[str, Gate] = GATES) -> Optional[Gate]:
    return table.get(name)

def gate_names(table: Mapping[str, Gate] = GATES) -> List[str]:
    return list(table.keys())
