# qubit_tutor/circuit.py
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Mapping, Optional, Tuple
import numpy as np

from .gates import GATES, Gate, get_gate
from .linalg import ZeroNormError, mat_vec, normalize
from .state import State

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    gate: str
    state: State


def apply_gate(name: str, state: State, table: Mapping[str, Gate] = GATES) -> State:
    """Apply gate `name` to `state` and renormalize. Returns a new State.

    Unknown gate names and products that vanish (norm 0) leave the state
    unchanged.
    """
    gate = get_gate(name, table)
    if gate is None:
        logger.warning("Unknown gate %r ignored", name)
        return state
    out = mat_vec(gate.matrix, state.psi)
    try:
        a, b = normalize(out)
    except ZeroNormError:
        logger.warning("Gate %s mapped %s to the zero vector; state left unchanged", name, state.ket())
        return state
    return State(np.array([a, b], dtype=np.complex128))


def _replay(names, table, start: Optional[State] = None) -> Iterator[HistoryEntry]:
    st = start if start is not None else State.zero()
    for g in names:
        st = apply_gate(g, st, table)
        yield HistoryEntry(g, st)


def run_circuit(circuit, table: Mapping[str, Gate] = GATES) -> Tuple[State, List[HistoryEntry]]:
    """Replay `circuit` (any iterable of gate names) from |0>.

    Returns the final state and a freshly built history with one entry per gate.
    """
    history = list(_replay(circuit, table))
    final = history[-1].state if history else State.zero()
    logger.debug("Ran %d gate(s); final %s", len(history), final.ket())
    return final, history


def run_up_to(circuit, index: int, table: Mapping[str, Gate] = GATES) -> State:
    """Replay gates 0..index (inclusive) from |0>; index past the end is clipped."""
    if not isinstance(index, (int, np.integer)) or isinstance(index, bool):
        raise TypeError(f"index must be an int, got {type(index).__name__}")
    names = list(circuit)[:max(int(index) + 1, 0)]
    st = State.zero()
    for entry in _replay(names, table):
        st = entry.state
    return st


def measure(state: State, rng: np.random.Generator) -> Tuple[int, State]:
    """Computational-basis measurement: sample an outcome and collapse onto it."""
    p0 = float(state.probabilities()[0])
    r = rng.random()
    outcome = 0 if r < p0 else 1
    logger.debug("Measured %d (p0=%.6f, r=%.6f)", outcome, p0, r)
    return outcome, (State.zero() if outcome == 0 else State.one())


@dataclass
class Circuit:
    ops: List[str] = field(default_factory=list)

    @staticmethod
    def empty() -> "Circuit":
        return Circuit([])

    def append(self, name: str) -> "Circuit":
        self.ops.append(name); return self

    def i(self): return self.append("I")
    def x(self): return self.append("X")
    def z(self): return self.append("Z")
    def h(self): return self.append("H")
    def s(self): return self.append("S")
    def t(self): return self.append("T")

    def clear(self):
        self.ops.clear()

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ops)

    def unknown(self, table: Mapping[str, Gate] = GATES) -> List[str]:
        return [g for g in self.ops if g not in table]

    def run(self, table: Mapping[str, Gate] = GATES, check_norm=True, check_norm_tol=None) -> Tuple[State, List[HistoryEntry]]:
        final, history = run_circuit(self.ops, table)
        if check_norm:
            final.check_normalized(tol=check_norm_tol if check_norm_tol is not None else 1e-6)
        return final, history

    def run_up_to(self, index: int, table: Mapping[str, Gate] = GATES) -> State:
        return run_up_to(self.ops, index, table)
