# qubit_tutor/session.py
"""Interactive tutor session: current state, gate sequence, history, measurement.

A Session is what a front end (CLI, notebook, GUI) drives. It never talks to a
renderer itself; front ends either poll the query properties or register a
callback with `subscribe`, which is invoked after every mutation.

Quick-apply (`apply_gate`) acts on the current state only. The built circuit and
its recorded history are kept as they are and `history_stale` becomes True
until the next `run` or `clear`.
"""
import logging
from typing import Callable, List, Optional, Tuple

from .bloch import BlochPoint, compute_bloch_point
from .circuit import HistoryEntry, apply_gate, measure, run_circuit, run_up_to
from .config import SessionConfig
from .state import State

logger = logging.getLogger(__name__)

Listener = Callable[["Session"], None]

IDLE = "idle"
SUPERPOSITION = "superposition"
MEASURED = "measured"


class Session:
    def __init__(self, config: Optional[SessionConfig] = None):
        self.config = config if config is not None else SessionConfig()
        self.table = self.config.gate_table()
        self._rng = self.config.make_rng()
        self._listeners: List[Listener] = []
        self._state = State.zero()
        self._circuit: List[str] = []
        self._history: List[HistoryEntry] = []
        self._measurement: Optional[int] = None
        self._phase = IDLE
        self.history_stale = False

    # ---------------- queries ----------------

    @property
    def state(self) -> State:
        return self._state

    @property
    def circuit(self) -> Tuple[str, ...]:
        return tuple(self._circuit)

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._history)

    @property
    def measurement(self) -> Optional[int]:
        return self._measurement

    @property
    def phase(self) -> str:
        return self._phase

    def bloch_point(self) -> BlochPoint:
        return compute_bloch_point(self._state)

    # ---------------- listeners ----------------

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register `callback(session)`; returns a function that unregisters it."""
        self._listeners.append(callback)
        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    def _changed(self):
        for cb in list(self._listeners):
            cb(self)

    def _set_state(self, st: State, phase: str):
        self._state = st
        self._phase = phase
        logger.debug("state -> %s [%s]", st.ket(), phase)

    # ---------------- mutations ----------------

    def apply_gate(self, name: str) -> State:
        st = apply_gate(name, self._state, self.table)
        if st is self._state:
            # unknown gate or vanishing product: nothing changed
            return st
        self._set_state(st, SUPERPOSITION)
        if self.config.clear_measurement_on_apply:
            self._measurement = None
        if self._circuit or self._history:
            self.history_stale = True
        self._changed()
        return self._state

    def add_gate(self, name: str):
        self._circuit.append(name)
        self._changed()

    def run(self) -> State:
        final, history = run_circuit(self._circuit, self.table)
        if self.config.check_norm:
            final.check_normalized(tol=self.config.norm_tol)
        self._history = history
        self.history_stale = False
        self._set_state(final, SUPERPOSITION if history else IDLE)
        self._changed()
        return final

    def run_up_to(self, index: int) -> State:
        st = run_up_to(self._circuit, index, self.table)
        self._set_state(st, SUPERPOSITION if index >= 0 and self._circuit else IDLE)
        self._changed()
        return st

    def measure(self) -> int:
        outcome, collapsed = measure(self._state, self._rng)
        self._measurement = outcome
        self._set_state(collapsed, MEASURED)
        self._changed()
        return outcome

    def reset(self):
        """Back to |0> with no measurement; circuit and history are kept."""
        self._measurement = None
        self._set_state(State.zero(), IDLE)
        self._changed()

    def clear(self):
        self._circuit = []
        self._history = []
        self._measurement = None
        self.history_stale = False
        self._set_state(State.zero(), IDLE)
        self._changed()
