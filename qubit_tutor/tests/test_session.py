import numpy as np
import pytest
from qubit_tutor.config import SessionConfig
from qubit_tutor.gates import CORRECTED_GATES, GATES
from qubit_tutor.session import IDLE, MEASURED, SUPERPOSITION, Session
from qubit_tutor.state import State

S2 = np.sqrt(0.5)

def almost(p, q, tol=1e-6):
    return np.allclose(p, q, atol=tol, rtol=0)

def assert_initial(sess):
    assert sess.state.isclose(State.zero())
    assert sess.circuit == ()
    assert sess.history == ()
    assert sess.measurement is None
    assert sess.phase == IDLE
    assert not sess.history_stale

def test_initial_session():
    sess = Session()
    assert_initial(sess)
    assert sess.table is GATES
    assert sess.bloch_point().theta == pytest.approx(0.0)

def test_standard_hadamard_config():
    sess = Session(SessionConfig(hadamard="standard"))
    assert sess.table is CORRECTED_GATES
    sess.add_gate("H"); sess.add_gate("H")
    assert almost(sess.run().psi, [1, 0])

def test_add_gate_does_not_touch_state():
    sess = Session()
    sess.add_gate("X")
    assert sess.circuit == ("X",)
    assert almost(sess.state.psi, [1, 0])
    assert sess.history == ()

def test_run_builds_history():
    sess = Session(SessionConfig(hadamard="standard"))
    for g in ("X", "H", "S"):
        sess.add_gate(g)
    final = sess.run()
    assert [h.gate for h in sess.history] == ["X", "H", "S"]
    assert almost(final.psi, [S2, -S2 * 1j])
    assert sess.state is final
    assert sess.phase == SUPERPOSITION

def test_run_empty_circuit():
    sess = Session()
    sess.apply_gate("X")
    assert almost(sess.run().psi, [1, 0])
    assert sess.phase == IDLE

def test_run_up_to_keeps_history():
    sess = Session()
    sess.add_gate("X"); sess.add_gate("Z")
    sess.run()
    st = sess.run_up_to(0)
    assert almost(st.psi, [0, 1])
    assert len(sess.history) == 2
    assert almost(sess.history[-1].state.psi, [0, -1])

def test_clear_resets_everything():
    sess = Session(SessionConfig(seed=3))
    sess.add_gate("H")
    sess.run()
    sess.apply_gate("X")
    sess.measure()
    sess.clear()
    assert_initial(sess)

def test_reset_keeps_circuit():
    sess = Session(SessionConfig(seed=3))
    sess.add_gate("X")
    sess.run()
    sess.measure()
    sess.reset()
    assert sess.circuit == ("X",)
    assert len(sess.history) == 1
    assert sess.measurement is None
    assert almost(sess.state.psi, [1, 0])

def test_measure_collapses():
    sess = Session(SessionConfig(seed=0))
    sess.apply_gate("X")
    assert sess.measure() == 1
    assert sess.measurement == 1
    assert sess.phase == MEASURED
    assert almost(sess.state.psi, [0, 1])

def test_seeded_measurements_repeat():
    def outcomes(seed):
        sess = Session(SessionConfig(seed=seed))
        out = []
        for _ in range(50):
            sess.reset()
            sess.apply_gate("H")
            out.append(sess.measure())
        return out
    a = outcomes(42)
    assert a == outcomes(42)
    assert 0 in a and 1 in a

def test_injected_rng():
    sess = Session(SessionConfig(rng=np.random.default_rng(9)))
    ref = np.random.default_rng(9)
    for _ in range(20):
        sess.reset()
        sess.apply_gate("H")
        expect = 0 if ref.random() < 0.5 else 1
        assert sess.measure() == expect

def test_quick_apply_marks_history_stale():
    sess = Session()
    sess.apply_gate("X")
    assert not sess.history_stale
    sess.add_gate("H")
    sess.run()
    sess.apply_gate("Z")
    assert sess.history_stale
    assert sess.circuit == ("H",)
    assert len(sess.history) == 1
    sess.run()
    assert not sess.history_stale

def test_quick_apply_measurement_policy():
    sess = Session(SessionConfig(seed=1))
    sess.measure()
    sess.apply_gate("X")
    assert sess.measurement == 0
    sess = Session(SessionConfig(seed=1, clear_measurement_on_apply=True))
    sess.measure()
    sess.apply_gate("X")
    assert sess.measurement is None

def test_unknown_quick_apply_is_noop():
    sess = Session()
    seen = []
    sess.subscribe(seen.append)
    before = sess.state
    assert sess.apply_gate("nope") is before
    assert sess.phase == IDLE
    assert not sess.history_stale
    assert seen == []

def test_vanishing_quick_apply_is_noop():
    # observed Hadamard sends |1> to the zero vector
    sess = Session()
    sess.add_gate("X")
    sess.run()
    sess.apply_gate("H")
    assert sess.state.isclose(State.one())
    assert not sess.history_stale

def test_history_cannot_be_rewritten_through_state():
    sess = Session()
    sess.add_gate("X")
    sess.run()
    with pytest.raises(ValueError):
        sess.state.psi[:] = [1, 0]
    with pytest.raises(ValueError):
        sess.history[-1].state.psi[0] = 1
    assert sess.history[-1].state.isclose(State.one())
    assert sess.state.isclose(State.one())

def test_listeners():
    sess = Session()
    seen = []
    unsubscribe = sess.subscribe(lambda s: seen.append(s.phase))
    sess.apply_gate("H")
    sess.add_gate("X")
    sess.measure()
    assert seen == [SUPERPOSITION, SUPERPOSITION, MEASURED]
    unsubscribe()
    sess.clear()
    assert len(seen) == 3

def test_config_validation():
    with pytest.raises(ValueError):
        SessionConfig(hadamard="fixed")
    with pytest.raises(ValueError):
        SessionConfig(norm_tol=0)
    with pytest.raises(ValueError):
        SessionConfig(rng=42)
