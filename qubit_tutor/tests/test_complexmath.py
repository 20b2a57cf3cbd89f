import math
import numpy as np
import pytest
from qubit_tutor import complexmath as cm
from qubit_tutor.linalg import ZeroNormError, inner, mat_vec, norm, normalize

def almost(p, q, tol=1e-12):
    return np.allclose(p, q, atol=tol, rtol=0)

def test_basic_ops():
    a, b = 1 + 2j, 3 + 4j
    assert cm.add(a, b) == 4 + 6j
    assert cm.sub(a, b) == -2 - 2j
    assert cm.mul(a, b) == -5 + 10j
    assert cm.scale(a, 0.5) == 0.5 + 1j
    assert cm.conj(a) == 1 - 2j
    assert cm.abs2(3 + 4j) == 25.0

def test_mul_matches_builtin():
    rng = np.random.default_rng(0)
    for _ in range(50):
        a = complex(*rng.normal(size=2))
        b = complex(*rng.normal(size=2))
        assert almost(cm.mul(a, b), a * b)
        assert almost(cm.mul(a, b), cm.mul(b, a))

def test_arg():
    assert cm.arg(1j) == pytest.approx(math.pi / 2)
    assert cm.arg(-1 + 0j) == pytest.approx(math.pi)
    assert cm.arg(cm.ZERO) == 0.0

def test_inner():
    assert inner((1, 0), (1, 0)) == 1
    assert inner((1j, 0), (1j, 0)) == 1
    assert inner((1, 0), (0, 1)) == 0

def test_mat_vec_missing_entries_are_zero():
    v = (0.6 + 0j, 0.8j)
    assert mat_vec([[None, 1], [1, None]], v) == (0.8j, 0.6 + 0j)
    assert mat_vec([[1], [0, 1]], v) == v

def test_mat_vec_numpy_matrix():
    m = np.array([[0, 1], [1, 0]], dtype=np.complex128)
    assert mat_vec(m, np.array([1, 0], dtype=np.complex128)) == (0j, 1 + 0j)

def test_normalize():
    assert norm((3, 4j)) == 5.0
    a, b = normalize((3, 4j))
    assert almost([a, b], [0.6, 0.8j])

def test_normalize_zero_vector_raises():
    with pytest.raises(ZeroNormError):
        normalize((0, 0))
    assert issubclass(ZeroNormError, ValueError)
