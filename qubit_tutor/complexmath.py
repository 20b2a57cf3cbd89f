# qubit_tutor/complexmath.py
import math

ZERO = complex(0.0, 0.0)


def add(a: complex, b: complex) -> complex:
    return complex(a.real + b.real, a.imag + b.imag)

def sub(a: complex, b: complex) -> complex:
    return complex(a.real - b.real, a.imag - b.imag)

def mul(a: complex, b: complex) -> complex:
    """(a+bi)(c+di) = (ac - bd) + (ad + bc)i"""
    return complex(a.real * b.real - a.imag * b.imag,
                   a.real * b.imag + a.imag * b.real)

def scale(a: complex, k: float) -> complex:
    return complex(a.real * k, a.imag * k)

def conj(a: complex) -> complex:
    return complex(a.real, -a.imag)

def abs2(a: complex) -> float:
    return a.real * a.real + a.imag * a.imag

def arg(a: complex) -> float:
    return math.atan2(a.imag, a.real)
