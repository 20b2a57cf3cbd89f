# qubit_tutor/config.py
from dataclasses import dataclass
from typing import Mapping, Optional
import numpy as np

from .gates import HADAMARD_VARIANTS, Gate, gate_table


@dataclass
class SessionConfig:
    seed: Optional[int] = None
    rng: Optional[np.random.Generator] = None   # wins over seed when given
    hadamard: str = "observed"                   # "observed" or "standard"
    clear_measurement_on_apply: bool = False
    check_norm: bool = True
    norm_tol: float = 1e-6

    def __post_init__(self):
        if self.hadamard not in HADAMARD_VARIANTS:
            raise ValueError(f"hadamard must be one of {HADAMARD_VARIANTS}, got {self.hadamard!r}")
        if self.norm_tol <= 0:
            raise ValueError(f"norm_tol must be positive, got {self.norm_tol}")
        if self.rng is not None and not isinstance(self.rng, np.random.Generator):
            raise ValueError("rng must be a numpy.random.Generator")

    def make_rng(self) -> np.random.Generator:
        if self.rng is not None:
            return self.rng
        return np.random.default_rng(self.seed)

    def gate_table(self) -> Mapping[str, Gate]:
        return gate_table(self.hadamard)
