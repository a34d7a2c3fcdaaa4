"""
Trajectory Simulation - State Vector

This module defines the state vector shared by every dynamics model: a
fixed-length array of phase variables plus the independent variable.
Each model documents the meaning of its slots; the integrator only ever
sees the flat array.
"""

import operator
from dataclasses import dataclass, field
import numpy as np


class IndexOutOfRange(IndexError):
    """Raised when a state slot outside [0, n) is accessed."""
    pass


@dataclass
class StateVector:
    """
    Phase variables of a dynamics model.

    Attributes:
        q: Phase variables, layout defined by the owning model [n]
        s: Independent variable (time in s, or arc length)
    """

    q: np.ndarray = field(default_factory=lambda: np.zeros(0))
    s: float = 0.0

    def __post_init__(self):
        """Own a float64 copy of the phase variables."""
        self.q = np.array(self.q, dtype=np.float64)
        self.s = float(self.s)

    @property
    def n(self) -> int:
        """Number of phase variables."""
        return self.q.shape[0]

    def __len__(self) -> int:
        return self.n

    def _check_index(self, index: int):
        try:
            index = operator.index(index)
        except TypeError:
            raise IndexOutOfRange(f"State index must be an integer, got {index!r}") from None
        if not 0 <= index < self.n:
            raise IndexOutOfRange(
                f"State index {index} out of range for {self.n} components"
            )

    def get_component(self, index: int) -> float:
        """Return phase variable `index`."""
        self._check_index(index)
        return float(self.q[index])

    def set_component(self, index: int, value: float):
        """Overwrite phase variable `index`."""
        self._check_index(index)
        self.q[index] = value

    def copy(self) -> 'StateVector':
        """Create a deep copy of the state."""
        return StateVector(q=self.q.copy(), s=self.s)

    def to_vector(self) -> np.ndarray:
        """Return a copy of the phase variables as a flat array."""
        return self.q.copy()

    @classmethod
    def from_vector(cls, vec: np.ndarray, s: float) -> 'StateVector':
        """
        Create a StateVector from a flat numpy array.

        Args:
            vec: Phase variables
            s: Independent variable value
        """
        return cls(q=vec, s=s)

    def __str__(self) -> str:
        values = ", ".join(f"{v:.4g}" for v in self.q)
        return f"StateVector(s={self.s:.3f}, q=[{values}])"
