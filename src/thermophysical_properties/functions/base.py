from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Sequence, Tuple
import numpy as np

from thermophysical_properties.helpers import DomainError, MalformedCoefficients


@dataclass(frozen=True)
class ThermophysicalFunction:
    """
    Base class of all correlation families: an ordered coefficient vector and a formula f(p, T).

    Parameters
    ----------
    coefficients : sequence of float
        Coefficients in the order declared by the family
    T_range : tuple, optional
        Validity range (Tmin, Tmax) [K] of the correlation. Metadata only: it is not enforced on evaluation
    name : str, optional
        Diagnostic name, normally "<material>.<slot>"
    """
    type_name: ClassVar[str] = ""
    arity: ClassVar[int] = 0
    critical_index: ClassVar[int | None] = None  # Position of Tc in the coefficients of reduced-temperature forms
    coefficients: Tuple[float, ...] = ()
    T_range: Tuple[float, float] | None = None
    name: str = field(default="", compare=False)

    def __post_init__(self):
        try:
            coefficients = tuple(float(c) for c in self.coefficients)
        except (TypeError, ValueError):
            raise MalformedCoefficients(f'{self.type_name} "{self.name}": coefficients must be numbers, {self.coefficients!r} was provided') from None
        self.check_coefficients(coefficients)
        object.__setattr__(self, "coefficients", coefficients)
        if self.T_range is not None:
            try:
                T_min, T_max = (float(T) for T in self.T_range)
            except (TypeError, ValueError):
                raise MalformedCoefficients(f'{self.type_name} "{self.name}": the validity range must be a pair [Tmin, Tmax], {self.T_range!r} was provided') from None
            if not T_min < T_max:
                raise MalformedCoefficients(f'{self.type_name} "{self.name}": empty validity range [{T_min}, {T_max}]')
            object.__setattr__(self, "T_range", (T_min, T_max))

    def check_coefficients(self, coefficients: Tuple[float, ...]):
        if len(coefficients) != self.arity:
            raise MalformedCoefficients(f'{self.type_name} "{self.name}" expects {self.arity} coefficients, {len(coefficients)} were provided')

    @property
    def Tc(self) -> float | None:
        return None if self.critical_index is None else self.coefficients[self.critical_index]

    @property
    def reduced_temperature(self) -> bool:
        return self.critical_index is not None

    def f(self, p, T):
        """Evaluates the correlation. T may be a float or a numpy array"""
        self.check_domain(p, T)
        return self.formula(self.coefficients, p, T)

    def __call__(self, p, T):
        return self.f(p, T)

    def check_domain(self, p, T):
        T_arr = np.asarray(T, dtype=float)
        if np.any(T_arr <= 0.0):
            raise DomainError(f'{self.type_name} "{self.name}" evaluated at non-positive temperature T = {T}')
        if self.reduced_temperature and np.any(T_arr >= self.Tc):
            raise DomainError(f'{self.type_name} "{self.name}" is undefined at or above the critical temperature Tc = {self.Tc} K (T = {T})')

    def in_range(self, T) -> bool:
        if self.T_range is None:
            return True
        T_arr = np.asarray(T, dtype=float)
        return bool(np.all((T_arr >= self.T_range[0]) & (T_arr <= self.T_range[1])))

    @staticmethod
    def formula(coeffs, p, T):
        raise NotImplementedError

    def working_range(self) -> Tuple[float, float] | None:
        return self.T_range

    def write(self) -> Dict[str, Any]:
        record = {"typeName": self.type_name, "coefficients": list(self.coefficients)}
        if self.T_range is not None:
            record["validityRange"] = list(self.T_range)
        return record

    # --- FITTING ---

    @classmethod
    def sample_temperatures(cls, T_low: float, T_high: float, n_samples: int, sources: Sequence[ThermophysicalFunction]):
        return np.linspace(T_low, T_high, n_samples)

    @classmethod
    def fit(cls, T: np.ndarray, y: np.ndarray, guess: Tuple[float, ...], p: float) -> Tuple[float, ...]:
        """Returns the coefficients of this family that best approximate y(T) at pressure p"""
        raise NotImplementedError(f"Coefficient fitting is not available for {cls.type_name}")
