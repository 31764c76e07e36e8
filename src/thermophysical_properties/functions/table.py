import numpy as np

from thermophysical_properties.functions.base import ThermophysicalFunction
from thermophysical_properties.helpers import DomainError, MalformedCoefficients


class TableFunction(ThermophysicalFunction):
    """
    Piecewise-linear interpolation in T. Coefficients are the flattened nodes [T0, y0, T1, y1, ...],
    with at least two nodes and strictly increasing temperatures
    """
    type_name = "table"

    def check_coefficients(self, coefficients):
        if len(coefficients) < 4 or len(coefficients) % 2:
            raise MalformedCoefficients(f'{self.type_name} "{self.name}" expects an even number (>= 4) of coefficients [T0, y0, T1, y1, ...], {len(coefficients)} were provided')
        if np.any(np.diff(coefficients[0::2]) <= 0.0):
            raise MalformedCoefficients(f'{self.type_name} "{self.name}": node temperatures must be strictly increasing')

    @classmethod
    def from_columns(cls, T, values, T_range=None, name=""):
        return cls(coefficients=np.column_stack([T, values]).ravel(), T_range=T_range, name=name)

    @property
    def nodes(self):
        return np.array(self.coefficients[0::2])

    @property
    def values(self):
        return np.array(self.coefficients[1::2])

    @staticmethod
    def formula(coeffs, p, T):
        return np.interp(T, coeffs[0::2], coeffs[1::2])

    def check_domain(self, p, T):
        super().check_domain(p, T)
        T_arr = np.asarray(T, dtype=float)
        if np.any(T_arr < self.coefficients[0]) or np.any(T_arr > self.coefficients[-2]):
            raise DomainError(f'{self.type_name} "{self.name}" evaluated at T = {T}, outside the tabulated range [{self.coefficients[0]}, {self.coefficients[-2]}]')

    def working_range(self):
        return self.T_range or (self.coefficients[0], self.coefficients[-2])

    @classmethod
    def sample_temperatures(cls, T_low, T_high, n_samples, sources):
        # The union of both tables' nodes keeps every breakpoint of the blended curve
        nodes = np.concatenate([source.nodes for source in sources] + [[T_low, T_high]])
        return np.unique(nodes[(nodes >= T_low) & (nodes <= T_high)])

    @classmethod
    def fit(cls, T, y, guess, p):
        return tuple(np.column_stack([T, y]).ravel())
