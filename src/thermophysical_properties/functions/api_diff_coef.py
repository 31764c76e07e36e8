import numpy as np

from thermophysical_properties.constants import THERMO
from thermophysical_properties.functions.base import ThermophysicalFunction
from thermophysical_properties.functions.fitting import linear_least_squares
from thermophysical_properties.helpers import DomainError


class APIdiffCoef(ThermophysicalFunction):
    """
    API correlation for the vapour diffusivity [m^2/s] of a liquid's vapour in a carrier gas:

        D = 3.6059e-3 * (1.8*T)^1.75 * sqrt(1/wf + 1/wa) / (p * (a^(1/3) + b^(1/3))^2)

    Coefficients are [a, b, wf, wa]: molar volumes of the vapour and of the carrier gas, and their molecular weights
    """
    type_name = "APIdiffCoef"
    arity = 4

    @staticmethod
    def formula(coeffs, p, T):
        a, b, wf, wa = coeffs
        return THERMO.api_diffusion*(1.8*T)**1.75*np.sqrt(1.0/wf + 1.0/wa)/(p*(np.cbrt(a) + np.cbrt(b))**2)

    def check_domain(self, p, T):
        super().check_domain(p, T)
        if np.any(np.asarray(p, dtype=float) <= 0.0):
            raise DomainError(f'{self.type_name} "{self.name}" evaluated at non-positive pressure p = {p}')

    def f_binary(self, p, T, Wb):
        """Vapour diffusivity with the carrier gas molecular weight replaced by Wb"""
        self.check_domain(p, T)
        a, b, wf, _ = self.coefficients
        return self.formula((a, b, wf, Wb), p, T)

    @classmethod
    def fit(cls, T, y, guess, p):
        # D*p/(1.8 T)^1.75 is a constant K = alpha/beta: fit K, keep b, wf and wa, and solve beta for a
        _, b, wf, wa = guess
        K = linear_least_squares([THERMO.api_diffusion*(1.8*T)**1.75/p], y)[0]
        alpha = np.sqrt(1.0/wf + 1.0/wa)
        if K <= 0.0 or np.sqrt(alpha/K) <= np.cbrt(b):
            raise DomainError(f"Cannot refit {cls.type_name}: scale factor {K} is not compatible with the carrier gas volume {b}")
        a = (np.sqrt(alpha/K) - np.cbrt(b))**3
        return (a, b, wf, wa)
