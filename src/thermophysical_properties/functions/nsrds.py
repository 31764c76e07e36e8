"""
NSRDS / DIPPR correlation families.

All formulas accept a float or a numpy array of temperatures [K]. None of them depends on pressure.
Reduced-temperature forms (NSRDS5, NSRDS6, NSRDS8, NSRDS9) are undefined at and above their critical temperature.
"""
import numpy as np

from thermophysical_properties.functions.base import ThermophysicalFunction
from thermophysical_properties.functions.fitting import linear_least_squares, log_samples, refine


class NSRDS0(ThermophysicalFunction):
    """Polynomial: a + b*T + c*T^2 + d*T^3 + e*T^4 + f*T^5"""
    type_name = "NSRDS0"
    arity = 6

    @staticmethod
    def formula(coeffs, p, T):
        a, b, c, d, e, f = coeffs
        return ((((f*T + e)*T + d)*T + c)*T + b)*T + a

    @classmethod
    def fit(cls, T, y, guess, p):
        return tuple(linear_least_squares([T**k for k in range(6)], y))


class NSRDS1(ThermophysicalFunction):
    """Exponential: exp(a + b/T + c*ln(T) + d*T^e)"""
    type_name = "NSRDS1"
    arity = 5

    @staticmethod
    def formula(coeffs, p, T):
        a, b, c, d, e = coeffs
        return np.exp(a + b/T + c*np.log(T) + d*T**e)

    @classmethod
    def fit(cls, T, y, guess, p):
        # Linear in (a, b, c, d) for ln(y) once the exponent e is fixed
        e = guess[4]
        z = log_samples(y, cls.type_name)
        if e == 0.0:
            # T^0 duplicates the constant term: d stays at its guess
            d = guess[3]
            a, b, c = linear_least_squares([1.0, 1.0/T, np.log(T)], z - d)
        else:
            a, b, c, d = linear_least_squares([1.0, 1.0/T, np.log(T), T**e], z)
        return refine(cls.formula, (a, b, c, d, e), T, y, p, free=range(5))


class NSRDS2(ThermophysicalFunction):
    """Rational power law: a*T^b / (1 + c/T + d/T^2)"""
    type_name = "NSRDS2"
    arity = 4

    @staticmethod
    def formula(coeffs, p, T):
        a, b, c, d = coeffs
        return a*T**b/(1.0 + c/T + d/T**2)

    @classmethod
    def fit(cls, T, y, guess, p):
        # y*(1 + c/T + d/T^2) = a*T^b is linear in (a, c, d) for a fixed b
        b = guess[1]
        a, c, d = linear_least_squares([T**b, -y/T, -y/T**2], y)
        return refine(cls.formula, (a, b, c, d), T, y, p, free=range(4))


class NSRDS3(ThermophysicalFunction):
    """a + b*exp(-c/T^d)"""
    type_name = "NSRDS3"
    arity = 4

    @staticmethod
    def formula(coeffs, p, T):
        a, b, c, d = coeffs
        return a + b*np.exp(-c/T**d)

    @classmethod
    def fit(cls, T, y, guess, p):
        c, d = guess[2], guess[3]
        a, b = linear_least_squares([1.0, np.exp(-c/T**d)], y)
        return refine(cls.formula, (a, b, c, d), T, y, p, free=range(4))


class NSRDS4(ThermophysicalFunction):
    """a + b/T + c/T^3 + d/T^8 + e/T^9"""
    type_name = "NSRDS4"
    arity = 5

    @staticmethod
    def formula(coeffs, p, T):
        a, b, c, d, e = coeffs
        return a + b/T + c/T**3 + d/T**8 + e/T**9

    @classmethod
    def fit(cls, T, y, guess, p):
        return tuple(linear_least_squares([1.0, 1.0/T, 1.0/T**3, 1.0/T**8, 1.0/T**9], y))


class NSRDS5(ThermophysicalFunction):
    """Rackett-type density: a / b^(1 + (1 - T/c)^d), with c the critical temperature"""
    type_name = "NSRDS5"
    arity = 4
    critical_index = 2

    @staticmethod
    def formula(coeffs, p, T):
        a, b, c, d = coeffs
        return a/b**(1.0 + (1.0 - T/c)**d)

    @classmethod
    def fit(cls, T, y, guess, p):
        # ln(y) = (ln a - ln b) - ln b * t^d with t = 1 - T/c
        c, d = guess[2], guess[3]
        u, v = linear_least_squares([1.0, (1.0 - T/c)**d], log_samples(y, cls.type_name))
        b = np.exp(-v)
        a = np.exp(u - v)
        return refine(cls.formula, (a, b, c, d), T, y, p, free=(0, 1, 3))


class NSRDS6(ThermophysicalFunction):
    """Watson-type: a*(1 - Tr)^(b + c*Tr + d*Tr^2 + e*Tr^3), Tr = T/Tc. Coefficients are [Tc, a, b, c, d, e]"""
    type_name = "NSRDS6"
    arity = 6
    critical_index = 0

    @staticmethod
    def formula(coeffs, p, T):
        Tc, a, b, c, d, e = coeffs
        Tr = T/Tc
        return a*(1.0 - Tr)**(((e*Tr + d)*Tr + c)*Tr + b)

    @classmethod
    def fit(cls, T, y, guess, p):
        Tc = guess[0]
        Tr = T/Tc
        L = np.log(1.0 - Tr)
        log_a, b, c, d, e = linear_least_squares([1.0, L, L*Tr, L*Tr**2, L*Tr**3], log_samples(y, cls.type_name))
        return (Tc, np.exp(log_a), b, c, d, e)


class NSRDS7(ThermophysicalFunction):
    """Aly-Lee ideal gas heat capacity: a + b*((c/T)/sinh(c/T))^2 + d*((e/T)/cosh(e/T))^2"""
    type_name = "NSRDS7"
    arity = 5

    @staticmethod
    def formula(coeffs, p, T):
        a, b, c, d, e = coeffs
        return a + b*((c/T)/np.sinh(c/T))**2 + d*((e/T)/np.cosh(e/T))**2

    @classmethod
    def fit(cls, T, y, guess, p):
        c, e = guess[2], guess[4]
        a, b, d = linear_least_squares([1.0, ((c/T)/np.sinh(c/T))**2, ((e/T)/np.cosh(e/T))**2], y)
        return refine(cls.formula, (a, b, c, d, e), T, y, p, free=range(5))


class NSRDS8(ThermophysicalFunction):
    """
    DIPPR 114 liquid heat capacity, t = 1 - T/Tc:
    a^2/t + b - 2*a*c*t - a*d*t^2 - c^2*t^3/3 - c*d*t^4/2 - d^2*t^5/5. Coefficients are [Tc, a, b, c, d]
    """
    type_name = "NSRDS8"
    arity = 5
    critical_index = 0

    @staticmethod
    def formula(coeffs, p, T):
        Tc, a, b, c, d = coeffs
        t = 1.0 - T/Tc
        return a**2/t + b - 2.0*a*c*t - a*d*t**2 - c**2*t**3/3.0 - c*d*t**4/2.0 - d**2*t**5/5.0

    @classmethod
    def fit(cls, T, y, guess, p):
        # Nonlinear in (a, c, d): start from the blended guess with b re-centred on the samples
        Tc, a, _, c, d = guess
        b = float(np.mean(y - cls.formula((Tc, a, 0.0, c, d), p, T)))
        return refine(cls.formula, (Tc, a, b, c, d), T, y, p, free=(1, 2, 3, 4))


class NSRDS9(ThermophysicalFunction):
    """DIPPR 116 liquid density, t = 1 - T/Tc: a + b*t^0.35 + c*t^(2/3) + d*t + e*t^(4/3). Coefficients are [Tc, a, b, c, d, e]"""
    type_name = "NSRDS9"
    arity = 6
    critical_index = 0

    @staticmethod
    def formula(coeffs, p, T):
        Tc, a, b, c, d, e = coeffs
        t = 1.0 - T/Tc
        return a + b*t**0.35 + c*t**(2.0/3.0) + d*t + e*t**(4.0/3.0)

    @classmethod
    def fit(cls, T, y, guess, p):
        Tc = guess[0]
        t = 1.0 - T/Tc
        return (Tc, *linear_least_squares([1.0, t**0.35, t**(2.0/3.0), t, t**(4.0/3.0)], y))
