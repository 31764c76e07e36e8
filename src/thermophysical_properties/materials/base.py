from __future__ import annotations
from dataclasses import FrozenInstanceError
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, MutableMapping
import numpy as np
import pandas as pd
from scipy.optimize import brentq

from thermophysical_properties.functions import CORRELATIONS, APIdiffCoef, ThermophysicalFunction, NoneFunction
from thermophysical_properties.constants import THERMO
from thermophysical_properties.core.registry import CorrelationRegistry
from thermophysical_properties.helpers import DomainError, UndefinedFunction

# Slot key -> (accessor, unit)
SLOTS: Dict[str, tuple] = {
    "rho":    ("density", "kg/m^3"),
    "pv":     ("vapour_pressure", "Pa"),
    "hl":     ("heat_of_vapourisation", "J/kg"),
    "Cp":     ("heat_capacity", "J/kg/K"),
    "h":      ("enthalpy", "J/kg"),
    "Cpg":    ("ideal_gas_heat_capacity", "J/kg/K"),
    "B":      ("second_virial_coeff", "m^3/kg"),
    "mu":     ("dynamic_viscosity", "Pa s"),
    "mug":    ("vapour_dynamic_viscosity", "Pa s"),
    "kappa":  ("thermal_conductivity", "W/m/K"),
    "kappag": ("vapour_thermal_conductivity", "W/m/K"),
    "sigma":  ("surface_tension", "N/m"),
    "D":      ("vapour_diffusivity", "m^2/s"),
}

# Plain constants of a liquid, not correlations
SCALARS = ("W", "Tc", "Pc", "Vc", "Zc", "Tt", "Pt", "Tb", "dipm", "omega", "delta")


class LiquidProperties:
    """
    Property set of a liquid: one correlation per slot of SLOTS plus the scalar constants of SCALARS.
    Slots that are not provided hold a NoneFunction, which fails only when evaluated.

    Parameters
    ----------
    name : str
        Name of the substance
    functions : dict
        Slot key -> correlation
    W : float, optional
        Molecular weight [kg/kmol]
    Tc, Pc, Vc, Zc : float, optional
        Critical temperature [K], pressure [Pa], volume [m^3/kmol] and compressibility [-]
    Tt, Pt : float, optional
        Triple point temperature [K] and pressure [Pa]
    Tb : float, optional
        Normal boiling temperature [K]
    dipm : float, optional
        Dipole moment [C m]
    omega : float, optional
        Pitzer's acentric factor [-]
    delta : float, optional
        Solubility parameter [(J/m^3)^0.5]
    """
    type_name = "liquid"
    name: str
    W: float | None
    Tc: float | None
    Pc: float | None
    Vc: float | None
    Zc: float | None
    Tt: float | None
    Pt: float | None
    Tb: float | None
    dipm: float | None
    omega: float | None
    delta: float | None

    def __init__(self, name: str, functions: Mapping[str, ThermophysicalFunction], **scalars: float | None):
        unknown = set(functions) - set(SLOTS)
        if unknown:
            raise KeyError(f'Unknown property slots {sorted(unknown)} for the liquid {name}. Valid slots are: {", ".join(SLOTS)}')
        unknown = set(scalars) - set(SCALARS)
        if unknown:
            raise KeyError(f'Unknown constants {sorted(unknown)} for the liquid {name}. Valid constants are: {", ".join(SCALARS)}')
        self.name = name
        for key in SCALARS:
            value = scalars.get(key)
            setattr(self, key, None if value is None else float(value))
        self._functions = MappingProxyType({
            slot: functions.get(slot) or NoneFunction(name=f"{name}.{slot}") for slot in SLOTS
        })
        self._frozen = True

    def __setattr__(self, key, value):
        # Read-only once built
        if getattr(self, "_frozen", False):
            raise FrozenInstanceError(f'Cannot assign "{key}": the property set of {self.name} is read-only')
        super().__setattr__(key, value)

    @classmethod
    def from_dict(cls, name: str, config: Mapping[str, Any], correlations: CorrelationRegistry = CORRELATIONS):
        functions = {slot: correlations.from_dict(config[slot], name=f"{name}.{slot}") for slot in SLOTS if slot in config}
        scalars = {key: config[key] for key in SCALARS if key in config}
        return cls(name, functions, **scalars)

    # --- PROPERTIES ---

    def density(self, p, T):                     return self._functions["rho"].f(p, T)

    def vapour_pressure(self, p, T):             return self._functions["pv"].f(p, T)

    def heat_of_vapourisation(self, p, T):       return self._functions["hl"].f(p, T)

    def heat_capacity(self, p, T):               return self._functions["Cp"].f(p, T)

    def enthalpy(self, p, T):                    return self._functions["h"].f(p, T)

    def ideal_gas_heat_capacity(self, p, T):     return self._functions["Cpg"].f(p, T)

    def second_virial_coeff(self, p, T):         return self._functions["B"].f(p, T)

    def dynamic_viscosity(self, p, T):           return self._functions["mu"].f(p, T)

    def vapour_dynamic_viscosity(self, p, T):    return self._functions["mug"].f(p, T)

    def thermal_conductivity(self, p, T):        return self._functions["kappa"].f(p, T)

    def vapour_thermal_conductivity(self, p, T): return self._functions["kappag"].f(p, T)

    def surface_tension(self, p, T):             return self._functions["sigma"].f(p, T)

    def vapour_diffusivity(self, p, T, Wb: float | None = None):
        """Vapour diffusivity. Wb replaces the carrier gas molecular weight, which only APIdiffCoef depends on"""
        function = self._functions["D"]
        if Wb is None or isinstance(function, NoneFunction):
            return function.f(p, T)
        if not isinstance(function, APIdiffCoef):
            raise UndefinedFunction(f'"{self.name}.D" ({function.type_name}) has no carrier gas dependence: the molecular weight Wb = {Wb} cannot be applied')
        return function.f_binary(p, T, Wb)

    # --- UTILITIES ---

    def __getitem__(self, slot: str) -> ThermophysicalFunction:
        return self._functions[slot]

    @property
    def functions(self) -> Mapping[str, ThermophysicalFunction]:
        return self._functions

    def defined_slots(self):
        return [slot for slot, function in self._functions.items() if not isinstance(function, NoneFunction)]

    @property
    def temperature_range(self):
        """Default (Tt, Tc) liquid range [K], or None if either constant is missing"""
        if self.Tt is None or self.Tc is None:
            return None
        return (self.Tt, self.Tc)

    def saturation_temperature(self, p: float, T_low: float | None = None, T_high: float | None = None) -> float:
        """Temperature [K] at which the vapour pressure equals p, found by bracketing over the liquid range"""
        T_range = self.temperature_range or (None, None)
        T_low = T_low or T_range[0]
        T_high = T_high or (T_range[1] * (1.0 - 1e-6) if T_range[1] else None)
        if T_low is None or T_high is None:
            raise DomainError(f"Cannot invert the vapour pressure of {self.name}: no temperature bracket is available")
        residual = lambda T: self.vapour_pressure(p, T) - p
        if residual(T_low) * residual(T_high) > 0.0:
            raise DomainError(f"The vapour pressure of {self.name} does not reach {p} Pa between {T_low} and {T_high} K")
        return brentq(residual, T_low, T_high, xtol=1e-10)

    def to_dataframe(self, T: Iterable[float], p: float = THERMO.p_std, slots: Iterable[str] | None = None) -> pd.DataFrame:
        """Tabulates the defined slots (or the given ones) at pressure p over the temperatures T"""
        T = np.asarray(list(T), dtype=float)
        slots = self.defined_slots() if slots is None else list(slots)
        data = {slot: np.broadcast_to(self._functions[slot].f(p, T), T.shape) for slot in slots}
        return pd.DataFrame(data, index=pd.Index(T, name="T"))

    def write(self, sink: MutableMapping[str, Any] | None = None) -> MutableMapping[str, Any]:
        """Writes the property set back in configuration form: type first, then constants, then every slot"""
        sink = {} if sink is None else sink
        sink["type"] = self.type_name
        for key in SCALARS:
            if getattr(self, key) is not None:
                sink[key] = getattr(self, key)
        for slot, function in self._functions.items():
            sink[slot] = function.write()
        return sink

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name}: {len(self.defined_slots())}/{len(SLOTS)} slots defined>"
