from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple
import logging
import numpy as np
import pandas as pd

from thermophysical_properties.config import MixtureFitConfig
from thermophysical_properties.functions import NoneFunction, ThermophysicalFunction
from thermophysical_properties.helpers import DomainError, IncompatibleCorrelationFamilies
from thermophysical_properties.materials.base import SCALARS, SLOTS, LiquidProperties

logger = logging.getLogger(__name__)

# How each constant of the mixture is obtained from the two sources
SCALAR_BLENDING: Dict[str, str] = {
    "W":     "weighted",
    "Tc":    "weighted",
    "Pc":    "min",
    "Vc":    "min",
    "Zc":    "weighted",
    "Tt":    "max",  # the liquid range of the mixture lies within both sources' ranges
    "Pt":    "max",
    "Tb":    "weighted",
    "dipm":  "weighted",
    "omega": "weighted",
    "delta": "weighted",
}


def blend_scalar(policy: str, x1: float | None, x2: float | None, fraction: float) -> float | None:
    if x1 is None or x2 is None:
        return None
    match policy:
        case "weighted":
            return fraction * x1 + (1.0 - fraction) * x2
        case "min":
            return min(x1, x2)
        case "max":
            return max(x1, x2)
        case _:
            raise ValueError(f'Unknown blending policy "{policy}"')


@dataclass(frozen=True)
class MixtureSpec:
    """Two source liquids (shared, not copied), the fraction of the first one and the fit settings"""
    first: LiquidProperties
    second: LiquidProperties
    fraction: float
    fit: MixtureFitConfig = field(default_factory=MixtureFitConfig)

    def __post_init__(self):
        if not 0.0 <= self.fraction <= 1.0:
            raise ValueError(f"The mixture fraction must be within [0, 1], {self.fraction} was provided")


class MixtureBuilder:
    """
    Builds the property set of a binary mixture Y = w*Y1 + (1 - w)*Y2.

    Each correlation of the mixture is a new member of the sources' family whose coefficients are re-fitted
    by least squares on the blended curve, sampled across the working range of the slot at the reference pressure.
    The constants are blended according to SCALAR_BLENDING.
    """
    spec: MixtureSpec
    _report: Dict[str, Dict[str, float]]

    def __init__(self, spec: MixtureSpec):
        self.spec = spec
        self._report = {}

    @property
    def fraction(self) -> float:
        return self.spec.fraction

    def working_range(self, slot: str) -> Tuple[float, float]:
        f1, f2 = self.spec.first[slot], self.spec.second[slot]
        cfg = self.spec.fit
        if cfg.T_range is not None:
            T_low, T_high = cfg.T_range
        else:
            r1 = f1.working_range() or self.spec.first.temperature_range
            r2 = f2.working_range() or self.spec.second.temperature_range
            if r1 is None or r2 is None:
                raise DomainError(f'No temperature range is known for "{slot}": give the sources Tt and Tc, a validity range, or set the fitting range')
            T_low, T_high = max(r1[0], r2[0]), min(r1[1], r2[1])
        if f1.reduced_temperature:
            T_high = min(T_high, min(f1.Tc, f2.Tc) * (1.0 - cfg.critical_margin))
        if not T_low < T_high:
            raise DomainError(f'The sources of "{slot}" have no overlapping temperature range ([{T_low}, {T_high}])')
        return T_low, T_high

    def blend_function(self, slot: str, name: str = "") -> ThermophysicalFunction:
        f1, f2 = self.spec.first[slot], self.spec.second[slot]
        if type(f1) is not type(f2):
            raise IncompatibleCorrelationFamilies(f'Cannot blend "{slot}": {self.spec.first.name} uses {f1.type_name} and {self.spec.second.name} uses {f2.type_name}')
        if isinstance(f1, NoneFunction):
            return NoneFunction(name=name)
        family = type(f1)
        w, p = self.fraction, self.spec.fit.p_ref
        T_low, T_high = self.working_range(slot)
        T = family.sample_temperatures(T_low, T_high, self.spec.fit.n_samples, (f1, f2))
        target = w * f1.f(p, T) + (1.0 - w) * f2.f(p, T)
        if len(f1.coefficients) == len(f2.coefficients):
            guess = tuple(w * np.array(f1.coefficients) + (1.0 - w) * np.array(f2.coefficients))
        else:
            guess = f1.coefficients
        blended = family(coefficients=family.fit(T, target, guess, p), T_range=(T_low, T_high), name=name)
        deviation = float(np.max(np.abs(blended.f(p, T) - target)) / np.max(np.abs(target)))
        self._report[slot] = {"family": family.type_name, "T_low": T_low, "T_high": T_high, "n_samples": len(T), "max_deviation": deviation}
        if deviation > self.spec.fit.tolerance:
            logger.warning("Poor fit for %s: max relative deviation %.2e over [%.2f, %.2f] K", name or slot, deviation, T_low, T_high)
        else:
            logger.debug("Fitted %s (%s): max relative deviation %.2e", name or slot, family.type_name, deviation)
        return blended

    def blend_scalars(self) -> Dict[str, float | None]:
        return {key: blend_scalar(SCALAR_BLENDING[key], getattr(self.spec.first, key), getattr(self.spec.second, key), self.fraction) for key in SCALARS}

    def build(self, name: str | None = None) -> LiquidProperties:
        name = name or f"{self.spec.first.name}-{self.spec.second.name}"
        functions = {slot: self.blend_function(slot, f"{name}.{slot}") for slot in SLOTS}
        mixture = LiquidProperties(name, functions, **self.blend_scalars())
        logger.info("Created mixture %s: %.3f %s + %.3f %s", name, self.fraction, self.spec.first.name, 1.0 - self.fraction, self.spec.second.name)
        return mixture

    def report(self) -> pd.DataFrame:
        """Working range, sample count and maximum relative deviation of every slot fitted so far"""
        return pd.DataFrame(list(self._report.values()), index=pd.Index(list(self._report), name="slot"),
                            columns=["family", "T_low", "T_high", "n_samples", "max_deviation"])


def create_mixture(name: str, config: Mapping[str, Any], materials: Mapping[str, LiquidProperties] | None = None) -> LiquidProperties:
    """
    Mixture record: {components: [first, second], fraction: w, Trange, nSamples, pRef, ...}.
    Components are names of materials already built and passed in materials
    """
    materials = materials or {}
    components = list(config["components"])
    if len(components) != 2:
        raise ValueError(f"The mixture {name} needs exactly two components, {len(components)} were provided")
    missing = [component for component in components if component not in materials]
    if missing:
        raise KeyError(f'The components {missing} of the mixture {name} are not defined')
    spec = MixtureSpec(materials[components[0]], materials[components[1]], float(config["fraction"]), MixtureFitConfig.from_dict(config))
    return MixtureBuilder(spec).build(name)
