# thermophysical_properties/config.py
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from thermophysical_properties.constants import THERMO

@dataclass(frozen=True)
class MixtureFitConfig:
    n_samples: int = 50                          # temperatures sampled across the working range
    T_range: Tuple[float, float] | None = None   # K. None: overlap of the two sources' ranges
    p_ref: float = THERMO.p_std                  # Pa, pressure at which the sources are sampled
    critical_margin: float = 1e-3                # reduced-temperature forms are sampled up to min(Tc) * (1 - margin)
    tolerance: float = 1e-3                      # max relative deviation before a poor fit is reported

    def __post_init__(self):
        if self.n_samples < 2:
            raise ValueError(f"At least 2 samples are needed for the mixture fit, {self.n_samples} were requested")
        if self.T_range is not None:
            T_low, T_high = (float(T) for T in self.T_range)
            if not 0.0 < T_low < T_high:
                raise ValueError(f"Invalid mixture fitting range [{T_low}, {T_high}]")
            object.__setattr__(self, "T_range", (T_low, T_high))

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]):
        """Reads the optional Trange, nSamples, pRef, criticalMargin and tolerance keys of a mixture record"""
        keys = {"Trange": "T_range", "nSamples": "n_samples", "pRef": "p_ref", "criticalMargin": "critical_margin", "tolerance": "tolerance"}
        return cls(**{attr: config[key] for key, attr in keys.items() if key in config})

    def write(self):
        record = {"nSamples": self.n_samples, "pRef": self.p_ref, "criticalMargin": self.critical_margin, "tolerance": self.tolerance}
        if self.T_range is not None:
            record["Trange"] = list(self.T_range)
        return record
