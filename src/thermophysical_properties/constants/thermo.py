# src/thermophysical_properties/constants/thermo.py
from dataclasses import dataclass

@dataclass(frozen=True)
class Thermo:
    """Reference constants, SI units"""
    p_std: float = 101325.0          # Standard atmosphere [Pa]
    api_diffusion: float = 3.6059e-3 # Leading constant of the API vapour diffusivity correlation [-]

THERMO = Thermo()
