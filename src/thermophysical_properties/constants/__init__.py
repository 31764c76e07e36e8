# src/thermophysical_properties/constants/__init__.py
from .thermo import THERMO

__all__ = ["THERMO"]
