# Re-export a stable public API
from .helpers import (
    ThermophysicalError, RegistrationError, UnknownCorrelationType, UnknownMaterialType,
    MalformedCoefficients, UndefinedFunction, DomainError, IncompatibleCorrelationFamilies,
)
from .constants import THERMO
from .config import MixtureFitConfig
from .core.registry import CorrelationRegistry, MaterialRegistry
from .functions import (
    CORRELATIONS, ThermophysicalFunction, NSRDS0, NSRDS1, NSRDS2, NSRDS3, NSRDS4, NSRDS5, NSRDS6, NSRDS7,
    NSRDS8, NSRDS9, APIdiffCoef, TableFunction, NoneFunction,
)
from .materials import (
    MATERIALS, SLOTS, SCALARS, LiquidProperties, MixtureBuilder, MixtureSpec,
    load_materials, load_materials_file, load_builtin_liquids,
)
from .io.loaders import load_material_config, dump_material_config, load_property_table

__all__ = [
    "ThermophysicalError", "RegistrationError", "UnknownCorrelationType", "UnknownMaterialType",
    "MalformedCoefficients", "UndefinedFunction", "DomainError", "IncompatibleCorrelationFamilies",
    "THERMO", "MixtureFitConfig",
    "CorrelationRegistry", "MaterialRegistry", "CORRELATIONS", "MATERIALS",
    "ThermophysicalFunction", "NSRDS0", "NSRDS1", "NSRDS2", "NSRDS3", "NSRDS4", "NSRDS5", "NSRDS6", "NSRDS7",
    "NSRDS8", "NSRDS9", "APIdiffCoef", "TableFunction", "NoneFunction",
    "SLOTS", "SCALARS", "LiquidProperties", "MixtureBuilder", "MixtureSpec",
    "load_materials", "load_materials_file", "load_builtin_liquids",
    "load_material_config", "dump_material_config", "load_property_table",
]
