from thermophysical_properties.core.registry import CorrelationRegistry
from .base import ThermophysicalFunction
from .nsrds import NSRDS0, NSRDS1, NSRDS2, NSRDS3, NSRDS4, NSRDS5, NSRDS6, NSRDS7, NSRDS8, NSRDS9
from .api_diff_coef import APIdiffCoef
from .table import TableFunction
from .none import NoneFunction

FUNCTION_TYPES = [NSRDS0, NSRDS1, NSRDS2, NSRDS3, NSRDS4, NSRDS5, NSRDS6, NSRDS7, NSRDS8, NSRDS9, APIdiffCoef, TableFunction, NoneFunction]


def register_functions(registry: CorrelationRegistry) -> CorrelationRegistry:
    for function_type in FUNCTION_TYPES:
        registry.register(function_type.type_name, function_type)
    return registry


CORRELATIONS = register_functions(CorrelationRegistry())
CORRELATIONS.seal()

__all__ = [
    "ThermophysicalFunction", "CORRELATIONS", "FUNCTION_TYPES", "register_functions",
    "NSRDS0", "NSRDS1", "NSRDS2", "NSRDS3", "NSRDS4", "NSRDS5", "NSRDS6", "NSRDS7", "NSRDS8", "NSRDS9",
    "APIdiffCoef", "TableFunction", "NoneFunction",
]
