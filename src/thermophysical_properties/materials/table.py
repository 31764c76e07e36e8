import logging
from typing import Any, Mapping
import pandas as pd

from thermophysical_properties.functions import TableFunction
from thermophysical_properties.io.loaders import load_property_table
from thermophysical_properties.materials.base import SCALARS, SLOTS, LiquidProperties

logger = logging.getLogger(__name__)


def create_tabulated_liquid(name: str, config: Mapping[str, Any], materials: Mapping[str, LiquidProperties] | None = None) -> LiquidProperties:
    """
    Liquid described by tabulated values, interpolated linearly in T.
    The table comes either from a csv file ("file", separator "sep", default ";") or from inline "columns".
    It needs a "T" column [K] plus one column per provided slot (rho, pv, mu, ...)
    """
    if "file" in config:
        table = load_property_table(config["file"], sep=config.get("sep", ";"))
    elif "columns" in config:
        table = pd.DataFrame(config["columns"])
    else:
        raise KeyError(f'The tabulated liquid {name} needs either a "file" or a "columns" entry')
    if "T" not in table.columns:
        raise KeyError(f'The table of {name} has no "T" column. Columns found: {", ".join(table.columns)}')
    table = table.sort_values("T")
    functions = {
        slot: TableFunction.from_columns(table["T"].to_numpy(), table[slot].to_numpy(), name=f"{name}.{slot}")
        for slot in SLOTS if slot in table.columns
    }
    scalars = {key: config[key] for key in SCALARS if key in config}
    logger.info("Created tabulated liquid %s from %d rows (%s)", name, len(table), ", ".join(functions))
    return LiquidProperties(name, functions, **scalars)
