from pathlib import Path
from typing import Any, Dict, Mapping
import pandas as pd
import yaml


def load_material_config(path) -> Dict[str, Any]:
    """Reads a YAML file mapping material names to their configuration records"""
    with open(path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"The material file {path} should contain a mapping of material names, {type(config).__name__} was found")
    return config


def dump_material_config(path, config: Mapping[str, Any]):
    """Writes material records to YAML, preserving the order of keys (type and typeName first)"""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(_to_builtin(config), f, sort_keys=False, default_flow_style=None)


def load_property_table(path, sep: str = ";") -> pd.DataFrame:
    """Reads a csv of tabulated properties with a temperature column T, sorted by increasing T"""
    table = pd.read_csv(path, sep=sep, decimal=".", header=0)
    table.columns = [str(column).strip() for column in table.columns]
    if "T" not in table.columns:
        raise KeyError(f"The property table {path} has no \"T\" column. Columns found: {', '.join(table.columns)}")
    return table.sort_values("T").reset_index(drop=True)


def _to_builtin(value):
    # numpy scalars are not representable by yaml.safe_dump
    if isinstance(value, Mapping):
        return {str(key): _to_builtin(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_builtin(item) for item in value]
    if hasattr(value, "item"):
        return value.item()
    return value
