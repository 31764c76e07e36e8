from pathlib import Path
from typing import Any, Dict, Mapping

from thermophysical_properties.core.registry import MaterialRegistry
from thermophysical_properties.io.loaders import load_material_config
from .base import SCALARS, SLOTS, LiquidProperties
from .liquid import create_liquid
from .table import create_tabulated_liquid
from .mixture import SCALAR_BLENDING, MixtureBuilder, MixtureSpec, blend_scalar, create_mixture

MATERIALS = MaterialRegistry()
MATERIALS.register("liquid", create_liquid)
MATERIALS.register("table", create_tabulated_liquid)
MATERIALS.register("mixture", create_mixture)
MATERIALS.seal()


def load_materials(config: Mapping[str, Mapping[str, Any]], registry: MaterialRegistry = MATERIALS) -> Dict[str, LiquidProperties]:
    """Builds every material of the config. Mixtures are built after the components they reference"""
    materials: Dict[str, LiquidProperties] = {}
    pending = set()

    def build(name):
        if name in materials:
            return materials[name]
        if name not in config:
            raise KeyError(f'Material "{name}" is referenced but not defined')
        if name in pending:
            raise ValueError(f'Material "{name}" references itself through its components')
        pending.add(name)
        record = config[name]
        for component in record.get("components", ()):
            build(component)
        materials[name] = registry.create(record.get("type", LiquidProperties.type_name), record, name=name, materials=materials)
        pending.discard(name)
        return materials[name]

    for name in config:
        build(name)
    return materials


def load_materials_file(path, registry: MaterialRegistry = MATERIALS) -> Dict[str, LiquidProperties]:
    """Reads a YAML material file. Relative table files are resolved against the folder of the YAML file"""
    path = Path(path)
    config = load_material_config(path)
    for record in config.values():
        if "file" in record and not Path(record["file"]).is_absolute():
            record["file"] = str(path.parent / record["file"])
    return load_materials(config, registry)


def load_builtin_liquids() -> Dict[str, LiquidProperties]:
    return load_materials_file(Path(__file__).parent.parent / "data" / "liquids.yaml")


__all__ = [
    "MATERIALS", "SLOTS", "SCALARS", "SCALAR_BLENDING", "LiquidProperties",
    "MixtureBuilder", "MixtureSpec", "blend_scalar",
    "create_liquid", "create_tabulated_liquid", "create_mixture",
    "load_materials", "load_materials_file", "load_builtin_liquids",
]
