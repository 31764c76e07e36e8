# tests/conftest.py
import pathlib
import numpy as np
import pytest

import thermophysical_properties as tp

@pytest.fixture(scope="session")
def data_dir() -> pathlib.Path:
    return pathlib.Path(__file__).parent / "data"

@pytest.fixture(scope="session")
def liquids_file() -> pathlib.Path:
    return pathlib.Path(tp.__file__).parent / "data" / "liquids.yaml"

@pytest.fixture
def liquids_config(liquids_file):
    return tp.load_material_config(liquids_file)

@pytest.fixture
def pure_liquids(liquids_config):
    """Pure substances of the sample library, without the mixtures"""
    pure = {name: record for name, record in liquids_config.items() if record.get("type", "liquid") == "liquid"}
    return tp.load_materials(pure)

@pytest.fixture
def decane(pure_liquids):
    return pure_liquids["C10H22"]

@pytest.fixture
def heptane(pure_liquids):
    return pure_liquids["C7H16"]

@pytest.fixture
def p_atm():
    return tp.THERMO.p_std

@pytest.fixture
def liquid_grid():
    """Temperatures strictly inside the liquid range of a property set"""
    def grid(liquid, n=12):
        T_low, T_high = liquid.temperature_range
        return np.linspace(T_low + 1.0, 0.95 * T_high, n)
    return grid
