import logging
from typing import Any, Mapping

from thermophysical_properties.materials.base import LiquidProperties

logger = logging.getLogger(__name__)


def create_liquid(name: str, config: Mapping[str, Any], materials: Mapping[str, LiquidProperties] | None = None) -> LiquidProperties:
    """Pure substance: every slot is read as a {typeName, coefficients, validityRange} record"""
    liquid = LiquidProperties.from_dict(name, config)
    logger.info("Created liquid %s (%d of %d slots defined)", name, len(liquid.defined_slots()), len(liquid.functions))
    return liquid
