import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Sequence

from thermophysical_properties.helpers import (
    RegistrationError, UnknownCorrelationType, UnknownMaterialType,
)

logger = logging.getLogger(__name__)


@dataclass
class Registry:
    """Name -> constructor table. Populated once, then sealed."""
    kind: str
    _constructors: Dict[str, Callable[..., Any]] = field(default_factory=dict)
    _sealed: bool = False

    def register(self, name: str, constructor: Callable[..., Any]):
        if self._sealed:
            raise RegistrationError(f'The {self.kind} registry is sealed: cannot register "{name}" after start-up')
        if name in self._constructors:
            raise RegistrationError(f'Duplicate {self.kind} type "{name}": already registered by {self._constructors[name]!r}')
        self._constructors[name] = constructor
        return constructor

    def seal(self):
        self._sealed = True
        logger.info("Sealed %s registry with %d types: %s", self.kind, len(self._constructors), ", ".join(self._constructors))

    @property
    def sealed(self) -> bool:
        return self._sealed

    def names(self) -> List[str]:
        return list(self._constructors)

    def lookup(self, name: str) -> Callable[..., Any]:
        try:
            return self._constructors[name]
        except KeyError:
            raise self.unknown_type(name) from None

    def unknown_type(self, name: str) -> Exception:
        return KeyError(name)

    def __contains__(self, name: str) -> bool:
        return name in self._constructors


@dataclass
class CorrelationRegistry(Registry):
    kind: str = "correlation"

    def unknown_type(self, name):
        return UnknownCorrelationType(f'Unknown correlation type "{name}". Valid types are: {", ".join(self.names())}')

    def create(self, type_name: str, coefficients: Sequence[float] = (), T_range: Sequence[float] | None = None, name: str = ""):
        return self.lookup(type_name)(coefficients=coefficients, T_range=T_range, name=name)

    def from_dict(self, record: Mapping[str, Any], name: str = ""):
        """Builds a correlation from a {typeName, coefficients, validityRange} record"""
        return self.create(record["typeName"], record.get("coefficients", ()), record.get("validityRange"), name=name)


@dataclass
class MaterialRegistry(Registry):
    kind: str = "material"

    def unknown_type(self, name):
        return UnknownMaterialType(f'Unknown material type "{name}". Valid types are: {", ".join(self.names())}')

    def create(self, type_name: str, config: Mapping[str, Any], name: str | None = None, materials: Mapping[str, Any] | None = None):
        return self.lookup(type_name)(name=name or type_name, config=config, materials=materials or {})
