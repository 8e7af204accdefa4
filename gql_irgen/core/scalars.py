"""Scalar-to-target type mapping for GraphQL code generation.

Maps GraphQL scalar names to the type names the downstream templates emit, and
tracks which target types are primitives (never wrapped as optional by the
``optional`` policy).

Example usage:
    from gql_irgen.core.scalars import ScalarTypeMap

    scalars = ScalarTypeMap()
    scalars.resolve("ID")        # "string"
    scalars.resolve("User")      # "User" (declared types pass through)

    scalars.register("Money", "decimal.Decimal")
    scalars.update_from_string("UUID=uuid.UUID,Date=civil.Date")
"""

from .errors import ConfigError

DEFAULT_SCALARS = {
    "ID": "string",
    "String": "string",
    "Boolean": "bool",
    "Float": "float64",
    "Int": "int",
    "DateTime": "time.Time",
}

DEFAULT_PRIMITIVES = {"string", "bool", "int", "datetime", "time.Time"}


def parse_type_mappings(text: str) -> dict[str, str]:
    """Parse a ``key1=value1,key2=value2`` list into a dict.

    Raises:
        ConfigError: If an entry has no ``=`` or an empty side.
    """
    mappings: dict[str, str] = {}
    if not text:
        return mappings
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, target = entry.partition("=")
        name, target = name.strip(), target.strip()
        if not sep or not name or not target:
            raise ConfigError(f"invalid type mapping {entry!r}, expected key=value")
        mappings[name] = target
    return mappings


class ScalarTypeMap:
    """Registry of scalar name -> target type name.

    Example:
        scalars = ScalarTypeMap()
        scalars.register("Money", "decimal.Decimal")

        if scalars.has("Money"):
            target = scalars.get("Money")  # "decimal.Decimal"
    """

    def __init__(self):
        self._targets: dict[str, str] = {}
        self._primitives: set[str] = set()
        # Register default mappings
        self._register_defaults()

    def _register_defaults(self):
        """Register built-in scalar mappings."""
        for name, target in DEFAULT_SCALARS.items():
            self.register(name, target)
        self._primitives.update(DEFAULT_PRIMITIVES)

    def register(self, scalar_name: str, target: str, primitive: bool = False):
        """Map a scalar to a target type, optionally marking it primitive."""
        self._targets[scalar_name] = target
        if primitive:
            self._primitives.add(target)

    def get(self, scalar_name: str) -> str | None:
        """Get the target type for a scalar, or None if not registered."""
        return self._targets.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        """Check if a mapping is registered for a scalar."""
        return scalar_name in self._targets

    def resolve(self, type_name: str) -> str:
        """Return the mapped target, or the name itself for declared types."""
        return self._targets.get(type_name, type_name)

    def is_primitive(self, target: str) -> bool:
        """Check if a target type is a primitive."""
        return target in self._primitives

    def update_from_string(self, text: str):
        """Apply a ``key=value,...`` list; every target becomes a primitive."""
        for name, target in parse_type_mappings(text).items():
            self.register(name, target, primitive=True)

    def as_dict(self) -> dict[str, str]:
        """Return a copy of all registered mappings."""
        return dict(self._targets)
