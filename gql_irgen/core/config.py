"""Configuration for the IR builder.

A single BuilderConfig is created at startup (usually by the CLI) and passed
to the builder; nothing in the core reads process-wide state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .scalars import ScalarTypeMap

DEFAULT_NOT_OPTIONAL_TYPES = frozenset({"Time", "Date", "Password", "DateTime"})


@dataclass
class BuilderConfig:
    """Configuration options for IR building."""

    # Object type names treated as the operation roots
    query_type: str = "Query"
    mutation_type: str = "Mutation"

    # Wrap every non-primitive, non-Input type as optional, even if not-null
    optional: bool = False

    # Scalar name -> target type
    scalars: ScalarTypeMap = field(default_factory=ScalarTypeMap)

    # Base types that are never rendered optional
    not_optional_types: frozenset[str] = DEFAULT_NOT_OPTIONAL_TYPES

    # Rendering markers for the target type spelling
    nullable_marker: str = "*"
    sequence_marker: str = "[]"

    # Tag written to the "kind" key of the output document
    kind: str = "gql"

    @staticmethod
    def from_options(
        query_type: str = "Query",
        mutation_type: str = "Mutation",
        optional: bool = False,
        type_mappings: str = "",
        kind: str = "gql",
    ) -> BuilderConfig:
        """Create a config from CLI-style options.

        Args:
            query_type: Name of the Query root type
            mutation_type: Name of the Mutation root type
            optional: Enable the global optional policy
            type_mappings: Extra scalar mappings in ``key=value,...`` form
            kind: Output document kind tag

        Raises:
            ConfigError: If type_mappings is malformed.
        """
        scalars = ScalarTypeMap()
        scalars.update_from_string(type_mappings)
        return BuilderConfig(
            query_type=query_type,
            mutation_type=mutation_type,
            optional=optional,
            scalars=scalars,
            kind=kind,
        )

    def is_root_type(self, type_name: str | None) -> bool:
        """Check if a type name is the configured Query or Mutation root."""
        return type_name in (self.query_type, self.mutation_type)
