"""Exceptions raised while turning GraphQL documents into IR."""


class GqlIRError(Exception):
    """Base class for all gql-irgen errors."""


class DirectiveValueError(GqlIRError):
    """Raised when a directive argument literal cannot be decoded.

    Integer arguments must be unsigned; anything else means the schema is
    corrupt and the whole conversion stops.
    """

    def __init__(self, directive: str, argument: str, value: str):
        self.directive = directive
        self.argument = argument
        self.value = value
        super().__init__(
            f"@{directive}({argument}: {value}): not a valid unsigned integer"
        )


class SchemaLoadError(GqlIRError):
    """Raised when a schema or query file cannot be read or parsed."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"failed to parse file ({path}): {message}")


class ConfigError(GqlIRError):
    """Raised for malformed configuration such as a bad type mapping."""
