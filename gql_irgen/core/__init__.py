"""Core modules for GraphQL to IR conversion."""

from .builder import IRBuilder, sort_fields, sort_nodes
from .casing import (
    de_initialism,
    lower_first,
    short_name,
    split_words,
    suffix_initialism,
    to_camel,
    to_exported,
    to_field,
    to_snake,
    upper_first,
)
from .config import BuilderConfig
from .emitter import TemplateRenderer
from .errors import ConfigError, DirectiveValueError, GqlIRError, SchemaLoadError
from .inflector import DefaultInflector, Inflector
from .ir import (
    IRArgument,
    IRDefinition,
    IRDirective,
    IRDocument,
    IREnum,
    IREnumValue,
    IRField,
    IRInputType,
    IRMember,
    IROperation,
    IRType,
    NodeKind,
    TypeDescriptor,
)
from .loader import load_definitions
from .scalars import ScalarTypeMap, parse_type_mappings

__all__ = [
    # Builder
    "IRBuilder",
    "BuilderConfig",
    "sort_fields",
    "sort_nodes",
    # Casing
    "split_words",
    "to_exported",
    "to_field",
    "to_snake",
    "to_camel",
    "lower_first",
    "upper_first",
    "short_name",
    "de_initialism",
    "suffix_initialism",
    # Inflection
    "Inflector",
    "DefaultInflector",
    # Scalars
    "ScalarTypeMap",
    "parse_type_mappings",
    # IR types
    "IRArgument",
    "IRDefinition",
    "IRDirective",
    "IRDocument",
    "IREnum",
    "IREnumValue",
    "IRField",
    "IRInputType",
    "IRMember",
    "IROperation",
    "IRType",
    "NodeKind",
    "TypeDescriptor",
    # Loading and rendering
    "load_definitions",
    "TemplateRenderer",
    # Errors
    "GqlIRError",
    "ConfigError",
    "DirectiveValueError",
    "SchemaLoadError",
]
