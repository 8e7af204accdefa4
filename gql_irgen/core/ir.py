"""Intermediate Representation (IR) for GraphQL schemas and queries.

This module defines the models the builder produces and the downstream
templates consume. Attribute names are Pythonic; the serialized keys (the
aliases) are a stability contract with the templates and must not change.
"""

import json
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, model_serializer

# directive name -> argument name -> decoded literal
DirectiveMap = dict[str, dict[str, Any]]


class NodeKind(str, Enum):
    """Kinds of top-level IR nodes."""
    DIRECTIVE = "DirectiveDefinition"
    SCALAR = "ScalarDefinition"
    ENUM = "EnumDefinition"
    UNION = "UnionDefinition"
    INTERFACE = "InterfaceDefinition"
    OBJECT = "ObjectDefinition"
    INPUT_OBJECT = "InputObjectDefinition"
    QUERY = "QueryDefinition"
    MUTATION = "MutationDefinition"
    OPERATION = "OperationDefinition"


# Output precedence of top-level nodes
KIND_ORDER = list(NodeKind)


class TypeDescriptor(BaseModel):
    """A resolved type reference such as ``[String!]!``."""
    model_config = ConfigDict(frozen=True)

    base_name: str  # scalar target type or declared type name
    is_array: bool = False
    not_null: bool = False
    source_text: str = ""  # the reference as written, wrappers included
    src: str = ""  # declared name before scalar mapping
    src_x: str = ""  # src with a trailing "!" when not-null


class IRModel(BaseModel):
    """Base for all IR nodes: serialized by alias, built by attribute name."""
    model_config = ConfigDict(populate_by_name=True)


class IRMember(IRModel):
    """Name variants and type shared by fields, arguments and variables."""
    name_orig: str = Field(alias="nameOrig")
    exported: str = Field(alias="Name")
    name_json: str = Field("", alias="nameJson")
    var_name: str = Field("", alias="name")
    exported_plural: str = Field("", alias="Names")
    var_name_plural: str = Field("", alias="names")
    short_name: str = Field("", alias="n")
    name_db: str = Field("", alias="nameDb")
    name_exact_db: str = Field("", alias="nameExactDb")
    names_db: str = Field("", alias="namesDb")
    name_exact: str = Field("", alias="NameExact")
    name_exact_json: str = Field("", alias="nameExact")
    key: str = ""
    # Type, flattened for templates; type_info keeps the descriptor itself
    type_info: TypeDescriptor | None = Field(None, exclude=True)
    type: str | None = Field(None, alias="Type")
    src_type: str = Field("", alias="srcType")
    src_type_x: str = Field("", alias="srcTypeX")
    base_type: str = Field("", alias="baseType")
    type_db: str = Field("", alias="typeDb")
    is_array: bool = Field(False, alias="isArray")
    not_null: bool = Field(False, alias="notNull")
    directives: DirectiveMap = Field(default_factory=dict)


class IRArgument(IRMember):
    """An argument, operation variable or input object field."""
    # Query-side arguments: how the value was written
    name_input: str | None = Field(None, alias="nameInput")
    name_input_exact: str | None = Field(None, alias="nameInputExact")
    # Object literal arguments
    fields: list["IRArgument"] = Field(default_factory=list)


class IRField(IRMember):
    """A field of a type, or a selected field of an operation."""
    name_camel: str = Field("", alias="NameCamel")
    alias: str = ""
    arguments: list[IRArgument] = Field(default_factory=list, alias="args")
    # Sub-selections; empty for leaf fields
    fields: list["IRField"] = Field(default_factory=list)

    @property
    def is_composite(self) -> bool:
        """True if the field has a nested selection."""
        return bool(self.fields)

    @model_serializer(mode="wrap")
    def _omit_empty_arguments(self, handler):
        data = handler(self)
        # args is left out when the field takes none; fields is always written
        if not self.arguments:
            data.pop("args", None)
            data.pop("arguments", None)
        return data


class IREnumValue(IRModel):
    """A single value of a GraphQL enum."""
    name_orig: str = Field(alias="nameOrig")
    exported: str = Field(alias="Name")
    name_json: str = Field("", alias="nameJson")
    var_name: str = Field("", alias="name")
    name_exact_json: str = Field("", alias="nameExact")
    key: str = ""
    type_info: TypeDescriptor | None = Field(None, exclude=True)
    type: str | None = Field(None, alias="Type")
    directives: DirectiveMap = Field(default_factory=dict)


class IRDefinition(IRModel):
    """Name variants shared by all top-level type and operation nodes."""
    kind: NodeKind
    key: str
    name_orig: str = Field(alias="nameOrig")
    exported: str = Field(alias="Name")
    var_name: str = Field("", alias="name")
    exported_plural: str = Field("", alias="Names")
    var_name_plural: str = Field("", alias="names")
    short_name: str = Field("", alias="n")
    name_db: str = Field("", alias="nameDb")
    name_exact_db: str = Field("", alias="nameExactDb")
    names_db: str = Field("", alias="namesDb")
    name_exact: str = Field("", alias="NameExact")
    name_exact_json: str = Field("", alias="nameExact")
    names_exact_json: str = Field("", alias="namesExact")
    comment: str = ""
    directives: DirectiveMap = Field(default_factory=dict)


class IRType(IRDefinition):
    """An object, interface, union or scalar definition.

    Objects named like the configured Query/Mutation root carry an
    operation tag.
    """
    operation: str | None = None
    operation_name: str | None = Field(None, alias="Operation")
    fields: list[IRField] = Field(default_factory=list)
    interfaces: list[IRField] | None = None


class IREnum(IRDefinition):
    """A GraphQL enum; values keep their declaration order."""
    enum_values: list[IREnumValue] = Field(default_factory=list, alias="fields")


class IRInputType(IRDefinition):
    """A GraphQL input object type."""
    name_input: str = Field("", alias="NameInput")
    fields: list[IRArgument] = Field(default_factory=list)


class IROperation(IRDefinition):
    """A query, mutation or subscription document."""
    operation: str
    operation_name: str = Field(alias="Operation")
    variables: list[IRArgument] = Field(default_factory=list, alias="vars")
    fields: list[IRField] = Field(default_factory=list)


class IRDirective(IRModel):
    """A directive definition."""
    kind: NodeKind = NodeKind.DIRECTIVE
    exported: str = Field(alias="Name")
    key: str
    arguments: list[IRArgument] = Field(default_factory=list, alias="args")


IRNode = Union[IRType, IREnum, IRInputType, IROperation, IRDirective]


class IRDocument(IRModel):
    """Complete IR of one conversion, in output order."""
    kind: str = "gql"
    src_kind: str = Field("gql", alias="srcKind")
    data: list[IRNode] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, keyed by alias, without null values."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: str | int | None = "\t") -> str:
        """Serialize the document to JSON."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def get_node(self, key: str) -> IRNode | None:
        """Look up a top-level node by key."""
        for node in self.data:
            if node.key == key:
                return node
        return None
