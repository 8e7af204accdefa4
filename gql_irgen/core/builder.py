"""Build the IR from parsed GraphQL schema and query documents.

Type definitions are converted first and register a field table per type;
operations are converted afterwards and resolve each selected field against
the table of the type it is selected on, inheriting its type and directives.
"""

import logging
from typing import Any, Iterable

from graphql import (
    ArgumentNode,
    BooleanValueNode,
    DefinitionNode,
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    EnumValueNode,
    FieldDefinitionNode,
    FieldNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InputValueDefinitionNode,
    IntValueNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ObjectFieldNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ObjectValueNode,
    OperationDefinitionNode,
    OperationType,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SelectionSetNode,
    StringValueNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    VariableDefinitionNode,
    VariableNode,
)

from .casing import de_initialism, lower_first, to_camel, to_exported, to_snake
from .config import BuilderConfig
from .directives import collect_directives, merge_directives
from .fragments import FragmentTable, collect_fragments, expand_fragments
from .inflector import DefaultInflector, Inflector
from .ir import (
    KIND_ORDER,
    IRArgument,
    IRDirective,
    IRDocument,
    IREnum,
    IREnumValue,
    IRField,
    IRInputType,
    IRNode,
    IROperation,
    IRType,
    NodeKind,
    TypeDescriptor,
)
from .names import definition_names, disambiguate_key, member_names
from .type_resolver import literal_type, render_type, resolve_type

logger = logging.getLogger(__name__)


def sort_fields(fields: list[IRField]) -> list[IRField]:
    """Leaf fields first, then fields with sub-selections; by key within each."""
    return sorted(fields, key=lambda f: (f.is_composite, f.key))


def sort_nodes(nodes: list[IRNode]) -> list[IRNode]:
    """Order top-level nodes by kind precedence, then by key."""
    return sorted(nodes, key=lambda n: (KIND_ORDER.index(n.kind), n.key))


def check_id_suffix(type_name: str, field_name: str) -> bool:
    """Warn about a field spelled ``...ID`` instead of ``...Id``.

    ``UID`` and upper-case runs such as ``GUID`` are accepted.
    """
    if field_name.endswith("ID") and not field_name.endswith("UID"):
        if len(field_name) < 3 or not field_name[-3].isupper():
            logger.warning(
                "Model '%s', Field '%s' ends with ID, use Id instead", type_name, field_name
            )
            return True
    return False


def _description(node: Any) -> str:
    description = getattr(node, "description", None)
    return description.value if description else ""


class IRBuilder:
    """Converts GraphQL definitions into an ordered IR forest.

    Example:
        document = parse(schema_source + query_source, no_location=True)
        ir = IRBuilder(BuilderConfig(optional=True)).build_document(document)
        print(ir.to_json())
    """

    def __init__(self, config: BuilderConfig | None = None, inflector: Inflector | None = None):
        """Initialize a builder.

        Args:
            config: Builder configuration; defaults to BuilderConfig()
            inflector: Pluralization oracle; defaults to DefaultInflector()
        """
        self.config = config or BuilderConfig()
        self.inflector = inflector or DefaultInflector()
        self._fragments: FragmentTable = {}
        # type name -> field lookup key -> schema field
        self._tables: dict[str, dict[str, IRField]] = {}
        self._enum_names: frozenset[str] = frozenset()
        self._handlers = {
            DirectiveDefinitionNode: self._build_directive,
            EnumTypeDefinitionNode: self._build_enum,
            EnumTypeExtensionNode: self._build_enum,
            InputObjectTypeDefinitionNode: self._build_input_object,
            InputObjectTypeExtensionNode: self._build_input_object,
            OperationDefinitionNode: self._build_operation,
            ScalarTypeDefinitionNode: self._build_scalar,
            ScalarTypeExtensionNode: self._build_scalar,
            UnionTypeDefinitionNode: self._build_union,
            UnionTypeExtensionNode: self._build_union,
            InterfaceTypeDefinitionNode: self._build_interface,
            InterfaceTypeExtensionNode: self._build_interface,
            ObjectTypeDefinitionNode: self._build_object,
            ObjectTypeExtensionNode: self._build_object,
        }

    def build_document(self, document: DocumentNode | Iterable[DefinitionNode]) -> IRDocument:
        """Convert a document (or a list of definitions) into an IRDocument."""
        definitions = document.definitions if isinstance(document, DocumentNode) else document
        return IRDocument(kind=self.config.kind, data=self.build(definitions))

    def build(
        self,
        definitions: Iterable[DefinitionNode],
        fragments: FragmentTable | None = None,
    ) -> list[IRNode]:
        """Convert definitions into sorted IR nodes.

        Args:
            definitions: Top-level definitions of one or more parsed documents
            fragments: Fragment table; collected from definitions when omitted

        Returns:
            The IR nodes in output order.

        Raises:
            DirectiveValueError: If a directive carries a malformed integer.
        """
        definitions = list(definitions)
        self._fragments = collect_fragments(definitions) if fragments is None else fragments
        self._tables = {}
        self._enum_names = frozenset(
            d.name.value
            for d in definitions
            if isinstance(d, (EnumTypeDefinitionNode, EnumTypeExtensionNode))
        )

        nodes: list[IRNode] = []
        # Operations last, so every field table they consult exists
        for definition in sorted(definitions, key=lambda d: isinstance(d, OperationDefinitionNode)):
            handler = self._handlers.get(type(definition))
            if handler is None:
                # fragments and schema definitions carry no IR of their own
                continue
            nodes.append(handler(definition))
        return sort_nodes(nodes)

    # -- type helpers -------------------------------------------------------

    def _render(self, descriptor: TypeDescriptor) -> str:
        return render_type(descriptor, self.config, self._enum_names)

    def _type_fields(self, descriptor: TypeDescriptor | None, base_type: str | None = None) -> dict[str, Any]:
        """Flattened type attributes of a member."""
        if descriptor is None:
            return {}
        base_type = descriptor.base_name if base_type is None else base_type
        return {
            "type_info": descriptor,
            "type": self._render(descriptor),
            "src_type": descriptor.src,
            "src_type_x": descriptor.src_x,
            "base_type": base_type,
            "type_db": to_snake(descriptor.base_name),
            "is_array": descriptor.is_array,
            "not_null": descriptor.not_null,
        }

    @staticmethod
    def _inherited_type_fields(schema_field: IRField) -> dict[str, Any]:
        """Type attributes a selected field takes over from its schema field."""
        return {
            "type_info": schema_field.type_info,
            "type": schema_field.type,
            "src_type": schema_field.src_type,
            "src_type_x": schema_field.src_type_x,
            "base_type": schema_field.base_type,
            "type_db": schema_field.type_db,
            "is_array": schema_field.is_array,
            "not_null": schema_field.not_null,
        }

    def _lookup_key(self, name: str, root: bool) -> str:
        """Join key of a field: exported form on root types, lowerCamel elsewhere."""
        return de_initialism(to_exported(name) if root else lower_first(name))

    def _input_value(self, name: str, type_node, directives, key: str) -> IRArgument:
        names = member_names(name, self.inflector)
        return IRArgument(
            **names,
            key=key,
            directives=collect_directives(directives),
            **self._type_fields(resolve_type(type_node, self.config.scalars)),
        )

    def _argument(self, node: InputValueDefinitionNode, owner_var_name: str | None) -> IRArgument:
        key = disambiguate_key(lower_first(self.inflector.singularize(node.name.value)), owner_var_name)
        return self._input_value(node.name.value, node.type, node.directives, key)

    def _variable(self, node: VariableDefinitionNode, owner_var_name: str) -> IRArgument:
        name = node.variable.name.value
        key = disambiguate_key(lower_first(self.inflector.singularize(name)), owner_var_name)
        return self._input_value(name, node.type, node.directives, key)

    def _member(self, name: str, key: str) -> IRField:
        """A type-less member such as a union member or implemented interface."""
        return IRField(**member_names(name, self.inflector), key=key)

    # -- definitions --------------------------------------------------------

    def _build_directive(self, node: DirectiveDefinitionNode) -> IRDirective:
        name = node.name.value
        return IRDirective(
            exported=name,
            key=name,
            arguments=[self._argument(arg, None) for arg in node.arguments or ()],
        )

    def _build_enum(self, node: EnumTypeDefinitionNode) -> IREnum:
        name = node.name.value
        values = []
        for value in node.values or ():
            raw = value.name.value
            # ACTIVE_USER -> ActiveUser
            name_json = to_camel(to_snake(raw))
            descriptor = literal_type("string")
            values.append(
                IREnumValue(
                    name_orig=raw,
                    exported=to_exported(name_json),
                    name_json=name_json,
                    var_name=lower_first(name_json),
                    name_exact_json=raw,
                    key=raw,
                    type_info=descriptor,
                    type=self._render(descriptor),
                    directives=collect_directives(value.directives),
                )
            )
        names = definition_names(name, self.inflector)
        names.update(name_exact=to_exported(name), name_exact_json=name)
        return IREnum(
            kind=NodeKind.ENUM,
            key=to_exported(name),
            **names,
            directives=collect_directives(node.directives),
            enum_values=values,
        )

    def _build_input_object(self, node: InputObjectTypeDefinitionNode) -> IRInputType:
        name = node.name.value
        fields = []
        for field in node.fields or ():
            key = de_initialism(lower_first(self.inflector.singularize(field.name.value)))
            fields.append(self._input_value(field.name.value, field.type, field.directives, key))
        return IRInputType(
            kind=NodeKind.INPUT_OBJECT,
            key=de_initialism(to_exported(name)),
            **definition_names(name, self.inflector, exported=name.removeprefix("Input")),
            name_input=name,
            comment=_description(node),
            directives=collect_directives(node.directives),
            fields=sorted(fields, key=lambda f: f.key),
        )

    def _build_scalar(self, node: ScalarTypeDefinitionNode) -> IRType:
        name = node.name.value
        return IRType(
            kind=NodeKind.SCALAR,
            key=name,
            **definition_names(name, self.inflector),
            comment=_description(node),
            directives=collect_directives(node.directives),
        )

    def _build_union(self, node: UnionTypeDefinitionNode) -> IRType:
        name = node.name.value
        members = [self._member(t.name.value, lower_first(t.name.value)) for t in node.types or ()]
        return IRType(
            kind=NodeKind.UNION,
            key=name,
            **definition_names(name, self.inflector),
            comment=_description(node),
            directives=collect_directives(node.directives),
            fields=sort_fields(members),
        )

    def _build_interface(self, node: InterfaceTypeDefinitionNode) -> IRType:
        return self._build_object_like(node, NodeKind.INTERFACE, key=to_exported(node.name.value))

    def _build_object(self, node: ObjectTypeDefinitionNode) -> IRType:
        name = node.name.value
        kind = NodeKind.OBJECT
        if name == self.config.query_type:
            kind = NodeKind.QUERY
        elif name == self.config.mutation_type:
            kind = NodeKind.MUTATION
        return self._build_object_like(node, kind, key=de_initialism(to_exported(name)))

    def _build_object_like(self, node, kind: NodeKind, key: str) -> IRType:
        """Convert an object or interface and register its field table."""
        name = node.name.value
        names = definition_names(name, self.inflector)
        owner_var_name = names["var_name"]
        root = self.config.is_root_type(name)

        # extensions add to the table of the type they extend
        table = self._tables.setdefault(name, {})
        fields = []
        for field in node.fields or ():
            ir_field = self._schema_field(field, name, owner_var_name, root)
            table[self._lookup_key(field.name.value, root)] = ir_field
            fields.append(ir_field)

        interfaces = [
            self._member(i.name.value, disambiguate_key(lower_first(i.name.value), owner_var_name))
            for i in getattr(node, "interfaces", None) or ()
        ]
        operation = None
        if kind == NodeKind.QUERY:
            operation = OperationType.QUERY.value
        elif kind == NodeKind.MUTATION:
            operation = OperationType.MUTATION.value
        return IRType(
            kind=kind,
            key=key,
            **names,
            comment=_description(node),
            directives=collect_directives(node.directives),
            operation=operation,
            operation_name=operation.title() if operation else None,
            fields=sort_fields(fields),
            interfaces=interfaces or None,
        )

    def _schema_field(
        self,
        node: FieldDefinitionNode,
        owner: str,
        owner_var_name: str,
        root: bool,
    ) -> IRField:
        name = node.name.value
        check_id_suffix(owner, name)
        names = member_names(name, self.inflector)
        descriptor = resolve_type(node.type, self.config.scalars)
        return IRField(
            **names,
            name_camel=to_camel(names["name_exact_db"]),
            key=disambiguate_key(self._lookup_key(name, root), owner_var_name),
            directives=collect_directives(node.directives),
            arguments=[self._argument(arg, owner_var_name) for arg in node.arguments or ()],
            **self._type_fields(descriptor, owner if name == "__typename" else None),
        )

    # -- operations ---------------------------------------------------------

    def _root_type(self, operation: OperationType) -> str | None:
        if operation == OperationType.QUERY:
            return self.config.query_type
        if operation == OperationType.MUTATION:
            return self.config.mutation_type
        return None

    def _build_operation(self, node: OperationDefinitionNode) -> IROperation:
        name = node.name.value if node.name else ""
        operation = node.operation.value
        names = definition_names(name, self.inflector)
        names.update(name_exact=to_exported(name))

        variables = []
        variable_types: dict[str, TypeDescriptor | None] = {}
        for definition in node.variable_definitions or ():
            variable = self._variable(definition, names["var_name"])
            variables.append(variable)
            variable_types[definition.variable.name.value] = variable.type_info

        return IROperation(
            kind=NodeKind.OPERATION,
            key=de_initialism(to_exported(name)),
            **names,
            operation=operation,
            operation_name=operation.title(),
            variables=variables,
            directives=collect_directives(node.directives),
            fields=self._selections(node.selection_set, self._root_type(node.operation), variable_types),
        )

    def _selections(
        self,
        selection_set: SelectionSetNode | None,
        type_name: str | None,
        variable_types: dict[str, TypeDescriptor | None],
    ) -> list[IRField]:
        """Convert a selection set selected on type_name."""
        if selection_set is None:
            return []
        fields = []
        for selection in expand_fragments(self._fragments, selection_set.selections):
            if isinstance(selection, FieldNode):
                fields.append(self._selected_field(selection, type_name, variable_types))
            else:
                logger.warning(
                    "unsupported selection %s on %s skipped", selection.kind, type_name or "?"
                )
        return sort_fields(fields)

    def _selected_field(
        self,
        node: FieldNode,
        type_name: str | None,
        variable_types: dict[str, TypeDescriptor | None],
    ) -> IRField:
        name = node.name.value
        names = member_names(name, self.inflector)
        key = self._lookup_key(name, self.config.is_root_type(type_name))

        directives = collect_directives(node.directives)
        type_fields: dict[str, Any] = {}
        child_type = None
        schema_field = self._tables.get(type_name, {}).get(key) if type_name else None
        if schema_field is not None:
            type_fields = self._inherited_type_fields(schema_field)
            directives = merge_directives(directives, schema_field.directives)
            child_type = schema_field.src_type or None
        if name == "__typename":
            type_fields["base_type"] = type_name or ""

        return IRField(
            **names,
            name_camel=to_camel(names["name_exact_db"]),
            key=key,
            alias=node.alias.value if node.alias else "",
            directives=directives,
            arguments=[
                self._selected_argument(arg, names["var_name"], variable_types)
                for arg in node.arguments or ()
            ],
            fields=self._selections(node.selection_set, child_type, variable_types),
            **type_fields,
        )

    def _selected_argument(
        self,
        node: ArgumentNode | ObjectFieldNode,
        owner_var_name: str,
        variable_types: dict[str, TypeDescriptor | None],
    ) -> IRArgument:
        """Convert an argument passed in a query, recording how it was written."""
        name = node.name.value
        names = member_names(name, self.inflector)
        value = node.value

        name_input = name_input_exact = None
        descriptor = None
        fields = []
        if isinstance(value, VariableNode):
            name_input_exact = value.name.value
            name_input = lower_first(to_exported(name_input_exact))
            descriptor = variable_types.get(name_input_exact)
        elif isinstance(value, (StringValueNode, EnumValueNode)):
            name_input = f'"{value.value}"'
            descriptor = literal_type("string")
        elif isinstance(value, IntValueNode):
            name_input = value.value
            descriptor = literal_type("int")
        elif isinstance(value, BooleanValueNode):
            name_input = "true" if value.value else "false"
            descriptor = literal_type("bool")
        elif isinstance(value, ObjectValueNode):
            fields = [
                self._selected_argument(field, owner_var_name, variable_types)
                for field in value.fields
            ]
        else:
            logger.warning("unsupported argument literal %s for %s", value.kind, name)

        return IRArgument(
            **names,
            key=disambiguate_key(names["name_json"], owner_var_name),
            name_input=name_input,
            name_input_exact=name_input_exact,
            fields=fields,
            **self._type_fields(descriptor),
        )
