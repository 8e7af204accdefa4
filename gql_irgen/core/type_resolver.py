"""Resolve GraphQL type references into flat TypeDescriptors."""

from graphql import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode, print_ast

from .config import BuilderConfig
from .ir import TypeDescriptor
from .scalars import ScalarTypeMap


def _unwrap(type_node: TypeNode, not_null: bool, is_array: bool) -> tuple[str, bool, bool]:
    if isinstance(type_node, NonNullTypeNode):
        return _unwrap(type_node.type, True, is_array)
    if isinstance(type_node, ListTypeNode):
        return _unwrap(type_node.type, not_null, True)
    if isinstance(type_node, NamedTypeNode):
        return type_node.name.value, not_null, is_array
    raise TypeError(f"Expected a type reference node, got {type(type_node).__name__}")


def resolve_type(type_node: TypeNode, scalars: ScalarTypeMap) -> TypeDescriptor:
    """Flatten a (possibly wrapped) type reference.

    Any not-null wrapper sets ``not_null`` and any list wrapper sets
    ``is_array``; the named leaf is mapped through the scalar table.

    Args:
        type_node: A NamedTypeNode, ListTypeNode or NonNullTypeNode
        scalars: Scalar-to-target mapping

    Returns:
        The resolved descriptor; ``source_text`` is the reference as written.
    """
    name, not_null, is_array = _unwrap(type_node, False, False)
    return TypeDescriptor(
        base_name=scalars.resolve(name),
        is_array=is_array,
        not_null=not_null,
        source_text=print_ast(type_node),
        src=name,
        src_x=f"{name}!" if not_null else name,
    )


def literal_type(base_name: str) -> TypeDescriptor:
    """Descriptor for a value written inline as a literal (always not-null)."""
    return TypeDescriptor(base_name=base_name, not_null=True)


def render_type(
    descriptor: TypeDescriptor,
    config: BuilderConfig,
    enum_names: frozenset[str] = frozenset(),
) -> str:
    """Spell a descriptor as a target type, e.g. ``*User`` or ``[]string``.

    Nullable references are always wrapped. Not-null enums and not-optional
    base types are never wrapped; other not-null types are wrapped only under
    the ``optional`` policy, and only when they are neither primitives nor
    ``Input``-prefixed.
    """
    target = descriptor.base_name
    if not descriptor.not_null:
        target = config.nullable_marker + target
    elif target in enum_names or target in config.not_optional_types:
        pass
    elif (
        config.optional
        and not config.scalars.is_primitive(target)
        and not target.startswith("Input")
    ):
        target = config.nullable_marker + target
    if descriptor.is_array:
        target = config.sequence_marker + target
    return target
