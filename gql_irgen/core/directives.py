"""Flatten directives attached to AST nodes into DirectiveMaps.

    @size(max: 64, unit: BYTES, tags: ["a", "b"])

becomes ``{"size": {"max": 64, "unit": "BYTES", "tags": {"a": 1, "b": 1}}}``.
"""

import copy
import logging
from typing import Any, Iterable

from graphql import (
    BooleanValueNode,
    DirectiveNode,
    EnumValueNode,
    FloatValueNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    ObjectValueNode,
    StringValueNode,
    ValueNode,
    VariableNode,
)

from .errors import DirectiveValueError
from .ir import DirectiveMap

logger = logging.getLogger(__name__)

MAX_UNSIGNED = 2**64 - 1


def _decode_unsigned(node: IntValueNode, directive: str, argument: str) -> int:
    text = node.value
    if not (text.isascii() and text.isdigit()) or int(text) > MAX_UNSIGNED:
        raise DirectiveValueError(directive, argument, text)
    return int(text)


def _decode_set(node: ListValueNode, directive: str, argument: str) -> dict[str, int]:
    """Decode a list literal into a set of tags, ``{tag: 1}``."""
    tags: dict[str, int] = {}
    for item in node.values:
        if isinstance(item, (EnumValueNode, StringValueNode)):
            tags[item.value] = 1
        else:
            logger.warning(
                "@%s(%s): unsupported list element %s skipped", directive, argument, item.kind
            )
    return tags


def decode_value(value: ValueNode, directive: str = "", argument: str = "") -> Any:
    """Decode one literal by its kind.

    Raises:
        DirectiveValueError: If an integer literal is not a valid unsigned integer.
    """
    if isinstance(value, (StringValueNode, EnumValueNode)):
        return value.value
    if isinstance(value, IntValueNode):
        return _decode_unsigned(value, directive, argument)
    if isinstance(value, FloatValueNode):
        return float(value.value)
    if isinstance(value, BooleanValueNode):
        return value.value
    if isinstance(value, NullValueNode):
        return None
    if isinstance(value, VariableNode):
        return value.name.value
    if isinstance(value, ListValueNode):
        return _decode_set(value, directive, argument)
    if isinstance(value, ObjectValueNode):
        return {
            field.name.value: decode_value(field.value, directive, f"{argument}.{field.name.value}")
            for field in value.fields
        }
    logger.warning("@%s(%s): unsupported literal %s skipped", directive, argument, value.kind)
    return None


def collect_directives(
    directives: Iterable[DirectiveNode] | None,
    into: DirectiveMap | None = None,
) -> DirectiveMap:
    """Build a DirectiveMap from a node's directives.

    Args:
        directives: The directives attached to an AST node
        into: An existing map to merge with; it is copied, never modified.
            Directive names already present keep their arguments unless the
            new directives set the same argument again.

    Returns:
        A new map.
    """
    result: DirectiveMap = copy.deepcopy(into) if into else {}
    for directive in directives or ():
        name = directive.name.value
        arguments = result.setdefault(name, {})
        for argument in directive.arguments or ():
            arguments[argument.name.value] = decode_value(
                argument.value, name, argument.name.value
            )
    return result


def merge_directives(target: DirectiveMap, source: DirectiveMap) -> DirectiveMap:
    """Return target with every entry of source copied over it."""
    merged = copy.deepcopy(target)
    for name, arguments in source.items():
        merged[name] = copy.deepcopy(arguments)
    return merged
