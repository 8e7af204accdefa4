"""Named fragment collection and inlining."""

import logging
from typing import Iterable, Mapping, Sequence

from graphql import DefinitionNode, FragmentDefinitionNode, FragmentSpreadNode, SelectionNode

logger = logging.getLogger(__name__)

FragmentTable = Mapping[str, Sequence[SelectionNode]]


def collect_fragments(definitions: Iterable[DefinitionNode]) -> dict[str, tuple[SelectionNode, ...]]:
    """Map every fragment definition name to its selections."""
    return {
        definition.name.value: tuple(definition.selection_set.selections)
        for definition in definitions
        if isinstance(definition, FragmentDefinitionNode)
    }


def expand_fragments(
    fragments: FragmentTable,
    selections: Iterable[SelectionNode] | None,
    _active: frozenset[str] = frozenset(),
) -> list[SelectionNode]:
    """Inline fragment spreads into a flat selection list.

    Spreads are replaced by their fragment's selections, recursively; every
    other selection is passed through in order. Only this level is expanded:
    sub-selections of the returned fields still hold their own spreads.

    Args:
        fragments: Fragment name -> selections
        selections: The selections of one selection set

    Returns:
        A new list; the inputs are not modified.
    """
    expanded: list[SelectionNode] = []
    for selection in selections or ():
        if not isinstance(selection, FragmentSpreadNode):
            expanded.append(selection)
            continue
        name = selection.name.value
        if name in _active:
            logger.warning("fragment %s spreads itself, skipped", name)
            continue
        body = fragments.get(name)
        if body is None:
            logger.debug("unknown fragment %s skipped", name)
            continue
        expanded.extend(expand_fragments(fragments, body, _active | {name}))
    return expanded
