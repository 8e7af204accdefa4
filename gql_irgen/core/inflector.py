"""Singular/plural word forms used when deriving names.

The builder never pluralizes on its own; it asks an Inflector. The default one
delegates to the ``inflection`` package (Rails inflection rules).

Example usage:
    from gql_irgen.core.inflector import DefaultInflector

    inflector = DefaultInflector()
    inflector.pluralize("User")         # "Users"
    inflector.pluralize("information")  # "informations"
"""

from typing import Protocol, runtime_checkable

import inflection


@runtime_checkable
class Inflector(Protocol):
    """Protocol for pluralization oracles."""

    def pluralize(self, word: str) -> str:
        """Return the plural form of word."""
        ...

    def singularize(self, word: str) -> str:
        """Return the singular form of word."""
        ...


# Uncountable in English, but table names are conventionally pluralized.
PLURAL_OVERRIDES = {
    "information": "informations",
    "Information": "Informations",
}


class DefaultInflector:
    """Inflector backed by the inflection library."""

    def pluralize(self, word: str) -> str:
        if not word:
            return ""
        out = inflection.pluralize(word)
        return PLURAL_OVERRIDES.get(out, out)

    def singularize(self, word: str) -> str:
        if not word:
            return ""
        return inflection.singularize(word)


def fix_plural_initialism(name: str) -> str:
    """Rewrite a trailing ``IDS`` produced by pluralizing an ``ID`` suffix.

    ``UserIDS`` -> ``UserIds``; the trailing ``S`` is a plural suffix, not part
    of the initialism, so the tail is rendered like the ``ID`` -> ``Ids`` rule.
    """
    if name.endswith("IDS"):
        return name[:-2] + "ds"
    return name
