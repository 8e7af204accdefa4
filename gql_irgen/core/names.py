"""Derived name variants for IR nodes.

Every IR node carries the same family of names computed from its original
identifier; templates pick whichever spelling they need. Members (fields,
arguments, variables) and definitions (types, operations) derive them slightly
differently: a definition keeps its declared name as the exported form, a
member is re-cased.
"""

from typing import Any

from .casing import lower_first, short_name, to_exported, to_snake
from .inflector import Inflector, fix_plural_initialism


def member_names(name: str, inflector: Inflector) -> dict[str, Any]:
    """Name variants for a field, argument or variable.

    ``userIDs`` gives exported ``UserID``, var name ``userID``, plural
    ``UserIDs``, db name ``user_id`` and short name ``uid``.
    """
    name_json = lower_first(inflector.singularize(name))
    exported = to_exported(name_json)
    if exported == "ID":
        var_name = "id"
        exported_plural = "Ids"
    else:
        var_name = lower_first(inflector.singularize(exported))
        exported_plural = fix_plural_initialism(inflector.pluralize(exported))
    var_name_plural = fix_plural_initialism(lower_first(inflector.pluralize(var_name)))
    name_db = to_snake(inflector.singularize(exported))
    return {
        "name_orig": name,
        "exported": exported,
        "name_json": name_json,
        "var_name": var_name,
        "exported_plural": exported_plural,
        "var_name_plural": var_name_plural,
        "short_name": short_name(exported),
        "name_db": name_db,
        "name_exact_db": to_snake(name),
        "names_db": inflector.pluralize(name_db),
        "name_exact": to_exported(name),
        "name_exact_json": lower_first(name),
    }


def definition_names(
    name: str,
    inflector: Inflector,
    exported: str | None = None,
) -> dict[str, Any]:
    """Name variants for a type, enum, union, scalar or operation.

    Args:
        name: Declared name
        inflector: Pluralization oracle
        exported: Exported form when it differs from the declared name
            (input objects drop their ``Input`` prefix)
    """
    if exported is None:
        exported = name
    var_name = lower_first(inflector.singularize(exported))
    name_db = to_snake(inflector.singularize(exported))
    return {
        "name_orig": name,
        "exported": exported,
        "var_name": var_name,
        "exported_plural": fix_plural_initialism(inflector.pluralize(exported)),
        "var_name_plural": fix_plural_initialism(lower_first(inflector.pluralize(var_name))),
        "short_name": short_name(exported),
        "name_db": name_db,
        "name_exact_db": to_snake(name),
        "names_db": inflector.pluralize(name_db),
        "name_exact": name,
        "name_exact_json": lower_first(name),
        "names_exact_json": lower_first(inflector.pluralize(name)),
    }


def disambiguate_key(key: str, owner_var_name: str | None) -> str:
    """Prefix a bare ``id`` key with its owner: ``id`` in User -> ``userId``."""
    if key == "id" and owner_var_name:
        return f"{owner_var_name}Id"
    return key
