"""Read and parse GraphQL schema and query files using graphql-core."""

import logging
import os
import re
from pathlib import Path
from typing import Iterable

from graphql import DefinitionNode, GraphQLSyntaxError, parse

from .errors import SchemaLoadError

logger = logging.getLogger(__name__)

GRAPHQL_SUFFIXES = (".graphql", ".graphqls", ".gql")

_BLOCK_DESCRIPTION_RE = re.compile(r'"""[\s\S]+?"""')
_NULL_DEFAULT_RE = re.compile(r"\s*=\s*null\b")


def strip_comments(source: str) -> str:
    """Remove block descriptions and ``= null`` default values."""
    source = _BLOCK_DESCRIPTION_RE.sub("", source)
    return _NULL_DEFAULT_RE.sub("", source)


def collect_files(paths: Iterable[str]) -> list[str]:
    """Expand directories into the GraphQL files they contain.

    Files given explicitly are kept whatever their suffix; directories are
    walked for ``.graphql``, ``.graphqls`` and ``.gql`` files in sorted order.
    """
    files = []
    for path in paths:
        if os.path.isdir(path):
            found = []
            for root, _, filenames in os.walk(path):
                for filename in filenames:
                    if filename.endswith(GRAPHQL_SUFFIXES):
                        found.append(os.path.join(root, filename))
            files.extend(sorted(found))
        else:
            files.append(path)
    return files


def load_definitions(paths: Iterable[str], remove_comments: bool = False) -> list[DefinitionNode]:
    """Parse every file and return all top-level definitions in file order.

    Raises:
        SchemaLoadError: If a file cannot be read or does not parse.
    """
    definitions: list[DefinitionNode] = []
    for path in collect_files(paths):
        try:
            source = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise SchemaLoadError(path, str(e)) from e
        if remove_comments:
            source = strip_comments(source)
        try:
            document = parse(source, no_location=True)
        except GraphQLSyntaxError as e:
            logger.error("failed to parse file: %s, err: %s", path, e.message)
            raise SchemaLoadError(path, e.message) from e
        logger.debug("%s: %d definitions", path, len(document.definitions))
        definitions.extend(document.definitions)
    return definitions


def mtime(path: str) -> float:
    """Modification time of path, or -1 if it does not exist."""
    try:
        return os.stat(path).st_mtime
    except OSError:
        return -1


def is_up_to_date(inputs: Iterable[str], output: str) -> bool:
    """True if output exists and is not older than any of the inputs."""
    output_time = mtime(output)
    if output_time <= 0:
        return False
    input_time = max((mtime(path) for path in collect_files(inputs)), default=-1)
    return 0 < input_time <= output_time


def default_output_path(schema_path: str) -> str:
    """``api.graphql`` -> ``api-graphql.json``; other names get ``.json`` appended."""
    if ".graphql" in schema_path:
        return schema_path.replace(".graphql", "-graphql.json", 1)
    return schema_path + ".json"
