"""Command-line interface for gql-irgen."""

import functools
import logging
from collections import Counter

import click
from jinja2 import TemplateError

from .core.builder import IRBuilder
from .core.config import BuilderConfig
from .core.emitter import TemplateRenderer
from .core.errors import GqlIRError
from .core.ir import IRDocument
from .core.loader import default_output_path, is_up_to_date, load_definitions

logger = logging.getLogger(__name__)

_LEVEL_COLORS = {
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


class ClickHandler(logging.Handler):
    """Log handler writing to stderr through click, warnings in yellow."""

    def emit(self, record):
        try:
            message = self.format(record)
            click.secho(message, fg=_LEVEL_COLORS.get(record.levelno), err=True)
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False, debug: bool = False):
    """Route the package loggers to stderr at the requested level."""
    level = logging.WARNING
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO

    package_logger = logging.getLogger("gql_irgen")
    for handler in list(package_logger.handlers):
        if isinstance(handler, ClickHandler):
            package_logger.removeHandler(handler)
    handler = ClickHandler()
    fmt = "%(levelname)s %(name)s: %(message)s" if debug else "%(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


def build_options(f):
    """Options shared by every command that builds an IR document."""
    options = [
        click.argument("files", nargs=-1, type=click.Path(exists=True)),
        click.option(
            "--schema",
            "-s",
            multiple=True,
            type=click.Path(exists=True),
            help="GraphQL schema file or directory, read before FILES. Repeatable.",
        ),
        click.option("--kind", default="gql", show_default=True, help="Kind tag of the output document."),
        click.option("--query-type", default="Query", show_default=True, help="Name of the query root type."),
        click.option(
            "--mutation-type", default="Mutation", show_default=True, help="Name of the mutation root type."
        ),
        click.option(
            "--optional",
            is_flag=True,
            help="Render every non-primitive, non-input type as optional.",
        ),
        click.option(
            "--type-mappings",
            default="",
            help="Extra scalar mappings, e.g. 'UUID=uuid.UUID,Decimal=decimal.Decimal'.",
        ),
        click.option(
            "--remove-comments",
            is_flag=True,
            help='Strip """descriptions""" and "= null" defaults before parsing.',
        ),
        click.option("--verbose", "-v", is_flag=True, help="Enable verbose output."),
        click.option("--debug", is_flag=True, help="Enable debug output."),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _inputs(schema: tuple[str, ...], files: tuple[str, ...]) -> list[str]:
    inputs = list(schema) + list(files)
    if not inputs:
        raise click.UsageError("no input files given")
    return inputs


def build_document(
    inputs: list[str],
    kind: str,
    query_type: str,
    mutation_type: str,
    optional: bool,
    type_mappings: str,
    remove_comments: bool,
) -> IRDocument:
    """Parse the inputs and build one IR document."""
    try:
        config = BuilderConfig.from_options(
            query_type=query_type,
            mutation_type=mutation_type,
            optional=optional,
            type_mappings=type_mappings,
            kind=kind,
        )
        definitions = load_definitions(inputs, remove_comments=remove_comments)
        document = IRBuilder(config).build_document(definitions)
    except GqlIRError as e:
        raise click.ClickException(str(e)) from e

    counts = Counter(node.kind.value for node in document.data)
    for node_kind, count in sorted(counts.items()):
        logger.info("  %s: %d", node_kind, count)
    return document


def _write(content: str, output: str):
    if output == "-":
        click.echo(content, nl=False)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(content)
    logger.info("Wrote %s", output)


def _with_logging(f):
    @functools.wraps(f)
    def wrapper(*args, verbose: bool, debug: bool, **kwargs):
        setup_logging(verbose, debug)
        return f(*args, **kwargs)

    return wrapper


@click.group()
@click.version_option(package_name="gql-irgen")
def main():
    """Convert GraphQL schemas and queries into a JSON IR.

    The IR feeds template-based source generators.
    """
    pass


@main.command()
@build_options
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Output file; '-' for stdout. Defaults to the first input with "
    ".graphql replaced by -graphql.json.",
)
@click.option("--force", "-f", is_flag=True, help="Rebuild even if the output is up to date.")
@click.option("--changed", is_flag=True, help="Exit with status 2 when the output was rewritten.")
@click.pass_context
@_with_logging
def convert(ctx, files, schema, output, force, changed, **build):
    """Convert GraphQL files into a JSON IR document.

    Examples:

        gql-irgen convert api.graphql

        gql-irgen convert -s schema.graphql queries/ -o api.json --optional

        gql-irgen convert api.graphql --type-mappings 'UUID=uuid.UUID' -o -
    """
    inputs = _inputs(schema, files)
    output = output or default_output_path(inputs[0])

    if output != "-" and not force and is_up_to_date(inputs, output):
        logger.info("%s is up to date", output)
        return

    logger.info("Parsing %d input(s)...", len(inputs))
    document = build_document(inputs, **build)
    _write(document.to_json() + "\n", output)

    if changed:
        ctx.exit(2)


@main.command()
@build_options
@click.option("--template", "-t", required=True, help="Template name, or path to a template file.")
@click.option(
    "--template-dir",
    "-d",
    type=click.Path(exists=True, file_okay=False),
    help="Directory to look up templates in.",
)
@click.option("--output", "-o", default="-", type=click.Path(), help="Output file; '-' for stdout.")
@_with_logging
def render(files, schema, template, template_dir, output, **build):
    """Build the IR and render it through a Jinja2 template.

    Examples:

        gql-irgen render api.graphql -t models.go.j2 -d ./templates -o models.go
    """
    document = build_document(_inputs(schema, files), **build)
    renderer = TemplateRenderer(template_dir=template_dir)
    try:
        content = renderer.render(template, document)
    except TemplateError as e:
        raise click.ClickException(f"template {template}: {e}") from e
    _write(content, output)


if __name__ == "__main__":
    main()
