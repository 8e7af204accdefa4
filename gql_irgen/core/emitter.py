"""Render IR documents through Jinja2 templates.

The IR is meant for template-based source emitters; this module is the
reference one. Templates see the serialized document (the same keys as the
JSON output) plus casing filters:

    {% for node in data if node.kind == "ObjectDefinition" %}
    type {{ node.Name }} struct {
    {%- for f in node.fields %}
        {{ f.Name }} {{ f.Type }} `json:"{{ f.nameExact }}" db:"{{ f.nameExactDb }}"`
    {%- endfor %}
    }
    {% endfor %}

Template lookup order:
1. The directory of a template given by path (that render call only)
2. The template directory given to the renderer
"""

import os
import re
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .casing import (
    de_initialism,
    lower_first,
    short_name,
    suffix_initialism,
    to_camel,
    to_exported,
    to_field,
    to_snake,
    upper_first,
)
from .inflector import DefaultInflector, Inflector
from .ir import IRDocument


def safe_comment(text: str) -> str:
    """Make text safe for a single-line comment.

    Removes newlines and collapses whitespace so a description cannot break
    out of a ``//`` or ``#`` comment, and splits ``*/`` for block comments.
    """
    if not text:
        return ""
    text = text.replace("\n", " ").replace("\r", "").replace("*/", "* /")
    text = re.sub(r"\s+", " ", text)
    if len(text) > 120:
        text = text[:117] + "..."
    return text.strip()


class TemplateRenderer:
    """Renders IR documents with Jinja2 templates.

    Example:
        renderer = TemplateRenderer(template_dir="./templates")
        code = renderer.render("models.go.j2", document)
    """

    def __init__(self, template_dir: str | None = None, inflector: Inflector | None = None):
        """Initialize the renderer.

        Args:
            template_dir: Optional directory with Jinja2 templates
            inflector: Pluralization oracle for the plural/singular filters
        """
        self.template_dir = template_dir
        self.inflector = inflector or DefaultInflector()

        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        self._loader = ChoiceLoader(loaders)

        self.env = Environment(
            loader=self._loader,
            autoescape=select_autoescape(),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        # Register casing filters
        self.env.filters["exported"] = to_exported
        self.env.filters["field"] = to_field
        self.env.filters["lower_first"] = lower_first
        self.env.filters["upper_first"] = upper_first
        self.env.filters["snake"] = to_snake
        self.env.filters["camel"] = to_camel
        self.env.filters["short_name"] = short_name
        self.env.filters["de_initialism"] = de_initialism
        self.env.filters["suffix_initialism"] = suffix_initialism
        self.env.filters["plural"] = self.inflector.pluralize
        self.env.filters["singular"] = self.inflector.singularize
        self.env.filters["safe_comment"] = safe_comment

    def context(self, document: IRDocument) -> dict[str, Any]:
        """Template context for a document."""
        serialized = document.to_dict()
        return {
            "kind": serialized["kind"],
            "srcKind": serialized["srcKind"],
            "data": serialized["data"],
            "ir": document,
        }

    def render(self, template_name: str, document: IRDocument) -> str:
        """Render a template by name, or by path to a template file."""
        env = self.env
        if os.path.isfile(template_name):
            directory, template_name = os.path.split(os.path.abspath(template_name))
            # the file's own directory first, without caching across calls
            loader = ChoiceLoader([FileSystemLoader(directory), self._loader])
            env = self.env.overlay(loader=loader, cache_size=0)
        template = env.get_template(template_name)
        return template.render(self.context(document))

    def render_to_file(self, template_name: str, document: IRDocument, output_path: str):
        """Render a template and write the result."""
        content = self.render(template_name, document)
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
