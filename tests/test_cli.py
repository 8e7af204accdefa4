"""Tests for the command-line interface."""

import json
import logging
import os

import pytest
from click.testing import CliRunner

from gql_irgen.cli import main

SCHEMA = """
type Query {
    users(limit: Int): [User!]!
}

type User {
    id: ID!
    name: String
}

query Users {
    users(limit: 5) {
        id
        name
    }
}
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the handler the commands install on the package logger."""
    yield
    package_logger = logging.getLogger("gql_irgen")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "api.graphql"
    path.write_text(SCHEMA)
    return path


class TestConvert:
    """Tests for the convert command."""

    def test_default_output(self, runner, schema_file, tmp_path):
        result = runner.invoke(main, ["convert", str(schema_file)])
        assert result.exit_code == 0, result.output
        output = tmp_path / "api-graphql.json"
        data = json.loads(output.read_text())
        assert data["kind"] == "gql"
        assert [node["kind"] for node in data["data"]] == [
            "ObjectDefinition",
            "QueryDefinition",
            "OperationDefinition",
        ]

    def test_stdout(self, runner, schema_file):
        result = runner.invoke(main, ["convert", str(schema_file), "-o", "-"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"][2]["fields"][0]["Type"] == "[]User"

    def test_schema_option_and_kind(self, runner, tmp_path):
        schema = tmp_path / "schema.graphql"
        schema.write_text("type User { id: ID! }")
        query = tmp_path / "query.graphql"
        query.write_text("query Me { me { id } }")
        output = tmp_path / "out.json"
        result = runner.invoke(
            main,
            ["convert", "-s", str(schema), str(query), "-o", str(output), "--kind", "api"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert data["kind"] == "api"
        assert [node["key"] for node in data["data"]] == ["User", "Me"]

    def test_optional_and_type_mappings(self, runner, tmp_path):
        schema = tmp_path / "api.graphql"
        schema.write_text("scalar UUID type User { uid: UUID! friend: User! }")
        result = runner.invoke(
            main,
            ["convert", str(schema), "-o", "-", "--optional", "--type-mappings", "UUID=uuid.UUID"],
        )
        assert result.exit_code == 0, result.output
        user = json.loads(result.output)["data"][1]
        assert {f["nameOrig"]: f["Type"] for f in user["fields"]} == {
            "uid": "uuid.UUID",
            "friend": "*User",
        }

    def test_custom_query_type(self, runner, tmp_path):
        schema = tmp_path / "api.graphql"
        schema.write_text("type RootQuery { me: String }")
        result = runner.invoke(main, ["convert", str(schema), "-o", "-", "--query-type", "RootQuery"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"][0]["kind"] == "QueryDefinition"

    def test_up_to_date_output_skipped(self, runner, schema_file, tmp_path):
        output = tmp_path / "api-graphql.json"
        output.write_text("stale")
        os.utime(schema_file, (1000, 1000))
        os.utime(output, (2000, 2000))
        result = runner.invoke(main, ["convert", str(schema_file)])
        assert result.exit_code == 0
        assert output.read_text() == "stale"

    def test_force(self, runner, schema_file, tmp_path):
        output = tmp_path / "api-graphql.json"
        output.write_text("stale")
        os.utime(schema_file, (1000, 1000))
        os.utime(output, (2000, 2000))
        result = runner.invoke(main, ["convert", str(schema_file), "--force"])
        assert result.exit_code == 0
        assert json.loads(output.read_text())["kind"] == "gql"

    def test_changed_exit_status(self, runner, schema_file):
        result = runner.invoke(main, ["convert", str(schema_file), "--changed"])
        assert result.exit_code == 2

    def test_changed_not_set_when_up_to_date(self, runner, schema_file, tmp_path):
        output = tmp_path / "api-graphql.json"
        output.write_text("stale")
        os.utime(schema_file, (1000, 1000))
        os.utime(output, (2000, 2000))
        result = runner.invoke(main, ["convert", str(schema_file), "--changed"])
        assert result.exit_code == 0

    def test_syntax_error(self, runner, tmp_path):
        schema = tmp_path / "broken.graphql"
        schema.write_text("type User {")
        result = runner.invoke(main, ["convert", str(schema), "-o", "-"])
        assert result.exit_code == 1
        assert "failed to parse file" in result.output

    def test_bad_type_mapping(self, runner, schema_file):
        result = runner.invoke(main, ["convert", str(schema_file), "-o", "-", "--type-mappings", "UUID"])
        assert result.exit_code == 1
        assert "invalid type mapping" in result.output

    def test_malformed_directive(self, runner, tmp_path):
        schema = tmp_path / "api.graphql"
        schema.write_text("type User { name: String @size(max: -1) }")
        result = runner.invoke(main, ["convert", str(schema), "-o", "-"])
        assert result.exit_code == 1
        assert "not a valid unsigned integer" in result.output

    def test_no_inputs(self, runner):
        result = runner.invoke(main, ["convert"])
        assert result.exit_code == 2
        assert "no input files given" in result.output

    def test_id_suffix_warning(self, runner, tmp_path):
        schema = tmp_path / "api.graphql"
        schema.write_text("type User { ownerID: ID }")
        output = tmp_path / "out.json"
        result = runner.invoke(main, ["convert", str(schema), "-o", str(output)])
        assert result.exit_code == 0
        assert "Model 'User', Field 'ownerID' ends with ID, use Id instead" in result.output

    def test_remove_comments(self, runner, tmp_path):
        schema = tmp_path / "api.graphql"
        schema.write_text('"""\nA user\n"""\ntype User { id: ID! }')
        result = runner.invoke(main, ["convert", str(schema), "-o", "-", "--remove-comments"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"][0]["comment"] == ""


class TestRender:
    """Tests for the render command."""

    def test_render_to_stdout(self, runner, schema_file, tmp_path):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "ops.j2").write_text(
            "{% for node in data if node.kind == 'OperationDefinition' %}{{ node.Name }}{% endfor %}"
        )
        result = runner.invoke(
            main, ["render", str(schema_file), "-t", "ops.j2", "-d", str(templates)]
        )
        assert result.exit_code == 0, result.output
        assert result.output == "Users"

    def test_render_to_file(self, runner, schema_file, tmp_path):
        template = tmp_path / "keys.j2"
        template.write_text("{% for node in data %}{{ node.key }} {% endfor %}")
        output = tmp_path / "keys.txt"
        result = runner.invoke(main, ["render", str(schema_file), "-t", str(template), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert output.read_text() == "User Query Users "

    def test_missing_template(self, runner, schema_file):
        result = runner.invoke(main, ["render", str(schema_file), "-t", "missing.j2"])
        assert result.exit_code == 1
        assert "template missing.j2" in result.output
