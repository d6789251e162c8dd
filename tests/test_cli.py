import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from openapi_node_builder.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliBuild:
    def test_build_json(self, tmp_path):
        output = tmp_path / "out" / "properties.json"
        runner = CliRunner()
        result = runner.invoke(main, ["build", str(FIXTURES / "petstore.yaml"), "-o", str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert data[0]["name"] == "resource"
        assert data[1]["displayOptions"] == {"show": {"resource": ["Pet"]}}
        assert "Generated 14 properties" in result.output

    def test_build_yaml_without_notice(self, tmp_path):
        output = tmp_path / "properties.yaml"
        runner = CliRunner()
        result = runner.invoke(
            main, ["build", str(FIXTURES / "petstore.yaml"), "-o", str(output), "--no-notice"]
        )

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(output.read_text())
        assert not any(p["type"] == "notice" and "typeOptions" in p for p in data)

    def test_build_with_config(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("overrides:\n  - find: {name: resource}\n    replace: {default: Store}\n")
        output = tmp_path / "properties.json"
        runner = CliRunner()
        result = runner.invoke(
            main, ["build", str(FIXTURES / "petstore.yaml"), "-o", str(output), "--config", str(config)]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())[0]["default"] == "Store"

    def test_build_rejects_non_openapi(self, tmp_path):
        doc = tmp_path / "doc.md"
        doc.write_text("# API Docs\nSome text")
        runner = CliRunner()
        result = runner.invoke(main, ["build", str(doc), "-o", str(tmp_path / "out.json")])

        assert result.exit_code == 1
        assert "not an OpenAPI document" in result.output

    def test_build_fails_without_operations(self, tmp_path):
        doc = tmp_path / "empty.yaml"
        doc.write_text("openapi: 3.0.0\npaths: {}\n")
        runner = CliRunner()
        result = runner.invoke(main, ["build", str(doc), "-o", str(tmp_path / "out.json")])

        assert result.exit_code == 1
        assert "No operations found" in result.output

    def test_build_reports_failed_operations(self, tmp_path):
        doc = tmp_path / "api.yaml"
        doc.write_text(
            "openapi: 3.0.0\n"
            "paths:\n"
            "  /a:\n"
            "    get:\n"
            "      operationId: untagged\n"
            "  /b:\n"
            "    get:\n"
            "      operationId: tagged\n"
            "      tags: [b]\n"
        )
        runner = CliRunner()
        result = runner.invoke(main, ["build", str(doc), "-o", str(tmp_path / "out.json")])

        assert result.exit_code == 0, result.output
        assert "Skipped 1 operations" in result.output


class TestCliInspect:
    def test_inspect_lists_resources(self):
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", str(FIXTURES / "petstore.yaml")])

        assert result.exit_code == 0, result.output
        assert "Pet:" in result.output
        assert "Store:" in result.output
        assert "List Pets (GET /pets)" in result.output
        assert "Delete Pet" not in result.output

    def test_inspect_include_deprecated(self):
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", str(FIXTURES / "petstore.yaml"), "--include-deprecated"])
        assert "Delete Pet" in result.output

    def test_build_tolerates_string_tags(self, tmp_path):
        doc = tmp_path / "api.yaml"
        doc.write_text(
            "openapi: 3.0.0\n"
            "tags: [pet]\n"
            "paths:\n"
            "  /pets:\n"
            "    get:\n"
            "      operationId: listPets\n"
            "      tags: [pet]\n"
        )
        output = tmp_path / "out.json"
        runner = CliRunner()
        result = runner.invoke(main, ["build", str(doc), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())[0]["options"] == [{"name": "Pet", "value": "Pet"}]
