import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from api_spec_builder.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliBuild:
    def test_build_yaml(self, tmp_path):
        output_file = tmp_path / "out" / "api.yaml"
        runner = CliRunner()
        result = runner.invoke(main, [
            "build", str(FIXTURES / "petstore_routes.yaml"),
            "-o", str(output_file),
            "--title", "Pet Store",
        ])

        assert result.exit_code == 0, result.output
        assert "Found 4 routes." in result.output
        doc = yaml.safe_load(output_file.read_text())
        assert doc["swagger"] == "2.0"
        assert doc["info"] == {"title": "Pet Store", "version": "1.0.0"}
        assert set(doc["paths"]) == {"/pets", "/pets/{petId}"}

    def test_build_json_by_suffix(self, tmp_path):
        output_file = tmp_path / "api.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "build", str(FIXTURES / "petstore_routes.yaml"),
            "-o", str(output_file),
            "--api-version", "3.2.1",
        ])

        assert result.exit_code == 0, result.output
        doc = json.loads(output_file.read_text())
        assert doc["info"]["version"] == "3.2.1"
        assert doc["paths"]["/pets"]["get"]["responses"]["200"]["schema"]["items"] == {"$ref": "#/definitions/store.Pet"}

    def test_explicit_format_overrides_suffix(self, tmp_path):
        output_file = tmp_path / "api.txt"
        runner = CliRunner()
        result = runner.invoke(main, [
            "build", str(FIXTURES / "petstore_routes.yaml"),
            "-o", str(output_file),
            "--format", "json",
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(output_file.read_text())["swagger"] == "2.0"

    def test_invalid_manifest_reports_error(self, tmp_path):
        manifest = tmp_path / "routes.yaml"
        manifest.write_text("routes:\n  - path: /pets\n")
        runner = CliRunner()
        result = runner.invoke(main, ["build", str(manifest), "-o", str(tmp_path / "api.yaml")])

        assert result.exit_code == 1
        assert "invalid route manifest" in result.output
        assert not (tmp_path / "api.yaml").exists()

    def test_invalid_type_reference_reports_error(self, tmp_path):
        manifest = tmp_path / "routes.yaml"
        manifest.write_text(
            "routes:\n"
            "  - method: GET\n"
            "    path: /pets\n"
            "    response_errors:\n"
            "      200:\n"
            "        message: OK\n"
            "        model: '[]'\n"
        )
        runner = CliRunner()
        result = runner.invoke(main, ["build", str(manifest), "-o", str(tmp_path / "api.yaml")])

        assert result.exit_code == 1
        assert "empty type expression" in result.output

    def test_requires_a_manifest(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["build", "-o", str(tmp_path / "api.yaml")])
        assert result.exit_code != 0
