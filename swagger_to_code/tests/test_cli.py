import json
from pathlib import Path

from click.testing import CliRunner

from swagger_to_code.cli_utils import reconstruct_command_line
from swagger_to_code.swagger_to_code import swagger_to_code

TEST_DATA = Path(__file__).parent / "test_data"


class TestCli:
    """Command line entry point"""

    def test_generate(self, tmp_path):
        output = tmp_path / "api"
        result = CliRunner().invoke(swagger_to_code, [str(TEST_DATA / "petstore.json"), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert (output / "models" / "pet.ts").exists()
        assert (output / "services" / "admin.service.ts").exists()
        content = (output / "models" / "pet.ts").read_text()
        assert "// Generated by swagger_to_code petstore.json" in content

    def test_options_override_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"prefix": "Store", "excludeTags": "pets"}))
        output = tmp_path / "api"
        result = CliRunner().invoke(
            swagger_to_code,
            [
                str(TEST_DATA / "petstore.json"),
                "-o",
                str(output),
                "-c",
                str(config),
                "--exclude-tags",
                "admin",
                "--keep-unused-models",
            ],
        )
        assert result.exit_code == 0, result.output
        assert (output / "store.module.ts").exists()
        assert (output / "services" / "pets.service.ts").exists()
        assert not (output / "services" / "admin.service.ts").exists()
        assert (output / "models" / "orphan.ts").exists()

    def test_compilation_error(self, tmp_path):
        document = tmp_path / "openapi.json"
        document.write_text(json.dumps({"openapi": "3.0.0"}))
        result = CliRunner().invoke(swagger_to_code, [str(document), "-o", str(tmp_path / "api")])
        assert result.exit_code == 1
        assert "Must be a 2.0" in result.output

    def test_missing_file(self, tmp_path):
        result = CliRunner().invoke(swagger_to_code, [str(tmp_path / "missing.json")])
        assert result.exit_code == 2

    def test_reconstruct_command_line_without_context(self):
        assert reconstruct_command_line(swagger_to_code) == "swagger_to_code"

    def test_generate_examples_and_templates(self, tmp_path):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "configuration.ts.jinja2").write_text("export const ROOT_URL = '{{ root_url }}';\n")
        output = tmp_path / "api"
        result = CliRunner().invoke(
            swagger_to_code,
            [str(TEST_DATA / "petstore.json"), "-o", str(output), "--generate-examples", "--templates", str(templates)],
        )
        assert result.exit_code == 0, result.output
        assert "getPetExample" in (output / "models" / "pet-example.ts").read_text()
        assert (output / "api-configuration.ts").read_text() == "export const ROOT_URL = 'https://petstore.example.com/v1';\n"

    def test_invalid_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"minParamsForContainer": "many"}))
        result = CliRunner().invoke(swagger_to_code, [str(TEST_DATA / "petstore.json"), "-o", str(tmp_path / "api"), "-c", str(config)])
        assert result.exit_code == 1
        assert "must be an integer" in result.output
