import pytest

from swagger_to_code.pipeline import CompilationError, CompilerConfig, ConfigurationError, SortParams


class TestCompilerConfig:
    def test_defaults(self):
        config = CompilerConfig()
        assert config.ignore_unused_models
        assert config.min_params_for_container == 2
        assert config.sort_params == SortParams.DESC.value
        assert config.default_tag == "Api"
        assert config.service_file_suffix == ".service"

    def test_from_dict_camel_case_keys(self):
        config = CompilerConfig.from_dict(
            {
                "includeTags": "pets,admin",
                "ignoreUnusedModels": False,
                "minParamsForContainer": 3,
                "sortParams": "asc",
                "defaultTag": "Default",
                "camelCase": True,
                "apiModule": False,
            }
        )
        assert config.include_tags == "pets,admin"
        assert not config.ignore_unused_models
        assert config.min_params_for_container == 3
        assert config.sort_params == "asc"
        assert config.default_tag == "Default"
        assert config.camel_case
        assert not config.api_module

    def test_from_dict_snake_case_keys(self):
        config = CompilerConfig.from_dict({"exclude_tags": ["admin"], "prefix": "Petstore"})
        assert config.exclude_tags == ["admin"]
        assert config.prefix == "Petstore"

    def test_custom_file_suffix(self):
        config = CompilerConfig.from_dict({"customFileSuffix": {"model": ".model"}})
        assert config.model_file_suffix == ".model"
        assert config.service_file_suffix == ".service"

    def test_unknown_keys_are_ignored(self):
        config = CompilerConfig.from_dict({"swagger": "x.json", "CAMEL_CASE_KEYS": {}, "command_line": "other"})
        assert config.command_line == "swagger_to_code"
        assert "includeTags" in CompilerConfig.CAMEL_CASE_KEYS

    def test_round_trip(self):
        config = CompilerConfig(include_tags=["pets"], camel_case=True, prefix="Store")
        data = config.to_dict()
        assert "command_line" not in data
        assert CompilerConfig.from_dict(data) == config

    def test_example_options(self):
        config = CompilerConfig.from_dict({"generateExamples": True, "customFileSuffix": {"example": ".example"}})
        assert config.generate_examples
        assert config.example_file_suffix == ".example"
        assert CompilerConfig().example_file_suffix == "-example"

    def test_string_values_are_coerced(self):
        config = CompilerConfig.from_dict(
            {"minParamsForContainer": "3", "camelCase": "true", "apiModule": "no", "errorHandler": 0, "prefix": 12}
        )
        assert config.min_params_for_container == 3
        assert config.camel_case is True
        assert config.api_module is False
        assert config.error_handler is False
        assert config.prefix == "12"

    def test_invalid_values_are_rejected(self):
        with pytest.raises(ConfigurationError, match="minParamsForContainer|min_params_for_container"):
            CompilerConfig.from_dict({"minParamsForContainer": "abc"})
        with pytest.raises(ConfigurationError, match="boolean"):
            CompilerConfig.from_dict({"camelCase": "maybe"})
        with pytest.raises(ConfigurationError, match="cannot be null"):
            CompilerConfig.from_dict({"ignoreUnusedModels": None})
        with pytest.raises(CompilationError):
            CompilerConfig.from_dict({"prefix": ["a", "b"]})
        with pytest.raises(ConfigurationError, match="mapping"):
            CompilerConfig.from_dict(["camelCase"])

    def test_optional_values_accept_null(self):
        config = CompilerConfig.from_dict({"includeTags": None, "templates": None})
        assert config.include_tags is None
        assert config.templates is None
