import copy
import json
import logging
from pathlib import Path

import pytest

from swagger_to_code.pipeline import CompilerConfig, SwaggerCompiler
from swagger_to_code.pipeline.analyzer import ModelDescriptor, ServiceDescriptor, TagFilter
from swagger_to_code.pipeline.analyzer.tag_filter import collect_dependencies, normalize_tags

TEST_DATA = Path(__file__).parent / "test_data"


@pytest.fixture
def petstore():
    with open(TEST_DATA / "petstore.json") as f:
        return json.load(f)


def model(name, *dependencies):
    return ModelDescriptor(name=name, model_class=name, dependencies=list(dependencies))


class TestNormalizeTags:
    def test_list_and_comma_string(self):
        assert normalize_tags(["pets", "admin"]) == {"Pets", "Admin"}
        assert normalize_tags("pets, admin") == {"Pets", "Admin"}

    def test_empty_is_not_set(self):
        assert normalize_tags(None) is None
        assert normalize_tags([]) is None
        assert normalize_tags("") is None

    def test_scalar_tags(self):
        assert normalize_tags([5, "pets"]) == {"5", "Pets"}
        assert normalize_tags(5) == {"5"}
        assert normalize_tags([None, " "]) is None


class TestCollectDependencies:
    def test_transitive_closure(self):
        models = {"a": model("A", "B"), "b": model("B", "C"), "c": model("C"), "d": model("D")}
        assert collect_dependencies(["A"], models) == {"a", "b", "c"}

    def test_cycles_terminate(self):
        models = {"a": model("A", "B"), "b": model("B", "A")}
        assert collect_dependencies(["B"], models) == {"a", "b"}

    def test_closure_is_a_fixed_point(self):
        models = {"a": model("A", "B", "C"), "b": model("B", "C"), "c": model("C", "A"), "d": model("D", "A")}
        closure = collect_dependencies(["A"], models)
        for key in closure:
            for dep in models[key].dependencies:
                assert dep.lower() in closure

    def test_unknown_names_are_ignored(self):
        assert collect_dependencies(["Missing"], {"a": model("A")}) == set()


class TestTagFilter:
    """Filtering of the petstore tables"""

    def _compile(self, document, **config):
        return SwaggerCompiler(CompilerConfig(**config)).compile(document)

    def test_unused_models_are_dropped(self, petstore):
        api = self._compile(petstore)
        assert "orphan" not in api.models
        assert "adminreport" in api.models
        assert set(api.models) == {"animal", "pet", "petstatus", "tag", "petlist", "error", "adminreport"}

    def test_exclude_tags(self, petstore, caplog):
        caplog.set_level(logging.INFO)
        api = self._compile(petstore, exclude_tags=["admin"])
        assert list(api.services) == ["Pets", "Api"]
        assert "adminreport" not in api.models
        assert "Ignoring service Admin because it was not included" in caplog.text
        assert "Ignoring model AdminReport because it was not used by any service" in caplog.text

    def test_include_tags(self, petstore):
        api = self._compile(petstore, include_tags="admin")
        assert list(api.services) == ["Admin"]
        assert list(api.models) == ["adminreport"]

    def test_include_tags_matching_nothing(self, petstore, caplog):
        caplog.set_level(logging.INFO)
        api = self._compile(petstore, include_tags=["store"])
        assert api.services == {}
        assert api.models == {}
        assert "Ignoring service Pets because it was not included" in caplog.text

    def test_keep_unused_models(self, petstore):
        api = self._compile(petstore, include_tags=["admin"], ignore_unused_models=False)
        assert list(api.services) == ["Admin"]
        assert "orphan" in api.models
        assert len(api.models) == 8

    def test_error_dependencies_are_kept(self, petstore):
        api = self._compile(petstore, include_tags=["pets"])
        assert "error" in api.models

    def test_idempotent(self, petstore):
        config = CompilerConfig(exclude_tags=["admin"])
        api = SwaggerCompiler(config).compile(petstore)
        models = dict(api.models)
        services = dict(api.services)

        tag_filter = TagFilter(config.include_tags, config.exclude_tags, config.ignore_unused_models)
        tag_filter.apply(api.models, api.services)
        assert api.models == models
        assert api.services == services

    def test_surviving_services_are_included(self, petstore):
        tag_filter = TagFilter(include_tags=["pets", "api"], exclude_tags=["api"])
        api = self._compile(petstore, include_tags=["pets", "api"], exclude_tags=["api"])
        assert list(api.services) == ["Pets"]
        for name in api.services:
            assert tag_filter.includes(name)

    def test_does_not_mutate_document(self, petstore):
        original = copy.deepcopy(petstore)
        self._compile(petstore, exclude_tags=["admin"])
        assert petstore == original

    def test_apply_on_plain_tables(self):
        models = {"a": model("A", "B"), "b": model("B"), "c": model("C")}
        services = {
            "One": ServiceDescriptor(name="One", dependencies=["A"]),
            "Two": ServiceDescriptor(name="Two", dependencies=["C"]),
        }
        TagFilter(exclude_tags=["two"]).apply(models, services)
        assert list(services) == ["One"]
        assert list(models) == ["a", "b"]
