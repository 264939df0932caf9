import json
from pathlib import Path
from unittest import TestCase

import pytest

from swagger_to_code.pipeline import CompilerConfig, UnresolvedReferenceError
from swagger_to_code.pipeline.analyzer import ModelBuilder, ModelKind

TEST_DATA = Path(__file__).parent / "test_data"


def build(definitions, config=None):
    return ModelBuilder(config or CompilerConfig()).build(definitions)


class TestPetstoreModels(TestCase):
    """Models of the petstore document"""

    def setUp(self):
        with open(TEST_DATA / "petstore.json") as f:
            self.models = build(json.load(f)["definitions"])

    def test_table_is_keyed_by_normalized_class_name(self):
        self.assertEqual(
            list(self.models),
            ["animal", "pet", "petstatus", "tag", "petlist", "error", "adminreport", "orphan"],
        )

    def test_composition_with_parent_is_object(self):
        pet = self.models["pet"]
        self.assertEqual(pet.kind, ModelKind.OBJECT)
        self.assertEqual(pet.parents, ["Animal"])
        self.assertEqual(pet.description, "A pet of the store")
        self.assertEqual([p.name for p in pet.properties], ["name", "status", "tags"])
        self.assertTrue(pet.properties[-1].is_last)
        self.assertFalse(pet.properties[0].is_last)

    def test_properties_types_and_required(self):
        props = {p.name: p for p in self.models["pet"].properties}
        self.assertEqual(str(props["name"].type), "string")
        self.assertTrue(props["name"].required)
        self.assertEqual(str(props["status"].type), "PetStatus")
        self.assertFalse(props["status"].required)
        self.assertEqual(str(props["tags"].type), "Array<Tag>")

    def test_hierarchy_is_linked_both_ways(self):
        self.assertEqual(self.models["animal"].subclasses, ["Pet"])
        for model in self.models.values():
            for parent in model.parents:
                self.assertIn(model.model_class, self.models[parent.lower()].subclasses)

    def test_dependencies(self):
        self.assertEqual(self.models["pet"].dependencies, ["Animal", "PetStatus", "Tag"])
        self.assertEqual(self.models["petlist"].dependencies, ["Pet"])
        self.assertEqual(self.models["animal"].dependencies, [])

    def test_subclasses_are_not_dependencies(self):
        self.assertNotIn("Pet", self.models["animal"].dependencies)

    def test_composition_with_enum_is_enum(self):
        status = self.models["petstatus"]
        self.assertEqual(status.kind, ModelKind.ENUM)
        self.assertEqual([v.name for v in status.enum_values], ["AVAILABLE", "PENDING", "SOLD"])
        self.assertEqual([v.value for v in status.enum_values], ["available", "pending", "sold"])
        self.assertTrue(status.enum_values[-1].is_last)
        self.assertEqual(status.dependencies, [])

    def test_array_model(self):
        pet_list = self.models["petlist"]
        self.assertEqual(pet_list.kind, ModelKind.ARRAY)
        self.assertEqual(str(pet_list.element_type), "Array<Pet>")

    def test_file_names(self):
        self.assertEqual(self.models["petstatus"].model_file, "pet-status")
        self.assertEqual(self.models["adminreport"].model_class, "AdminReport")


class TestModelClassification:
    """Classification of single definitions"""

    def test_every_model_has_exactly_one_kind(self):
        models = build(
            {
                "Obj": {"type": "object"},
                "Implicit": {"properties": {"a": {"type": "string"}}},
                "Arr": {"type": "array", "items": {"type": "string"}},
                "Union": {"oneOf": [{"$ref": "#/definitions/Obj"}, {"type": "string"}]},
                "Alias": {"type": "string"},
                "Multi": {"type": ["string", "integer"]},
            }
        )
        kinds = {m.model_class: m.kind for m in models.values()}
        assert kinds == {
            "Obj": ModelKind.OBJECT,
            "Implicit": ModelKind.OBJECT,
            "Arr": ModelKind.ARRAY,
            "Union": ModelKind.UNION,
            "Alias": ModelKind.SIMPLE,
            "Multi": ModelKind.SIMPLE,
        }

    def test_union_dependencies(self):
        models = build(
            {
                "Cat": {"type": "object"},
                "Dog": {"type": "object"},
                "Animal": {"anyOf": [{"$ref": "#/definitions/Cat"}, {"$ref": "#/definitions/Dog"}]},
            }
        )
        animal = models["animal"]
        assert str(animal.alias_type) == "Cat |\n  Dog"
        assert animal.is_simple
        assert animal.dependencies == ["Cat", "Dog"]

    def test_string_enum_definition_is_literal_alias(self):
        models = build({"Color": {"type": "string", "enum": ["red", "green"]}})
        color = models["color"]
        assert color.kind == ModelKind.SIMPLE
        assert str(color.alias_type) == "'red' | 'green'"
        assert color.dependencies == []

    def test_composition_without_parent_enum_or_properties_is_string(self):
        models = build({"Name": {"allOf": [{"type": "string"}]}})
        assert models["name"].kind == ModelKind.SIMPLE
        assert str(models["name"].alias_type) == "string"

    def test_composition_merges_properties_of_all_branches(self):
        models = build(
            {
                "Merged": {
                    "allOf": [
                        {"properties": {"a": {"type": "string"}}, "required": ["a"]},
                        {"properties": {"b": {"type": "integer"}}},
                    ]
                }
            }
        )
        merged = models["merged"]
        assert merged.kind == ModelKind.OBJECT
        assert [(p.name, p.required) for p in merged.properties] == [("a", True), ("b", False)]

    def test_additional_properties(self):
        models = build(
            {
                "Any": {"type": "object", "additionalProperties": True},
                "Typed": {"type": "object", "additionalProperties": {"$ref": "#/definitions/Any"}},
            }
        )
        assert str(models["any"].additional_properties_type) == "any"
        assert str(models["typed"].additional_properties_type) == "Any"
        assert models["typed"].dependencies == ["Any"]

    def test_self_reference_is_not_a_dependency(self):
        models = build(
            {
                "Node": {
                    "type": "object",
                    "properties": {
                        "children": {"type": "array", "items": {"$ref": "#/definitions/Node"}},
                        "parent": {"$ref": "#/definitions/Node"},
                    },
                }
            }
        )
        assert models["node"].dependencies == []

    def test_quoted_property_identifier(self):
        models = build({"Obj": {"properties": {"content-type": {"type": "string"}}}})
        assert models["obj"].properties[0].identifier == '"content-type"'

    def test_non_mapping_definitions_are_skipped(self):
        models = build({"//": "comment", "Obj": {"type": "object"}})
        assert list(models) == ["obj"]

    def test_unknown_parent_raises(self):
        with pytest.raises(UnresolvedReferenceError) as excinfo:
            build({"Pet": {"allOf": [{"$ref": "#/definitions/Missing"}, {"properties": {}}]}})
        assert excinfo.value.ref == "Missing"

    def test_class_name_collision_logs_and_keeps_later(self, caplog):
        models = build({"the-user": {"type": "object"}, "TheUser": {"type": "string"}})
        assert list(models) == ["theuser"]
        assert models["theuser"].name == "TheUser"
        assert "same class name" in caplog.text

    def test_file_suffix(self):
        models = build({"Pet": {"type": "object"}}, CompilerConfig(model_file_suffix=".model"))
        assert models["pet"].model_file == "pet.model"
