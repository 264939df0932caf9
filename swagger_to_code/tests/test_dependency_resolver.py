import pytest

from swagger_to_code.pipeline.analyzer import DependencyResolver, ModelDescriptor, TypeExpression


@pytest.fixture
def models():
    return {
        name.lower(): ModelDescriptor(name=name, model_class=name)
        for name in ("Pet", "Tag", "Error", "TheUser")
    }


class TestDependencyResolver:
    """Collection of model dependencies"""

    def test_first_seen_order_without_duplicates(self, models):
        resolver = DependencyResolver(models)
        resolver.add("Tag")
        resolver.add(TypeExpression.scalar("Pet"))
        resolver.add(TypeExpression(text="Array<Tag>", all_types=["Tag"]))
        resolver.add("tag")
        assert resolver.get() == ["Tag", "Pet"]

    def test_unknown_names_are_ignored(self, models):
        resolver = DependencyResolver(models)
        resolver.add("string")
        resolver.add(TypeExpression.scalar("'a' | 'b'"))
        resolver.add(None)
        assert resolver.get() == []

    def test_owner_is_excluded(self, models):
        resolver = DependencyResolver(models, "Pet")
        resolver.add("Pet")
        resolver.add("Array<Pet>")
        resolver.add("Tag")
        assert resolver.get() == ["Tag"]

    def test_wrappers_are_stripped(self, models):
        resolver = DependencyResolver(models)
        resolver.add("null | Array<Pet>")
        resolver.add(TypeExpression(text="Error[] | null", all_types=["Error[]"]))
        assert resolver.get() == ["Pet", "Error"]

    def test_compound_constituents(self, models):
        resolver = DependencyResolver(models)
        resolver.add(TypeExpression(text="{user: TheUser, tags: Array<Tag>}", all_types=["TheUser", "Array<Tag>"]))
        assert resolver.get() == ["TheUser", "Tag"]

    def test_lookup_uses_normalized_names(self, models):
        resolver = DependencyResolver(models)
        resolver.add("theuser")
        assert resolver.get() == ["TheUser"]
