"""
Tests for the pass-through reference decorator.
"""

from refer.decorator import ReferencesDecorator
from refer.references import References

from conftest import Plain


class TestReferencesDecorator:
    """Test delegation to the base reference set."""

    def test_parent_defaults_to_base(self):
        base = References()
        decorator = ReferencesDecorator(base)

        assert decorator.base_references is base
        assert decorator.parent_references is base

    def test_base_defaults_to_parent(self):
        parent = References()
        decorator = ReferencesDecorator(parent_references=parent)

        assert decorator.base_references is parent

    def test_operations_reach_base(self):
        base = References()
        decorator = ReferencesDecorator(base)
        first, second = Plain("first"), Plain("second")

        decorator.put("cache", first)
        decorator.put("cache", second)
        decorator.put("logger", Plain("logger"))

        assert base.get_all_locators() == ["cache", "cache", "logger"]
        assert decorator.get_all_locators() == ["cache", "cache", "logger"]
        assert decorator.find("cache", True) == [first, second]
        assert decorator.get_one_required("cache") is first
        assert decorator.remove("cache") is first
        assert len(decorator.remove_all("logger")) == 1
        assert decorator.get_all() == [second]
        assert base.get_all() == [second]

    def test_decorators_stack(self):
        base = References()
        outer = ReferencesDecorator(ReferencesDecorator(base))
        component = Plain()

        outer.put("cache", component)

        assert base.get_one_required("cache") is component
        assert outer.get_one_required("cache") is component
