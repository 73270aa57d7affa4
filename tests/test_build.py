"""
Tests for building missing components on demand.
"""

import pytest

from refer.build import BuildReferencesDecorator
from refer.descriptor import Descriptor
from refer.exceptions import ReferenceNotFoundError
from refer.factory import Factory
from refer.references import References

from conftest import Plain

REGISTERED = Descriptor("app", "cache", "memory", "default", "1.0")
WANTED = Descriptor("app", "cache", "*", "*", "*")


class CountingFactory:
    """Factory that builds Plain components and counts its calls."""

    def __init__(self, locator=REGISTERED):
        self.locator = locator
        self.created = 0

    def can_create(self, locator):
        return self.locator if self.locator.match(locator) else None

    def create(self, locator):
        self.created += 1
        return Plain(f"built-{self.created}")


class BrokenProbeFactory:
    def can_create(self, locator):
        raise RuntimeError("probe failed")

    def create(self, locator):
        return Plain()


class FixedProbeFactory:
    """Factory that always reports the same locator."""

    def __init__(self, locator):
        self.locator = locator

    def can_create(self, locator):
        return self.locator

    def create(self, locator):
        return Plain()


class RejectingReferences(References):
    def put(self, locator, component):
        raise RuntimeError("read only")


class TestBuildReferencesDecorator:
    """Test the build stage."""

    @pytest.fixture
    def references(self):
        return References()

    @pytest.fixture
    def factory(self):
        return CountingFactory()

    @pytest.fixture
    def build(self, references, factory):
        references.put("factory", factory)
        return BuildReferencesDecorator(references)

    def test_existing_component_not_built(self, build, factory):
        cache = Plain("cache")
        build.put(REGISTERED, cache)

        assert build.find(WANTED, True) == [cache]
        assert factory.created == 0

    def test_required_lookup_builds_component(self, build, factory):
        component = build.get_one_required(WANTED)

        assert component.name == "built-1"
        assert factory.created == 1

    def test_built_component_registered_in_parent(self, build, references, factory):
        component = build.get_one_required(WANTED)

        assert references.get_one_required(REGISTERED) is component
        assert build.get_one_required(WANTED) is component
        assert factory.created == 1

    def test_optional_lookup_does_not_build(self, build, factory):
        assert build.find(WANTED, False) == []
        assert build.get_one_optional(WANTED) is None
        assert factory.created == 0

    def test_no_factory_can_create(self, build):
        with pytest.raises(ReferenceNotFoundError):
            build.find(Descriptor("app", "logger", "*", "*", "*"), True)

    def test_failing_probe_is_not_found(self, references):
        references.put("factory", BrokenProbeFactory())
        build = BuildReferencesDecorator(references)

        assert build.find_factory(WANTED) is None
        with pytest.raises(ReferenceNotFoundError):
            build.find(WANTED, True)

    def test_failing_create_is_not_found(self, references):
        factory = Factory()
        factory.register(REGISTERED, lambda locator: 1 / 0)
        references.put("factory", factory)
        build = BuildReferencesDecorator(references)

        assert build.find_factory(WANTED) is factory
        assert build.create(WANTED, factory) is None
        with pytest.raises(ReferenceNotFoundError):
            build.get_one_required(WANTED)

    def test_first_capable_factory_wins(self, references):
        first = CountingFactory()
        second = CountingFactory()
        references.put("factory", Plain())
        references.put("factory", first)
        references.put("factory", second)
        build = BuildReferencesDecorator(references)

        build.get_one_required(WANTED)

        assert first.created == 1
        assert second.created == 0

    def test_registration_failure_still_returns_component(self, factory):
        base = References([("factory", factory)])
        build = BuildReferencesDecorator(base, RejectingReferences())

        components = build.find(WANTED, True)

        assert [c.name for c in components] == ["built-1"]


class TestClarifyLocator:
    """Test merging requested and factory locators."""

    @pytest.fixture
    def build(self):
        return BuildReferencesDecorator(References())

    def test_fills_wildcards_from_factory(self, build):
        factory = FixedProbeFactory(Descriptor("g2", "t", "k2", "n", "v"))

        clarified = build.clarify_locator(Descriptor("g", None, "k", None, None), factory)

        assert clarified == Descriptor("g", "t", "k", "n", "v")

    def test_without_factory(self, build):
        locator = Descriptor("g", None, "k", None, None)

        assert build.clarify_locator(locator, None) is locator

    def test_non_descriptor_locator(self, build):
        factory = FixedProbeFactory(Descriptor("g2", "t", "k2", "n", "v"))

        assert build.clarify_locator("cache", factory) == "cache"

    def test_factory_reports_non_descriptor(self, build):
        locator = Descriptor("g", None, "k", None, None)

        assert build.clarify_locator(locator, FixedProbeFactory("cache")) is locator

    def test_built_component_registered_under_clarified_locator(self):
        factory = CountingFactory()
        references = References([("factory", factory)])
        build = BuildReferencesDecorator(references)

        build.get_one_required(Descriptor("app", "cache", "*", "*", "*"))

        assert references.get_all_locators()[-1] == REGISTERED
