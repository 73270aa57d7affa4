"""
Tests for component factories and the provides decorator.
"""

import pytest

from refer.decorators import provides
from refer.descriptor import Descriptor
from refer.exceptions import CreateError
from refer.factory import CompositeFactory, Factory

from conftest import Plain

CACHE = Descriptor("app", "cache", "memory", "*", "1.0")


class MemoryCache:
    pass


class TestFactory:
    """Test locator based creation."""

    @pytest.fixture
    def factory(self):
        factory = Factory()
        factory.register_as_type(CACHE, MemoryCache)
        factory.register(
            Descriptor("app", "logger", "console", "*", "1.0"),
            lambda locator: Plain(locator.name),
        )
        return factory

    def test_can_create_returns_registered_locator(self, factory):
        assert factory.can_create(Descriptor("app", "cache", "*", "*", "*")) == CACHE
        assert factory.can_create(Descriptor("app", "queue", "*", "*", "*")) is None

    def test_create_from_type(self, factory):
        assert isinstance(factory.create(Descriptor("app", "cache", "*", "*", "*")), MemoryCache)

    def test_creator_receives_locator(self, factory):
        component = factory.create(Descriptor("app", "logger", "console", "audit", "1.0"))

        assert component.name == "audit"

    def test_create_unknown(self, factory):
        with pytest.raises(CreateError):
            factory.create(Descriptor("app", "queue", "*", "*", "*"))

    def test_creator_failure_wrapped(self):
        factory = Factory()
        factory.register("broken", lambda locator: 1 / 0)

        with pytest.raises(CreateError) as exc_info:
            factory.create("broken")

        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)

    def test_register_validation(self):
        factory = Factory()

        with pytest.raises(ValueError):
            factory.register(None, lambda locator: Plain())
        with pytest.raises(TypeError):
            factory.register("cache", "not callable")
        with pytest.raises(TypeError):
            factory.register_as_type("cache", MemoryCache())

    def test_first_registration_wins(self):
        factory = Factory()
        factory.register("cache", lambda locator: Plain("first"))
        factory.register("cache", lambda locator: Plain("second"))

        assert factory.create("cache").name == "first"


class TestCompositeFactory:
    """Test aggregated factories."""

    def test_first_capable_factory_creates(self):
        empty = Factory()
        first = Factory()
        first.register("cache", lambda locator: Plain("first"))
        second = Factory()
        second.register("cache", lambda locator: Plain("second"))
        composite = CompositeFactory(empty, first)
        composite.add(second)

        assert composite.can_create("cache") == "cache"
        assert composite.create("cache").name == "first"

        composite.remove(first)
        assert composite.create("cache").name == "second"

    def test_nothing_can_create(self):
        composite = CompositeFactory(Factory())

        assert composite.can_create("cache") is None
        with pytest.raises(CreateError):
            composite.create("cache")

    def test_add_none(self):
        with pytest.raises(ValueError):
            CompositeFactory().add(None)


class TestProvides:
    """Test registration by decorator."""

    def test_class_registration(self):
        factory = Factory()

        @provides(factory, CACHE)
        class DecoratedCache:
            pass

        assert isinstance(factory.create(CACHE), DecoratedCache)

    def test_function_registration(self):
        factory = Factory()
        locator = Descriptor("app", "logger", "console", "*", "1.0")

        @provides(factory, locator)
        def create_logger(requested):
            return Plain(requested.name)

        assert create_logger(locator).name is None
        assert factory.create(Descriptor("app", "logger", "console", "main", "1.0")).name == "main"

    def test_invalid_target(self):
        with pytest.raises(TypeError):
            provides(Factory(), CACHE)("not callable")
