"""Unit tests for DependencyResolver."""

from typing import List, Optional, Protocol, Union

import pytest

from contextual_di.application.resolver import DependencyResolver, is_assignable
from contextual_di.domain import CircularDependencyError, IContainer, IResolver, UnresolvableError


class MockContainer(IContainer):
    """Mock container returning preset instances or constructing types directly."""

    def __init__(self, instances=None):
        self.instances = dict(instances or {})
        self.requested = []

    def register_binding(self, dependency_type, lifetime, builder):
        pass

    def register_singletons(self, dependencies):
        pass

    def register_transients(self, dependencies):
        pass

    def register_scoped(self, dependencies):
        pass

    def resolve(self, dependency_type):
        self.requested.append(dependency_type)
        if dependency_type in self.instances:
            return self.instances[dependency_type]
        return dependency_type()

    def is_registered(self, dependency_type):
        return dependency_type in self.instances

    def activate_with_overrides(self, implementation_type, explicit_instances):
        return DependencyResolver().resolve_dependencies(implementation_type, self, explicit_instances)

    def create_scope(self):
        return self

    def clear(self):
        pass

    def get_registry_copy(self):
        return {}


class Clock:
    pass


class FrozenClock(Clock):
    pass


class Mailer:
    pass


class StubMailer(Mailer):
    __test__ = False


class Notifier:
    def __init__(self, clock: Clock, mailer: Mailer):
        self.clock = clock
        self.mailer = mailer


class TwoClocks:
    def __init__(self, primary: Clock, secondary: Clock, mailer: Mailer):
        self.primary = primary
        self.secondary = secondary
        self.mailer = mailer


class TestResolverInitialization:
    """Test cases for DependencyResolver initialization."""

    def test_resolver_implements_interface(self):
        """Test that DependencyResolver implements IResolver."""
        assert isinstance(DependencyResolver(), IResolver)


class TestConstructorParameters:
    """Test cases for constructor introspection."""

    def test_parameters_in_declared_order(self):
        """Test that parameters come back in order with their annotations."""
        params = DependencyResolver().get_constructor_parameters(Notifier)

        assert [p.name for p in params] == ["clock", "mailer"]
        assert [p.annotation for p in params] == [Clock, Mailer]

    def test_varargs_and_self_are_skipped(self):
        """Test that self, *args and **kwargs are not parameters."""

        class Flexible:
            def __init__(self, clock: Clock, *args, **kwargs):
                pass

        params = DependencyResolver().get_constructor_parameters(Flexible)

        assert [p.name for p in params] == ["clock"]

    def test_class_without_init(self):
        """Test that a class without __init__ has no parameters."""
        assert DependencyResolver().get_constructor_parameters(Clock) == []

    def test_default_and_positional_only_flags(self):
        """Test the flags recorded for defaults and positional-only parameters."""

        class Mixed:
            def __init__(self, clock: Clock, /, mailer: Mailer = None, *, retries: int = 3):
                pass

        clock, mailer, retries = DependencyResolver().get_constructor_parameters(Mixed)

        assert clock.positional_only and not clock.has_default
        assert mailer.has_default and mailer.default is None
        assert retries.has_default and retries.default == 3

    def test_unresolvable_forward_reference(self):
        """Test that an unknown forward reference raises UnresolvableError."""

        class Broken:
            def __init__(self, thing: "DoesNotExist"):  # noqa: F821
                pass

        with pytest.raises(UnresolvableError, match="Failed to inspect constructor"):
            DependencyResolver().get_constructor_parameters(Broken)


class TestDefaultResolution:
    """Test cases for resolution without explicit instances."""

    def test_resolves_from_container(self):
        """Test that every parameter is resolved from the container."""
        clock = Clock()
        container = MockContainer({Clock: clock})

        notifier = DependencyResolver().resolve_dependencies(Notifier, container)

        assert notifier.clock is clock
        assert isinstance(notifier.mailer, Mailer)
        assert container.requested == [Clock, Mailer]

    def test_default_values_are_kept(self):
        """Test that parameters with defaults are not resolved."""

        class WithDefault:
            def __init__(self, clock: Clock, mailer: Mailer = None):
                self.clock = clock
                self.mailer = mailer

        container = MockContainer()
        instance = DependencyResolver().resolve_dependencies(WithDefault, container)

        assert instance.mailer is None
        assert container.requested == [Clock]

    def test_missing_type_hint_raises(self):
        """Test that an untyped parameter without default raises."""

        class Untyped:
            def __init__(self, clock):
                pass

        with pytest.raises(UnresolvableError, match="Parameter 'clock' lacks type hint"):
            DependencyResolver().resolve_dependencies(Untyped, MockContainer())

    def test_container_failure_is_wrapped(self):
        """Test that a failing parameter resolution names the parameter."""

        class FailingContainer(MockContainer):
            def resolve(self, dependency_type):
                raise UnresolvableError(dependency_type, "nothing registered")

        with pytest.raises(UnresolvableError, match="parameter 'clock'") as exc_info:
            DependencyResolver().resolve_dependencies(Notifier, FailingContainer())

        assert exc_info.value.cls is Notifier

    def test_circular_error_is_not_wrapped(self):
        """Test that circular dependency errors pass through."""

        class CyclingContainer(MockContainer):
            def resolve(self, dependency_type):
                raise CircularDependencyError([Notifier, Clock, Notifier])

        with pytest.raises(CircularDependencyError):
            DependencyResolver().resolve_dependencies(Notifier, CyclingContainer())

    def test_constructor_failure_is_wrapped(self):
        """Test that exceptions raised by __init__ become UnresolvableError."""

        class Exploding:
            def __init__(self, clock: Clock):
                raise RuntimeError("boom")

        with pytest.raises(UnresolvableError, match="boom"):
            DependencyResolver().resolve_dependencies(Exploding, MockContainer())


class TestExplicitInstances:
    """Test cases for binding explicit instances to parameters."""

    def test_explicit_instance_preferred(self):
        """Test that a matching explicit instance wins over the container."""
        frozen = FrozenClock()
        container = MockContainer({Clock: Clock()})

        notifier = DependencyResolver().resolve_dependencies(Notifier, container, [frozen])

        assert notifier.clock is frozen
        assert container.requested == [Mailer]

    def test_instance_is_consumed_once(self):
        """Test that one instance compatible with two parameters only binds the first."""
        frozen = FrozenClock()
        default_clock = Clock()
        container = MockContainer({Clock: default_clock})

        result = DependencyResolver().resolve_dependencies(TwoClocks, container, [frozen])

        assert result.primary is frozen
        assert result.secondary is default_clock

    def test_two_instances_fill_two_parameters_in_order(self):
        """Test that instances are taken in declaration order."""
        first, second = FrozenClock(), FrozenClock()

        result = DependencyResolver().resolve_dependencies(TwoClocks, MockContainer(), [first, second])

        assert result.primary is first
        assert result.secondary is second

    def test_same_object_twice_gives_two_slots(self):
        """Test that duplicate entries are independent slots."""
        frozen = FrozenClock()

        result = DependencyResolver().resolve_dependencies(TwoClocks, MockContainer(), [frozen, frozen])

        assert result.primary is frozen
        assert result.secondary is frozen

    def test_order_of_distinct_types_does_not_matter(self):
        """Test that distinct instances land on their own parameters in either order."""
        frozen, mailer = FrozenClock(), StubMailer()
        resolver = DependencyResolver()

        forward = resolver.resolve_dependencies(Notifier, MockContainer(), [frozen, mailer])
        backward = resolver.resolve_dependencies(Notifier, MockContainer(), [mailer, frozen])

        assert (forward.clock, forward.mailer) == (frozen, mailer)
        assert (backward.clock, backward.mailer) == (frozen, mailer)

    def test_unmatched_instance_is_ignored(self):
        """Test that an instance matching no parameter is silently unused."""

        class Unrelated:
            pass

        notifier = DependencyResolver().resolve_dependencies(Notifier, MockContainer(), [Unrelated()])

        assert type(notifier.clock) is Clock
        assert type(notifier.mailer) is Mailer

    def test_explicit_instance_overrides_default_value(self):
        """Test that a defaulted parameter accepts a matching explicit instance."""

        class WithDefault:
            def __init__(self, mailer: Mailer = None):
                self.mailer = mailer

        mailer = StubMailer()
        instance = DependencyResolver().resolve_dependencies(WithDefault, MockContainer(), [mailer])

        assert instance.mailer is mailer

    def test_positional_only_parameters(self):
        """Test that positional-only parameters are passed positionally."""

        class Positional:
            def __init__(self, clock: Clock = None, mailer: Mailer = None, /):
                self.clock = clock
                self.mailer = mailer

        mailer = StubMailer()
        instance = DependencyResolver().resolve_dependencies(Positional, MockContainer(), [mailer])

        assert instance.clock is None
        assert instance.mailer is mailer

    def test_optional_annotation_matches(self):
        """Test that Optional[X] accepts an instance of X."""

        class OptionalClock:
            def __init__(self, clock: Optional[Clock]):
                self.clock = clock

        frozen = FrozenClock()
        instance = DependencyResolver().resolve_dependencies(OptionalClock, MockContainer(), [frozen])

        assert instance.clock is frozen


class TestIsAssignable:
    """Test cases for is_assignable."""

    def test_plain_classes(self):
        """Test subclass and unrelated class checks."""
        assert is_assignable(FrozenClock(), Clock)
        assert not is_assignable(Clock(), FrozenClock)
        assert not is_assignable(Mailer(), Clock)

    def test_unions(self):
        """Test Union and PEP 604 unions."""
        assert is_assignable(Mailer(), Union[Clock, Mailer])
        assert is_assignable(Mailer(), Clock | Mailer)
        assert not is_assignable(Notifier(Clock(), Mailer()), Optional[Clock])

    def test_generic_alias_uses_origin(self):
        """Test that List[int] matches a list."""
        assert is_assignable([1, 2], List[int])

    def test_non_runtime_protocol_never_matches(self):
        """Test that protocols without runtime_checkable do not match."""

        class Ticking(Protocol):
            def tick(self) -> None: ...

        assert not is_assignable(Clock(), Ticking)

    def test_missing_annotation(self):
        """Test that None never matches."""
        assert not is_assignable(Clock(), None)
