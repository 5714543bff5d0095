from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Sequence, Type, TypeVar

from contextual_di.domain.enums import Lifetime
from contextual_di.domain.models import ConstructorParameter, DependencyMetadata

T = TypeVar("T")


class IContainer(ABC):
    """Abstract interface for dependency injection container operations."""

    @abstractmethod
    def register_binding(
        self,
        dependency_type: Type,
        lifetime: Lifetime,
        builder: Callable[["IContainer"], Any],
    ) -> None:
        """Register a single binding with an explicit builder and lifetime.

        Args:
            dependency_type: The service type to bind.
            lifetime: How long resolved instances are reused.
            builder: Factory function receiving the resolving container.
        """

    @abstractmethod
    def register_singletons(self, dependencies: Dict[Type, Callable[["IContainer"], Any]]) -> None:
        """Register multiple singleton dependencies at once.

        Args:
            dependencies: A dictionary mapping types to their builder functions.
        """

    @abstractmethod
    def register_transients(self, dependencies: Dict[Type, Callable[["IContainer"], Any]]) -> None:
        """Register multiple transient dependencies at once.

        Args:
            dependencies: A dictionary mapping types to their builder functions.
        """

    @abstractmethod
    def register_scoped(self, dependencies: Dict[Type, Callable[["IContainer"], Any]]) -> None:
        """Register multiple scoped dependencies at once.

        Args:
            dependencies: A dictionary mapping types to their builder functions.
        """

    @abstractmethod
    def resolve(self, dependency_type: Type[T]) -> T:
        """Resolve and return an instance of the requested class type.

        Args:
            dependency_type: The type to resolve.
        """

    @abstractmethod
    def is_registered(self, dependency_type: Type) -> bool:
        """Return whether an explicit binding exists for the type."""

    @abstractmethod
    def activate_with_overrides(self, implementation_type: Type[T], explicit_instances: Sequence[Any]) -> T:
        """Construct an implementation preferring explicit instances for its parameters.

        Args:
            implementation_type: The concrete type to construct.
            explicit_instances: Already-resolved instances, in priority order.
        """

    @abstractmethod
    def create_scope(self) -> "IContainer":
        """Create and return a new scoped container instance."""

    @abstractmethod
    def clear(self) -> None:
        """Clear all registrations and instances from the container."""

    @abstractmethod
    def get_registry_copy(self) -> Dict[Type, DependencyMetadata]:
        """Get a copy of the current registry of dependencies."""


class IResolver(ABC):
    """Abstract interface for constructor introspection and activation."""

    @abstractmethod
    def get_constructor_parameters(self, dependency_type: Type) -> List[ConstructorParameter]:
        """Describe the injectable constructor parameters of a type, in declared order.

        Args:
            dependency_type: The type to inspect.
        """

    @abstractmethod
    def resolve_dependencies(
        self,
        dependency_type: Type,
        container: IContainer,
        explicit_instances: Sequence[Any] = (),
    ) -> Any:
        """Resolve all constructor dependencies and create instance.

        Args:
            dependency_type: The type to resolve.
            container: The DI container to use for resolving dependencies.
            explicit_instances: Instances bound preferentially to matching parameters.

        Returns:
            Instance with all dependencies injected.

        Raises:
            UnresolvableError: If a dependency cannot be resolved.
        """


class ILifetimeManager(ABC):
    """Abstract interface for managing dependency lifetimes."""

    @abstractmethod
    def get_or_create(
        self,
        metadata: DependencyMetadata,
        factory: Callable[[], Any],
    ) -> Any:
        """Get existing instance or create a new one based on lifetime.

        Args:
            metadata: The dependency metadata containing registration info.
            factory: A callable to create a new instance if needed.
        """

    @abstractmethod
    def evict(self, dependency_type: Type) -> None:
        """Drop any cached instance of the given type."""

    @abstractmethod
    def get_singleton_cache(self) -> Dict[Type, Any]:
        """Return the singleton cache so scopes can share it."""

    @abstractmethod
    def clear_cache(self) -> None:
        """Clear any cached instances managed by this lifetime manager."""

    @abstractmethod
    def clear_scoped_cache(self) -> None:
        """Clear only the scoped instances cache."""
