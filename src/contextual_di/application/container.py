import logging
from typing import Any, Callable, Dict, Optional, Sequence, Type, TypeVar

from contextual_di.application.circular_detector import CircularDependencyDetector
from contextual_di.application.lifetime_manager import LifetimeManager
from contextual_di.application.replacement_spec import ReplacementSpec, with_replacement
from contextual_di.application.resolver import DependencyResolver
from contextual_di.domain import (
    DependencyMetadata,
    IContainer,
    ILifetimeManager,
    IResolver,
    Lifetime,
    LifetimeError,
    Registration,
    ScopeError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class DIContainer(IContainer):
    """Main dependency injection container.

    Orchestrates registration and resolution of dependencies using domain objects.
    Supports singleton, transient, and scoped lifetimes with auto-wiring, and
    bindings whose constructor dependencies are partly replaced through
    ``with_replacement``.

    Attributes:
        _registry: Dictionary mapping dependency types to their metadata.
        _resolver: Component responsible for auto-wiring dependencies.
        _lifetime_manager: Component managing instance lifetimes.
        _circular_detector: Component detecting circular dependencies.
        _is_scope: Whether this container was created by ``create_scope``.
        _closed: Whether this scope has been exited.
    """

    def __init__(self, parent_singleton_cache: Optional[Dict[Type, Any]] = None) -> None:
        """Initialize the DI container.

        Args:
            parent_singleton_cache: Singleton cache shared with a parent container.
                Only passed by ``create_scope``.
        """
        self._registry: Dict[Type, DependencyMetadata] = {}
        self._resolver: IResolver = DependencyResolver()
        self._lifetime_manager: ILifetimeManager = LifetimeManager(parent_singleton_cache)
        self._circular_detector = CircularDependencyDetector()
        self._is_scope = parent_singleton_cache is not None
        self._closed = False

    def register_binding(
        self,
        dependency_type: Type,
        lifetime: Lifetime,
        builder: Callable[[IContainer], Any],
    ) -> None:
        """Register one binding with validation.

        Registering a type again with the same lifetime replaces the builder
        and drops any cached instance.

        Args:
            dependency_type: The type to register.
            lifetime: How long the instance should live.
            builder: Factory function to create the instance.

        Raises:
            LifetimeError: If already registered with a different lifetime.
        """
        lifetime = Lifetime.coerce(lifetime)
        existing = self._registry.get(dependency_type)
        if existing is not None:
            if existing.registration.lifetime != lifetime:
                raise LifetimeError(
                    f"Dependency {dependency_type.__name__} is already registered "
                    f"with lifetime {existing.registration.lifetime.value}, "
                    f"cannot re-register with {lifetime.value}"
                )
            self._lifetime_manager.evict(dependency_type)
            logger.debug("Replacing %s binding for %s", lifetime, dependency_type.__name__)

        registration = Registration(
            dependency_type=dependency_type,
            builder=builder,
            lifetime=lifetime,
        )
        self._registry[dependency_type] = DependencyMetadata(registration=registration)

    def register_singletons(self, dependencies: Dict[Type, Callable[[IContainer], Any]]) -> None:
        """Register multiple singleton dependencies at once.

        Singleton dependencies are created once and shared across the entire application.

        Args:
            dependencies: Dictionary mapping dependency types to builder functions.
                         Each builder receives the container and returns an instance.

        Raises:
            LifetimeError: If a dependency is already registered with a different lifetime.

        Example:
            >>> container.register_singletons({
            ...     AuditLog: lambda c: FileAuditLog("/var/log/audit"),
            ...     ReportRepository: lambda c: ReportRepository(c.resolve(AuditLog)),
            ... })
        """
        for dependency_type, builder in dependencies.items():
            self.register_binding(dependency_type, Lifetime.SINGLETON, builder)

    def register_transients(self, dependencies: Dict[Type, Callable[[IContainer], Any]]) -> None:
        """Register multiple transient dependencies at once.

        Transient dependencies are created fresh on each resolution.

        Args:
            dependencies: Dictionary mapping dependency types to builder functions.

        Raises:
            LifetimeError: If a dependency is already registered with a different lifetime.
        """
        for dependency_type, builder in dependencies.items():
            self.register_binding(dependency_type, Lifetime.TRANSIENT, builder)

    def register_scoped(self, dependencies: Dict[Type, Callable[[IContainer], Any]]) -> None:
        """Register multiple scoped dependencies at once.

        Scoped dependencies are created once per scope (see ``create_scope``).

        Args:
            dependencies: Dictionary mapping dependency types to builder functions.

        Raises:
            LifetimeError: If a dependency is already registered with a different lifetime.
        """
        for dependency_type, builder in dependencies.items():
            self.register_binding(dependency_type, Lifetime.SCOPED, builder)

    def with_replacement(self, replacement_type: Type, replaces: Optional[Type] = None) -> ReplacementSpec:
        """Start a replacement spec bound to this container.

        Args:
            replacement_type: Registered type whose instance is injected preferentially.
            replaces: Optional service type the replacement must be a subtype of.

        Example:
            >>> container.with_replacement(VerboseAuditLog, replaces=AuditLog).add_scoped(ReportService)
        """
        return with_replacement(self, replacement_type, replaces)

    def is_registered(self, dependency_type: Type) -> bool:
        return dependency_type in self._registry

    def resolve(self, dependency_type: type[T]) -> T:
        """Resolve and return an instance of the specified type.

        Uses auto-wiring if no explicit registration exists. Delegates to resolver
        for dependency graph construction and lifetime manager for instance creation.

        Args:
            dependency_type: The type to resolve.

        Returns:
            Instance of the requested type with all dependencies injected.

        Raises:
            UnresolvableError: If the dependency cannot be resolved.
            ReplacementUnresolvedError: If a replacement declared for the binding cannot be resolved.
            CircularDependencyError: If a circular dependency is detected.
            ScopeError: If this scope has already been closed.
        """
        if self._closed:
            raise ScopeError(f"Cannot resolve {dependency_type.__name__}: scope has been closed")

        with self._circular_detector.track(dependency_type):
            metadata = self._registry.get(dependency_type)
            if metadata is not None:
                instance = self._lifetime_manager.get_or_create(
                    metadata,
                    lambda: metadata.registration.builder(self),
                )
                metadata.resolution_count += 1
                return instance

            return self._resolver.resolve_dependencies(dependency_type, self)

    def activate_with_overrides(self, implementation_type: Type[T], explicit_instances: Sequence[Any]) -> T:
        """Construct an implementation, binding explicit instances before container defaults.

        Args:
            implementation_type: The concrete type to construct.
            explicit_instances: Already-resolved instances, in priority order.

        Returns:
            A new instance of ``implementation_type``.
        """
        return self._resolver.resolve_dependencies(implementation_type, self, explicit_instances)

    def get_registry_copy(self) -> Dict[Type, DependencyMetadata]:
        """Get a copy of the registry for scope inheritance."""
        return self._registry.copy()

    def set_registry(self, registry: Dict[Type, DependencyMetadata]) -> None:
        """Set the registry from a parent container.

        Args:
            registry: Registry to inherit.
        """
        self._registry = registry

    def create_scope(self) -> "DIContainer":
        """Create a child container for scoped lifetime.

        Scoped containers inherit a copy of the parent registrations and share
        its singleton cache, but keep their own cache for scoped dependencies.
        Registrations added to a scope stay local to it.

        Returns:
            New container that inherits parent registrations.

        Example:
            >>> with container.create_scope() as scoped:
            ...     ctx1 = scoped.resolve(RequestContext)
            ...     ctx2 = scoped.resolve(RequestContext)
            ...     assert ctx1 is ctx2
        """
        scoped_container = DIContainer(parent_singleton_cache=self._lifetime_manager.get_singleton_cache())
        scoped_container.set_registry(self.get_registry_copy())
        return scoped_container

    def close(self) -> None:
        """End this scope: drop its scoped instances and refuse further resolutions.

        Closing the root container only drops scoped instances it cached.
        """
        self._lifetime_manager.clear_scoped_cache()
        if self._is_scope:
            self._closed = True

    def clear(self) -> None:
        """Clear all registrations and cached instances.

        A scope never clears the singleton cache it shares with its parent.
        """
        self._registry.clear()
        if self._is_scope:
            self._lifetime_manager.clear_scoped_cache()
        else:
            self._lifetime_manager.clear_cache()
        self._circular_detector.clear()

    def __enter__(self) -> "DIContainer":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.close()
        return False
