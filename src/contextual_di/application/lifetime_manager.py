from typing import Any, Callable, Dict, Optional, Type

from contextual_di.domain import (
    CircularDependencyError,
    DependencyMetadata,
    ILifetimeManager,
    Lifetime,
    UnresolvableError,
)


class LifetimeManager(ILifetimeManager):
    """Manages instance lifetimes for singleton, transient, and scoped dependencies.

    A root container owns its singleton cache; scopes created from it receive
    the same dict so singletons are shared, while each scope keeps a private
    scoped cache.

    Attributes:
        _singleton_cache: Cache for singleton instances.
        _scoped_cache: Cache for scoped instances (per scope context).
    """

    def __init__(self, parent_singleton_cache: Optional[Dict[Type, Any]] = None) -> None:
        """Initialize the lifetime manager.

        Args:
            parent_singleton_cache: Singleton cache of the parent container, for scopes.
        """
        self._singleton_cache: Dict[Type, Any] = {} if parent_singleton_cache is None else parent_singleton_cache
        self._scoped_cache: Dict[Type, Any] = {}

    def get_or_create(self, metadata: DependencyMetadata, factory: Callable[[], Any]) -> Any:
        """Get existing instance or create new one based on lifetime.

        Args:
            metadata: Registration metadata containing lifetime info.
            factory: Function to create new instance if needed.

        Returns:
            Instance according to lifetime rules:
            - Singleton: Returns cached instance or creates and caches new one
            - Transient: Always creates new instance
            - Scoped: Returns cached instance within scope or creates new one

        Raises:
            UnresolvableError: If the factory fails. DI errors raised by the
                factory (including replacement failures) propagate unchanged.
        """
        lifetime = metadata.registration.lifetime
        dependency_type = metadata.registration.dependency_type

        if lifetime == Lifetime.TRANSIENT:
            return self._create(dependency_type, factory)

        cache = self._singleton_cache if lifetime == Lifetime.SINGLETON else self._scoped_cache
        if dependency_type not in cache:
            cache[dependency_type] = self._create(dependency_type, factory)
        return cache[dependency_type]

    @staticmethod
    def _create(dependency_type: Type, factory: Callable[[], Any]) -> Any:
        try:
            return factory()
        except (UnresolvableError, CircularDependencyError):
            raise
        except Exception as e:
            raise UnresolvableError(dependency_type, f"Failed to create instance: {str(e)}") from e

    def evict(self, dependency_type: Type) -> None:
        """Drop cached singleton and scoped instances of a type.

        Used when a binding is replaced so the next resolution uses the new builder.
        """
        self._singleton_cache.pop(dependency_type, None)
        self._scoped_cache.pop(dependency_type, None)

    def clear_cache(self) -> None:
        """Clear all cached instances (singletons and scoped)."""
        self._singleton_cache.clear()
        self._scoped_cache.clear()

    def clear_scoped_cache(self) -> None:
        """Clear only the scoped instance cache.

        Called when a scope ends (e.g., end of HTTP request).
        """
        self._scoped_cache.clear()

    def get_singleton_cache(self) -> Dict[Type, Any]:
        """Get reference to singleton cache for scope inheritance."""
        return self._singleton_cache
