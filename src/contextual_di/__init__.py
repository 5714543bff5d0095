"""
contextual-di: Type-hint based Dependency Injection container with per-consumer
replacement of constructor dependencies.

Public API exports for the contextual-di package.
"""

# Application exports
from contextual_di.application.container import DIContainer
from contextual_di.application.replacement_spec import (
    ReplacementSpec,
    add,
    add_scoped,
    add_singleton,
    add_transient,
    with_replacement,
)

# Domain exports
from contextual_di.domain.enums import Lifetime
from contextual_di.domain.exceptions import (
    CircularDependencyError,
    DIException,
    InvalidArgumentError,
    LifetimeError,
    ReplacementUnresolvedError,
    ScopeError,
    UnresolvableError,
)

__version__ = "0.1.0"

__all__ = [
    # Container
    "DIContainer",
    # Replacements
    "ReplacementSpec",
    "with_replacement",
    "add",
    "add_transient",
    "add_scoped",
    "add_singleton",
    # Enums
    "Lifetime",
    # Exceptions
    "DIException",
    "InvalidArgumentError",
    "CircularDependencyError",
    "UnresolvableError",
    "ReplacementUnresolvedError",
    "LifetimeError",
    "ScopeError",
]
