"""
Domain layer - Core models and contracts.

This layer contains the fundamental rules and models for dependency injection.
It has no dependencies on other layers.
"""

from .enums import Lifetime
from .exceptions import (
    CircularDependencyError,
    DIException,
    InvalidArgumentError,
    LifetimeError,
    ReplacementUnresolvedError,
    ScopeError,
    UnresolvableError,
)
from .interfaces import IContainer, ILifetimeManager, IResolver
from .models import ConstructorParameter, DependencyMetadata, Registration

# Rebuild Pydantic models to resolve forward references
Registration.model_rebuild()

__all__ = [
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
    # Interfaces
    "IContainer",
    "IResolver",
    "ILifetimeManager",
    # Models
    "Registration",
    "DependencyMetadata",
    "ConstructorParameter",
]
