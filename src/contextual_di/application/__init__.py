"""
Application layer - Use cases and orchestration.

This layer contains the use cases that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .circular_detector import CircularDependencyDetector
from .container import DIContainer
from .lifetime_manager import LifetimeManager
from .registrar import ReplacementActivator, register_with_replacements
from .replacement_spec import (
    ReplacementSpec,
    add,
    add_scoped,
    add_singleton,
    add_transient,
    with_replacement,
)
from .resolver import DependencyResolver, is_assignable

__all__ = [
    "DIContainer",
    "DependencyResolver",
    "LifetimeManager",
    "CircularDependencyDetector",
    "ReplacementSpec",
    "ReplacementActivator",
    "register_with_replacements",
    "is_assignable",
    "with_replacement",
    "add",
    "add_transient",
    "add_scoped",
    "add_singleton",
]
