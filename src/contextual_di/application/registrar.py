"""Application layer - Registration of replacement-aware bindings."""

import logging
from typing import Any, Tuple, Type

from contextual_di.domain import (
    IContainer,
    InvalidArgumentError,
    Lifetime,
    ReplacementUnresolvedError,
    UnresolvableError,
)

logger = logging.getLogger(__name__)


class ReplacementActivator:
    """Builder used for bindings registered through a replacement spec.

    Holds the implementation type and a snapshot of the replacement types
    taken at registration time. Every call resolves each replacement type
    through the resolving container, once per occurrence and in declaration
    order, and hands the results to the container as explicit instances for
    the implementation's constructor.

    Attributes:
        implementation_type: The concrete type to construct.
        replacements: Replacement types in declaration order.
    """

    __slots__ = ("implementation_type", "replacements")

    def __init__(self, implementation_type: Type, replacements: Tuple[Type, ...]) -> None:
        self.implementation_type = implementation_type
        self.replacements = tuple(replacements)

    def __call__(self, container: IContainer) -> Any:
        explicit_instances = [self._resolve_replacement(container, t) for t in self.replacements]
        return container.activate_with_overrides(self.implementation_type, explicit_instances)

    def _resolve_replacement(self, container: IContainer, replacement_type: Type) -> Any:
        if not container.is_registered(replacement_type):
            raise ReplacementUnresolvedError(
                replacement_type,
                self.implementation_type,
                "no registration exists for the replacement type",
            )
        try:
            instance = container.resolve(replacement_type)
        except UnresolvableError as e:
            raise ReplacementUnresolvedError(replacement_type, self.implementation_type, str(e)) from e
        logger.debug(
            "Resolved replacement %s for %s",
            replacement_type.__name__,
            self.implementation_type.__name__,
        )
        return instance

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self.replacements)
        return f"ReplacementActivator({self.implementation_type.__name__}, [{names}])"


def register_with_replacements(
    container: IContainer,
    service_type: Type,
    implementation_type: Type,
    lifetime: Lifetime,
    replacements: Tuple[Type, ...],
) -> ReplacementActivator:
    """Register a binding whose builder activates the implementation with replacements.

    Args:
        container: Container receiving the binding.
        service_type: The service type the binding is registered under.
        implementation_type: The concrete type constructed on resolution.
        lifetime: Lifetime of the binding; strings are accepted.
        replacements: Replacement types captured for the binding.

    Returns:
        The builder that was registered.

    Raises:
        InvalidArgumentError: If the service type, implementation type or lifetime is missing.
        LifetimeError: If the service type is already bound with another lifetime.
    """
    if service_type is None:
        raise InvalidArgumentError("service_type", "must not be None")
    if implementation_type is None:
        raise InvalidArgumentError("implementation_type", "must not be None")
    lifetime = Lifetime.coerce(lifetime)

    activator = ReplacementActivator(implementation_type, replacements)
    container.register_binding(service_type, lifetime, activator)
    logger.debug(
        "Registered %s binding %s -> %r",
        lifetime,
        service_type.__name__,
        activator,
    )
    return activator
