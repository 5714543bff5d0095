from typing import List, Optional, Type


class DIException(Exception):
    """Base exception for DI-related errors."""


class InvalidArgumentError(DIException):
    """Raised when a required argument is missing at spec construction or registration.

    This occurs when:
    - A replacement spec is built without a container or replacement type.
    - A binding is registered without a service or implementation type.
    - A replacement type does not satisfy the service type it replaces.

    Attributes:
        argument: Name of the offending argument.
    """

    def __init__(self, argument: str, reason: Optional[str] = None) -> None:
        self.argument = argument
        self.reason = reason
        message = f"Invalid argument '{argument}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CircularDependencyError(DIException):
    """Raised when a circular dependency is detected.

    Attributes:
        dependency_chain: List of types involved in the circular dependency.
    """

    def __init__(self, dependency_chain: List[Type]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join([cls.__name__ for cls in dependency_chain])}"
        super().__init__(message)


class UnresolvableError(DIException):
    """Raised when a dependency cannot be resolved.

    This occurs when:
    - Constructor parameters lacks type hints.
    - Type hint cannot be resolved.
    - A builder fails while creating the instance.

    Attributes:
        cls: The class type that could not be resolved.
        reason: Optional reason for the failure.
    """

    def __init__(self, cls: Type, reason: Optional[str] = None) -> None:
        self.cls = cls
        self.reason = reason
        message = f"Cannot resolve dependency for type: {getattr(cls, '__name__', repr(cls))}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class ReplacementUnresolvedError(UnresolvableError):
    """Raised when a declared replacement type cannot be resolved at activation time.

    Replacement types are never auto-wired: each one must have a registration
    in the container.

    Attributes:
        replacement_type: The replacement type that failed to resolve.
        implementation_type: The implementation whose activation was aborted.
    """

    def __init__(self, replacement_type: Type, implementation_type: Type, reason: Optional[str] = None) -> None:
        self.replacement_type = replacement_type
        self.implementation_type = implementation_type
        detail = f"Replacement {replacement_type.__name__} could not be resolved"
        if reason:
            detail += f": {reason}"
        super().__init__(implementation_type, detail)


class LifetimeError(DIException):
    """Raised for invalid lifetime configurations.

    This occurs when:
    - Registering the same type with conflicting lifetimes.
    - Invalid lifetime value provided.
    """


class ScopeError(DIException):
    """Raised for invalid scope operations.

    This occurs when:
    - Resolving from a scope that has already been closed.
    """
