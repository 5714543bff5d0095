from typing import TYPE_CHECKING, Any, Callable, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from contextual_di.domain.enums import Lifetime

if TYPE_CHECKING:
    from contextual_di.domain.interfaces import IContainer


class Registration(BaseModel):
    """Value object representing a service binding.

    Attributes:
        dependency_type: The service type being registered.
        builder: Factory function that receives container and returns instance.
        lifetime: How long the instance should live.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dependency_type: Type = Field(..., description="The service type to be registered.")
    builder: Callable[["IContainer"], Any] = Field(
        ..., description="The builder function to create an instance of the service."
    )
    lifetime: Lifetime = Field(..., description="The lifetime of the registered service.")


class DependencyMetadata(BaseModel):
    """Tracks registration details and resolution statistics.

    Attributes:
        registration: The original registration configuration.
        resolution_count: Number of times this dependency has been resolved.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    registration: Registration = Field(..., description="The registration details of the dependency.")
    resolution_count: int = Field(
        default=0,
        description="Number of times this dependency has been resolved.",
    )


class ConstructorParameter(BaseModel):
    """A single injectable constructor parameter of an implementation type.

    Attributes:
        name: Parameter name as declared in ``__init__``.
        annotation: The required dependency type, or None when the parameter has no type hint.
        positional_only: Whether the parameter must be passed positionally.
        has_default: Whether the parameter declares a default value.
        default: The declared default, when there is one.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    annotation: Optional[Any] = None
    positional_only: bool = False
    has_default: bool = False
    default: Optional[Any] = None
