from enum import Enum
from typing import Any

from contextual_di.domain.exceptions import InvalidArgumentError


class Lifetime(str, Enum):
    """Defines how long a resolved instance is reused.

    Attributes:
        TRANSIENT: New instance created on each resolution.
        SCOPED: Single instance per scope (e.g., per HTTP request).
        SINGLETON: Single instance shared across entire application.
    """

    TRANSIENT = "transient"
    SCOPED = "scoped"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: Any) -> "Lifetime":
        """Convert a lifetime or its string value into a Lifetime member.

        Args:
            value: A Lifetime member or one of "transient", "scoped", "singleton".

        Raises:
            InvalidArgumentError: If the value is missing or not a known lifetime.
        """
        if value is None:
            raise InvalidArgumentError("lifetime", "must not be None")
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidArgumentError("lifetime", f"unknown lifetime {value!r}") from e
