"""Application layer - Circular dependency detection."""

import threading
from contextlib import contextmanager
from typing import Iterator, List, Type

from contextual_di.domain import CircularDependencyError


class CircularDependencyDetector:
    """Detects circular dependencies during resolution.

    Keeps one resolution stack per thread. A type that is pushed while it is
    already on the stack closes a cycle. Replacement types go through the
    same stack, so a replacement that (transitively) depends on its own
    consumer is reported rather than recursed into.

    Attributes:
        _local: Thread-local storage for resolution stacks.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _get_stack(self) -> List[Type]:
        if not hasattr(self._local, "stack"):
            self._local.stack = []
        return self._local.stack

    def push(self, dependency_type: Type) -> None:
        """Add a dependency to the resolution stack.

        Args:
            dependency_type: The type being resolved.

        Raises:
            CircularDependencyError: If the type is already in the stack.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push(ReportService)
            >>> detector.push(AuditLogger)
            >>> detector.push(ReportService)  # Raises CircularDependencyError
        """
        stack = self._get_stack()
        if dependency_type in stack:
            cycle = stack[stack.index(dependency_type) :] + [dependency_type]
            raise CircularDependencyError(cycle)
        stack.append(dependency_type)

    def pop(self) -> None:
        """Remove the most recent dependency from the resolution stack."""
        stack = self._get_stack()
        if stack:
            stack.pop()

    @contextmanager
    def track(self, dependency_type: Type) -> Iterator[None]:
        """Keep a type on the stack for the duration of a ``with`` block."""
        self.push(dependency_type)
        try:
            yield
        finally:
            self.pop()

    def clear(self) -> None:
        """Clear the current thread's resolution stack."""
        if hasattr(self._local, "stack"):
            self._local.stack.clear()
