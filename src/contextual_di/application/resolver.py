import inspect
import logging
from types import UnionType
from typing import Any, Dict, List, Optional, Sequence, Type, Union, get_args, get_origin, get_type_hints

from contextual_di.domain import (
    CircularDependencyError,
    ConstructorParameter,
    IContainer,
    IResolver,
    ReplacementUnresolvedError,
    UnresolvableError,
)

logger = logging.getLogger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def is_assignable(instance: Any, annotation: Any) -> bool:
    """Return whether an instance can be passed for a parameter annotated with ``annotation``.

    Plain classes use ``isinstance``. ``Optional``/``Union`` match when any member
    matches, and parameterized generics such as ``List[int]`` match on their
    origin class. Annotations that ``isinstance`` cannot handle never match.
    """
    if annotation is None or annotation is Any:
        return False

    origin = get_origin(annotation)
    if origin is Union or origin is UnionType:
        return any(is_assignable(instance, member) for member in get_args(annotation) if member is not type(None))
    if origin is not None:
        annotation = origin

    if not inspect.isclass(annotation):
        return False
    try:
        return isinstance(instance, annotation)
    except TypeError:
        # Non-runtime protocols and similar special forms
        return False


class DependencyResolver(IResolver):
    """Resolves dependencies using constructor introspection and type hints.

    Uses Python's inspect module to analyze constructor signatures. Each
    parameter is bound either to one of the explicit instances handed in by
    the caller or, failing that, to whatever the container resolves for the
    parameter's type hint.
    """

    def get_constructor_parameters(self, dependency_type: Type) -> List[ConstructorParameter]:
        """Describe the injectable constructor parameters of a type.

        ``self``, ``*args`` and ``**kwargs`` are left out.

        Args:
            dependency_type: The type to inspect.

        Returns:
            Parameters in declared order.

        Raises:
            UnresolvableError: If the constructor signature or its type hints cannot be read.
        """
        try:
            signature = inspect.signature(dependency_type.__init__)
            type_hints = get_type_hints(dependency_type.__init__)
        except Exception as e:
            raise UnresolvableError(
                dependency_type,
                f"Failed to inspect constructor of {dependency_type}: {e}",
            ) from e

        parameters = []
        for param_name, param in signature.parameters.items():
            if param_name == "self" or param.kind in _SKIPPED_KINDS:
                continue
            parameters.append(
                ConstructorParameter(
                    name=param_name,
                    annotation=type_hints.get(param_name),
                    positional_only=param.kind == inspect.Parameter.POSITIONAL_ONLY,
                    has_default=param.default is not inspect.Parameter.empty,
                    default=None if param.default is inspect.Parameter.empty else param.default,
                )
            )
        return parameters

    def resolve_dependencies(
        self,
        dependency_type: Type,
        container: IContainer,
        explicit_instances: Sequence[Any] = (),
    ) -> Any:
        """Resolve all constructor dependencies and create instance.

        Parameters are walked in declared order. Each one takes the first
        explicit instance that is assignable to it and has not been used by an
        earlier parameter; a used instance is never handed out twice, so a
        later parameter of a compatible type falls back to the container.
        Parameters with a default keep the default unless an explicit
        instance matches.

        Args:
            dependency_type: The type to instantiate.
            container: The container to resolve dependencies from.
            explicit_instances: Instances bound preferentially, in priority order.

        Returns:
            Instance with all dependencies injected.

        Raises:
            UnresolvableError: If any dependency cannot be resolved or lacks type hint.

        Example:
            >>> class ReportService:
            ...     def __init__(self, repo: ReportRepository, log: AuditLog):
            ...         self.repo = repo
            ...         self.log = log
            >>>
            >>> resolver = DependencyResolver()
            >>> service = resolver.resolve_dependencies(ReportService, container, [VerboseAuditLog()])
        """
        consumed = [False] * len(explicit_instances)
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}

        for param in self.get_constructor_parameters(dependency_type):
            slot = self._take_explicit(param, explicit_instances, consumed)
            if slot is not None:
                logger.debug(
                    "Binding explicit instance #%d to %s.%s",
                    slot,
                    dependency_type.__name__,
                    param.name,
                )
                value = explicit_instances[slot]
            elif param.has_default:
                if not param.positional_only:
                    continue
                value = param.default
            elif param.annotation is None:
                raise UnresolvableError(
                    dependency_type,
                    f"Parameter '{param.name}' lacks type hint and has no default value.",
                )
            else:
                try:
                    value = container.resolve(param.annotation)
                except (CircularDependencyError, ReplacementUnresolvedError):
                    raise
                except Exception as e:
                    raise UnresolvableError(
                        dependency_type,
                        f"Failed to resolve dependency for parameter '{param.name}': {e}",
                    ) from e

            if param.positional_only:
                args.append(value)
            else:
                kwargs[param.name] = value

        try:
            return dependency_type(*args, **kwargs)
        except Exception as e:
            raise UnresolvableError(
                dependency_type,
                f"Failed to auto-wire constructor for {dependency_type}: {e}",
            ) from e

    @staticmethod
    def _take_explicit(
        param: ConstructorParameter,
        explicit_instances: Sequence[Any],
        consumed: List[bool],
    ) -> Optional[int]:
        """Consume and return the index of the first free instance matching the parameter, if any."""
        if param.annotation is None:
            return None
        for index, instance in enumerate(explicit_instances):
            if not consumed[index] and is_assignable(instance, param.annotation):
                consumed[index] = True
                return index
        return None
