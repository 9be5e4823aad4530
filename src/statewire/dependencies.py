import inspect
import types
from dataclasses import dataclass
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from statewire.exceptions import StateWireDependencyExtractionError
from statewire.markers import Inject

MIN_ANNOTATED_ARGS = 2
_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    """Information about a constructor parameter."""

    name: str
    service_key: Any
    has_default: bool


class DependenciesExtractor:
    """Extract type-hinted constructor dependencies from classes."""

    def __init__(self) -> None:
        self._deps_cache: dict[type[Any], tuple[ParameterInfo, ...]] = {}

    def get_dependencies(self, cls: type[Any]) -> tuple[ParameterInfo, ...]:
        """Get all constructor dependencies of ``cls`` in declaration order."""
        cached = self._deps_cache.get(cls)
        if cached is not None:
            return cached

        init_func = cls.__init__
        if init_func is object.__init__:
            self._deps_cache[cls] = ()
            return ()

        try:
            type_hints = get_type_hints(init_func, include_extras=True)
            sig = inspect.signature(init_func)
        except (TypeError, NameError, ValueError) as e:
            raise StateWireDependencyExtractionError(cls, e) from e

        result: list[ParameterInfo] = []
        for index, (name, param) in enumerate(sig.parameters.items()):
            if index == 0 or param.kind in _SKIPPED_KINDS:
                # first parameter is the instance itself
                continue

            has_default = param.default is not inspect.Parameter.empty
            hint = type_hints.get(name)
            if hint is None:
                if has_default:
                    continue
                msg = f"required parameter {name!r} has no type annotation"
                raise StateWireDependencyExtractionError(cls, msg)

            result.append(
                ParameterInfo(
                    name=name,
                    service_key=self._extract_service_key(hint),
                    has_default=has_default,
                ),
            )

        dependencies = tuple(result)
        self._deps_cache[cls] = dependencies
        return dependencies

    def _extract_service_key(self, hint: Any) -> Any:
        """Map a parameter annotation to the service key it is resolved by."""
        # None defaults may wrap Annotated in Optional on older interpreters
        hint = self._strip_optional(hint)
        if get_origin(hint) is Annotated:
            args = get_args(hint)
            if len(args) < MIN_ANNOTATED_ARGS:
                return args[0]  # pragma: no cover - Annotated requires at least 2 args
            for metadata in args[1:]:
                if isinstance(metadata, Inject):
                    return metadata.key
            hint = self._strip_optional(args[0])

        return hint

    def _strip_optional(self, hint: Any) -> Any:
        if get_origin(hint) not in (Union, types.UnionType):
            return hint

        members = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
        return hint
