from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, get_origin, get_type_hints


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    F = TypeVar("F", bound=Callable[..., Any])


logger = logging.getLogger(__name__)

INJECT_ATTR = "__inject__"

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class DependencySource(Protocol):
    """Supplies the ordered dependency tokens of a token.

    Must be deterministic and side-effect free. Returning `None` or an empty
    iterable both mean the token takes no dependencies.
    """

    def __call__(self, token: Any, /) -> Iterable[Any] | None: ...


def injectable(*deps: Any) -> Callable[[F], F]:
    """Declare the dependency tokens of a class or factory explicitly.

    Example:
      @injectable(Sun, Flower)
      class Student:
          def __init__(self, sun, flower): ...

    Called without arguments it only marks the token; dependencies are then
    discovered from constructor annotations.
    """

    def decorator(token: F) -> F:
        if deps:
            setattr(token, INJECT_ATTR, deps)
        return token

    return decorator


def describe_dependencies(token: Any) -> tuple[Any, ...]:
    """Default dependency source.

    Precedence:
    1. explicit declaration via `@injectable(...)`
    2. positional constructor parameters annotated with a class, in order,
       up to the first parameter that cannot be injected positionally
    3. no dependencies.
    """
    declared = _declared_dependencies(token)
    if declared is not None:
        return declared

    return _reflected_dependencies(token)


def _declared_dependencies(token: Any) -> tuple[Any, ...] | None:
    # a subclass must not inherit the declaration of its base
    declared = token.__dict__.get(INJECT_ATTR) if inspect.isclass(token) else getattr(token, INJECT_ATTR, None)
    if declared is None:
        return None
    return tuple(declared)


def _reflected_dependencies(token: Any) -> tuple[Any, ...]:
    try:
        sig = inspect.signature(token)
    except (TypeError, ValueError):
        return ()

    hints = _get_init_type_hints(token) if inspect.isclass(token) else _get_callable_type_hints(token)

    deps: list[Any] = []
    for name, p in sig.parameters.items():
        if p.kind not in _POSITIONAL or p.default is not inspect.Parameter.empty:
            break

        ann = hints.get(name)
        # parametrized generics are not constructible tokens
        if not inspect.isclass(ann) or get_origin(ann) is not None:
            logger.debug(
                "Parameter '%s' of %s has no class annotation; dependency list ends before it",
                name,
                getattr(token, "__qualname__", token),
            )
            break

        deps.append(ann)

    return tuple(deps)


def _get_init_type_hints(cls: type) -> dict[str, Any]:
    try:
        init = inspect.getattr_static(cls, "__init__")
        # signature comes from __new__ when __init__ is not overridden (e.g. NamedTuple)
        if init is object.__init__ and cls.__new__ is not object.__new__:
            init = cls.__new__
        hints = get_type_hints(init)
    except TypeError:
        hints = {}
    except NameError as exc:
        logger.warning("'%s' name error retrieving %s (%s) type hints", exc.name, cls.__name__, cls.__qualname__)
        hints = {}

    return hints


def _get_callable_type_hints(fn: Any) -> dict[str, Any]:
    try:
        hints = get_type_hints(fn)
    except TypeError:
        hints = {}
    except NameError as exc:
        logger.warning("'%s' name error retrieving %r type hints", exc.name, fn)
        hints = {}

    return hints
