"""Minimal flat dependency injection container.

This package provides a lightweight dependency injection container for Python.
Tokens (classes or factory callables) are registered once, with their ordered
dependency tokens, and resolved on demand to a single cached instance each.

Exports:
- `Injector`: Flat DI container with lazy, memoized, depth-first resolution.
- `RecordState`: Per-token resolution state, as reported by `Injector.state`.
- `injectable`: Decorator declaring a token's dependencies explicitly.
- `describe_dependencies`: Default dependency source (explicit declaration,
  then constructor annotations).
- `MissingBindingError` / `CircularDependencyError`: Resolution failures,
  both subclasses of `InjectionError`.
"""

from ._describe import DependencySource, describe_dependencies, injectable
from ._errors import CircularDependencyError, InjectionError, MissingBindingError
from ._injector import Injector, RecordState


__all__ = [
    "CircularDependencyError",
    "DependencySource",
    "InjectionError",
    "Injector",
    "MissingBindingError",
    "RecordState",
    "describe_dependencies",
    "injectable",
]
