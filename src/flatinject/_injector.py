from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar, overload

from ._describe import describe_dependencies
from ._errors import CircularDependencyError, MissingBindingError


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ._describe import DependencySource

    T = TypeVar("T")


class RecordState(Enum):
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


@dataclass
class Record:
    constructor: Callable[..., object]
    dependencies: tuple[Any, ...]
    state: RecordState = RecordState.UNRESOLVED
    value: object = field(default=None, repr=False)  # valid once RESOLVED

    @property
    def resolved(self) -> bool:
        return self.state is RecordState.RESOLVED


class Injector:
    """Flat DI container.

    - register tokens (classes or factory callables)
    - resolve with positional constructor injection
    - one cached instance per token
    - circular dependency detection.
    """

    def __init__(self, tokens: Iterable[Any] = (), *, source: DependencySource = describe_dependencies) -> None:
        self._records: dict[Any, Record] = {}
        self._source = source
        self._lock = threading.RLock()
        # tokens being resolved by the thread holding the lock, outermost first
        self._path: list[Any] = []

        for token in tokens:
            self.register(token)

    def register(self, token: Any, deps: Iterable[Any] | None = None) -> None:
        """Register a token, replacing any previous registration and its cached instance.

        Example:
          injector.register(Student)
          injector.register(make_db, deps=[Config])

        Dependencies come from `deps` when given, otherwise from the injector's
        dependency source. Nothing is constructed here.
        """
        if deps is None:
            deps = self._source(token)

        record = Record(constructor=token, dependencies=tuple(deps or ()))

        with self._lock:
            if token in self._records:
                logger.debug("Replacing registration for %r", token)
            self._records[token] = record

        logger.debug("Registered %r with dependencies %r", token, record.dependencies)

    @overload
    def get(self, token: type[T]) -> T: ...

    @overload
    def get(self, token: Callable[..., T]) -> T: ...

    def get(self, token: Any) -> object:
        """Resolve the token to its instance, constructing it and its dependencies on first use.

        Raises `MissingBindingError` for unregistered tokens and
        `CircularDependencyError` when the token depends on itself. Errors raised
        by constructors propagate unchanged.
        """
        with self._lock:
            return self._resolve(token)

    def is_resolved(self, token: Any) -> bool:
        with self._lock:
            record = self._records.get(token)
            return record is not None and record.resolved

    def state(self, token: Any) -> RecordState:
        """Resolution state of a registered token; `MissingBindingError` otherwise."""
        return self._record(token).state

    def dependencies(self, token: Any) -> tuple[Any, ...]:
        """Dependency tokens captured when the token was registered."""
        return self._record(token).dependencies

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _record(self, token: Any) -> Record:
        with self._lock:
            record = self._records.get(token)
        if record is None:
            raise MissingBindingError(token)
        return record

    def _resolve(self, token: Any) -> object:
        record = self._records.get(token)
        if record is None:
            raise MissingBindingError(token, tuple(self._path))

        if record.state is RecordState.RESOLVED:
            return record.value

        if record.state is RecordState.RESOLVING:
            start = self._path.index(token)
            raise CircularDependencyError((*self._path[start:], token))

        record.state = RecordState.RESOLVING
        self._path.append(token)
        try:
            values = [self._resolve(dep) for dep in record.dependencies]

            logger.debug("Constructing %r", token)
            value = record.constructor(*values)
        except BaseException:
            record.state = RecordState.UNRESOLVED
            raise
        finally:
            self._path.pop()

        record.value = value
        record.state = RecordState.RESOLVED
        return value
