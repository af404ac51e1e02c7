from __future__ import annotations

from typing import Any


def _token_name(token: Any) -> str:
    return getattr(token, "__qualname__", None) or getattr(token, "__name__", None) or repr(token)


class InjectionError(RuntimeError):
    pass


class MissingBindingError(InjectionError, KeyError):
    """Raised by `Injector.get` for a token that was never registered.

    `path` holds the tokens that were being resolved when the missing one was
    requested, outermost first (empty for a direct `get`).
    """

    def __init__(self, token: Any, path: tuple[Any, ...] = ()) -> None:
        self.token = token
        self.path = path
        msg = f"No registration found for token: {_token_name(token)}"
        if path:
            msg += f" (required by {' -> '.join(_token_name(t) for t in path)})"
        super().__init__(msg)

    # KeyError quotes its message
    def __str__(self) -> str:
        return str(self.args[0])


class CircularDependencyError(InjectionError):
    def __init__(self, chain: tuple[Any, ...]) -> None:
        self.chain = chain
        msg = f"Circular dependency detected: {' -> '.join(_token_name(t) for t in chain)}"
        super().__init__(msg)
