"""Observer capability: inspect each evaluation and optionally steer the solver."""

from __future__ import annotations

from typing import Any, Callable, Protocol, Union, runtime_checkable

from bracketsolve.events import Event


@runtime_checkable
class Observer(Protocol):
    def observe(self, event: Event) -> Any: ...


ObserverLike = Union[Observer, Callable[[Event], Any], None]


class NoopObserver:
    """Accepts every evaluation outcome as-is."""

    def observe(self, event: Event) -> None:
        return None


def notify(observer: ObserverLike, event: Event) -> Any:
    """Deliver ``event`` and return the observer's action (``None`` for no action).

    ``None`` behaves as the no-op observer; objects with ``observe`` and plain
    callables are both accepted.
    """
    if observer is None:
        return None
    if isinstance(observer, Observer):
        return observer.observe(event)
    if callable(observer):
        return observer(event)
    raise TypeError(f"Observer must define observe(event) or be callable, got {type(observer).__name__}.")
