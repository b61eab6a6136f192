"""Model capability and captured input/output snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Model(Protocol):
    """Deterministic input -> output calculation, opaque to the solvers.

    Raising any exception from ``call`` is treated as a model failure.
    """

    def call(self, input: Any) -> Any: ...


@dataclass(frozen=True)
class Snapshot:
    """Captured input/output pair from one model call."""

    input: Any
    output: Any


class FunctionModel:
    """Adapts a plain callable to the ``Model`` capability."""

    def __init__(self, fn: Callable[[Any], Any]):
        self.fn = fn

    def call(self, input: Any) -> Any:
        return self.fn(input)

    def __repr__(self) -> str:
        name = getattr(self.fn, "__name__", type(self.fn).__name__)
        return f"FunctionModel({name})"


def as_model(candidate: Any) -> Model:
    if isinstance(candidate, Model):
        return candidate
    if callable(candidate):
        return FunctionModel(candidate)
    raise TypeError(f"Expected a model with call(input) or a callable, got {type(candidate).__name__}.")
