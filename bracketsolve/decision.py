"""Reconcile observer intent with the raw evaluation outcome."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from bracketsolve.actions import StopEarly
from bracketsolve.errors import EvaluationError


class DecisionKind(str, Enum):
    CONTINUE = "continue"
    STOP_EARLY = "stop_early"
    FATAL = "fatal"


@dataclass(frozen=True)
class Decision:
    kind: DecisionKind
    info: Any = None
    error: EvaluationError | None = None

    @classmethod
    def proceed(cls, info: Any) -> "Decision":
        return cls(DecisionKind.CONTINUE, info=info)

    @classmethod
    def stop(cls) -> "Decision":
        return cls(DecisionKind.STOP_EARLY)

    @classmethod
    def fatal(cls, error: EvaluationError) -> "Decision":
        return cls(DecisionKind.FATAL, error=error)


def resolve(action: Any, outcome: Any, classify: Callable[[Any], Any]) -> Decision:
    """Return the control-flow decision for one evaluation.

    ``outcome`` is either the evaluation score or the ``EvaluationError`` it
    raised. An assume-action wins over the outcome, ``StopEarly`` wins over
    everything, and an unrecovered error is fatal.
    """
    if isinstance(action, StopEarly):
        return Decision.stop()
    if action is not None:
        return Decision.proceed(action.assumed())
    if isinstance(outcome, EvaluationError):
        return Decision.fatal(outcome)
    return Decision.proceed(classify(outcome))
