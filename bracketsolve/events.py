"""Events handed to observers, one per attempted evaluation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from bracketsolve.errors import EvaluationError
from bracketsolve.evaluate import Evaluation


@dataclass(frozen=True)
class Point:
    """A solver variable with its score.

    ``score`` is the raw residual or objective (NaN when the point was
    assumed rather than evaluated); ``rank`` is the value the solver compares.
    """

    x: float
    score: float
    rank: float

    @classmethod
    def from_evaluation(cls, evaluation: Evaluation, rank: float) -> "Point":
        return cls(x=evaluation.scalar_x, score=float(np.ravel(evaluation.score)[0]), rank=float(rank))

    @classmethod
    def assumed(cls, x: float, rank: float) -> "Point":
        return cls(x=float(x), score=math.nan, rank=float(rank))


@dataclass(frozen=True)
class Event:
    """View of one evaluation attempt.

    Valid for the duration of the observer call that receives it; observers
    that need history should copy what they need (see ``TraceRecorder``).
    """

    solver: str
    phase: str
    x: float
    iteration: int = 0
    evaluation: Evaluation | None = None
    error: EvaluationError | None = None
    other: Point | None = None
    best: Point | None = None
    bracket: tuple[float, float] | None = None

    @property
    def ok(self) -> bool:
        return self.evaluation is not None

    @property
    def input(self) -> Any:
        if self.evaluation is not None:
            return self.evaluation.snapshot.input
        if self.error is not None:
            return self.error.input
        return None

    @property
    def output(self) -> Any:
        if self.evaluation is not None:
            return self.evaluation.snapshot.output
        if self.error is not None:
            return self.error.output
        return None

    @property
    def score(self) -> Any:
        if self.evaluation is None:
            return None
        return self.evaluation.score

    @property
    def residual(self) -> float:
        if self.evaluation is None or self.solver != "bisection":
            return math.nan
        return self.evaluation.residual

    @property
    def objective(self) -> float:
        if self.evaluation is None or self.solver != "golden_section":
            return math.nan
        return self.evaluation.objective
