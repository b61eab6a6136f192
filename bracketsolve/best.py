"""Best-result tracking shared by both solver families."""

from __future__ import annotations

from typing import Callable

from bracketsolve.errors import NoSuccessfulEvaluation
from bracketsolve.evaluate import Evaluation
from bracketsolve.events import Point
from bracketsolve.solution import Solution, Status


def residual_magnitude(evaluation: Evaluation) -> float:
    return abs(evaluation.residual)


def residual_value(evaluation: Evaluation) -> float:
    return evaluation.residual


def objective_value(evaluation: Evaluation) -> float:
    return evaluation.objective


class BestTracker:
    """Keeps the single best evaluation seen so far.

    ``key`` orders evaluations (smaller is better); ties keep the earlier
    evaluation. ``score`` extracts the value reported on the ``Solution``.
    """

    def __init__(
        self,
        key: Callable[[Evaluation], float] = residual_magnitude,
        score: Callable[[Evaluation], float] = residual_value,
    ):
        self.key = key
        self.score = score
        self.evaluation: Evaluation | None = None
        self._best_key = float("inf")

    @property
    def is_empty(self) -> bool:
        return self.evaluation is None

    @property
    def point(self) -> Point | None:
        if self.evaluation is None:
            return None
        return Point(x=self.evaluation.scalar_x, score=float(self.score(self.evaluation)), rank=self._best_key)

    def update(self, evaluation: Evaluation) -> bool:
        """Fold ``evaluation`` in; return True when it became the new best."""
        candidate = float(self.key(evaluation))
        if self.evaluation is not None and candidate >= self._best_key:
            return False
        self.evaluation = evaluation
        self._best_key = candidate
        return True

    def is_converged(self, tol: float) -> bool:
        return self.evaluation is not None and self._best_key <= tol

    def finish(self, status: Status, iters: int) -> Solution:
        if self.evaluation is None:
            raise NoSuccessfulEvaluation()
        return Solution(
            status=status,
            x=self.evaluation.scalar_x,
            score=float(self.score(self.evaluation)),
            snapshot=self.evaluation.snapshot,
            iters=int(iters),
        )
