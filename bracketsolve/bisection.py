"""Bisection root finding on a sign-changing bracket."""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from bracketsolve.actions import BISECTION_ACTIONS, AssumeResidualSign, Sign
from bracketsolve.best import BestTracker, residual_magnitude, residual_value
from bracketsolve.bracket import Bracket
from bracketsolve.config import BisectionConfig
from bracketsolve.engine import Attempt, BracketStrategy, EvalContext, run
from bracketsolve.errors import NoBracket
from bracketsolve.evaluate import evaluate_equation
from bracketsolve.events import Point
from bracketsolve.model import as_model
from bracketsolve.observer import ObserverLike
from bracketsolve.problems import EquationProblem
from bracketsolve.solution import Solution


def classify_residual(score: Any) -> Sign:
    return Sign.of(float(np.ravel(score)[0]))


def _endpoint_residual(attempt: Attempt) -> float:
    if attempt.excluded:
        return math.nan
    return attempt.score


def _endpoint_point(attempt: Attempt) -> Point:
    residual = _endpoint_residual(attempt)
    return Point(x=attempt.x, score=residual, rank=abs(residual))


class BisectionStrategy(BracketStrategy):
    """Halves the bracket, keeping the endpoint residual signs opposite."""

    def __init__(self, bracket: Sequence[float], config: BisectionConfig):
        super().__init__(bracket, config)
        self.bracket: Bracket | None = None

    def start(self, ctx: EvalContext, best: BestTracker) -> bool:
        bounds = self.validate()

        left = ctx.attempt(best, bounds.left, phase="left")
        if left.stopped:
            return False
        right = ctx.attempt(best, bounds.right, phase="right", other=_endpoint_point(left))
        if right.stopped:
            return False

        if left.info == right.info:
            raise NoBracket(bounds.left, bounds.right, _endpoint_residual(left), _endpoint_residual(right))
        self.bracket = Bracket(bounds, left.info, right.info)
        return True

    def x_converged(self) -> bool:
        return self.bracket.is_x_converged(self.config.x_abs_tol, self.config.x_rel_tol)

    def score_converged(self, best: BestTracker) -> bool:
        return best.is_converged(self.config.residual_tol)

    def step(self, ctx: EvalContext, best: BestTracker, iteration: int) -> bool:
        x = self.bracket.midpoint
        attempt = ctx.attempt(best, x, phase="midpoint", iteration=iteration, bracket=self.bracket.as_tuple())
        if attempt.stopped:
            return False
        self.bracket.shrink(x, attempt.info)
        return True


def solve(
    model: Any,
    problem: EquationProblem,
    bracket: Sequence[float],
    config: BisectionConfig | None = None,
    observer: ObserverLike = None,
) -> Solution:
    """Find ``x`` in ``bracket`` where the problem's residual crosses zero.

    ``model`` may be a ``Model`` or a plain callable. Returns a ``Solution``
    for converged, max-iteration and observer-stopped solves; raises a
    ``SolverError`` subclass otherwise. An evaluation that triggers
    ``StopEarly`` still counts toward the best result; only assumed signs
    are excluded.
    """
    config = config or BisectionConfig()
    ctx = EvalContext(
        solver="bisection",
        model=as_model(model),
        problem=problem,
        evaluate=evaluate_equation,
        classify=classify_residual,
        observer=observer,
        allowed_actions=BISECTION_ACTIONS,
        excluded_actions=(AssumeResidualSign,),
    )
    best = BestTracker(key=residual_magnitude, score=residual_value)
    log_context = {
        "max_iters": config.max_iters,
        "x_abs_tol": config.x_abs_tol,
        "x_rel_tol": config.x_rel_tol,
        "residual_tol": config.residual_tol,
    }
    return run(BisectionStrategy(bracket, config), ctx, best, config.max_iters, log_context)
