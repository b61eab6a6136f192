"""Bounded scalar goal-seek helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from bracketsolve import bisection
from bracketsolve.config import BisectionConfig
from bracketsolve.errors import EvaluationError, NoBracket, SolverError
from bracketsolve.model import FunctionModel
from bracketsolve.problems import TargetOutputProblem
from bracketsolve.runtime_logging import append_runtime_event


@dataclass
class GoalSeekResult:
    status: str
    value: float | None
    achieved: float | None
    iterations: int
    message: str


def _failure_message(exc: SolverError) -> str:
    if isinstance(exc, NoBracket):
        return "Target is not bracketed in the selected bounds. Adjust min/max bounds."
    if isinstance(exc, EvaluationError):
        cause = exc.__cause__ if exc.__cause__ is not None else exc
        return f"Evaluator failed at x={exc.scalar_x}: {cause}"
    return str(exc)


def solve_bounded_scalar(
    evaluator: Callable[[float], float],
    target: float,
    lower_bound: float,
    upper_bound: float,
    tol: float = 1e-3,
    max_iter: int = 60,
) -> GoalSeekResult:
    """Solve evaluator(x)=target for x within [lower_bound, upper_bound] via bisection."""
    lo = float(lower_bound)
    hi = float(upper_bound)
    if hi <= lo:
        return GoalSeekResult("failed", None, None, 0, "Upper bound must be greater than lower bound.")

    context = {"target": float(target), "lower_bound": lo, "upper_bound": hi, "tol": tol, "max_iter": max_iter}
    try:
        config = BisectionConfig(max_iters=max_iter, x_abs_tol=0.0, x_rel_tol=0.0, residual_tol=tol)
        solution = bisection.solve(FunctionModel(evaluator), TargetOutputProblem(target), (lo, hi), config)
    except NoBracket as exc:
        # Same-signed endpoints may still hit the target, e.g. a zero residual at a bound.
        for where, x, residual in (("lower", exc.left, exc.left_residual), ("upper", exc.right, exc.right_residual)):
            if abs(residual) <= tol:
                return GoalSeekResult("solved", x, residual + float(target), 0, f"Solved at {where} bound.")
        message = _failure_message(exc)
        append_runtime_event(level="ERROR", event="goal_seek_failed", message=message, context=context, exc=exc)
        return GoalSeekResult("failed", None, None, 0, message)
    except SolverError as exc:
        message = _failure_message(exc)
        append_runtime_event(level="ERROR", event="goal_seek_failed", message=message, context=context, exc=exc)
        return GoalSeekResult("failed", None, None, 0, message)

    achieved = float(solution.snapshot.output)
    if abs(solution.residual) > tol:
        return GoalSeekResult(
            "failed",
            solution.x,
            achieved,
            solution.iters,
            "Reached max iterations before tolerance was met.",
        )
    if solution.iters == 0:
        where = "lower" if solution.x == lo else "upper"
        return GoalSeekResult("solved", solution.x, achieved, 0, f"Solved at {where} bound.")
    return GoalSeekResult("solved", solution.x, achieved, solution.iters, "Converged.")
