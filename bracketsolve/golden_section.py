"""Golden-section search for the extremum of a unimodal objective."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from bracketsolve.actions import GOLDEN_SECTION_ACTIONS, AssumeWorse, StopEarly
from bracketsolve.best import BestTracker, objective_value
from bracketsolve.bracket import GoldenBracket, within_tolerance
from bracketsolve.config import GoldenSectionConfig
from bracketsolve.engine import Attempt, BracketStrategy, EvalContext, run
from bracketsolve.evaluate import Evaluation, evaluate_optimization
from bracketsolve.events import Point
from bracketsolve.model import as_model
from bracketsolve.observer import ObserverLike
from bracketsolve.problems import OptimizationProblem
from bracketsolve.solution import Solution


Transform = Callable[[float], float]


def _identity(value: float) -> float:
    return float(value)


def _negate(value: float) -> float:
    return -float(value)


def _point(attempt: Attempt) -> Point:
    return Point(x=attempt.x, score=attempt.score, rank=float(attempt.info))


class GoldenSectionStrategy(BracketStrategy):
    """Keeps two interior points and discards the side of the worse one.

    Points are compared on the transformed objective, so the search always
    minimizes; an assumed-worse point ranks at ``+inf``.
    """

    def __init__(self, bracket: Sequence[float], config: GoldenSectionConfig):
        super().__init__(bracket, config)
        self.bracket: GoldenBracket | None = None
        self.left: Point | None = None
        self.right: Point | None = None

    def start(self, ctx: EvalContext, best: BestTracker) -> bool:
        self.bracket = GoldenBracket(self.validate())

        first = ctx.attempt(best, self.bracket.inner_left, phase="init", bracket=self.bracket.as_tuple())
        if first.stopped:
            return False
        self.left = _point(first)

        second = ctx.attempt(
            best, self.bracket.inner_right, phase="init", other=self.left, bracket=self.bracket.as_tuple()
        )
        if second.stopped:
            return False
        self.right = _point(second)
        return True

    def x_converged(self) -> bool:
        return within_tolerance(
            self.bracket.inner_gap,
            self.bracket.inner_midpoint,
            self.config.x_abs_tol,
            self.config.x_rel_tol,
        )

    def score_converged(self, best: BestTracker) -> bool:
        return False

    def step(self, ctx: EvalContext, best: BestTracker, iteration: int) -> bool:
        bracket = self.bracket.as_tuple()
        if self.left.rank <= self.right.rank:
            x = self.bracket.next_inner_left()
            attempt = ctx.attempt(best, x, phase="search", iteration=iteration, other=self.left, bracket=bracket)
            if attempt.stopped:
                return False
            self.bracket.shrink_right()
            self.left, self.right = _point(attempt), self.left
        else:
            x = self.bracket.next_inner_right()
            attempt = ctx.attempt(best, x, phase="search", iteration=iteration, other=self.right, bracket=bracket)
            if attempt.stopped:
                return False
            self.bracket.shrink_left()
            self.left, self.right = self.right, _point(attempt)
        return True


def _search(
    model: Any,
    problem: OptimizationProblem,
    bracket: Sequence[float],
    config: GoldenSectionConfig | None,
    observer: ObserverLike,
    transform: Transform,
    goal: str,
) -> Solution:
    config = config or GoldenSectionConfig()

    def rank(evaluation: Evaluation) -> float:
        return transform(evaluation.objective)

    ctx = EvalContext(
        solver="golden_section",
        model=as_model(model),
        problem=problem,
        evaluate=evaluate_optimization,
        classify=transform,
        observer=observer,
        allowed_actions=GOLDEN_SECTION_ACTIONS,
        excluded_actions=(StopEarly, AssumeWorse),
    )
    best = BestTracker(key=rank, score=objective_value)
    log_context = {
        "goal": goal,
        "max_iters": config.max_iters,
        "x_abs_tol": config.x_abs_tol,
        "x_rel_tol": config.x_rel_tol,
    }
    return run(GoldenSectionStrategy(bracket, config), ctx, best, config.max_iters, log_context)


def minimize(
    model: Any,
    problem: OptimizationProblem,
    bracket: Sequence[float],
    config: GoldenSectionConfig | None = None,
    observer: ObserverLike = None,
) -> Solution:
    """Find the ``x`` in ``bracket`` with the smallest objective.

    Assumes the objective is unimodal on the bracket; otherwise a local
    minimum is returned.
    """
    return _search(model, problem, bracket, config, observer, _identity, "minimize")


def maximize(
    model: Any,
    problem: OptimizationProblem,
    bracket: Sequence[float],
    config: GoldenSectionConfig | None = None,
    observer: ObserverLike = None,
) -> Solution:
    """Find the ``x`` in ``bracket`` with the largest objective.

    The reported ``Solution.score`` is the objective itself, not its negation.
    """
    return _search(model, problem, bracket, config, observer, _negate, "maximize")
