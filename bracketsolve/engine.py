"""Generic bracketing solve skeleton shared by bisection and golden section."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Protocol

import numpy as np

from bracketsolve.best import BestTracker
from bracketsolve.bracket import Bounds
from bracketsolve.decision import Decision, DecisionKind, resolve
from bracketsolve.errors import EvaluationError, SolverError
from bracketsolve.evaluate import Evaluation
from bracketsolve.events import Event
from bracketsolve.model import Model
from bracketsolve.observer import ObserverLike, notify
from bracketsolve.runtime_logging import append_runtime_event
from bracketsolve.solution import Solution, Status


@dataclass(frozen=True)
class Attempt:
    """Outcome of one evaluate -> observe -> resolve round.

    ``evaluation`` is the real evaluation (``None`` when it failed).
    ``excluded`` is True when the observer's action kept the evaluation out
    of best tracking.
    """

    x: float
    evaluation: Evaluation | None
    decision: Decision
    excluded: bool

    @property
    def stopped(self) -> bool:
        return self.decision.kind == DecisionKind.STOP_EARLY

    @property
    def info(self) -> Any:
        return self.decision.info

    @property
    def score(self) -> float:
        if self.evaluation is None:
            return math.nan
        return float(np.ravel(self.evaluation.score)[0])


class EvalContext:
    """Evaluates points for one solve call and routes each attempt through the observer.

    ``excluded_actions`` lists the action types whose attempt must not reach
    the best tracker, even when the real evaluation succeeded.
    """

    def __init__(
        self,
        solver: str,
        model: Model,
        problem: Any,
        evaluate: Callable[[Model, Any, Any], Evaluation],
        classify: Callable[[Any], Any],
        observer: ObserverLike,
        allowed_actions: tuple[type, ...],
        excluded_actions: tuple[type, ...],
    ):
        self.solver = solver
        self.model = model
        self.problem = problem
        self.evaluate = evaluate
        self.classify = classify
        self.observer = observer
        self.allowed_actions = allowed_actions
        self.excluded_actions = excluded_actions
        self.evaluations = 0

    def attempt(
        self,
        best: BestTracker,
        x: float,
        phase: str,
        iteration: int = 0,
        other: Any = None,
        bracket: tuple[float, float] | None = None,
    ) -> Attempt:
        """Evaluate ``x``, notify the observer, fold the result into ``best``.

        Raises the evaluation error when the decision is fatal.
        """
        evaluation: Evaluation | None = None
        error: EvaluationError | None = None
        try:
            evaluation = self.evaluate(self.model, self.problem, x)
            outcome: Any = evaluation.score
        except EvaluationError as exc:
            error = exc
            outcome = exc
        self.evaluations += 1

        event = Event(
            solver=self.solver,
            phase=phase,
            x=float(x),
            iteration=iteration,
            evaluation=evaluation,
            error=error,
            other=other,
            best=best.point,
            bracket=bracket,
        )
        action = notify(self.observer, event)
        if action is not None and not isinstance(action, self.allowed_actions):
            allowed = ", ".join(cls.__name__ for cls in self.allowed_actions)
            raise TypeError(f"Unsupported {self.solver} action {action!r}; expected one of: {allowed}.")

        decision = resolve(action, outcome, self.classify)
        if decision.kind == DecisionKind.FATAL:
            raise decision.error

        excluded = isinstance(action, self.excluded_actions)
        if evaluation is not None and not excluded:
            best.update(evaluation)
        return Attempt(x=float(x), evaluation=evaluation, decision=decision, excluded=excluded)


class BracketStrategy:
    """Holds the caller's bracket until ``start`` validates it."""

    def __init__(self, bracket: Any, config: Any):
        self.requested = bracket
        self.config = config
        self.bounds: Bounds | None = None

    def validate(self) -> Bounds:
        self.bounds = Bounds.from_pair(self.requested)
        return self.bounds

    def log_fields(self) -> dict[str, Any]:
        if self.bounds is None:
            return {"requested_bracket": repr(self.requested)}
        return {"bracket": [self.bounds.left, self.bounds.right]}


class Strategy(Protocol):
    """Bracket narrowing rule plugged into ``drive``."""

    def start(self, ctx: EvalContext, best: BestTracker) -> bool: ...

    def x_converged(self) -> bool: ...

    def score_converged(self, best: BestTracker) -> bool: ...

    def step(self, ctx: EvalContext, best: BestTracker, iteration: int) -> bool: ...

    def log_fields(self) -> dict[str, Any]: ...


def drive(strategy: Strategy, ctx: EvalContext, best: BestTracker, max_iters: int) -> Solution:
    """Run the shared loop.

    ``start`` and ``step`` return False when the observer asked to stop.
    The iteration count is the number of ``step`` evaluations performed.
    """
    if not strategy.start(ctx, best):
        return best.finish(Status.STOPPED_BY_OBSERVER, 0)
    if strategy.score_converged(best):
        return best.finish(Status.CONVERGED, 0)

    for iteration in range(1, max_iters + 1):
        if strategy.x_converged():
            return best.finish(Status.CONVERGED, iteration - 1)
        if not strategy.step(ctx, best, iteration):
            return best.finish(Status.STOPPED_BY_OBSERVER, iteration)
        if strategy.score_converged(best):
            return best.finish(Status.CONVERGED, iteration)

    return best.finish(Status.MAX_ITERS, max_iters)


def run(
    strategy: Strategy,
    ctx: EvalContext,
    best: BestTracker,
    max_iters: int,
    log_context: dict[str, Any] | None = None,
) -> Solution:
    """``drive`` plus runtime diagnostics for failed or unconverged solves."""
    context = dict(log_context or {})
    try:
        solution = drive(strategy, ctx, best, max_iters)
    except SolverError as exc:
        context.update(strategy.log_fields())
        context["evaluations"] = ctx.evaluations
        append_runtime_event(
            level="ERROR",
            event=f"{ctx.solver}_failed",
            message=str(exc),
            context=context,
            exc=exc,
        )
        raise

    if solution.status != Status.CONVERGED:
        context.update(strategy.log_fields())
        context["evaluations"] = ctx.evaluations
        context.update(solution.to_record())
        append_runtime_event(
            level="WARNING",
            event=f"{ctx.solver}_not_converged",
            message=f"Solve ended with status {solution.status.value} after {solution.iters} iteration(s).",
            context=context,
        )
    return solution
