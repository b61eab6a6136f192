"""Reusable observers for tracing and steering solves."""

from __future__ import annotations

import math
from typing import Any

import pandas as pd

from bracketsolve.actions import STOP_EARLY
from bracketsolve.events import Event
from bracketsolve.observer import ObserverLike, notify


TRACE_COLUMNS = [
    "Solver",
    "Phase",
    "Iteration",
    "X",
    "OK",
    "Score",
    "Error Stage",
    "Error",
    "Best X",
    "Best Score",
    "Bracket Left",
    "Bracket Right",
]


def event_score(event: Event) -> float:
    """Residual for bisection events, objective for golden-section events, NaN on failure."""
    residual = event.residual
    if not math.isnan(residual):
        return residual
    return event.objective


class TraceRecorder:
    """Copies each event into a flat row; never steers the solver."""

    def __init__(self):
        self.rows: list[dict[str, Any]] = []

    def observe(self, event: Event) -> None:
        bracket = event.bracket or (math.nan, math.nan)
        best = event.best
        self.rows.append(
            {
                "Solver": event.solver,
                "Phase": event.phase,
                "Iteration": int(event.iteration),
                "X": float(event.x),
                "OK": event.ok,
                "Score": event_score(event),
                "Error Stage": event.error.stage if event.error is not None else "",
                "Error": str(event.error) if event.error is not None else "",
                "Best X": best.x if best is not None else math.nan,
                "Best Score": best.score if best is not None else math.nan,
                "Bracket Left": float(bracket[0]),
                "Bracket Right": float(bracket[1]),
            }
        )
        return None

    def __len__(self) -> int:
        return len(self.rows)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=TRACE_COLUMNS)


class StopAfter:
    """Stops the solve on the ``limit``-th attempted evaluation."""

    def __init__(self, limit: int):
        if int(limit) < 1:
            raise ValueError("StopAfter limit must be at least 1.")
        self.limit = int(limit)
        self.seen = 0

    def observe(self, event: Event):
        self.seen += 1
        if self.seen >= self.limit:
            return STOP_EARLY
        return None


class GoodEnough:
    """Stops once a successful evaluation scores below ``tolerance`` in magnitude.

    Failed evaluations count toward ``min_evals`` but never trigger a stop.
    """

    def __init__(self, tolerance: float, min_evals: int = 1):
        self.tolerance = float(tolerance)
        self.min_evals = int(min_evals)
        self.seen = 0

    def observe(self, event: Event):
        self.seen += 1
        if self.seen < self.min_evals:
            return None
        if abs(event_score(event)) < self.tolerance:
            return STOP_EARLY
        return None


class RecoverFailures:
    """Answers every failed evaluation with a fixed assume-action.

    Use ``assume_positive()``/``assume_negative()`` for bisection and
    ``ASSUME_WORSE`` for golden-section search.
    """

    def __init__(self, action: Any):
        self.action = action
        self.recovered: list[float] = []

    def observe(self, event: Event):
        if event.ok:
            return None
        self.recovered.append(float(event.x))
        return self.action


class ObserverChain:
    """Notifies every observer in order; the first non-``None`` action wins."""

    def __init__(self, observers: list[ObserverLike]):
        self.observers = list(observers)

    def observe(self, event: Event):
        chosen = None
        for observer in self.observers:
            action = notify(observer, event)
            if chosen is None and action is not None:
                chosen = action
        return chosen


def chain(*observers: ObserverLike) -> ObserverChain:
    return ObserverChain(list(observers))
