"""Evaluation pipeline: solver variables -> model input -> model output -> score."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from bracketsolve.errors import InputError, ModelError, ObjectiveError, ResidualError
from bracketsolve.model import Model, Snapshot
from bracketsolve.problems import EquationProblem, OptimizationProblem


@dataclass(frozen=True, eq=False)
class Evaluation:
    """One successful evaluation.

    ``score`` is a read-only residual array for equation problems and a
    float objective for optimization problems.
    """

    x: np.ndarray
    score: Any
    snapshot: Snapshot

    @property
    def scalar_x(self) -> float:
        return float(self.x[0])

    @property
    def residual(self) -> float:
        return float(np.ravel(self.score)[0])

    @property
    def objective(self) -> float:
        return float(self.score)


def as_variables(x: float | Sequence[float] | np.ndarray) -> np.ndarray:
    """Return ``x`` as a read-only 1-D float array."""
    arr = np.array(x, dtype=float, ndmin=1).ravel()
    arr.setflags(write=False)
    return arr


def evaluate_equation(model: Model, problem: EquationProblem, x: Any) -> Evaluation:
    """Evaluate residuals at ``x``.

    Raises ``InputError``, ``ModelError`` or ``ResidualError`` depending on
    the stage that failed.
    """
    x = as_variables(x)
    try:
        input = problem.input(x)
    except Exception as exc:
        raise InputError(x) from exc
    try:
        output = model.call(input)
    except Exception as exc:
        raise ModelError(x, input) from exc
    try:
        raw = problem.residuals(input, output)
        residuals = np.array(raw, dtype=float, ndmin=1).ravel()
    except Exception as exc:
        raise ResidualError(x, input, output) from exc

    if residuals.shape != x.shape:
        raise ResidualError(x, input, output, f"Expected {x.size} residual(s), got {residuals.size}.")
    if not np.all(np.isfinite(residuals)):
        raise ResidualError(x, input, output, f"Non-finite residual {residuals.tolist()}.")

    residuals.setflags(write=False)
    return Evaluation(x=x, score=residuals, snapshot=Snapshot(input, output))


def evaluate_optimization(model: Model, problem: OptimizationProblem, x: Any) -> Evaluation:
    """Evaluate the objective at ``x``.

    Raises ``InputError``, ``ModelError`` or ``ObjectiveError`` depending on
    the stage that failed.
    """
    x = as_variables(x)
    try:
        input = problem.input(x)
    except Exception as exc:
        raise InputError(x) from exc
    try:
        output = model.call(input)
    except Exception as exc:
        raise ModelError(x, input) from exc
    try:
        objective = float(problem.objective(input, output))
    except Exception as exc:
        raise ObjectiveError(x, input, output) from exc

    if not math.isfinite(objective):
        raise ObjectiveError(x, input, output, f"Non-finite objective {objective}.")

    return Evaluation(x=x, score=objective, snapshot=Snapshot(input, output))
