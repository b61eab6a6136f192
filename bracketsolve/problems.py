"""Problem capabilities that adapt solver variables to model inputs and scores."""

from __future__ import annotations

from typing import Any, Callable, Protocol, Sequence

import numpy as np

from bracketsolve.model import Snapshot


class EquationProblem(Protocol):
    """Maps ``x`` to a model input and derives residuals from input/output.

    The residual sequence must have the same length as ``x``. Problems may
    also define ``residuals_from_snapshot(snapshot)``.
    """

    def input(self, x: np.ndarray) -> Any: ...

    def residuals(self, input: Any, output: Any) -> Sequence[float]: ...


class OptimizationProblem(Protocol):
    """Maps ``x`` to a model input and derives a scalar objective."""

    def input(self, x: np.ndarray) -> Any: ...

    def objective(self, input: Any, output: Any) -> float: ...


def residuals_from_snapshot(problem: EquationProblem, snapshot: Snapshot) -> np.ndarray:
    """Recompute residuals for a captured snapshot without calling the model."""
    custom = getattr(problem, "residuals_from_snapshot", None)
    if callable(custom):
        values = custom(snapshot)
    else:
        values = problem.residuals(snapshot.input, snapshot.output)
    return np.atleast_1d(np.asarray(values, dtype=float))


def _identity(value: Any) -> float:
    return float(value)


class TargetOutputProblem:
    """Scalar equation problem driving a model output to ``target``.

    The model input is ``x[0]`` and the residual is ``output - target``.
    ``output`` extracts the number to compare from the model output.
    """

    def __init__(self, target: float, output: Callable[[Any], float] | None = None):
        self.target = float(target)
        self.extract = output or _identity

    def input(self, x: np.ndarray) -> float:
        return float(x[0])

    def residuals(self, input: Any, output: Any) -> list[float]:
        return [float(self.extract(output)) - self.target]


class OutputObjective:
    """Scalar optimization problem whose objective is the model output."""

    def __init__(self, objective: Callable[[Any], float] | None = None):
        self.extract = objective or _identity

    def input(self, x: np.ndarray) -> float:
        return float(x[0])

    def objective(self, input: Any, output: Any) -> float:
        return float(self.extract(output))


class NegateObjective:
    """Adapter that negates an optimization problem's objective.

    Minimizing the wrapped problem maximizes the original one.
    """

    def __init__(self, problem: OptimizationProblem):
        self.problem = problem

    def input(self, x: np.ndarray) -> Any:
        return self.problem.input(x)

    def objective(self, input: Any, output: Any) -> float:
        return -float(self.problem.objective(input, output))
