"""Closed error taxonomy shared by the bracketing solvers."""

from __future__ import annotations

import math
from typing import Any

import numpy as np


class SolverError(Exception):
    """Base class for every error raised by a solve call."""


class InvalidConfig(SolverError, ValueError):
    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config: {field}={value!r} ({reason}).")


class InvalidBracket(SolverError, ValueError):
    def __init__(self, left: float, right: float, reason: str):
        self.left = left
        self.right = right
        self.reason = reason
        super().__init__(f"Invalid bracket [{left}, {right}]: {reason}.")


class NoBracket(SolverError):
    """Endpoint residuals share a sign, so the bracket holds no root."""

    def __init__(self, left: float, right: float, left_residual: float, right_residual: float):
        self.left = left
        self.right = right
        self.left_residual = left_residual
        self.right_residual = right_residual
        super().__init__(
            f"No root in bracket: f({left})={left_residual}, f({right})={right_residual}."
        )


class NoSuccessfulEvaluation(SolverError):
    def __init__(self, message: str = "No successful evaluation is available to build a solution."):
        super().__init__(message)


class EvaluationError(SolverError):
    """Failure of one evaluation stage.

    ``input`` and ``output`` hold whatever was built before the failing
    stage (``None`` when unavailable). The underlying exception is chained
    as ``__cause__``.
    """

    stage = "evaluation"

    def __init__(self, x: np.ndarray, message: str, input: Any = None, output: Any = None):
        self.x = x
        self.input = input
        self.output = output
        super().__init__(message)

    @property
    def scalar_x(self) -> float:
        if len(self.x) == 0:
            return math.nan
        return float(self.x[0])


class InputError(EvaluationError):
    stage = "input"

    def __init__(self, x: np.ndarray):
        super().__init__(x, f"Failed to compute model input at x={_format_x(x)}.")


class ModelError(EvaluationError):
    stage = "model"

    def __init__(self, x: np.ndarray, input: Any):
        super().__init__(x, f"Model call failed at x={_format_x(x)}.", input=input)


class ResidualError(EvaluationError):
    stage = "residual"

    def __init__(self, x: np.ndarray, input: Any, output: Any, detail: str = ""):
        message = f"Failed to compute residual at x={_format_x(x)}."
        if detail:
            message = f"{message} {detail}"
        super().__init__(x, message, input=input, output=output)


class ObjectiveError(EvaluationError):
    stage = "objective"

    def __init__(self, x: np.ndarray, input: Any, output: Any, detail: str = ""):
        message = f"Failed to compute objective at x={_format_x(x)}."
        if detail:
            message = f"{message} {detail}"
        super().__init__(x, message, input=input, output=output)


def _format_x(x: np.ndarray) -> str:
    values = [float(v) for v in np.ravel(x)]
    if len(values) == 1:
        return repr(values[0])
    return repr(values)
