from __future__ import annotations

import math

import numpy as np
import pytest

from bracketsolve.errors import EvaluationError, InputError, ModelError, ObjectiveError, ResidualError
from bracketsolve.evaluate import as_variables, evaluate_equation, evaluate_optimization
from bracketsolve.events import Event, Point
from bracketsolve.model import FunctionModel, Model, Snapshot, as_model
from bracketsolve.observer import NoopObserver, notify
from bracketsolve.problems import (
    NegateObjective,
    OutputObjective,
    TargetOutputProblem,
    residuals_from_snapshot,
)


class BrokenInput:
    def input(self, x):
        raise KeyError("missing")

    def residuals(self, input, output):
        return [0.0]


class TwoResiduals:
    def input(self, x):
        return float(x[0])

    def residuals(self, input, output):
        return [output, output]


def test_as_variables_is_read_only_vector():
    x = as_variables(2.5)
    assert x.shape == (1,)
    assert x[0] == 2.5
    with pytest.raises(ValueError):
        x[0] = 1.0


def test_evaluate_equation_captures_snapshot_and_residual():
    evaluation = evaluate_equation(FunctionModel(lambda x: x * 2.0), TargetOutputProblem(5.0), 4.0)
    assert evaluation.scalar_x == 4.0
    assert evaluation.residual == 3.0
    assert evaluation.snapshot == Snapshot(4.0, 8.0)
    assert not evaluation.score.flags.writeable


def test_target_output_problem_extracts_from_structured_output():
    problem = TargetOutputProblem(10.0, output=lambda out: out["total"])
    evaluation = evaluate_equation(FunctionModel(lambda x: {"total": x + 1.0}), problem, 4.0)
    assert evaluation.residual == -5.0


def test_input_failure_is_staged_and_chained():
    with pytest.raises(InputError) as info:
        evaluate_equation(FunctionModel(lambda x: x), BrokenInput(), 1.0)
    assert info.value.stage == "input"
    assert info.value.input is None
    assert isinstance(info.value.__cause__, KeyError)


def test_model_failure_carries_input():
    def explode(x):
        raise ZeroDivisionError("bad")

    with pytest.raises(ModelError) as info:
        evaluate_equation(FunctionModel(explode), TargetOutputProblem(0.0), 3.0)
    assert info.value.stage == "model"
    assert info.value.input == 3.0
    assert info.value.output is None
    assert isinstance(info.value.__cause__, ZeroDivisionError)
    assert "x=3.0" in str(info.value)


def test_residual_failure_carries_input_and_output():
    problem = TargetOutputProblem(0.0, output=lambda out: out["missing"])
    with pytest.raises(ResidualError) as info:
        evaluate_equation(FunctionModel(lambda x: {"present": x}), problem, 1.0)
    assert info.value.input == 1.0
    assert info.value.output == {"present": 1.0}
    assert isinstance(info.value, EvaluationError)


def test_residual_length_must_match_variables():
    with pytest.raises(ResidualError, match="Expected 1 residual"):
        evaluate_equation(FunctionModel(lambda x: x), TwoResiduals(), 1.0)


def test_non_finite_residual_is_a_residual_error():
    with pytest.raises(ResidualError, match="Non-finite"):
        evaluate_equation(FunctionModel(lambda x: math.nan), TargetOutputProblem(0.0), 1.0)


def test_evaluate_optimization_and_negation():
    model = FunctionModel(lambda x: (x - 1.0) ** 2)
    plain = evaluate_optimization(model, OutputObjective(), 3.0)
    negated = evaluate_optimization(model, NegateObjective(OutputObjective()), 3.0)
    assert plain.objective == 4.0
    assert negated.objective == -4.0
    assert negated.snapshot == plain.snapshot


def test_objective_failure_is_staged():
    with pytest.raises(ObjectiveError) as info:
        evaluate_optimization(FunctionModel(lambda x: "n/a"), OutputObjective(), 1.0)
    assert info.value.stage == "objective"
    assert info.value.output == "n/a"


def test_residuals_from_snapshot_uses_problem_override():
    class WithOverride(TargetOutputProblem):
        def residuals_from_snapshot(self, snapshot):
            return [snapshot.output * 10.0]

    snapshot = Snapshot(1.0, 2.0)
    assert residuals_from_snapshot(TargetOutputProblem(0.5), snapshot).tolist() == [1.5]
    assert residuals_from_snapshot(WithOverride(0.5), snapshot).tolist() == [20.0]


def test_as_model_wraps_callables_and_rejects_others():
    wrapped = as_model(abs)
    assert isinstance(wrapped, Model)
    assert wrapped.call(-2) == 2
    assert as_model(wrapped) is wrapped
    with pytest.raises(TypeError):
        as_model(42)


def test_event_views_fall_back_to_error_payload():
    error = ModelError(np.array([2.0]), 2.0)
    event = Event(solver="bisection", phase="midpoint", x=2.0, iteration=1, error=error)
    assert not event.ok
    assert event.input == 2.0
    assert event.output is None
    assert event.score is None
    assert math.isnan(event.residual)


def test_event_exposes_residual_only_for_bisection():
    evaluation = evaluate_equation(FunctionModel(lambda x: x), TargetOutputProblem(1.0), 3.0)
    bisection_event = Event(solver="bisection", phase="left", x=3.0, evaluation=evaluation)
    golden_event = Event(solver="golden_section", phase="init", x=3.0, evaluation=evaluation)
    assert bisection_event.residual == 2.0
    assert math.isnan(bisection_event.objective)
    assert math.isnan(golden_event.residual)


def test_point_from_evaluation_and_assumed():
    evaluation = evaluate_optimization(FunctionModel(lambda x: x + 1.0), OutputObjective(), 2.0)
    point = Point.from_evaluation(evaluation, rank=-3.0)
    assert (point.x, point.score, point.rank) == (2.0, 3.0, -3.0)
    assumed = Point.assumed(5.0, math.inf)
    assert math.isnan(assumed.score)
    assert assumed.rank == math.inf


def test_notify_accepts_none_objects_and_callables():
    event = Event(solver="bisection", phase="left", x=0.0)
    assert notify(None, event) is None
    assert notify(NoopObserver(), event) is None
    assert notify(lambda e: "stop", event) == "stop"
    with pytest.raises(TypeError):
        notify(3, event)
