from __future__ import annotations

from pathlib import Path

import pytest

import bracketsolve.runtime_logging as runtime_logging
from bracketsolve.problems import OutputObjective, TargetOutputProblem


@pytest.fixture(autouse=True)
def isolated_runtime_log(tmp_path, monkeypatch) -> Path:
    log_dir = Path(tmp_path) / "logs"
    monkeypatch.setattr(runtime_logging, "LOG_DIR", log_dir)
    monkeypatch.setattr(runtime_logging, "SOLVER_EVENTS_LOG_FILE", log_dir / "solver_events.jsonl")
    return log_dir


@pytest.fixture
def root_problem() -> TargetOutputProblem:
    return TargetOutputProblem(target=0.0)


@pytest.fixture
def objective_problem() -> OutputObjective:
    return OutputObjective()


class ThresholdModel:
    """Parabola with its minimum at x=2 that fails above ``threshold``."""

    def __init__(self, threshold: float):
        self.threshold = threshold
        self.calls: list[float] = []

    def call(self, x: float) -> float:
        self.calls.append(x)
        if x > self.threshold:
            raise RuntimeError(f"model failed at x={x} (threshold={self.threshold})")
        return (x - 2.0) ** 2


@pytest.fixture
def threshold_model() -> ThresholdModel:
    return ThresholdModel(threshold=5.0)
