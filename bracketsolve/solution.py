"""Terminal solve results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from bracketsolve.model import Snapshot


class Status(str, Enum):
    CONVERGED = "converged"
    MAX_ITERS = "max_iters"
    STOPPED_BY_OBSERVER = "stopped_by_observer"


@dataclass(frozen=True)
class Solution:
    """Best point found by a solve call.

    ``score`` is the residual for bisection and the (untransformed)
    objective for golden-section search.
    """

    status: Status
    x: float
    score: float
    snapshot: Snapshot
    iters: int

    @property
    def converged(self) -> bool:
        return self.status == Status.CONVERGED

    @property
    def residual(self) -> float:
        return self.score

    @property
    def objective(self) -> float:
        return self.score

    def to_record(self) -> dict[str, Any]:
        """JSON-friendly summary without the snapshot payload."""
        return {
            "status": self.status.value,
            "x": float(self.x),
            "score": float(self.score),
            "iters": int(self.iters),
        }
