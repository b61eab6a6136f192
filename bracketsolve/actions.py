"""Observer-issued control actions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class Sign(str, Enum):
    """Residual sign used for bracket bookkeeping. Zero counts as positive."""

    POSITIVE = "positive"
    NEGATIVE = "negative"

    @classmethod
    def of(cls, value: float) -> "Sign":
        if value >= 0.0:
            return cls.POSITIVE
        return cls.NEGATIVE


@dataclass(frozen=True)
class StopEarly:
    """Stop and finalize from the best evaluation recorded so far."""


@dataclass(frozen=True)
class AssumeResidualSign:
    """Bisection: treat the attempted point as having ``sign``.

    Applies whether or not the real evaluation succeeded; the evaluation is
    excluded from best tracking.
    """

    sign: Sign

    def __post_init__(self):
        object.__setattr__(self, "sign", Sign(self.sign))

    def assumed(self) -> Sign:
        return self.sign


@dataclass(frozen=True)
class AssumeWorse:
    """Golden section: treat the attempted point as worse than any real point.

    The assumed transformed score is ``+inf``; the evaluation is excluded from
    best tracking.
    """

    def assumed(self) -> float:
        return math.inf


STOP_EARLY = StopEarly()
ASSUME_WORSE = AssumeWorse()


def assume_positive() -> AssumeResidualSign:
    return AssumeResidualSign(Sign.POSITIVE)


def assume_negative() -> AssumeResidualSign:
    return AssumeResidualSign(Sign.NEGATIVE)


BISECTION_ACTIONS = (StopEarly, AssumeResidualSign)
GOLDEN_SECTION_ACTIONS = (StopEarly, AssumeWorse)
