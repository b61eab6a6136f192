"""Bracket state for bisection and golden-section search."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from bracketsolve.actions import Sign
from bracketsolve.errors import InvalidBracket


PHI = (1.0 + math.sqrt(5.0)) / 2.0
INV_PHI = PHI - 1.0


@dataclass(frozen=True)
class Bounds:
    """Ordered, finite, non-degenerate bracket endpoints."""

    left: float
    right: float

    @classmethod
    def from_pair(cls, bracket: Sequence[float]) -> "Bounds":
        try:
            a, b = (float(value) for value in bracket)
        except (TypeError, ValueError) as exc:
            raise InvalidBracket(math.nan, math.nan, f"expected two numeric endpoints, got {bracket!r}") from exc
        if not (math.isfinite(a) and math.isfinite(b)):
            raise InvalidBracket(a, b, "non-finite endpoint")
        if a == b:
            raise InvalidBracket(a, b, "zero width")
        if a < b:
            return cls(a, b)
        return cls(b, a)

    @property
    def width(self) -> float:
        return self.right - self.left


def within_tolerance(gap: float, mid: float, x_abs_tol: float, x_rel_tol: float) -> bool:
    return gap <= x_abs_tol + x_rel_tol * abs(mid)


class Bracket:
    """Bisection interval with the residual sign tracked at each end.

    Holds ``left_sign != right_sign`` from construction onward.
    """

    def __init__(self, bounds: Bounds, left_sign: Sign, right_sign: Sign):
        if left_sign == right_sign:
            raise ValueError("Bracket endpoints must have opposite residual signs.")
        self.left = bounds.left
        self.right = bounds.right
        self.left_sign = left_sign
        self.right_sign = right_sign

    def as_tuple(self) -> tuple[float, float]:
        return (self.left, self.right)

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.left + self.right)

    @property
    def width(self) -> float:
        return self.right - self.left

    def is_x_converged(self, x_abs_tol: float, x_rel_tol: float) -> bool:
        return within_tolerance(self.width, self.midpoint, x_abs_tol, x_rel_tol)

    def shrink(self, x: float, sign: Sign) -> None:
        """Replace whichever bound shares ``sign`` with ``x``."""
        if sign == self.left_sign:
            self.left = x
        else:
            self.right = x

    def __repr__(self) -> str:
        return f"Bracket(left={self.left!r}, right={self.right!r}, left_sign={self.left_sign.value}, right_sign={self.right_sign.value})"


class GoldenBracket:
    """Outer bounds plus two interior points placed by the golden ratio.

    ``left < inner_left < inner_right < right`` until the bracket collapses
    to floating-point resolution.
    """

    def __init__(self, bounds: Bounds):
        self.left = bounds.left
        self.right = bounds.right
        self.inner_left = self.left + (1.0 - INV_PHI) * self.width
        self.inner_right = self.left + INV_PHI * self.width

    @property
    def width(self) -> float:
        return self.right - self.left

    def as_tuple(self) -> tuple[float, float]:
        return (self.left, self.right)

    @property
    def inner_gap(self) -> float:
        return abs(self.inner_right - self.inner_left)

    @property
    def inner_midpoint(self) -> float:
        return 0.5 * (self.inner_left + self.inner_right)

    def next_inner_left(self) -> float:
        """Where the new ``inner_left`` lands after ``shrink_right``."""
        return self.left + (1.0 - INV_PHI) * (self.inner_right - self.left)

    def next_inner_right(self) -> float:
        """Where the new ``inner_right`` lands after ``shrink_left``."""
        return self.inner_left + INV_PHI * (self.right - self.inner_left)

    def shrink_right(self) -> None:
        """Discard ``(inner_right, right]``; old ``inner_left`` becomes ``inner_right``."""
        new_inner_left = self.next_inner_left()
        self.right = self.inner_right
        self.inner_right = self.inner_left
        self.inner_left = new_inner_left

    def shrink_left(self) -> None:
        """Discard ``[left, inner_left)``; old ``inner_right`` becomes ``inner_left``."""
        new_inner_right = self.next_inner_right()
        self.left = self.inner_left
        self.inner_left = self.inner_right
        self.inner_right = new_inner_right

    def __repr__(self) -> str:
        return (
            f"GoldenBracket(left={self.left!r}, inner_left={self.inner_left!r}, "
            f"inner_right={self.inner_right!r}, right={self.right!r})"
        )
