"""Validated solver tolerances."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Integral, Real

from bracketsolve.errors import InvalidConfig


def _check_tolerance(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidConfig(name, value, "must be a number")
    if not math.isfinite(value) or value < 0.0:
        raise InvalidConfig(name, value, "must be finite and non-negative")


def _check_max_iters(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidConfig("max_iters", value, "must be an integer")
    if value < 0:
        raise InvalidConfig("max_iters", value, "must be non-negative")


@dataclass(frozen=True)
class BisectionConfig:
    max_iters: int = 100
    x_abs_tol: float = 1e-12
    x_rel_tol: float = 1e-12
    residual_tol: float = 1e-12

    def __post_init__(self):
        _check_max_iters(self.max_iters)
        _check_tolerance("x_abs_tol", self.x_abs_tol)
        _check_tolerance("x_rel_tol", self.x_rel_tol)
        _check_tolerance("residual_tol", self.residual_tol)


@dataclass(frozen=True)
class GoldenSectionConfig:
    max_iters: int = 100
    x_abs_tol: float = 1e-12
    x_rel_tol: float = 1e-12

    def __post_init__(self):
        _check_max_iters(self.max_iters)
        _check_tolerance("x_abs_tol", self.x_abs_tol)
        _check_tolerance("x_rel_tol", self.x_rel_tol)
