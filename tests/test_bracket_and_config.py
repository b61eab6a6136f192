from __future__ import annotations

import math

import pytest

from bracketsolve.actions import Sign
from bracketsolve.bracket import INV_PHI, PHI, Bounds, Bracket, GoldenBracket
from bracketsolve.config import BisectionConfig, GoldenSectionConfig
from bracketsolve.errors import InvalidBracket, InvalidConfig


def test_bounds_reorder_reversed_endpoints():
    bounds = Bounds.from_pair((4.0, -1.0))
    assert (bounds.left, bounds.right) == (-1.0, 4.0)
    assert bounds.width == 5.0


@pytest.mark.parametrize("pair", [(1.0, 1.0), (math.nan, 0.0), (0.0, -math.inf), (1.0, 2.0, 3.0)])
def test_bounds_reject_degenerate_pairs(pair):
    with pytest.raises(InvalidBracket):
        Bounds.from_pair(pair)


def test_bracket_requires_opposite_signs():
    with pytest.raises(ValueError):
        Bracket(Bounds(0.0, 1.0), Sign.POSITIVE, Sign.POSITIVE)


def test_bracket_shrink_replaces_bound_with_matching_sign():
    bracket = Bracket(Bounds(0.0, 8.0), Sign.NEGATIVE, Sign.POSITIVE)
    bracket.shrink(bracket.midpoint, Sign.NEGATIVE)
    assert bracket.as_tuple() == (4.0, 8.0)
    bracket.shrink(bracket.midpoint, Sign.POSITIVE)
    assert bracket.as_tuple() == (4.0, 6.0)
    assert bracket.left_sign == Sign.NEGATIVE
    assert bracket.right_sign == Sign.POSITIVE


def test_bracket_width_convergence_uses_absolute_and_relative_tolerance():
    bracket = Bracket(Bounds(99.0, 101.0), Sign.NEGATIVE, Sign.POSITIVE)
    assert not bracket.is_x_converged(1.0, 0.0)
    assert bracket.is_x_converged(0.0, 0.03)
    assert bracket.is_x_converged(1.0, 0.015)


def test_golden_bracket_places_interior_points():
    bracket = GoldenBracket(Bounds(0.0, 10.0))
    assert PHI * INV_PHI == pytest.approx(1.0)
    assert bracket.inner_left == pytest.approx(10.0 * (1.0 - INV_PHI))
    assert bracket.inner_right == pytest.approx(10.0 * INV_PHI)


def test_golden_bracket_shrink_right_reuses_left_point():
    bracket = GoldenBracket(Bounds(0.0, 10.0))
    old_left, old_right = bracket.inner_left, bracket.inner_right
    expected = bracket.next_inner_left()
    bracket.shrink_right()
    assert bracket.right == old_right
    assert bracket.inner_right == old_left
    assert bracket.inner_left == expected
    assert bracket.left < bracket.inner_left < bracket.inner_right < bracket.right


def test_golden_bracket_shrink_left_reuses_right_point():
    bracket = GoldenBracket(Bounds(0.0, 10.0))
    old_left, old_right = bracket.inner_left, bracket.inner_right
    expected = bracket.next_inner_right()
    bracket.shrink_left()
    assert bracket.left == old_left
    assert bracket.inner_left == old_right
    assert bracket.inner_right == expected
    assert bracket.left < bracket.inner_left < bracket.inner_right < bracket.right


def test_golden_bracket_keeps_golden_proportions():
    bracket = GoldenBracket(Bounds(0.0, 1.0))
    for _ in range(5):
        bracket.shrink_right()
    assert bracket.inner_gap / bracket.width == pytest.approx(2.0 * INV_PHI - 1.0, rel=1e-9)


def test_default_configs():
    assert BisectionConfig() == BisectionConfig(max_iters=100, x_abs_tol=1e-12, x_rel_tol=1e-12, residual_tol=1e-12)
    assert GoldenSectionConfig().max_iters == 100


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"max_iters": -1}, "max_iters"),
        ({"max_iters": 2.5}, "max_iters"),
        ({"max_iters": True}, "max_iters"),
        ({"x_abs_tol": -1e-9}, "x_abs_tol"),
        ({"x_rel_tol": math.nan}, "x_rel_tol"),
        ({"residual_tol": math.inf}, "residual_tol"),
        ({"residual_tol": "small"}, "residual_tol"),
    ],
)
def test_bisection_config_rejects_bad_values(kwargs, field):
    with pytest.raises(InvalidConfig) as info:
        BisectionConfig(**kwargs)
    assert info.value.field == field
    assert isinstance(info.value, ValueError)


def test_golden_section_config_rejects_negative_tolerance():
    with pytest.raises(InvalidConfig):
        GoldenSectionConfig(x_abs_tol=-1.0)
    assert GoldenSectionConfig(max_iters=0, x_abs_tol=0.0, x_rel_tol=0.0).max_iters == 0
