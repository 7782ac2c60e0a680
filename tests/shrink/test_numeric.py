from __future__ import annotations

import math

from effcheck.domains import IntRange
from effcheck.shrink.numeric import shrink_candidates, shrink_float, shrink_integer


class TestShrinkInteger:
    def test_origin_then_bisection_toward_value(self):
        assert list(shrink_integer(73, 0)) == [0, 37, 55, 64, 69, 71, 72]

    def test_distance_to_value_halves(self):
        candidates = list(shrink_integer(73, 0))
        assert [73 - c for c in candidates[1:]] == [36, 18, 9, 4, 2, 1]

    def test_negative_values_mirror(self):
        assert list(shrink_integer(-73, 0)) == [0, -37, -55, -64, -69, -71, -72]

    def test_at_origin_is_empty(self):
        assert list(shrink_integer(0, 0)) == []
        assert list(shrink_integer(5, 5)) == []

    def test_one_step_from_origin(self):
        assert list(shrink_integer(1, 0)) == [0]

    def test_nonzero_origin(self):
        assert list(shrink_integer(20, 10, 10, 30)) == [10, 15, 18, 19]

    def test_every_candidate_is_strictly_closer(self):
        for value in range(-60, 61):
            for candidate in shrink_integer(value, 0):
                assert abs(candidate) < abs(value)

    def test_last_candidate_is_one_step_away(self):
        for value in range(2, 200):
            assert list(shrink_integer(value, 0))[-1] == value - 1

    def test_no_duplicates(self):
        for value in range(-100, 101):
            candidates = list(shrink_integer(value, 0))
            assert len(candidates) == len(set(candidates))


class TestShrinkFloat:
    def test_origin_then_integral_values(self):
        candidates = list(shrink_float(2.5, 0.0))
        assert candidates[:4] == [0.0, 2.0, 1.0, 1.25]

    def test_candidates_are_closer_and_unique(self):
        candidates = list(shrink_float(10.0, 0.0))
        assert candidates[0] == 0.0
        assert len(candidates) == len(set(candidates))
        assert all(abs(c) < 10.0 for c in candidates)

    def test_bisection_is_bounded(self):
        candidates = list(shrink_float(0.75, 0.0))
        assert len(candidates) <= 1 + 64

    def test_respects_bounds(self):
        candidates = list(shrink_float(7.5, 5.0, 5.0, 10.0))
        assert candidates[0] == 5.0
        assert all(5.0 <= c < 7.5 for c in candidates)

    def test_at_origin_is_empty(self):
        assert list(shrink_float(0.0, 0.0)) == []

    def test_nan_shrinks_to_origin(self):
        assert list(shrink_float(math.nan, 0.0)) == [0.0]

    def test_infinity_shrinks_to_origin_only(self):
        assert list(shrink_float(math.inf, 0.0)) == [0.0]


class TestShrinkCandidates:
    def test_delegates_to_domain(self):
        assert shrink_candidates(8, IntRange(5, 10)) == [5, 7]

    def test_explicit_target(self):
        assert shrink_candidates(2, IntRange(0, 10, 5)) == [5, 3]
