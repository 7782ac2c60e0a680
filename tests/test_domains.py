from __future__ import annotations

import math
import random

import pytest

from effcheck.domains import Elements, FloatRange, IntRange, Presence, Weighted


class TestIntRange:
    @pytest.mark.parametrize(
        ("domain", "origin"),
        [
            (IntRange(5, 10), 5),
            (IntRange(-10, -3), -3),
            (IntRange(-5, 5), 0),
            (IntRange(0, 10, 7), 7),
        ],
    )
    def test_origin(self, domain, origin):
        assert domain.origin() == origin

    def test_target_outside_range(self):
        with pytest.raises(ValueError, match="outside"):
            IntRange(0, 10, 11)

    def test_contains(self):
        domain = IntRange(0, 10)
        assert domain.contains(0)
        assert domain.contains(10)
        assert not domain.contains(11)
        assert not domain.contains(True)
        assert not domain.contains(2.0)

    def test_empty(self):
        assert IntRange(1, 0).is_empty()
        assert not IntRange(3, 3).is_empty()

    def test_draw_stays_in_range(self, rng):
        domain = IntRange(-3, 3)
        assert all(domain.contains(domain.draw(rng, 10)) for _ in range(200))

    def test_from_json_accepts_integral_floats(self):
        assert IntRange(0, 10).from_json(4.0) == 4
        assert isinstance(IntRange(0, 10).from_json(4.0), int)


class TestFloatRange:
    def test_origin_and_contains(self):
        domain = FloatRange(1.5, 3.0)
        assert domain.origin() == 1.5
        assert domain.contains(2)
        assert not domain.contains(3.5)
        assert not domain.contains(False)

    def test_empty(self):
        assert FloatRange(1.0, 0.0).is_empty()
        assert FloatRange(math.nan, 1.0).is_empty()

    def test_unbounded_draw_uses_size(self, rng):
        domain = FloatRange(-math.inf, math.inf)
        assert all(abs(domain.draw(rng, 5)) <= 5.0 for _ in range(200))

    @pytest.mark.parametrize(
        ("domain", "lo", "hi"),
        [
            (FloatRange(-math.inf, -1000.0), -1005.0, -1000.0),
            (FloatRange(1000.0, math.inf), 1000.0, 1005.0),
        ],
    )
    def test_half_open_draw_starts_at_finite_bound(self, rng, domain, lo, hi):
        draws = [domain.draw(rng, 5) for _ in range(200)]
        assert all(lo <= d <= hi for d in draws)
        assert len(set(draws)) > 100

    def test_from_json(self):
        assert FloatRange(0.0, 1.0).from_json(1) == 1.0


class TestPresence:
    def test_default_always_present(self, rng):
        assert all(Presence().draw(rng, 0) for _ in range(50))

    def test_probability_zero(self, rng):
        assert not any(Presence(0.0).draw(rng, 0) for _ in range(50))

    def test_invalid_probability(self):
        with pytest.raises(ValueError):
            Presence(1.5)

    def test_shrinks_to_absent(self):
        assert Presence().origin() is False
        assert Presence().shrink_candidates(True) == [False]
        assert Presence().shrink_candidates(False) == []


class TestElements:
    def test_items_become_a_tuple(self):
        domain = Elements(["a", "b", "c"])
        assert domain.items == ("a", "b", "c")
        assert hash(domain) == hash(Elements(("a", "b", "c")))

    def test_indexes(self):
        domain = Elements("xyz")
        assert domain.origin() == 0
        assert domain.contains(2)
        assert not domain.contains(3)
        assert domain.element(1) == "y"
        assert domain.shrink_candidates(2) == [0, 1]

    def test_empty(self):
        assert Elements([]).is_empty()


class TestWeighted:
    def test_zero_weights_are_never_drawn(self, rng):
        domain = Weighted((0, 3, 0, 1))
        drawn = {domain.draw(rng, 0) for _ in range(300)}
        assert drawn == {1, 3}

    def test_zero_weight_is_not_contained(self):
        domain = Weighted((0, 3, 0, 1))
        assert not domain.contains(0)
        assert not domain.contains(2)
        assert domain.contains(3)

    def test_origin_is_first_positive_weight(self):
        assert Weighted((0, 0, 2)).origin() == 2

    def test_shrink_skips_zero_weights(self):
        assert Weighted((1, 0, 1, 1)).shrink_candidates(3) == [0, 2]

    def test_empty_and_negative(self):
        assert Weighted((0, 0)).is_empty()
        with pytest.raises(ValueError):
            Weighted((1, -1))
