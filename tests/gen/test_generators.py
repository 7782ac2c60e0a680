from __future__ import annotations

import random
from typing import Any

import pytest

from effcheck import gen
from effcheck.channel import run_program
from effcheck.path import make_path
from effcheck.program import Program
from effcheck.recording import Recording
from effcheck.replay import ReplayToken
from effcheck.strategies import RandomStrategy, ReplayStrategy, ShrinkStrategy

SEEDS = range(40)


def generate(program: Program[Any], seed: int = 0, size: int = 10) -> tuple[Any, Recording]:
    strategy = RandomStrategy(random.Random(seed), size)
    value = run_program(program, handlers=[strategy])
    return value, strategy.recorder.freeze()


def replay(program: Program[Any], token: ReplayToken) -> tuple[Any, Recording]:
    strategy = ReplayStrategy(token)
    value = run_program(program, handlers=[strategy])
    return value, strategy.recorder.freeze()


def outcome_of(program: Program[Any], size: int = 10):
    return RandomStrategy(random.Random(0), size).run(program).outcome


class TestScalars:
    def test_integers_respect_bounds(self):
        for seed in SEEDS:
            value, _ = generate(gen.integers(-5, 5), seed)
            assert -5 <= value <= 5

    def test_missing_bounds_follow_size(self):
        for seed in SEEDS:
            value, _ = generate(gen.integers(), seed, size=4)
            assert -4 <= value <= 4
            value, _ = generate(gen.integers(lo=3), seed, size=4)
            assert 3 <= value <= 7

    def test_integer_origin_override(self):
        value, _ = replay(gen.integers(0, 10, origin=6), ReplayToken(size=0))
        assert value == 6

    def test_floats_respect_bounds(self):
        for seed in SEEDS:
            value, _ = generate(gen.floats(-1.0, 2.0), seed)
            assert -1.0 <= value <= 2.0

    def test_nan_bounds_rejected(self):
        with pytest.raises(ValueError, match="NaN"):
            generate(gen.floats(float("nan"), 1.0))

    def test_sampled_from_returns_items(self):
        values = {generate(gen.sampled_from(["a", "b", "c"]), seed)[0] for seed in SEEDS}
        assert values == {"a", "b", "c"}

    def test_booleans_probability(self):
        assert all(generate(gen.booleans(1.0), seed)[0] for seed in SEEDS)
        assert not any(generate(gen.booleans(0.0), seed)[0] for seed in SEEDS)


class TestUnions:
    def test_one_of_paths(self):
        generator = gen.one_of(gen.integers(0, 10), gen.integers(20, 30))
        for seed in range(10):
            value, recording = generate(generator, seed)
            choice, inner = recording.decisions
            assert choice.path == make_path([("one_of", 0), ("choice", 0)])
            assert inner.path == make_path(
                [("one_of", 0), ("branch", choice.value), ("integers", 0)]
            )
            assert (value >= 20) == (choice.value == 1)

    def test_empty_one_of_discards(self):
        assert outcome_of(gen.one_of()).is_discard

    def test_empty_sampled_from_discards(self):
        assert outcome_of(gen.sampled_from([])).is_discard

    def test_frequency_never_picks_zero_weight(self):
        generator = gen.frequency((0, gen.constant("never")), (3, gen.constant("always")))
        assert {generate(generator, seed)[0] for seed in SEEDS} == {"always"}

    def test_frequency_paths(self):
        generator = gen.frequency((1, gen.integers(0, 3)), (1, gen.integers(0, 3)))
        _, recording = generate(generator)
        assert recording.paths[0] == make_path([("frequency", 0), ("choice", 0)])


class TestContainers:
    LIST = make_path([("lists", 0)])

    def token(self) -> ReplayToken:
        choices: dict[Any, Any] = {self.LIST + make_path([("length", 0)]): 3}
        for i in range(3):
            element = self.LIST + make_path([("element", i)])
            choices[element + make_path([("present", 0)])] = True
            choices[element + make_path([("integers", 0)])] = i + 1
        return ReplayToken(size=5, choices=choices)

    def test_list_from_token(self):
        value, recording = replay(gen.lists(gen.integers(0, 9)), self.token())
        assert value == [1, 2, 3]
        assert len(recording) == 7

    def test_deleting_an_element_keeps_the_others_in_place(self):
        generator = gen.lists(gen.integers(0, 9))
        _, base = replay(generator, self.token())
        present = self.LIST + make_path([("element", 1), ("present", 0)])
        strategy = ShrinkStrategy(base, present, False)
        assert run_program(generator, handlers=[strategy]) == [1, 3]

    def test_length_bounded_by_size_and_max_size(self):
        for seed in SEEDS:
            value, _ = generate(gen.lists(gen.integers(0, 9)), seed, size=3)
            assert len(value) <= 3
            value, _ = generate(gen.lists(gen.integers(0, 9), max_size=2), seed, size=10)
            assert len(value) <= 2

    def test_min_size_elements_are_not_deletable(self):
        value, recording = replay(
            gen.lists(gen.integers(0, 9), min_size=2), ReplayToken(size=5)
        )
        assert value == [0, 0]
        texts = {segment.atom.text for path in recording.paths for segment in path}
        assert "present" not in texts

    def test_invalid_sizes(self):
        with pytest.raises(ValueError):
            gen.lists(gen.integers(0, 1), min_size=-1)
        with pytest.raises(ValueError):
            gen.lists(gen.integers(0, 1), min_size=3, max_size=2)

    def test_tuples_paths(self):
        value, recording = generate(gen.tuples(gen.integers(0, 5), gen.booleans()))
        assert isinstance(value, tuple) and len(value) == 2
        assert recording.paths == (
            make_path([("tuples", 0), ("integers", 0)]),
            make_path([("tuples", 0), ("booleans", 0)]),
        )

    def test_optionals_shrink_to_none(self):
        value, _ = replay(gen.optionals(gen.integers(1, 9)), ReplayToken(size=5))
        assert value is None


class TestFilters:
    def test_guard_discards(self):
        outcome = outcome_of(gen.guard(False, "nope"))
        assert outcome.is_discard
        assert outcome.reason == "nope"

    def test_guard_passes(self):
        assert outcome_of(gen.guard(True)).is_pass

    def test_such_that_values_satisfy_predicate(self):
        generator = gen.such_that(gen.integers(0, 20), lambda x: x % 2 == 0)
        for seed in SEEDS:
            value, _ = generate(generator, seed)
            assert value % 2 == 0

    def test_such_that_attempts_are_addressed(self):
        generator = gen.such_that(gen.integers(0, 9), lambda x: False, max_tries=2)
        strategy = RandomStrategy(random.Random(0), 10)
        trial = strategy.run(generator)
        assert trial.outcome.is_discard
        assert "2 attempts" in trial.outcome.reason
        assert trial.recording.paths == (
            make_path([("such_that", 0), ("attempt", 0), ("integers", 0)]),
            make_path([("such_that", 0), ("attempt", 1), ("integers", 0)]),
        )

    def test_such_that_needs_a_try(self):
        with pytest.raises(ValueError):
            gen.such_that(gen.integers(0, 1), bool, max_tries=0)


class TestSize:
    def test_sized(self):
        value, _ = generate(gen.sized(lambda n: gen.constant(n * 2)), size=7)
        assert value == 14

    def test_resize(self):
        value, _ = generate(gen.resize(3, gen.current_size()), size=50)
        assert value == 3

    def test_resize_rejects_negative(self):
        with pytest.raises(ValueError):
            gen.resize(-1, gen.current_size())

    def test_scale(self):
        value, _ = generate(gen.scale(lambda n: n // 2, gen.current_size()), size=9)
        assert value == 4

    def test_recursive_depth_bounded_by_size(self):
        def extend(child: Program[int]) -> Program[int]:
            return gen.tuples(child, child).map(lambda pair: 1 + max(pair))

        generator = gen.recursive(gen.constant(0), extend)
        for seed in range(20):
            value, _ = generate(generator, seed, size=4)
            assert 0 <= value <= 4
        assert generate(generator, size=0)[0] == 0


class TestDerived:
    def test_map_and_bind(self):
        doubled = gen.map_(lambda x: x * 2, gen.integers(1, 3))
        assert generate(doubled)[0] in {2, 4, 6}
        dependent = gen.bind(
            gen.integers(1, 3),
            lambda n: gen.lists(gen.constant(n), min_size=n, max_size=n),
        )
        value, _ = generate(dependent)
        assert value == [len(value)] * len(value)


class TestOrigins:
    @pytest.mark.parametrize(
        ("generator", "expected"),
        [
            (gen.integers(3, 9), 3),
            (gen.integers(-9, -3), -3),
            (gen.floats(1.0, 2.0), 1.0),
            (gen.booleans(), False),
            (gen.sampled_from("abc"), "a"),
            (gen.lists(gen.integers(0, 9)), []),
            (gen.one_of(gen.integers(5, 6), gen.constant("x")), 5),
            (gen.optionals(gen.integers(0, 1)), None),
        ],
    )
    def test_empty_token_yields_origin(self, generator, expected):
        assert replay(generator, ReplayToken(size=5))[0] == expected
