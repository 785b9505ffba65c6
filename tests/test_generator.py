"""Tests for greedy pairwise selection.

Tests cover:
- Cross-product enumeration order and cardinality
- Pair key construction
- Greedy acceptance and the result cap
- Single-step and colliding-name inputs
- Coverage statistics
"""

from __future__ import annotations

import pytest

from pairwiseqa.combinatorial import (
    DEFAULT_MAX_RESULTS,
    Assignment,
    PairwiseSelector,
    SelectionTrace,
    build_domains,
    pair_key,
    pair_keys,
    select_pairwise,
)
from pairwiseqa.errors import CombinatorialExplosionError, NoStepsError
from pairwiseqa.models import Step, Tag
from tests.conftest import make_step


def _values(results):
    return [tuple(r.values.values()) for r in results]


# ============================================================
# Enumeration
# ============================================================


class TestAllAssignments:
    """Tests for Stage A: full cross-product enumeration."""

    def test_odometer_order(self, browser_os_steps):
        selector = PairwiseSelector(build_domains(browser_os_steps))
        combos = [tuple(a.values.values()) for a in selector.all_assignments()]
        assert combos == [
            ("Chrome", "Windows"),
            ("Chrome", "Mac"),
            ("Firefox", "Windows"),
            ("Firefox", "Mac"),
        ]

    @pytest.mark.parametrize("sizes", [[1], [3], [2, 3], [3, 1, 2], [2, 2, 2, 2]])
    def test_cardinality_is_product(self, sizes):
        steps = [make_step(f"S{i}", [f"v{j}" for j in range(n)]) for i, n in enumerate(sizes)]
        selector = PairwiseSelector(build_domains(steps))
        expected = 1
        for n in sizes:
            expected *= n
        assert selector.total_assignments == expected
        assert len(selector.all_assignments()) == expected

    def test_assignment_fields(self, browser_os_steps):
        first = PairwiseSelector(build_domains(browser_os_steps)).all_assignments()[0]
        assert first.values == {"Browser": "Chrome", "OS": "Windows"}
        assert first.tags == {"Browser": Tag.GREEN, "OS": Tag.YELLOW}
        assert first.descriptions == ["Browser: Chrome", "OS: Windows"]
        assert first.description == "Browser: Chrome | OS: Windows"

    def test_max_assignments_guard(self, browser_os_steps):
        selector = PairwiseSelector(build_domains(browser_os_steps), max_assignments=3)
        with pytest.raises(CombinatorialExplosionError, match="4 combinations exceed"):
            selector.all_assignments()

    def test_max_assignments_at_limit_is_allowed(self, browser_os_steps):
        selector = PairwiseSelector(build_domains(browser_os_steps), max_assignments=4)
        assert len(selector.all_assignments()) == 4


# ============================================================
# Pair keys
# ============================================================


class TestPairKeys:
    """Tests for canonical pair keys."""

    def test_pair_key_format(self):
        assert pair_key("Browser", "Chrome", "OS", "Mac") == "Browser:Chrome-OS:Mac"

    def test_keys_follow_step_position_not_alphabet(self):
        keys = pair_keys({"Zeta": "z", "Alpha": "a"})
        assert keys == ["Zeta:z-Alpha:a"]

    def test_all_unordered_pairs(self):
        keys = pair_keys({"A": "1", "B": "2", "C": "3"})
        assert keys == ["A:1-B:2", "A:1-C:3", "B:2-C:3"]

    def test_single_step_has_no_pairs(self):
        assert pair_keys({"A": "1"}) == []

    def test_assignment_pair_keys(self):
        assignment = Assignment(
            values={"A": "1", "B": "2"},
            tags={"A": Tag.YELLOW, "B": Tag.YELLOW},
            descriptions=["A: 1", "B: 2"],
        )
        assert assignment.pair_keys() == ["A:1-B:2"]


# ============================================================
# Greedy selection
# ============================================================


class TestSelectPairwise:
    """Tests for Stage B and C: greedy cover and materialization."""

    def test_two_steps_select_entire_cross_product(self, browser_os_steps):
        results = select_pairwise(build_domains(browser_os_steps))
        assert _values(results) == [
            ("Chrome", "Windows"),
            ("Chrome", "Mac"),
            ("Firefox", "Windows"),
            ("Firefox", "Mac"),
        ]

    def test_three_steps_skip_fully_covered_combination(self, three_steps):
        results = select_pairwise(build_domains(three_steps))
        assert len(results) == 7
        assert ("Firefox", "Mac", "fr") not in _values(results)

    def test_three_steps_cover_every_pair(self, three_steps):
        selector = PairwiseSelector(build_domains(three_steps))
        stats = selector.coverage_stats(selector.select())
        assert stats.total_pairs == 12
        assert stats.covered_pairs == 12
        assert stats.complete

    def test_single_step_selects_only_first(self):
        results = select_pairwise(build_domains([make_step("Step", ["A", "B", "C"])]))
        assert len(results) == 1
        assert results[0].values == {"Step": "A"}
        assert results[0].description == "Step: A"

    def test_single_valueless_step(self):
        results = select_pairwise(build_domains([Step(name="Login")]))
        assert len(results) == 1
        assert results[0].values == {"Login": "Login"}
        assert results[0].description == "Login"
        assert results[0].tags == {"Login": Tag.YELLOW}

    def test_synthetic_step_pairs_with_others(self):
        steps = [Step(name="Login"), make_step("Browser", ["Chrome", "Firefox"])]
        results = select_pairwise(build_domains(steps))
        assert [r.description for r in results] == [
            "Login | Browser: Chrome",
            "Login | Browser: Firefox",
        ]

    def test_result_cap(self):
        steps = [
            make_step("A", [f"a{i}" for i in range(10)]),
            make_step("B", [f"b{i}" for i in range(10)]),
        ]
        selector = PairwiseSelector(build_domains(steps))
        results = selector.select()
        assert len(results) == DEFAULT_MAX_RESULTS
        expected = [tuple(a.values.values()) for a in selector.all_assignments()[:50]]
        assert _values(results) == expected

    def test_custom_cap(self, browser_os_steps):
        results = select_pairwise(build_domains(browser_os_steps), max_results=3)
        assert len(results) == 3

    @pytest.mark.parametrize("max_results", [1, 5, 50])
    def test_cap_never_exceeded(self, three_steps, max_results):
        selector = PairwiseSelector(build_domains(three_steps), max_results=max_results)
        assert len(selector.select()) <= min(selector.total_assignments, max_results)

    def test_invalid_cap_raises(self, browser_os_steps):
        with pytest.raises(ValueError, match="at least 1"):
            PairwiseSelector(build_domains(browser_os_steps), max_results=0)

    def test_empty_domains_raise(self):
        with pytest.raises(NoStepsError):
            select_pairwise([])

    def test_deterministic(self, three_steps):
        first = select_pairwise(build_domains(three_steps))
        second = select_pairwise(build_domains(three_steps))
        assert first == second

    def test_results_carry_tags(self, browser_os_steps):
        results = select_pairwise(build_domains(browser_os_steps))
        assert results[2].tags == {"Browser": Tag.RED, "OS": Tag.YELLOW}
        assert results[2].tag_for("Browser") == Tag.RED

    def test_colliding_step_names_last_write_wins(self):
        steps = [make_step("X", ["a", "b"]), make_step("X", ["c"])]
        results = select_pairwise(build_domains(steps))
        assert len(results) == 1
        assert results[0].values == {"X": "c"}
        assert results[0].description == "X: a | X: c"


class TestSelectionTrace:
    """Tests for the progress trace."""

    def test_coverage_never_shrinks(self, three_steps):
        trace = SelectionTrace()
        PairwiseSelector(build_domains(three_steps)).select(trace)
        counts = trace.covered_counts
        assert counts == sorted(counts)
        assert trace.processed == 8
        assert counts[-1] == 12

    def test_records_accepted_positions(self, three_steps):
        trace = SelectionTrace()
        PairwiseSelector(build_domains(three_steps)).select(trace)
        assert trace.accepted_indices == [0, 1, 2, 3, 4, 5, 6]
        assert trace.new_pair_counts == [3, 2, 2, 1, 2, 1, 1]

    def test_stops_at_cap(self, browser_os_steps):
        trace = SelectionTrace()
        PairwiseSelector(build_domains(browser_os_steps), max_results=2).select(trace)
        assert trace.processed == 2


class TestCoverageStats:
    """Tests for coverage statistics."""

    def test_partial_coverage(self, browser_os_steps):
        selector = PairwiseSelector(build_domains(browser_os_steps), max_results=3)
        stats = selector.coverage_stats(selector.select())
        assert stats.total_pairs == 4
        assert stats.covered_pairs == 3
        assert stats.coverage_pct == pytest.approx(75.0)
        assert stats.test_count == 3
        assert stats.total_assignments == 4
        assert not stats.complete

    def test_no_pairs_is_full_coverage(self):
        selector = PairwiseSelector(build_domains([make_step("A", ["1", "2"])]))
        stats = selector.coverage_stats(selector.select())
        assert stats.total_pairs == 0
        assert stats.coverage_pct == 100.0

    def test_repr(self, browser_os_steps):
        selector = PairwiseSelector(build_domains(browser_os_steps))
        assert "4/4 pairs covered" in repr(selector.coverage_stats(selector.select()))
