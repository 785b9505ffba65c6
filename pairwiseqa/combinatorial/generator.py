"""Greedy pairwise selection over the full cross-product of step domains.

The selector works in three stages:

1. Enumerate every assignment of one value per step, in odometer order
   (the last step varies fastest).
2. Walk the assignments in that order, keeping a set of covered pair keys.
   An assignment is accepted when it covers at least one new pair, or when
   nothing has been accepted yet. Selection stops once
   ``min(total_assignments, max_results)`` assignments are accepted.
3. Turn each accepted assignment into a PairwiseResult.

This is single-pass greedy first-fit, not an optimal covering array. The
result depends on enumeration order. Inputs with no possible pairs (a single
step, for example) yield only the first assignment.

Example:
    >>> from pairwiseqa.combinatorial import PairwiseSelector, build_domains
    >>>
    >>> selector = PairwiseSelector(build_domains(steps))
    >>> results = selector.select()
    >>> print(selector.coverage_stats(results))
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from pairwiseqa.combinatorial.domains import DomainEntry, StepDomain
from pairwiseqa.errors import CombinatorialExplosionError, ErrorContext, NoStepsError
from pairwiseqa.models import PairwiseResult, Tag

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 50
DESCRIPTION_SEPARATOR = " | "


def pair_key(step_a: str, value_a: str, step_b: str, value_b: str) -> str:
    """Canonical key for two (step, value) choices, in step order."""
    return f"{step_a}:{value_a}-{step_b}:{value_b}"


def pair_keys(values: Mapping[str, str]) -> list[str]:
    """All pair keys of an assignment, ordered by step position."""
    items = list(values.items())
    return [
        pair_key(name_a, value_a, name_b, value_b)
        for (name_a, value_a), (name_b, value_b) in itertools.combinations(items, 2)
    ]


@dataclass
class Assignment:
    """One full choice of a value for every step.

    Attributes:
        values: Step name to chosen value. Last write wins when step names
            collide.
        tags: Step name to the chosen value's tag.
        descriptions: Per-step descriptions, index-aligned with step order.
    """

    values: dict[str, str]
    tags: dict[str, Tag]
    descriptions: list[str]

    @classmethod
    def from_entries(
        cls,
        domains: Sequence[StepDomain],
        entries: Sequence[DomainEntry],
    ) -> Assignment:
        values: dict[str, str] = {}
        tags: dict[str, Tag] = {}
        for domain, entry in zip(domains, entries):
            values[domain.name] = entry.value
            tags[domain.name] = entry.tag
        return cls(values=values, tags=tags, descriptions=[e.description for e in entries])

    @property
    def description(self) -> str:
        return DESCRIPTION_SEPARATOR.join(self.descriptions)

    def pair_keys(self) -> list[str]:
        return pair_keys(self.values)

    def to_result(self) -> PairwiseResult:
        return PairwiseResult(
            values=dict(self.values),
            description=self.description,
            tags=dict(self.tags),
        )


@dataclass
class SelectionTrace:
    """Observations recorded while selecting.

    Attributes:
        covered_counts: Size of the covered-pair set after each processed
            assignment.
        accepted_indices: Cross-product positions of accepted assignments.
        new_pair_counts: Number of new pairs each accepted assignment added.
    """

    covered_counts: list[int] = field(default_factory=list)
    accepted_indices: list[int] = field(default_factory=list)
    new_pair_counts: list[int] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.covered_counts)


@dataclass
class CoverageStats:
    """How well a set of results covers the pairs of the domain space.

    Attributes:
        total_pairs: Number of distinct pairs in the space.
        covered_pairs: Number of those pairs present in the results.
        coverage_pct: Percentage coverage (0-100).
        test_count: Number of results.
        total_assignments: Size of the full cross-product.
    """

    total_pairs: int
    covered_pairs: int
    coverage_pct: float
    test_count: int
    total_assignments: int

    @property
    def complete(self) -> bool:
        return self.covered_pairs == self.total_pairs

    def __repr__(self) -> str:
        return (
            f"CoverageStats({self.covered_pairs}/{self.total_pairs} pairs covered "
            f"({self.coverage_pct:.1f}%), "
            f"{self.test_count} tests of {self.total_assignments})"
        )


class PairwiseSelector:
    """Selects a pairwise-covering subset of the full cross-product.

    Attributes:
        domains: Step domains in step order.
        max_results: Upper bound on the number of selected assignments.
        max_assignments: Optional bound on the cross-product size. When the
            product of domain sizes exceeds it, selection refuses to run.

    Example:
        >>> selector = PairwiseSelector(domains, max_results=20)
        >>> results = selector.select()
    """

    def __init__(
        self,
        domains: Sequence[StepDomain],
        max_results: int = DEFAULT_MAX_RESULTS,
        max_assignments: int | None = None,
    ) -> None:
        if not domains:
            raise NoStepsError()
        if max_results < 1:
            raise ValueError("max_results must be at least 1")

        self.domains = list(domains)
        self.max_results = max_results
        self.max_assignments = max_assignments

    @property
    def step_names(self) -> list[str]:
        return [d.name for d in self.domains]

    @property
    def total_assignments(self) -> int:
        """Size of the full cross-product."""
        result = 1
        for d in self.domains:
            result *= d.size
        return result

    @property
    def limit(self) -> int:
        """Number of accepted assignments at which selection stops."""
        return min(self.total_assignments, self.max_results)

    def all_assignments(self) -> list[Assignment]:
        """Enumerate the full cross-product in odometer order.

        Raises:
            CombinatorialExplosionError: If max_assignments is set and the
                cross-product is larger.
        """
        total = self.total_assignments
        if self.max_assignments is not None and total > self.max_assignments:
            raise CombinatorialExplosionError(
                f"{total} combinations exceed the limit of {self.max_assignments}",
                context=ErrorContext(extra={"total": total, "limit": self.max_assignments}),
            )

        return [
            Assignment.from_entries(self.domains, entries)
            for entries in itertools.product(*(d.entries for d in self.domains))
        ]

    def select_assignments(self, trace: SelectionTrace | None = None) -> list[Assignment]:
        """Greedily select assignments that add uncovered pairs.

        Args:
            trace: Optional SelectionTrace to record progress into.

        Returns:
            Accepted assignments in cross-product order. Never empty.
        """
        assignments = self.all_assignments()
        limit = min(len(assignments), self.max_results)

        logger.info(
            f"Selecting pairwise combinations for {len(self.domains)} step(s) "
            f"({len(assignments)} total combinations, cap {limit})"
        )

        covered: set[str] = set()
        selected: list[Assignment] = []

        for index, assignment in enumerate(assignments):
            new_pairs = [key for key in assignment.pair_keys() if key not in covered]

            if new_pairs or not selected:
                selected.append(assignment)
                covered.update(new_pairs)
                if trace is not None:
                    trace.accepted_indices.append(index)
                    trace.new_pair_counts.append(len(new_pairs))
                logger.debug(
                    f"Accepted combination {index}: {assignment.description} "
                    f"({len(new_pairs)} new pairs, {len(covered)} covered)"
                )

            if trace is not None:
                trace.covered_counts.append(len(covered))

            if len(selected) >= limit:
                break

        logger.info(
            f"Selected {len(selected)} combinations covering {len(covered)} pairs "
            f"(vs {len(assignments)} exhaustive)"
        )
        return selected

    def select(self, trace: SelectionTrace | None = None) -> list[PairwiseResult]:
        """Select assignments and materialize them as results."""
        return [a.to_result() for a in self.select_assignments(trace)]

    def all_pair_keys(self) -> set[str]:
        """Every pair key that some assignment in the space produces."""
        # Mirror Assignment.values: first position per name, last domain wins.
        effective: dict[str, StepDomain] = {}
        for domain in self.domains:
            effective[domain.name] = domain

        keys: set[str] = set()
        for (name_a, dom_a), (name_b, dom_b) in itertools.combinations(effective.items(), 2):
            for value_a, value_b in itertools.product(dom_a.values, dom_b.values):
                keys.add(pair_key(name_a, value_a, name_b, value_b))
        return keys

    def coverage_stats(self, results: Sequence[PairwiseResult]) -> CoverageStats:
        """Compute pair coverage statistics for a set of results."""
        space = self.all_pair_keys()
        covered: set[str] = set()
        for result in results:
            covered.update(k for k in pair_keys(result.values) if k in space)

        total = len(space)
        pct = (len(covered) / total * 100) if total > 0 else 100.0

        return CoverageStats(
            total_pairs=total,
            covered_pairs=len(covered),
            coverage_pct=pct,
            test_count=len(results),
            total_assignments=self.total_assignments,
        )


def select_pairwise(
    domains: Sequence[StepDomain],
    max_results: int = DEFAULT_MAX_RESULTS,
    max_assignments: int | None = None,
) -> list[PairwiseResult]:
    """Select a pairwise-covering set of results for the given domains.

    Raises:
        NoStepsError: If domains is empty.
    """
    return PairwiseSelector(domains, max_results, max_assignments).select()
