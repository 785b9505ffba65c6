"""Pairwise combination generation.

    Step -> build_domains -> StepDomain -> PairwiseSelector -> PairwiseResult

Modules:
    domains: DomainEntry, StepDomain, build_domain, build_domains
    generator: Assignment, PairwiseSelector, SelectionTrace, CoverageStats,
        select_pairwise, pair_key, pair_keys
"""

from pairwiseqa.combinatorial.domains import (
    DomainEntry,
    StepDomain,
    build_domain,
    build_domains,
)
from pairwiseqa.combinatorial.generator import (
    DEFAULT_MAX_RESULTS,
    Assignment,
    CoverageStats,
    PairwiseSelector,
    SelectionTrace,
    pair_key,
    pair_keys,
    select_pairwise,
)

__all__ = [
    # Domains
    "DomainEntry",
    "StepDomain",
    "build_domain",
    "build_domains",
    # Generator
    "DEFAULT_MAX_RESULTS",
    "Assignment",
    "CoverageStats",
    "PairwiseSelector",
    "SelectionTrace",
    "pair_key",
    "pair_keys",
    "select_pairwise",
]
