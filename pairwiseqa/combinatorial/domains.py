"""Value domains for pairwise generation.

A StepDomain is the effective list of choices for one step: its non-blank
values, or the step's own name when it has none.

Example:
    >>> from pairwiseqa.models import Step, Value
    >>> from pairwiseqa.combinatorial import build_domains
    >>>
    >>> domains = build_domains([
    ...     Step(name="Browser", values=[Value(value="Chrome"), Value(value=" ")]),
    ...     Step(name="Login"),
    ... ])
    >>> [e.value for e in domains[0].entries]  # ['Chrome']
    >>> [e.value for e in domains[1].entries]  # ['Login']
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pairwiseqa.models import Step, Tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainEntry:
    """A single choice within a step domain.

    Attributes:
        value: The trimmed value payload (or the step name when synthetic).
        tag: Display tag carried through to results.
        description: ``"<step>: <value>"``, or just ``"<step>"`` when synthetic.
    """

    value: str
    tag: Tag
    description: str

    def __repr__(self) -> str:
        return f"DomainEntry({self.description!r})"


@dataclass(frozen=True)
class StepDomain:
    """The ordered, non-empty list of choices for one step."""

    name: str
    entries: tuple[DomainEntry, ...]

    def __post_init__(self) -> None:
        if not self.entries:
            raise ValueError(f"Domain for step '{self.name}' must have at least one entry")

    @property
    def size(self) -> int:
        return len(self.entries)

    @property
    def values(self) -> list[str]:
        return [e.value for e in self.entries]

    def __repr__(self) -> str:
        return f"StepDomain({self.name!r}, values={self.values})"


def build_domain(step: Step) -> StepDomain:
    """Build the domain of a single step."""
    filled = step.filled_values
    if not filled:
        return StepDomain(
            name=step.name,
            entries=(DomainEntry(value=step.name, tag=Tag.YELLOW, description=step.name),),
        )

    entries = []
    for value in filled:
        payload = value.value.strip()
        entries.append(
            DomainEntry(
                value=payload,
                tag=value.tag,
                description=f"{step.name}: {payload}",
            )
        )
    return StepDomain(name=step.name, entries=tuple(entries))


def build_domains(steps: Sequence[Step]) -> list[StepDomain]:
    """Build one domain per step, preserving step order.

    Total over any step sequence; an empty sequence yields an empty list.
    """
    domains = [build_domain(step) for step in steps]
    summary = ", ".join(f"{d.name}({d.size})" for d in domains)
    logger.debug(f"Built {len(domains)} domain(s): {summary}")
    return domains
