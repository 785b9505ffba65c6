"""Immutable workspace holding the steps being edited and the last results.

Each edit returns a new Workspace with an incremented revision; nothing is
mutated in place. Generation takes a snapshot of the steps and fully replaces
the previous result set.

Example:
    >>> ws = Workspace().add_step("Browser").add_step("OS")
    >>> browser, os_step = ws.steps
    >>> ws = ws.add_value(browser.id, "Chrome").add_value(browser.id, "Firefox")
    >>> ws = ws.add_value(os_step.id, "Windows", tag=Tag.GREEN)
    >>> ws = ws.generate()
    >>> len(ws.results)  # 2
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from pairwiseqa.combinatorial import DEFAULT_MAX_RESULTS, PairwiseSelector, build_domains
from pairwiseqa.errors import (
    ErrorContext,
    NoStepsError,
    StepNotFoundError,
    ValueNotFoundError,
)
from pairwiseqa.models import PairwiseResult, Step, Tag, Value, new_id
from pairwiseqa.storage.document import PairwiseDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workspace:
    """A snapshot of the steps under edit and the latest generated results.

    Attributes:
        steps: Steps in display order.
        results: Results of the last generation run.
        revision: Incremented by every edit.
    """

    steps: tuple[Step, ...] = ()
    results: tuple[PairwiseResult, ...] = ()
    revision: int = 0

    @property
    def step_names(self) -> list[str]:
        return [s.name for s in self.steps]

    def get_step(self, step_id: str) -> Step:
        for step in self.steps:
            if step.id == step_id:
                return step
        raise StepNotFoundError(
            f"Step '{step_id}' not found",
            context=ErrorContext(step_id=step_id),
        )

    def _next(self, **changes) -> Workspace:
        return replace(self, revision=self.revision + 1, **changes)

    def _replace_step(self, step_id: str, update: Callable[[Step], Step]) -> Workspace:
        self.get_step(step_id)
        steps = tuple(update(s) if s.id == step_id else s for s in self.steps)
        return self._next(steps=steps)

    def _replace_value(
        self,
        step_id: str,
        value_id: str,
        update: Callable[[Value], Value],
    ) -> Workspace:
        step = self.get_step(step_id)
        if step.find_value(value_id) is None:
            raise ValueNotFoundError(
                f"Value '{value_id}' not found in step '{step.name}'",
                context=ErrorContext(step_id=step_id, step_name=step.name),
            )
        values = tuple(update(v) if v.id == value_id else v for v in step.values)
        return self._replace_step(step_id, lambda s: s.model_copy(update={"values": values}))

    def add_step(self, name: str | None = None) -> Workspace:
        """Append a step. Defaults to the name ``"Step <n>"``."""
        step = Step(id=new_id("step"), name=name or f"Step {len(self.steps) + 1}")
        return self._next(steps=(*self.steps, step))

    def remove_step(self, step_id: str) -> Workspace:
        self.get_step(step_id)
        return self._next(steps=tuple(s for s in self.steps if s.id != step_id))

    def rename_step(self, step_id: str, name: str) -> Workspace:
        return self._replace_step(step_id, lambda s: s.model_copy(update={"name": name}))

    def add_value(self, step_id: str, value: str = "", tag: Tag = Tag.YELLOW) -> Workspace:
        """Append a value to a step. New values start blank and yellow."""
        new_value = Value(id=new_id("child"), value=value, tag=tag)
        return self._replace_step(
            step_id,
            lambda s: s.model_copy(update={"values": (*s.values, new_value)}),
        )

    def remove_value(self, step_id: str, value_id: str) -> Workspace:
        step = self.get_step(step_id)
        if step.find_value(value_id) is None:
            raise ValueNotFoundError(
                f"Value '{value_id}' not found in step '{step.name}'",
                context=ErrorContext(step_id=step_id, step_name=step.name),
            )
        values = tuple(v for v in step.values if v.id != value_id)
        return self._replace_step(step_id, lambda s: s.model_copy(update={"values": values}))

    def update_value(self, step_id: str, value_id: str, value: str) -> Workspace:
        return self._replace_value(step_id, value_id, lambda v: v.model_copy(update={"value": value}))

    def set_tag(self, step_id: str, value_id: str, tag: Tag) -> Workspace:
        return self._replace_value(step_id, value_id, lambda v: v.model_copy(update={"tag": tag}))

    def generate(
        self,
        max_results: int = DEFAULT_MAX_RESULTS,
        max_assignments: int | None = None,
    ) -> Workspace:
        """Run pairwise selection on the current steps.

        Raises:
            NoStepsError: If the workspace has no steps.
            CombinatorialExplosionError: If max_assignments is exceeded.
        """
        if not self.steps:
            raise NoStepsError()

        selector = PairwiseSelector(
            build_domains(self.steps),
            max_results=max_results,
            max_assignments=max_assignments,
        )
        results = tuple(selector.select())
        logger.info(f"Workspace revision {self.revision + 1}: {len(results)} result(s)")
        return self._next(results=results)

    def to_document(self) -> PairwiseDocument:
        """Snapshot the workspace as a fresh export document."""
        return PairwiseDocument(steps=self.steps, pairwise_results=self.results)

    def with_document(self, document: PairwiseDocument) -> Workspace:
        """Replace both steps and results with a loaded document's."""
        return self._next(steps=tuple(document.steps), results=tuple(document.pairwise_results))

    @classmethod
    def from_document(cls, document: PairwiseDocument) -> Workspace:
        return cls().with_document(document)
