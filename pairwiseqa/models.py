"""Data models for pairwiseqa.

Steps, values and results are the shapes that cross the package boundary:
they are read from and written to JSON documents, so they are Pydantic
models. Field names follow Python conventions; the aliases keep the
persisted document format (``children``, ``color``) stable.

All models are frozen. Editing happens through pairwiseqa.state.Workspace,
which returns new model instances instead of mutating existing ones.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Reserved keys of the legacy flat result shape
LEGACY_DESCRIPTION_KEY = "Description"
LEGACY_TAGS_KEY = "_colors"


class Tag(str, Enum):
    """Display classification of a value. Never used by the engine."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


def new_id(prefix: str) -> str:
    """Generate an opaque identifier such as ``step-3f2a9c1d0b4e``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class Value(BaseModel):
    """One candidate value of a step.

    Attributes:
        id: Opaque identifier.
        value: Display payload. Blank payloads are ignored by the engine.
        tag: Display classification, serialized as ``color``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: new_id("child"))
    value: str = ""
    tag: Tag = Field(default=Tag.YELLOW, alias="color")

    @property
    def is_blank(self) -> bool:
        """True when the payload is empty after trimming whitespace."""
        return not self.value.strip()


class Step(BaseModel):
    """A named test dimension with an ordered list of candidate values.

    Attributes:
        id: Opaque identifier.
        name: Display name. Not required to be unique.
        values: Candidate values in display order, serialized as ``children``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: new_id("step"))
    name: str
    values: tuple[Value, ...] = Field(default=(), alias="children")

    @property
    def filled_values(self) -> list[Value]:
        """Values with a non-blank payload, in display order."""
        return [v for v in self.values if not v.is_blank]

    def find_value(self, value_id: str) -> Value | None:
        for value in self.values:
            if value.id == value_id:
                return value
        return None


class PairwiseResult(BaseModel):
    """One selected test case.

    Attributes:
        values: Step name to chosen value.
        description: Per-step descriptions joined with ``" | "``.
        tags: Step name to the chosen value's tag, for display coloring.
    """

    model_config = ConfigDict(frozen=True)

    values: dict[str, str]
    description: str
    tags: dict[str, Tag] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _accept_flat_shape(cls, data: Any) -> Any:
        """Accept records where step columns sit at the top level.

        Older exports stored results as ``{<step>: <value>, ...,
        "Description": ..., "_colors": {...}}``. Step names are arbitrary,
        so a step may itself be called ``values``; only a mapping under
        ``values`` with no ``Description`` key is the current shape.
        """
        if not isinstance(data, dict):
            return data
        if isinstance(data.get("values"), dict) and LEGACY_DESCRIPTION_KEY not in data:
            return data
        values = {
            key: value
            for key, value in data.items()
            if key not in (LEGACY_DESCRIPTION_KEY, LEGACY_TAGS_KEY)
        }
        return {
            "values": values,
            "description": data.get(LEGACY_DESCRIPTION_KEY, ""),
            "tags": data.get(LEGACY_TAGS_KEY) or {},
        }

    def tag_for(self, step_name: str) -> Tag:
        """Tag of the value chosen for step_name, yellow when unknown."""
        return self.tags.get(step_name, Tag.YELLOW)
