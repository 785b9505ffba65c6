"""Load step definitions from YAML or from an exported JSON document.

YAML layout::

    steps:
      - name: Browser
        values:
          - Chrome
          - value: Firefox
            color: green
      - name: Login        # no values: the step name is used as its value

A ``.json`` file is read as an exported document and its steps are used.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pairwiseqa.errors import ErrorContext, InvalidDocumentError
from pairwiseqa.models import Step, Value
from pairwiseqa.storage.document import load_document, read_text

JSON_SUFFIXES = {".json"}


def _coerce_value(raw: Any) -> dict[str, Any] | Value:
    if isinstance(raw, Value):
        return raw
    if isinstance(raw, dict):
        if raw.get("value") is not None:
            return {**raw, "value": str(raw["value"])}
        return raw
    return {"value": "" if raw is None else str(raw)}


def parse_steps(data: Any, source: str | None = None) -> list[Step]:
    """Build steps from a ``{"steps": [...]}`` mapping.

    Values may be given as plain scalars or as mappings with ``value`` and
    ``color``; ``children`` is accepted in place of ``values``.

    Raises:
        InvalidDocumentError: If the structure is wrong.
    """
    context = ErrorContext(path=source)

    if not isinstance(data, dict) or not isinstance(data.get("steps"), list):
        raise InvalidDocumentError(
            "Step definitions must contain a 'steps' list",
            context=context,
            field="steps",
            expected="array",
        )

    steps: list[Step] = []
    for index, raw in enumerate(data["steps"]):
        if isinstance(raw, str):
            raw = {"name": raw}
        if not isinstance(raw, dict):
            raise InvalidDocumentError(
                f"Step #{index + 1} must be a mapping or a name",
                context=context,
                field=f"steps[{index}]",
                value=raw,
            )
        raw = dict(raw)
        raw_values = raw.pop("values", None)
        if raw_values is None:
            raw_values = raw.pop("children", None) or []
        if not isinstance(raw_values, list):
            raise InvalidDocumentError(
                f"Values of step #{index + 1} must be a list",
                context=context,
                field=f"steps[{index}].values",
                value=raw_values,
            )
        raw["name"] = str(raw.get("name", ""))
        raw["values"] = [_coerce_value(v) for v in raw_values]
        try:
            steps.append(Step.model_validate(raw))
        except ValidationError as e:
            raise InvalidDocumentError(
                f"Invalid step #{index + 1}",
                context=ErrorContext(path=source, step_name=raw["name"] or None),
                cause=e,
            ) from e

    return steps


def load_steps(path: str | Path) -> list[Step]:
    """Load step definitions from a YAML file or an exported JSON document."""
    path = Path(path)
    if path.suffix.lower() in JSON_SUFFIXES:
        return list(load_document(path).steps)

    try:
        data = yaml.safe_load(read_text(path))
    except yaml.YAMLError as e:
        raise InvalidDocumentError(
            f"Invalid YAML in {path}",
            context=ErrorContext(path=str(path)),
            cause=e,
        ) from e

    return parse_steps(data, source=str(path))
