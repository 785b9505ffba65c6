"""Persisted JSON document holding steps and their pairwise results.

Document layout::

    {
      "id": "<uuid4>",
      "createdAt": "<ISO-8601 timestamp>",
      "steps": [{"id": ..., "name": ..., "children": [{"id", "value", "color"}]}],
      "pairwiseResults": [{"values": {...}, "description": ..., "tags": {...}}]
    }

Only ``steps`` and ``pairwiseResults`` are required on import; both must be
arrays. A document either loads completely or raises InvalidDocumentError.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pairwiseqa.errors import ErrorContext, InvalidDocumentError
from pairwiseqa.models import PairwiseResult, Step

logger = logging.getLogger(__name__)

REQUIRED_COLLECTIONS = ("steps", "pairwiseResults")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PairwiseDocument(BaseModel):
    """Envelope for exported steps and results.

    Attributes:
        id: Unique identifier, freshly generated per export.
        created_at: Creation timestamp, serialized as ``createdAt``.
        steps: The step definitions.
        pairwise_results: The generated results, serialized as
            ``pairwiseResults``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")
    steps: tuple[Step, ...] = ()
    pairwise_results: tuple[PairwiseResult, ...] = Field(default=(), alias="pairwiseResults")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def dump_document(document: PairwiseDocument, indent: int | None = 2) -> str:
    """Serialize a document to JSON text."""
    return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False)


def parse_document(text: str, source: str | None = None) -> PairwiseDocument:
    """Parse and validate a JSON document.

    Args:
        text: Raw JSON text.
        source: Where the text came from, for error messages.

    Raises:
        InvalidDocumentError: If the text is not JSON, or ``steps`` or
            ``pairwiseResults`` are missing or not arrays, or a record in
            them is malformed.
    """
    context = ErrorContext(path=source)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidDocumentError(
            "Error reading or parsing the JSON file.",
            context=context,
            cause=e,
        ) from e

    if not isinstance(data, dict):
        raise InvalidDocumentError(context=context, expected="object", value=type(data).__name__)

    for key in REQUIRED_COLLECTIONS:
        if not isinstance(data.get(key), list):
            raise InvalidDocumentError(
                context=context,
                field=key,
                expected="array",
                value=data.get(key),
            )

    try:
        document = PairwiseDocument.model_validate(data)
    except ValidationError as e:
        raise InvalidDocumentError(
            f"Invalid records in document: {e.error_count()} error(s)",
            context=context,
            cause=e,
        ) from e

    logger.debug(
        f"Parsed document {document.id}: {len(document.steps)} step(s), "
        f"{len(document.pairwise_results)} result(s)"
    )
    return document


def read_text(path: Path) -> str:
    """Read a UTF-8 file, raising InvalidDocumentError when it cannot be decoded."""
    try:
        return path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        raise InvalidDocumentError(
            f"Could not read {path}",
            context=ErrorContext(path=str(path)),
            cause=e,
        ) from e


def load_document(path: str | Path) -> PairwiseDocument:
    """Read and parse a document from disk."""
    path = Path(path)
    return parse_document(read_text(path), source=str(path))


def save_document(document: PairwiseDocument, path: str | Path, indent: int | None = 2) -> Path:
    """Write a document to disk, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_document(document, indent=indent), encoding="utf-8")
    return path
