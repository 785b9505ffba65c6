"""JSON reporter producing the importable export document.

Example:
    >>> reporter = JSONReporter(indent=2)
    >>> text = reporter.generate(results, steps=steps)
    >>> parse_document(text).pairwise_results == tuple(results)
    True
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pairwiseqa.models import PairwiseResult, Step
from pairwiseqa.reporters.base import BaseReporter
from pairwiseqa.storage.document import PairwiseDocument, dump_document


class JSONReporter(BaseReporter):
    """Export steps and results as a document with a fresh id and timestamp.

    Attributes:
        output_path: Optional default path for saving reports.
        indent: Spaces for JSON indentation, None for compact output.
    """

    def __init__(
        self,
        output_path: str | Path | None = None,
        indent: int | None = 2,
    ) -> None:
        super().__init__(output_path)
        self.indent = indent

    @property
    def file_extension(self) -> str:
        return ".json"

    def default_filename(self, document: PairwiseDocument | None = None, **kwargs: Any) -> str:
        if document is None:
            return super().default_filename()
        return f"pairwise-results-{document.id}{self.file_extension}"

    def build_document(
        self,
        results: Sequence[PairwiseResult],
        steps: Sequence[Step] = (),
    ) -> PairwiseDocument:
        self.require_results(results)
        return PairwiseDocument(steps=tuple(steps), pairwise_results=tuple(results))

    def generate(
        self,
        results: Sequence[PairwiseResult],
        steps: Sequence[Step] = (),
        **kwargs: Any,
    ) -> str:
        return dump_document(self.build_document(results, steps), indent=self.indent)

    def save(
        self,
        results: Sequence[PairwiseResult],
        path: str | Path | None = None,
        steps: Sequence[Step] = (),
        **kwargs: Any,
    ) -> Path:
        """Write the document; the default filename embeds its id."""
        return self.write_document(self.build_document(results, steps), path)

    def write_document(self, document: PairwiseDocument, path: str | Path | None = None) -> Path:
        """Write an already built document, so printed and saved copies match."""
        return self._write(dump_document(document, indent=self.indent), path, document=document)
