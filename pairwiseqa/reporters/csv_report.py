"""CSV reporter: one row per result, one column per step plus Description."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pairwiseqa.models import LEGACY_DESCRIPTION_KEY, PairwiseResult
from pairwiseqa.reporters.base import BaseReporter

DEFAULT_CSV_FILENAME = "pairwise-test-combinations.csv"


class CSVReporter(BaseReporter):
    """Export results as delimited text.

    The header lists step names in original order followed by
    ``Description``. Every data cell is quoted.

    Example:
        >>> CSVReporter().generate(results, step_names=["Browser", "OS"])
        'Browser,OS,Description\\n"Chrome","Windows","Browser: Chrome | OS: Windows"\\n'
    """

    def __init__(
        self,
        output_path: str | Path | None = None,
        filename: str = DEFAULT_CSV_FILENAME,
    ) -> None:
        super().__init__(output_path)
        self.filename = filename

    @property
    def file_extension(self) -> str:
        return ".csv"

    def default_filename(self, **kwargs: Any) -> str:
        return self.filename

    @staticmethod
    def columns(
        results: Sequence[PairwiseResult],
        step_names: Sequence[str] | None = None,
    ) -> list[str]:
        """Union of step names in first-seen order, then Description."""
        names: dict[str, None] = {}
        for name in step_names or ():
            names[name] = None
        for result in results:
            for name in result.values:
                names[name] = None
        return [*names, LEGACY_DESCRIPTION_KEY]

    def generate(
        self,
        results: Sequence[PairwiseResult],
        step_names: Sequence[str] | None = None,
        **kwargs: Any,
    ) -> str:
        self.require_results(results)
        headers = self.columns(results, step_names)
        step_columns = headers[:-1]

        buffer = io.StringIO()
        csv.writer(buffer, lineterminator="\n").writerow(headers)
        rows = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for result in results:
            rows.writerow([result.values.get(name, "") for name in step_columns] + [result.description])
        return buffer.getvalue()
