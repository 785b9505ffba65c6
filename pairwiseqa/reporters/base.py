"""Abstract base reporter class.

Reporters turn a list of PairwiseResult objects into an export format.

Example:
    >>> class CustomReporter(BaseReporter):
    ...     @property
    ...     def file_extension(self) -> str:
    ...         return ".custom"
    ...
    ...     def generate(self, results, **kwargs) -> str:
    ...         return "custom format output"
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pairwiseqa.errors import NoResultsError

if TYPE_CHECKING:
    from pairwiseqa.models import PairwiseResult


class BaseReporter(ABC):
    """Abstract base class for all reporters.

    Attributes:
        output_path: Optional default path for saving reports.
    """

    def __init__(self, output_path: str | Path | None = None) -> None:
        self.output_path = Path(output_path) if output_path else None

    @abstractmethod
    def generate(self, results: Sequence[PairwiseResult], **kwargs: Any) -> str:
        """Generate report content from results.

        Raises:
            NoResultsError: If results is empty.
        """
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension including the dot (e.g. '.csv')."""
        ...

    def default_filename(self, **kwargs: Any) -> str:
        return f"pairwise-results{self.file_extension}"

    def save(
        self,
        results: Sequence[PairwiseResult],
        path: str | Path | None = None,
        **kwargs: Any,
    ) -> Path:
        """Generate and write the report, creating parent directories.

        When neither path nor output_path is set, writes default_filename()
        in the current directory. A directory path gets default_filename()
        appended.
        """
        content = self.generate(results, **kwargs)
        return self._write(content, path, **kwargs)

    @staticmethod
    def is_directory(path: str | Path) -> bool:
        """True for existing directories, a trailing separator, or no suffix."""
        candidate = Path(path)
        if candidate.is_dir():
            return True
        if str(path).endswith(("/", os.sep)):
            return True
        return not candidate.suffix

    def _write(self, content: str, path: str | Path | None, **kwargs: Any) -> Path:
        destination = path if path else self.output_path
        if destination is None:
            output_path = Path(self.default_filename(**kwargs))
        elif self.is_directory(destination):
            output_path = Path(destination) / self.default_filename(**kwargs)
        else:
            output_path = Path(destination)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)

        return output_path

    @staticmethod
    def require_results(results: Sequence[PairwiseResult]) -> None:
        if not results:
            raise NoResultsError()
