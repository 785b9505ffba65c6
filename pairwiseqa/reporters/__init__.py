"""Exporters for pairwise results."""

from pairwiseqa.reporters.base import BaseReporter
from pairwiseqa.reporters.csv_report import DEFAULT_CSV_FILENAME, CSVReporter
from pairwiseqa.reporters.json_report import JSONReporter

__all__ = [
    "BaseReporter",
    "CSVReporter",
    "JSONReporter",
    "DEFAULT_CSV_FILENAME",
]
