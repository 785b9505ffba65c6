"""Reading and writing steps and results."""

from pairwiseqa.storage.document import (
    PairwiseDocument,
    dump_document,
    load_document,
    parse_document,
    save_document,
)
from pairwiseqa.storage.steps import load_steps, parse_steps

__all__ = [
    "PairwiseDocument",
    "dump_document",
    "load_document",
    "parse_document",
    "save_document",
    "load_steps",
    "parse_steps",
]
