"""pairwiseqa - pairwise test combination generator.

Define test steps, each with candidate values, and get back a reduced set of
test cases in which every pair of values from two different steps appears at
least once.

Example:
    >>> from pairwiseqa import Step, Value, build_domains, select_pairwise
    >>>
    >>> steps = [
    ...     Step(name="Browser", values=[Value(value="Chrome"), Value(value="Firefox")]),
    ...     Step(name="OS", values=[Value(value="Windows"), Value(value="Mac")]),
    ...     Step(name="Login"),
    ... ]
    >>> for result in select_pairwise(build_domains(steps)):
    ...     print(result.description)

Core pieces:
    build_domains: Step definitions to per-step value domains
    PairwiseSelector: Greedy pairwise selection over the cross-product
    Workspace: Immutable editing state with generate()
    CSVReporter / JSONReporter: Exporters
"""

from pairwiseqa.combinatorial import (
    DEFAULT_MAX_RESULTS,
    Assignment,
    CoverageStats,
    DomainEntry,
    PairwiseSelector,
    SelectionTrace,
    StepDomain,
    build_domains,
    select_pairwise,
)
from pairwiseqa.config import PairwiseConfig, load_config
from pairwiseqa.errors import PairwiseQAError
from pairwiseqa.models import PairwiseResult, Step, Tag, Value
from pairwiseqa.reporters import CSVReporter, JSONReporter
from pairwiseqa.state import Workspace
from pairwiseqa.storage import PairwiseDocument, load_document, load_steps, parse_document

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Models
    "Step",
    "Value",
    "Tag",
    "PairwiseResult",
    # Engine
    "DEFAULT_MAX_RESULTS",
    "Assignment",
    "CoverageStats",
    "DomainEntry",
    "PairwiseSelector",
    "SelectionTrace",
    "StepDomain",
    "build_domains",
    "select_pairwise",
    # State
    "Workspace",
    # Storage
    "PairwiseDocument",
    "load_document",
    "load_steps",
    "parse_document",
    # Reporters
    "CSVReporter",
    "JSONReporter",
    # Config and errors
    "PairwiseConfig",
    "load_config",
    "PairwiseQAError",
]
