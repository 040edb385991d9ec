"""Property evaluation runtime.

Provides the trial loop, counterexample shrinking, run results and
reports. Depends on the generation package for input values.

Python 3.13+.
"""

from .cancellation import CancellationToken
from .config import RunConfig, size_for_trial
from .report import ReportFormatter, format_report
from .results import (
    Counterexample,
    Failure,
    Inconclusive,
    InconclusiveReason,
    Sample,
    Success,
    TestResult,
    Trial,
    TrialOutcome,
)
from .runner import PropertyRunner
from .sampling import Proposition
from .shrink import Shrinker, ShrinkResult

__all__ = [
    "CancellationToken",
    "Counterexample",
    "Failure",
    "Inconclusive",
    "InconclusiveReason",
    "PropertyRunner",
    "Proposition",
    "ReportFormatter",
    "RunConfig",
    "Sample",
    "ShrinkResult",
    "Shrinker",
    "Success",
    "TestResult",
    "Trial",
    "TrialOutcome",
    "format_report",
    "size_for_trial",
]
