"""Human- and machine-readable run reports.

Every failure report carries the master seed, the failing trial's seed
and size hint, and the rendered inputs with their own seeds and size
hints, which is enough to regenerate the trial with PropertyRunner.replay.

Python 3.13+.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from lawcheck.diagnostics import EvaluationError, OutputFormat

from .results import Counterexample, Failure, Inconclusive, Success, TestResult

__all__ = ["ReportFormatter", "format_report"]


@dataclass(frozen=True, slots=True)
class ReportFormatter:
    """Formats TestResult values.

    Attributes:
        output_format: Output style (text, simple, json)
        max_errors: Evaluation errors listed in text reports

    Example:
        >>> print(ReportFormatter().format(result))
        FAIL monoid.associativity: falsified after 4 trial(s)
          --> master seed 5f1e...
          --> trial 4: seed 9a02..., size 3
          minimized (5 shrink step(s), 12 attempt(s)):
            x = 0  (seed 3c4d..., size 0)
            y = 0  (seed 3c4d..., size 0)
            z = 1  (seed 77e0..., size 1)
          original:
            x = -2  (seed 1b9f..., size 3)
            y = 3  (seed 1b9f..., size 3)
            z = 2  (seed 1b9f..., size 3)
    """

    output_format: OutputFormat = OutputFormat.TEXT
    max_errors: int = 5

    def format(self, result: TestResult) -> str:
        """Format a run result."""
        match self.output_format:
            case OutputFormat.TEXT:
                return self._format_text(result)
            case OutputFormat.SIMPLE:
                return self._format_simple(result)
            case OutputFormat.JSON:
                return json.dumps(self._to_dict(result), ensure_ascii=False)

    def _format_text(self, result: TestResult) -> str:
        parts: list[str] = []
        match result:
            case Success():
                suffix = " (cancelled)" if result.cancelled else ""
                parts.append(f"PASS {result.label}: {result.trials_run} trial(s) passed{suffix}")
                parts.append(f"  --> master seed {result.seed.hex}")
                self._append_errors(parts, result.inconclusive, "inconclusive trial(s)")
            case Failure():
                parts.append(f"FAIL {result.label}: falsified after {result.trials_run} trial(s)")
                parts.append(f"  --> master seed {result.seed.hex}")
                parts.append(
                    f"  --> trial {result.original.trial}: seed {result.original.seed.hex}, "
                    f"size {result.original.size}"
                )
                status = ", cancelled" if result.cancelled else ""
                parts.append(
                    f"  minimized ({result.shrink_steps} shrink step(s), "
                    f"{result.shrink_attempts} attempt(s){status}):"
                )
                parts.extend(self._sample_lines(result.minimized))
                parts.append("  original:")
                parts.extend(self._sample_lines(result.original))
                self._append_errors(parts, result.inconclusive, "inconclusive trial(s)")
            case Inconclusive():
                parts.append(
                    f"INCONCLUSIVE {result.label}: {result.reason.value} "
                    f"after {result.trials_run} trial(s)"
                )
                parts.append(f"  --> master seed {result.seed.hex}")
                self._append_errors(parts, result.errors, "evaluation error(s)")
        return "\n".join(parts)

    def _format_simple(self, result: TestResult) -> str:
        match result:
            case Success():
                return f"PASS {result.label}: {result.trials_run} trial(s)"
            case Failure():
                return (
                    f"FAIL {result.label}: {result.minimized.render()} "
                    f"({result.shrink_steps} shrink step(s), seed {result.seed.hex})"
                )
            case Inconclusive():
                return f"INCONCLUSIVE {result.label}: {result.reason.value}"

    @staticmethod
    def _sample_lines(counterexample: Counterexample) -> list[str]:
        return [
            f"    {s.name} = {s.rendered}  (seed {s.seed.hex}, size {s.size})"
            for s in counterexample.samples
        ]

    def _append_errors(
        self, parts: list[str], errors: tuple[EvaluationError, ...], title: str
    ) -> None:
        if not errors:
            return
        parts.append(f"  {len(errors)} {title}:")
        for error in errors[: self.max_errors]:
            parts.append(f"    {error.format()}")
        if len(errors) > self.max_errors:
            parts.append(f"    ... {len(errors) - self.max_errors} more")

    @staticmethod
    def _counterexample_dict(counterexample: Counterexample) -> dict[str, object]:
        return {
            "trial": counterexample.trial,
            "seed": counterexample.seed.hex,
            "size": counterexample.size,
            "inputs": [
                {"name": s.name, "value": s.rendered, "seed": s.seed.hex, "size": s.size}
                for s in counterexample.samples
            ],
        }

    def _to_dict(self, result: TestResult) -> dict[str, object]:
        data: dict[str, object] = {
            "label": result.label,
            "passed": result.passed,
            "trials_run": result.trials_run,
            "seed": result.seed.hex,
        }
        match result:
            case Success():
                data["status"] = "pass"
                data["cancelled"] = result.cancelled
                data["inconclusive"] = len(result.inconclusive)
            case Failure():
                data["status"] = "fail"
                data["cancelled"] = result.cancelled
                data["shrink_steps"] = result.shrink_steps
                data["shrink_attempts"] = result.shrink_attempts
                data["original"] = self._counterexample_dict(result.original)
                data["minimized"] = self._counterexample_dict(result.minimized)
                data["inconclusive"] = len(result.inconclusive)
            case Inconclusive():
                data["status"] = "inconclusive"
                data["reason"] = result.reason.value
                data["errors"] = [e.format() for e in result.errors]
        return data


def format_report(result: TestResult, output_format: OutputFormat = OutputFormat.TEXT) -> str:
    """Format result with a default-configured ReportFormatter."""
    return ReportFormatter(output_format).format(result)
