"""Report Aggregator - single fan-in point that turns raw findings into a Report."""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from convention_linter.domain.config import ConfigurationLoader
from convention_linter.domain.entities import FileResult, Report
from convention_linter.domain.rules import Violation

logger: logging.Logger = logging.getLogger(__name__)


class ReportAggregator:
    """
    Accumulates per-file results as they complete, then builds the final report.

    Pipeline per violation: drop disabled rules, drop excluded file paths,
    apply the severity override, lower demoted findings one level. The
    finished report is deduplicated and sorted by (path, line, rule id), so
    the output does not depend on the order workers finished in.
    """

    def __init__(self, config: ConfigurationLoader) -> None:
        self._config = config
        self._lock = threading.Lock()
        self._violations: set[Violation] = set()
        self._files_analyzed = 0

    def add_file_result(self, result: FileResult) -> None:
        """Merge one file's findings. Excluded files contribute nothing."""
        if self._config.is_excluded(result.path):
            logger.debug("Dropping findings for excluded file %s", result.path)
            return
        resolved = [self._resolve(v) for v in result.violations]
        with self._lock:
            self._files_analyzed += 1
            self._violations.update(v for v in resolved if v is not None)

    def add_project_violations(self, violations: Iterable[Violation]) -> None:
        """Merge findings of the run-level layout rules (never path-excluded)."""
        resolved = [self._resolve(v) for v in violations]
        with self._lock:
            self._violations.update(v for v in resolved if v is not None)

    def build_report(self) -> Report:
        with self._lock:
            ordered = sorted(self._violations, key=Violation.sort_key)
            return Report(violations=tuple(ordered), files_analyzed=self._files_analyzed)

    def _resolve(self, violation: Violation) -> Violation | None:
        if not self._config.is_rule_enabled(violation.rule_id):
            return None
        severity = self._config.get_severity(violation.rule_id) or violation.severity
        if violation.demoted:
            severity = severity.lowered()
        return violation.with_severity(severity)
