"""Check Conventions Use Case - orchestrates a whole-project run."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait
from typing import TYPE_CHECKING

from convention_linter.domain.constants import DEFAULT_EXCLUDED_DIRS
from convention_linter.domain.errors import AnalysisAborted, RootPathError
from convention_linter.domain.rules.catalog import RuleCatalog
from convention_linter.domain.services.report_aggregator import ReportAggregator
from convention_linter.domain.services.symbol_classifier import SymbolClassifier
from convention_linter.use_cases.analyze_source import SourceAnalyzer

if TYPE_CHECKING:
    from convention_linter.domain.config import ConfigurationLoader
    from convention_linter.domain.entities import FileResult, Report
    from convention_linter.domain.protocols import (
        AstroidProtocol,
        FileSystemProtocol,
        TelemetryPort,
    )

logger: logging.Logger = logging.getLogger(__name__)

# Submissions are bounded to this many tasks per worker.
IN_FLIGHT_PER_WORKER: int = 2


class CheckConventionsUseCase:
    """
    Validate the root, discover files, fan out per-file analysis, run the
    layout rules and return the aggregated report.

    Per-file work runs in a ProcessPoolExecutor (inline when one worker is
    enough). This object is the only consumer of worker results. cancel()
    stops new submissions; in-flight tasks finish, their results are
    discarded and execute() raises AnalysisAborted. A KeyboardInterrupt
    during analysis is turned into the same cancellation.
    """

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        parser: AstroidProtocol,
        config_loader: ConfigurationLoader,
        telemetry: TelemetryPort,
        jobs: int | None = None,
    ) -> None:
        self.filesystem = filesystem
        self.parser = parser
        self.config_loader = config_loader
        self.telemetry = telemetry
        self.jobs = jobs
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Request cancellation; safe to call from any thread."""
        self._cancelled.set()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def execute(self, root: str) -> Report:
        root_path = self.validate_root(root)
        files = self.discover_files(root_path)
        analyzer = self.create_analyzer(root_path)
        aggregator = ReportAggregator(self.config_loader)

        workers = self.get_worker_count(len(files))
        self.telemetry.step(f"Analyzing {len(files)} file(s) with {workers} worker(s)")
        try:
            if workers <= 1:
                self._run_inline(analyzer, files, aggregator)
            else:
                self._run_pool(analyzer, files, aggregator, workers)
        except KeyboardInterrupt:
            logger.debug("Interrupted; discarding partial results")
            self.cancel()
        if self.is_cancelled:
            raise AnalysisAborted("Analysis cancelled; no report produced")

        tree = self.filesystem.snapshot_tree(root_path, DEFAULT_EXCLUDED_DIRS)
        for rule in RuleCatalog.build_project_rules(self.config_loader):
            aggregator.add_project_violations(rule.check_project(tree))

        report = aggregator.build_report()
        summary = report.summary
        self.telemetry.step(
            f"{report.files_analyzed} file(s) analyzed: "
            f"{summary.errors} error(s), {summary.warnings} warning(s)"
        )
        return report

    def validate_root(self, root: str) -> str:
        """Resolve the root; raise RootPathError before anything is scheduled."""
        root_path = self.filesystem.resolve_path(root)
        if not self.filesystem.is_directory(root_path):
            raise RootPathError(root, "not an existing directory")
        if not self.filesystem.is_readable(root_path):
            raise RootPathError(root, "permission denied")
        return root_path

    def discover_files(self, root_path: str) -> list[str]:
        """Relative paths of every .py file under root, minus configured exclusions."""
        files = []
        for path in self.filesystem.list_python_files(root_path, DEFAULT_EXCLUDED_DIRS):
            if self.config_loader.is_excluded(path):
                logger.debug("Excluded by configuration: %s", path)
                continue
            files.append(path)
        return files

    def create_analyzer(self, root_path: str) -> SourceAnalyzer:
        return SourceAnalyzer(
            parser=self.parser,
            filesystem=self.filesystem,
            classifier=SymbolClassifier(self.config_loader.verb_prefixes),
            rules=RuleCatalog.build_file_rules(self.config_loader),
            root=root_path,
        )

    def get_worker_count(self, file_count: int) -> int:
        requested = self.jobs if self.jobs and self.jobs > 0 else (os.cpu_count() or 1)
        return max(1, min(requested, file_count))

    def _run_inline(
        self,
        analyzer: SourceAnalyzer,
        files: list[str],
        aggregator: ReportAggregator,
    ) -> None:
        for path in files:
            if self.is_cancelled:
                return
            result = analyzer.analyze_path(path)
            if not self.is_cancelled:
                aggregator.add_file_result(result)

    def _run_pool(
        self,
        analyzer: SourceAnalyzer,
        files: list[str],
        aggregator: ReportAggregator,
        workers: int,
    ) -> None:
        logger.debug("Starting process pool with %d workers", workers)
        max_in_flight = workers * IN_FLIGHT_PER_WORKER
        pending = iter(files)
        in_flight: dict[Future[FileResult], str] = {}
        with ProcessPoolExecutor(max_workers=workers) as executor:
            try:
                while True:
                    while not self.is_cancelled and len(in_flight) < max_in_flight:
                        path = next(pending, None)
                        if path is None:
                            break
                        in_flight[executor.submit(analyzer.analyze_path, path)] = path
                    if not in_flight:
                        break
                    done, _ = wait(in_flight, return_when=FIRST_COMPLETED)
                    for future in done:
                        result = self._collect(future, in_flight.pop(future))
                        if not self.is_cancelled:
                            aggregator.add_file_result(result)
            except KeyboardInterrupt:
                executor.shutdown(wait=False, cancel_futures=True)
                raise

    @staticmethod
    def _collect(future: Future[FileResult], path: str) -> FileResult:
        """A worker that died or raised still yields one finding for its file."""
        try:
            return future.result()
        except Exception as exc:
            return SourceAnalyzer.create_internal_failure(path, exc)
