"""Tests for CheckConventionsUseCase orchestration."""

from concurrent.futures import Future
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from convention_linter.domain.config import ConfigurationLoader
from convention_linter.domain.errors import AnalysisAborted, RootPathError
from convention_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from convention_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from convention_linter.infrastructure.reporters import JsonReportRenderer
from convention_linter.use_cases.analyze_source import SourceAnalyzer
from convention_linter.use_cases.check_conventions import CheckConventionsUseCase

CLEAN_SOURCE = "def process_payment(amount: float) -> bool:\n    return amount > 0\n"
DIRTY_SOURCE = "def Update(x): return x>3\n"


def _use_case(config: ConfigurationLoader | None = None, jobs: int | None = 1, **overrides) -> CheckConventionsUseCase:
    deps = {
        "filesystem": FileSystemGateway(),
        "parser": AstroidGateway(),
        "config_loader": config or ConfigurationLoader(),
        "telemetry": MagicMock(),
        "jobs": jobs,
    }
    deps.update(overrides)
    return CheckConventionsUseCase(**deps)


class TestExecute:
    def test_clean_project_exits_zero(self, make_project) -> None:
        root = make_project({"apps/payments.py": CLEAN_SOURCE})
        report = _use_case().execute(str(root))
        assert report.violations == ()
        assert report.exit_code == 0
        assert report.files_analyzed == 1

    def test_violations_use_relative_paths(self, make_project) -> None:
        root = make_project({"apps/models.py": DIRTY_SOURCE})
        report = _use_case().execute(str(root))
        assert {v.file_path for v in report.violations} == {"apps/models.py"}
        assert report.exit_code == 1

    def test_missing_tests_directory_is_one_layout_error(self, make_project) -> None:
        root = make_project({"apps/payments.py": CLEAN_SOURCE}, directories=("apps", "utils", "docs"))
        report = _use_case().execute(str(root))
        layout = [v for v in report.violations if v.rule_id == "layout.required-dir"]
        assert len(layout) == 1
        assert layout[0].file_path == "tests"
        assert report.exit_code == 1

    def test_parse_failure_is_isolated(self, make_project) -> None:
        root = make_project(
            {"apps/broken.py": "def broken(:\n", "apps/models.py": DIRTY_SOURCE}
        )
        report = _use_case().execute(str(root))
        parse_errors = [v for v in report.violations if v.rule_id == "parse.error"]
        assert [v.file_path for v in parse_errors] == ["apps/broken.py"]
        assert any(v.file_path == "apps/models.py" for v in report.violations)
        assert report.files_analyzed == 2

    def test_excluded_files_contribute_nothing(self, make_project) -> None:
        root = make_project({"apps/payments.py": CLEAN_SOURCE, "apps/generated/api.py": DIRTY_SOURCE})
        config = ConfigurationLoader({"exclude": ["apps/generated/*"]})
        report = _use_case(config).execute(str(root))
        assert report.violations == ()
        assert report.files_analyzed == 1

    def test_virtualenv_not_walked(self, make_project) -> None:
        root = make_project({"apps/payments.py": CLEAN_SOURCE, ".venv/lib/site.py": DIRTY_SOURCE})
        assert _use_case().execute(str(root)).violations == ()

    def test_disabled_rule_not_reported(self, make_project) -> None:
        root = make_project({"apps/models.py": DIRTY_SOURCE})
        config = ConfigurationLoader({"rules": {"magic-number.undeclared": {"enabled": False}}})
        report = _use_case(config).execute(str(root))
        assert "magic-number.undeclared" not in {v.rule_id for v in report.violations}

    def test_progress_goes_through_telemetry(self, make_project) -> None:
        root = make_project({"apps/payments.py": CLEAN_SOURCE})
        telemetry = MagicMock()
        _use_case(telemetry=telemetry).execute(str(root))
        assert telemetry.step.call_count == 2


    @pytest.mark.parametrize("jobs", [1, 2])
    def test_deeply_nested_file_does_not_abort_run(self, make_project, jobs: int) -> None:
        deep_source = "x = " + "+".join(["a"] * 3000) + "\n"
        root = make_project({"apps/deep.py": deep_source, "apps/payments.py": CLEAN_SOURCE})
        report = _use_case(jobs=jobs).execute(str(root))
        assert [(v.file_path, v.rule_id) for v in report.violations] == [("apps/deep.py", "parse.error")]
        assert report.files_analyzed == 2

    def test_bom_prefixed_file_is_clean(self, make_project, tmp_path: Path) -> None:
        root = make_project({})
        (tmp_path / "apps" / "pay.py").write_bytes(b"\xef\xbb\xbf" + CLEAN_SOURCE.encode("utf-8"))
        report = _use_case().execute(str(root))
        assert report.violations == ()
        assert report.exit_code == 0

    def test_existing_build_directory_satisfies_layout(self, make_project) -> None:
        root = make_project({"apps/payments.py": CLEAN_SOURCE}, directories=("build",))
        config = ConfigurationLoader({"required_dirs": ["build"]})
        report = _use_case(config).execute(str(root))
        assert "layout.required-dir" not in {v.rule_id for v in report.violations}


class TestDeterminism:
    def test_identical_output_across_runs_and_worker_counts(self, make_project) -> None:
        files = {f"apps/module_{i}.py": DIRTY_SOURCE for i in range(6)}
        files["utils/broken.py"] = "def broken(:\n"
        root = make_project(files)
        renderer = JsonReportRenderer()

        inline = renderer.render(_use_case(jobs=1).execute(str(root)))
        again = renderer.render(_use_case(jobs=1).execute(str(root)))
        pooled = renderer.render(_use_case(jobs=2).execute(str(root)))

        assert inline == again
        assert inline == pooled


class TestFatalErrors:
    def test_missing_root_raises_before_scheduling(self, tmp_path: Path) -> None:
        filesystem = MagicMock()
        filesystem.resolve_path.side_effect = lambda path: path
        filesystem.is_directory.return_value = False
        use_case = _use_case(filesystem=filesystem)

        with pytest.raises(RootPathError):
            use_case.execute(str(tmp_path / "missing"))
        filesystem.list_python_files.assert_not_called()

    def test_unreadable_root(self, tmp_path: Path) -> None:
        filesystem = MagicMock()
        filesystem.resolve_path.side_effect = lambda path: path
        filesystem.is_directory.return_value = True
        filesystem.is_readable.return_value = False
        with pytest.raises(RootPathError, match="permission denied"):
            _use_case(filesystem=filesystem).execute(str(tmp_path))


class TestCancellation:
    def test_cancel_mid_run_emits_no_report(self, make_project) -> None:
        root = make_project({f"apps/module_{i}.py": CLEAN_SOURCE for i in range(3)})
        use_case = _use_case(jobs=1)
        original = SourceAnalyzer.analyze_path

        def _analyze_then_cancel(analyzer: SourceAnalyzer, path: str):
            result = original(analyzer, path)
            use_case.cancel()
            return result

        with patch.object(SourceAnalyzer, "analyze_path", autospec=True, side_effect=_analyze_then_cancel) as analyze:
            with pytest.raises(AnalysisAborted):
                use_case.execute(str(root))
        assert analyze.call_count == 1

    def test_cancel_before_execute(self, make_project) -> None:
        root = make_project({"apps/payments.py": CLEAN_SOURCE})
        use_case = _use_case(jobs=2)
        use_case.cancel()
        with pytest.raises(AnalysisAborted):
            use_case.execute(str(root))


class TestWorkerCount:
    def test_bounded_by_file_count(self) -> None:
        assert _use_case(jobs=8).get_worker_count(3) == 3
        assert _use_case(jobs=8).get_worker_count(0) == 1

    def test_defaults_to_cpu_count(self) -> None:
        with patch("convention_linter.use_cases.check_conventions.os.cpu_count", return_value=4):
            assert _use_case(jobs=None).get_worker_count(100) == 4

    def test_keyboard_interrupt_aborts_without_report(self, make_project) -> None:
        root = make_project({"apps/payments.py": CLEAN_SOURCE})
        use_case = _use_case(jobs=1)
        with patch.object(SourceAnalyzer, "analyze_path", autospec=True, side_effect=KeyboardInterrupt):
            with pytest.raises(AnalysisAborted):
                use_case.execute(str(root))
        assert use_case.is_cancelled


class TestCollect:
    def test_failed_worker_future_yields_parse_error(self) -> None:
        future: Future = Future()
        future.set_exception(RuntimeError("worker died"))
        result = CheckConventionsUseCase._collect(future, "apps/models.py")
        assert result.path == "apps/models.py"
        assert [v.rule_id for v in result.violations] == ["parse.error"]
