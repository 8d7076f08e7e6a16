"""Tests for statistics, report rendering, and the console summary."""

from datetime import datetime, timezone

from ui_component_eval.models import EvalResult, EvaluationScenario
from ui_component_eval.report import (
    ReportGenerator,
    compute_statistics,
    file_timestamp,
    format_summary,
    render_report,
    resolve_output_path,
)
from ui_component_eval.store import ArtifactStore

FIXED = datetime(2025, 6, 1, 12, 30, 0, tzinfo=timezone.utc)


def _scenario(scenario_id, passed, reasoning="because", output="const A = 1;"):
    result = EvalResult(
        passed=passed,
        output=output,
        score=1.0 if passed else 0.0,
        test_prompt=f"question {scenario_id}?",
        ai_evaluation=f"ANSWER: {'YES' if passed else 'NO'}\nREASONING: {reasoning}",
        reasoning=reasoning,
    )
    return EvaluationScenario(
        scenario_id=scenario_id,
        description=f"description {scenario_id}",
        evaluation_prompt=f"question {scenario_id}?",
        eval_result=result,
    )


# -- Statistics --------------------------------------------------------------


def test_statistics_counts():
    scenarios = [_scenario(1, True), _scenario(2, False), _scenario(3, True), _scenario(4, False)]
    stats = compute_statistics(scenarios)
    assert stats.total == 4
    assert stats.passed == 2
    assert stats.failed == stats.total - stats.passed == 2
    assert stats.success_rate == 50.0
    assert stats.average_score == 50.0


def test_statistics_empty_run():
    stats = compute_statistics([])
    assert stats.total == 0
    assert stats.passed == 0
    assert stats.failed == 0
    assert stats.success_rate == 0.0
    assert stats.average_score == 0.0


def test_statistics_all_passed():
    stats = compute_statistics([_scenario(1, True), _scenario(2, True), _scenario(3, True)])
    assert stats.success_rate == 100.0
    assert stats.failed == 0


# -- Rendering ---------------------------------------------------------------


def test_render_header_and_sections():
    scenarios = [_scenario(1, True, reasoning="uses windowing"), _scenario(2, False)]
    document = render_report(scenarios, compute_statistics(scenarios), "2025-06-01 12:30:00 UTC")

    assert document.startswith("# AI Evaluation Report\n\n**Generated:** 2025-06-01 12:30:00 UTC\n")
    assert "**Total Scenarios:** 2\n" in document
    assert "**Passed:** 1\n**Failed:** 1\n" in document
    assert "**Success Rate:** 50.0%\n**Average Score:** 50.0%\n" in document
    assert "## Scenario 1 ✅ PASSED\n\n**Score:** 100.0%\n" in document
    assert "## Scenario 2 ❌ FAILED\n\n**Score:** 0.0%\n" in document
    assert "### Input Description\ndescription 1\n" in document
    assert "### Evaluation Question\nquestion 1?\n" in document
    assert "### AI Evaluation Result\n**Answer:** YES\n" in document
    assert "**Answer:** NO\n" in document
    assert "### AI Reasoning\nuses windowing\n" in document


def test_render_fences_artifact_and_judge_reply_verbatim():
    scenarios = [_scenario(1, True, reasoning="ok", output="line 1\nline 2")]
    document = render_report(scenarios, compute_statistics(scenarios), "now")
    assert "### Generated Component Code\n```typescript\nline 1\nline 2\n```\n" in document
    assert "### Full AI Evaluation Response\n```\nANSWER: YES\nREASONING: ok\n```\n" in document


def test_render_keeps_submission_order():
    scenarios = [_scenario(3, True), _scenario(1, False), _scenario(2, True)]
    document = render_report(scenarios, compute_statistics(scenarios), "now")
    positions = [document.index(f"## Scenario {i} ") for i in (3, 1, 2)]
    assert positions == sorted(positions)


def test_render_empty_run():
    document = render_report([], compute_statistics([]), "now")
    assert "**Total Scenarios:** 0\n" in document
    assert "**Success Rate:** 0.0%" in document
    assert "## Scenario" not in document


def test_generate_is_idempotent_except_timestamp():
    scenarios = [_scenario(2, False), _scenario(1, True)]
    first = ReportGenerator(clock=lambda: FIXED).generate(scenarios)
    second = ReportGenerator(clock=lambda: datetime(2026, 1, 1, tzinfo=timezone.utc)).generate(scenarios)

    assert first.generated_at != second.generated_at
    assert first.document.replace(first.generated_at, "<ts>") == second.document.replace(second.generated_at, "<ts>")


def test_end_to_end_report_markers():
    scenario = _scenario(1, True, reasoning="uses windowing")
    report = ReportGenerator(clock=lambda: FIXED).generate([scenario])
    assert "✅" in report.document
    assert "Scenario 1" in report.document
    assert "uses windowing" in report.document
    assert report.generated_at == "2025-06-01 12:30:00 UTC"
    assert report.statistics.passed == 1


def test_write_creates_directories(tmp_path):
    report = ReportGenerator(clock=lambda: FIXED).generate([_scenario(1, True)])
    path = tmp_path / "nested" / "reports" / "report.md"
    written = ReportGenerator().write(report, path, ArtifactStore())
    assert written == path
    assert path.read_text(encoding="utf-8") == report.document


# -- Paths and summary -------------------------------------------------------


def test_resolve_output_path():
    assert resolve_output_path("reports/{component}_{timestamp}.md", "select", "2025") == "reports/select_2025.md"
    assert resolve_output_path("report.md", "select", "2025") == "report.md"


def test_file_timestamp():
    assert file_timestamp(FIXED) == "2025-06-01T12-30-00"


def test_summary_lists_failed_scenarios():
    scenarios = [_scenario(1, True), _scenario(2, False)]
    summary = format_summary(scenarios, compute_statistics(scenarios), "reports/select.md")
    assert "EVALUATION SUMMARY" in summary
    assert "Total scenarios: 2" in summary
    assert "Success rate: 50.0%" in summary
    assert "Detailed report saved to: reports/select.md" in summary
    assert "- Scenario 2: description 2 (Score: 0.0%)" in summary
    assert "- Scenario 1:" not in summary


def test_summary_without_failures():
    scenarios = [_scenario(1, True)]
    summary = format_summary(scenarios, compute_statistics(scenarios))
    assert "Failed scenarios:" not in summary
