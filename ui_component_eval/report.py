"""Run statistics and Markdown report rendering."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Sequence

import jinja2

from ui_component_eval.models import EvaluationScenario, Report, RunStatistics
from ui_component_eval.store import ArtifactStore

logger = logging.getLogger(__name__)

SUMMARY_RULE = "=" * 50

_REPORT_TEMPLATE = """\
# AI Evaluation Report

**Generated:** {{ generated_at }}
**Total Scenarios:** {{ stats.total }}
**Passed:** {{ stats.passed }}
**Failed:** {{ stats.failed }}
**Success Rate:** {{ "%.1f"|format(stats.success_rate) }}%
**Average Score:** {{ "%.1f"|format(stats.average_score) }}%

---

{% for scenario in scenarios %}
{% set result = scenario.eval_result %}
## Scenario {{ scenario.scenario_id }} {{ "✅ PASSED" if result.passed else "❌ FAILED" }}

**Score:** {{ "%.1f"|format(result.score * 100) }}%

### Input Description
{{ scenario.description }}

### Evaluation Question
{{ scenario.evaluation_prompt }}

### AI Evaluation Result
**Answer:** {{ result.answer }}

### AI Reasoning
{{ result.reasoning }}

### Generated Component Code
```typescript
{{ result.output|fence_body }}```

### Full AI Evaluation Response
```
{{ result.ai_evaluation|fence_body }}```

---

{% endfor %}
"""


def _fence_body(text: str) -> str:
    """Terminate *text* with a newline so the closing fence starts its own line."""
    return text if text.endswith("\n") else text + "\n"


_ENV = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    autoescape=False,
)
_ENV.filters["fence_body"] = _fence_body
_TEMPLATE = _ENV.from_string(_REPORT_TEMPLATE)


def compute_statistics(scenarios: Sequence[EvaluationScenario]) -> RunStatistics:
    """Aggregate pass counts and rates over *scenarios*.

    Parameters
    ----------
    scenarios : Sequence[EvaluationScenario]
        Evaluated scenarios.

    Returns
    -------
    RunStatistics
        Rates are percentages, ``0.0`` when *scenarios* is empty.
    """
    total = len(scenarios)
    passed = sum(1 for s in scenarios if s.eval_result.passed)
    if total:
        success_rate = passed / total * 100
        average_score = sum(s.eval_result.score for s in scenarios) / total * 100
    else:
        success_rate = 0.0
        average_score = 0.0
    return RunStatistics(
        total=total,
        passed=passed,
        failed=total - passed,
        success_rate=success_rate,
        average_score=average_score,
    )


def render_report(
    scenarios: Sequence[EvaluationScenario],
    statistics: RunStatistics,
    generated_at: str,
) -> str:
    """Render the Markdown report.

    Sections follow the order of *scenarios*.  Generated code and the full
    judge reply are embedded verbatim in fenced blocks.
    """
    return _TEMPLATE.render(scenarios=list(scenarios), stats=statistics, generated_at=generated_at)


def resolve_output_path(template: str, component: str, timestamp: str) -> str:
    """Fill the ``{component}`` and ``{timestamp}`` placeholders of an output path."""
    return template.replace("{component}", component).replace("{timestamp}", timestamp)


def file_timestamp(moment: datetime) -> str:
    """Format *moment* for use inside a file name."""
    return moment.strftime("%Y-%m-%dT%H-%M-%S")


class ReportGenerator:
    """Build and persist evaluation reports.

    Parameters
    ----------
    clock : Callable[[], datetime] | None
        Source of the generation timestamp.  Defaults to UTC now.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def now(self) -> datetime:
        return self._clock()

    def generate(self, scenarios: Sequence[EvaluationScenario]) -> Report:
        """Compute statistics and render the full document in memory."""
        statistics = compute_statistics(scenarios)
        generated_at = self._clock().strftime("%Y-%m-%d %H:%M:%S %Z").strip()
        document = render_report(scenarios, statistics, generated_at)
        return Report(statistics=statistics, document=document, generated_at=generated_at)

    def write(self, report: Report, path: str | Path, store: ArtifactStore | None = None) -> Path:
        """Write *report* to *path* in a single call."""
        store = store or ArtifactStore()
        written = store.write_text(path, report.document)
        logger.info("Wrote report to %s", written)
        return written


def format_summary(
    scenarios: Sequence[EvaluationScenario],
    statistics: RunStatistics,
    report_path: str | Path | None = None,
) -> str:
    """Render the console summary block printed at the end of a run."""
    lines = [
        SUMMARY_RULE,
        "EVALUATION SUMMARY",
        SUMMARY_RULE,
        f"Total scenarios: {statistics.total}",
        f"Passed: {statistics.passed}",
        f"Failed: {statistics.failed}",
        f"Success rate: {statistics.success_rate:.1f}%",
        f"Average score: {statistics.average_score:.1f}%",
    ]
    if report_path is not None:
        lines.append("")
        lines.append(f"Detailed report saved to: {report_path}")

    failed = [s for s in scenarios if not s.eval_result.passed]
    if failed:
        lines.append("")
        lines.append("Failed scenarios:")
        for s in failed:
            lines.append(f"- Scenario {s.scenario_id}: {s.description} (Score: {s.eval_result.score * 100:.1f}%)")
    return "\n".join(lines)
