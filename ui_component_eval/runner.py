"""Dataset runner: evaluate every scenario, then report."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ui_component_eval.backends.client import CompletionClient
from ui_component_eval.config import EvaluationConfig
from ui_component_eval.engine import EvaluationEngine
from ui_component_eval.exceptions import CompletionFailure
from ui_component_eval.models import EvalResult, EvaluationScenario, Report, ScenarioSpec
from ui_component_eval.report import ReportGenerator, file_timestamp, resolve_output_path
from ui_component_eval.store import ArtifactStore

logger = logging.getLogger(__name__)

REASONING_PREVIEW_CHARS = 100


class EvaluationRunner:
    """Drive an :class:`EvaluationEngine` over a dataset.

    By default scenarios run one at a time in dataset order and the first
    :class:`CompletionFailure` aborts the run.

    Parameters
    ----------
    engine : EvaluationEngine
        Engine evaluating a single scenario.
    isolate_failures : bool
        Record a failed completion as a failed scenario and continue.
    max_workers : int
        Scenarios evaluated concurrently.  Results keep dataset order.
    """

    def __init__(self, engine: EvaluationEngine, *, isolate_failures: bool = False, max_workers: int = 1) -> None:
        if max_workers < 1:
            msg = f"max_workers must be >= 1, got {max_workers}"
            raise ValueError(msg)
        self._engine = engine
        self._isolate_failures = isolate_failures
        self._max_workers = max_workers

    def run(self, dataset: Sequence[ScenarioSpec]) -> list[EvaluationScenario]:
        """Evaluate every scenario in *dataset*.

        Parameters
        ----------
        dataset : Sequence[ScenarioSpec]
            Scenarios in report order.

        Returns
        -------
        list[EvaluationScenario]
            One entry per scenario, in dataset order.

        Raises
        ------
        CompletionFailure
            On the first failed call, unless ``isolate_failures`` is set.
        """
        logger.info("Running AI-based evaluations on %d scenarios", len(dataset))
        if self._max_workers == 1 or len(dataset) <= 1:
            return [self._run_one(spec) for spec in dataset]

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            return list(pool.map(self._run_one, dataset))

    def _run_one(self, spec: ScenarioSpec) -> EvaluationScenario:
        logger.info("Testing Scenario %d: %s", spec.scenario_id, spec.description)
        logger.info("Evaluation Question: %s", spec.evaluation_prompt)
        try:
            result = self._engine.evaluate(spec)
        except CompletionFailure as exc:
            if not self._isolate_failures:
                raise
            logger.error("Scenario %d failed: %s", spec.scenario_id, exc)
            result = EvalResult(
                passed=False,
                output="",
                score=0.0,
                test_prompt=spec.evaluation_prompt,
                ai_evaluation="",
                reasoning=f"Evaluation failed: {exc}",
            )

        logger.info(
            "Scenario %d result: %s (Score: %.1f%%) reasoning: %s...",
            spec.scenario_id,
            "PASSED" if result.passed else "FAILED",
            result.score * 100,
            result.reasoning[:REASONING_PREVIEW_CHARS],
        )
        return EvaluationScenario.from_spec(spec, result)


@dataclass(frozen=True)
class RunOutcome:
    """Everything a completed run produced."""

    scenarios: list[EvaluationScenario]
    report: Report
    report_path: Path


def run_evaluation(
    config: EvaluationConfig,
    *,
    store: ArtifactStore | None = None,
    client: CompletionClient | None = None,
    generator: ReportGenerator | None = None,
) -> RunOutcome:
    """Run a full evaluation and write its report.

    The report is rendered and written only after every scenario has been
    evaluated.  If the run aborts, nothing is written.

    Parameters
    ----------
    config : EvaluationConfig
        Resolved run configuration.
    store : ArtifactStore | None
        Store for inputs and the report.
    client : CompletionClient | None
        Completion client.  Built from ``config.backend`` when omitted.
    generator : ReportGenerator | None
        Report generator.  Injectable for a fixed clock.

    Returns
    -------
    RunOutcome
    """
    store = store or ArtifactStore()
    generator = generator or ReportGenerator()

    dataset = store.load_dataset(config.dataset_file)
    engine = EvaluationEngine.from_config(config, store, client)
    runner = EvaluationRunner(engine, isolate_failures=config.isolate_failures, max_workers=config.max_workers)

    scenarios = runner.run(dataset)
    report = generator.generate(scenarios)

    output_path = resolve_output_path(config.output_file, engine.component_kind, file_timestamp(generator.now()))
    report_path = generator.write(report, output_path, store)

    logger.info(
        "Evaluation complete: %d/%d passed (%.1f%%)",
        report.statistics.passed,
        report.statistics.total,
        report.statistics.success_rate,
    )
    return RunOutcome(scenarios=scenarios, report=report, report_path=report_path)
