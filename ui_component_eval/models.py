"""Data models for scenario evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ui_component_eval.exceptions import DatasetError

NO_REASONING = "No reasoning provided"


def answer_label(passed: bool) -> str:
    """Return the ``YES``/``NO`` label reports use for a verdict."""
    return "YES" if passed else "NO"


@dataclass(frozen=True)
class ScenarioSpec:
    """One row of the evaluation dataset.

    Parameters
    ----------
    scenario_id : int
        Positive identifier, unique within a run.
    description : str
        User query that drives component generation.
    evaluation_prompt : str
        Yes/no question used to judge the generated component.
    """

    scenario_id: int
    description: str
    evaluation_prompt: str

    @classmethod
    def from_record(cls, record: Any) -> ScenarioSpec:
        """Construct a spec from a dataset record.

        Parameters
        ----------
        record : dict
            Mapping with ``scenarioId``, ``description`` and
            ``evaluationPrompt`` keys.

        Returns
        -------
        ScenarioSpec

        Raises
        ------
        DatasetError
            If a field is missing or has the wrong type.
        """
        if not isinstance(record, dict):
            msg = f"Dataset record must be an object, got {type(record).__name__}"
            raise DatasetError(msg)

        scenario_id = record.get("scenarioId")
        if isinstance(scenario_id, bool) or not isinstance(scenario_id, int) or scenario_id < 1:
            msg = f"scenarioId must be a positive integer, got {scenario_id!r}"
            raise DatasetError(msg)

        for key in ("description", "evaluationPrompt"):
            value = record.get(key)
            if not isinstance(value, str) or not value.strip():
                msg = f"Scenario {scenario_id}: {key!r} must be a non-empty string"
                raise DatasetError(msg)

        return cls(
            scenario_id=scenario_id,
            description=record["description"],
            evaluation_prompt=record["evaluationPrompt"],
        )


@dataclass(frozen=True)
class Verdict:
    """Parsed outcome of a judge reply.

    Parameters
    ----------
    passed : bool
        ``True`` only when the reply answered ``YES``.
    reasoning : str
        Extracted rationale, or :data:`NO_REASONING`.
    """

    passed: bool
    reasoning: str = NO_REASONING

    @property
    def answer(self) -> str:
        """Return the verdict as the ``YES``/``NO`` label used in reports."""
        return answer_label(self.passed)


@dataclass(frozen=True)
class EvalResult:
    """Outcome of evaluating one scenario.

    Parameters
    ----------
    passed : bool
        Whether the judge answered ``YES``.
    output : str
        Generated component code, verbatim.
    score : float
        ``1.0`` when passed, else ``0.0``.
    test_prompt : str
        The evaluation question, echoed back.
    ai_evaluation : str
        Full judge reply retained for audit.
    reasoning : str
        Extracted rationale or the fail-closed sentinel.
    """

    passed: bool
    output: str
    score: float
    test_prompt: str
    ai_evaluation: str
    reasoning: str

    @classmethod
    def from_verdict(cls, output: str, test_prompt: str, ai_evaluation: str, verdict: Verdict) -> EvalResult:
        """Build a result from a parsed verdict using binary scoring."""
        return cls(
            passed=verdict.passed,
            output=output,
            score=1.0 if verdict.passed else 0.0,
            test_prompt=test_prompt,
            ai_evaluation=ai_evaluation,
            reasoning=verdict.reasoning,
        )

    @property
    def answer(self) -> str:
        """Return the judge's answer as the ``YES``/``NO`` label used in reports."""
        return answer_label(self.passed)


@dataclass(frozen=True)
class EvaluationScenario:
    """A scenario joined with its result, carried into the report."""

    scenario_id: int
    description: str
    evaluation_prompt: str
    eval_result: EvalResult

    @classmethod
    def from_spec(cls, spec: ScenarioSpec, result: EvalResult) -> EvaluationScenario:
        return cls(
            scenario_id=spec.scenario_id,
            description=spec.description,
            evaluation_prompt=spec.evaluation_prompt,
            eval_result=result,
        )


@dataclass(frozen=True)
class RunStatistics:
    """Aggregate statistics over one run.

    Rates are percentages.  Both are ``0.0`` for an empty run.
    """

    total: int
    passed: int
    failed: int
    success_rate: float
    average_score: float


@dataclass(frozen=True)
class Report:
    """A fully rendered report and the statistics it was built from."""

    statistics: RunStatistics
    document: str
    generated_at: str


@dataclass(frozen=True)
class PromptSpec:
    """Metadata and template content for a prompt.

    Parameters
    ----------
    name : str
        Unique prompt identifier.
    version : str
        Semver-style version string.
    description : str
        Human-readable description.
    template : str
        Jinja2 template for the user message.
    """

    name: str
    version: str
    description: str
    template: str
