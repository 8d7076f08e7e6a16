"""LLM-driven UI component generation and yes/no judgment harness."""

from ui_component_eval.backends import Backend, BackendRegistry, CompletionClient
from ui_component_eval.config import BackendConfig, EvaluationConfig, load_config
from ui_component_eval.engine import EvaluationEngine
from ui_component_eval.exceptions import CompletionFailure, ConfigurationError, DatasetError, HarnessError
from ui_component_eval.models import EvalResult, EvaluationScenario, Report, RunStatistics, ScenarioSpec, Verdict
from ui_component_eval.prompts import build_generation_prompt, build_judgment_prompt
from ui_component_eval.report import ReportGenerator, compute_statistics, render_report
from ui_component_eval.runner import EvaluationRunner, RunOutcome, run_evaluation
from ui_component_eval.store import ArtifactStore
from ui_component_eval.verdict import parse_verdict

__all__ = [
    "ArtifactStore",
    "Backend",
    "BackendConfig",
    "BackendRegistry",
    "CompletionClient",
    "CompletionFailure",
    "ConfigurationError",
    "DatasetError",
    "EvalResult",
    "EvaluationConfig",
    "EvaluationEngine",
    "EvaluationRunner",
    "EvaluationScenario",
    "HarnessError",
    "Report",
    "ReportGenerator",
    "RunOutcome",
    "RunStatistics",
    "ScenarioSpec",
    "Verdict",
    "build_generation_prompt",
    "build_judgment_prompt",
    "compute_statistics",
    "load_config",
    "parse_verdict",
    "render_report",
    "run_evaluation",
]
