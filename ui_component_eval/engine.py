"""EvaluationEngine: generate a component for one scenario and judge it."""

from __future__ import annotations

import logging

from ui_component_eval.backends.client import CompletionClient
from ui_component_eval.config import EvaluationConfig
from ui_component_eval.models import EvalResult, PromptSpec, ScenarioSpec
from ui_component_eval.prompts import build_generation_prompt, build_judgment_prompt, load_prompt_spec
from ui_component_eval.store import ArtifactStore, component_kind
from ui_component_eval.verdict import parse_verdict

logger = logging.getLogger(__name__)


class EvaluationEngine:
    """Evaluate scenarios against a fixed instruction document.

    Each call to :meth:`evaluate` issues exactly two completion calls, the
    judgment strictly after the generation.  Nothing is retried and no
    error is caught: a failed call propagates to the caller unchanged.

    The engine holds no mutable state, so one instance may serve several
    threads.

    Parameters
    ----------
    client : CompletionClient
        Completion client used for both calls.
    instructions : str
        Instruction document, shared read-only across scenarios.
    technologies : list[str]
        Technologies the generated component must use.
    component_kind : str
        Component the model must build (e.g. ``"select"``).
    model : str | None
        Generation model.  ``None`` uses the client default.
    judge_model : str | None
        Judgment model.  ``None`` reuses *model*.
    ui_library : str
        UI library providing the component.
    generation_spec : PromptSpec | None
        Generation template override.
    judgment_spec : PromptSpec | None
        Judgment template override.
    """

    def __init__(
        self,
        client: CompletionClient,
        instructions: str,
        *,
        technologies: list[str],
        component_kind: str,
        model: str | None = None,
        judge_model: str | None = None,
        ui_library: str = "shadcn ui",
        generation_spec: PromptSpec | None = None,
        judgment_spec: PromptSpec | None = None,
    ) -> None:
        self._client = client
        self._instructions = instructions
        self._technologies = tuple(technologies)
        self._component_kind = component_kind
        self._model = model
        self._judge_model = judge_model or model
        self._ui_library = ui_library
        self._generation_spec = generation_spec
        self._judgment_spec = judgment_spec

    @property
    def component_kind(self) -> str:
        return self._component_kind

    @classmethod
    def from_config(
        cls,
        config: EvaluationConfig,
        store: ArtifactStore | None = None,
        client: CompletionClient | None = None,
    ) -> EvaluationEngine:
        """Construct an engine, reading the instruction document once.

        Parameters
        ----------
        config : EvaluationConfig
            Resolved run configuration.
        store : ArtifactStore | None
            Store the instruction document is read from.
        client : CompletionClient | None
            Completion client.  Built from ``config.backend`` when omitted.

        Returns
        -------
        EvaluationEngine
        """
        store = store or ArtifactStore()
        instructions = store.read_text(config.instruction_file)
        kind = component_kind(config.instruction_file)
        logger.info("Loaded instructions %s (component=%s)", config.instruction_file, kind)

        generation_spec = None
        if config.prompts.generation:
            generation_spec = load_prompt_spec(store.resolve(config.prompts.generation))
        judgment_spec = None
        if config.prompts.judgment:
            judgment_spec = load_prompt_spec(store.resolve(config.prompts.judgment))

        return cls(
            client or CompletionClient.from_config(config.backend),
            instructions,
            technologies=config.technologies,
            component_kind=kind,
            model=config.backend.model,
            judge_model=config.judge_model,
            ui_library=config.ui_library,
            generation_spec=generation_spec,
            judgment_spec=judgment_spec,
        )

    def evaluate(self, scenario: ScenarioSpec) -> EvalResult:
        """Generate a component for *scenario* and judge it.

        Parameters
        ----------
        scenario : ScenarioSpec
            Scenario to evaluate.

        Returns
        -------
        EvalResult

        Raises
        ------
        CompletionFailure
            If either completion call fails.
        """
        generation_prompt = build_generation_prompt(
            self._instructions,
            list(self._technologies),
            self._component_kind,
            scenario.description,
            ui_library=self._ui_library,
            spec=self._generation_spec,
        )
        output = self._client.complete(generation_prompt, self._model)

        judgment_prompt = build_judgment_prompt(output, scenario.evaluation_prompt, spec=self._judgment_spec)
        ai_evaluation = self._client.complete(judgment_prompt, self._judge_model)

        verdict = parse_verdict(ai_evaluation)
        result = EvalResult.from_verdict(output, scenario.evaluation_prompt, ai_evaluation, verdict)

        logger.debug(
            "Evaluated scenario=%d passed=%s output_chars=%d",
            scenario.scenario_id,
            result.passed,
            len(output),
        )
        return result
