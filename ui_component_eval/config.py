"""Unified configuration for evaluation runs."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from ui_component_eval.exceptions import ConfigurationError
from ui_component_eval.prompts import check_prompt_spec, load_prompt_spec

DEFAULT_TECHNOLOGIES = ["Vite", "React", "Tailwind CSS", "Shadcn UI", "TypeScript"]


@dataclass
class BackendConfig:
    """LLM backend configuration.

    Parameters
    ----------
    type : str
        Registered backend name (``"openai"``, ``"anthropic"``, ``"litellm"``).
    model : str
        Model identifier used for generation.
    judge_model : str
        Model identifier used for judgment.  Empty string reuses ``model``.
    temperature : float | None
        Sampling temperature.  ``None`` leaves the provider default.
    max_tokens : int
        Maximum tokens per completion.
    timeout : float | None
        Per-request timeout in seconds.  ``None`` leaves the SDK default.
    api_key : str | None
        Explicit credential.  Falls back to the backend's environment variable.
    extra : dict
        Additional kwargs forwarded to the backend constructor.
    """

    type: str = "openai"
    model: str = "gpt-4o-mini"
    judge_model: str = ""
    temperature: float | None = None
    max_tokens: int = 4096
    timeout: float | None = None
    api_key: str | None = None
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.type:
            msg = "backend type must be a non-empty string"
            raise ValueError(msg)
        if not self.model:
            msg = "model must be a non-empty string"
            raise ValueError(msg)
        if self.temperature is not None and self.temperature < 0:
            msg = f"temperature must be >= 0, got {self.temperature}"
            raise ValueError(msg)
        if self.max_tokens <= 0:
            msg = f"max_tokens must be > 0, got {self.max_tokens}"
            raise ValueError(msg)
        if self.timeout is not None and self.timeout <= 0:
            msg = f"timeout must be > 0, got {self.timeout}"
            raise ValueError(msg)


@dataclass
class PromptConfig:
    """Optional prompt template overrides.

    Parameters
    ----------
    generation : str
        Path to a YAML generation template.  Empty uses the built-in one.
    judgment : str
        Path to a YAML judgment template.  Empty uses the built-in one.
    """

    generation: str = ""
    judgment: str = ""


@dataclass
class EvaluationConfig:
    """Top-level configuration for an evaluation run.

    Parameters
    ----------
    instruction_file : str
        Component instruction document, read once per run.
    dataset_file : str
        JSON or YAML list of scenario records.
    output_file : str
        Report path.  ``{component}`` and ``{timestamp}`` are substituted.
    technologies : list[str]
        Technologies the generated component must use.
    ui_library : str
        UI library whose component the generator must use.
    isolate_failures : bool
        Record a failed completion as a failed scenario instead of aborting.
    max_workers : int
        Scenarios evaluated concurrently.  ``1`` is strictly sequential.
    backend : BackendConfig
        LLM backend settings.
    prompts : PromptConfig
        Prompt template overrides.
    """

    instruction_file: str = "instructions/select.md"
    dataset_file: str = "datasets/select.json"
    output_file: str = "reports/{component}_{timestamp}.md"
    technologies: list[str] = field(default_factory=lambda: list(DEFAULT_TECHNOLOGIES))
    ui_library: str = "shadcn ui"
    isolate_failures: bool = False
    max_workers: int = 1
    backend: BackendConfig = field(default_factory=BackendConfig)
    prompts: PromptConfig = field(default_factory=PromptConfig)

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            msg = f"max_workers must be >= 1, got {self.max_workers}"
            raise ValueError(msg)
        if not self.technologies:
            msg = "technologies must contain at least one entry"
            raise ValueError(msg)

    @property
    def judge_model(self) -> str:
        """Model used for judgment calls."""
        return self.backend.judge_model or self.backend.model


def load_config(source: str | Path | dict[str, Any] | None = None) -> EvaluationConfig:
    """Load an EvaluationConfig from a YAML file, dict, or environment variables.

    Parameters
    ----------
    source : str | Path | dict | None
        A path to a YAML file, a raw dict, or ``None`` to use only
        environment variable overrides on defaults.

    Returns
    -------
    EvaluationConfig

    Raises
    ------
    ConfigurationError
        If *source* names a file that does not exist, or the loaded
        document is not a mapping.
    """
    raw: dict[str, Any] = {}

    if isinstance(source, dict):
        raw = source
    elif source is not None:
        path = Path(source)
        if not path.is_file():
            msg = f"Config file not found: {path}"
            raise ConfigurationError(msg)
        raw = _load_yaml(path)

    if not isinstance(raw, dict):
        msg = f"Config must be a mapping, got {type(raw).__name__}"
        raise ConfigurationError(msg)

    backend_raw = _section(raw, "backend")
    env_timeout = os.environ.get("UI_EVAL_TIMEOUT")
    timeout = env_timeout if env_timeout is not None else backend_raw.get("timeout")
    temperature = backend_raw.get("temperature")

    known_backend_keys = {"type", "model", "judge_model", "temperature", "max_tokens", "timeout", "api_key"}
    backend = BackendConfig(
        type=os.environ.get("UI_EVAL_BACKEND", backend_raw.get("type", "openai")),
        model=os.environ.get("UI_EVAL_MODEL", backend_raw.get("model", "gpt-4o-mini")),
        judge_model=os.environ.get("UI_EVAL_JUDGE_MODEL", backend_raw.get("judge_model", "")),
        temperature=float(temperature) if temperature is not None else None,
        max_tokens=int(os.environ.get("UI_EVAL_MAX_TOKENS", backend_raw.get("max_tokens", 4096))),
        timeout=float(timeout) if timeout is not None else None,
        api_key=backend_raw.get("api_key"),
        extra={k: v for k, v in backend_raw.items() if k not in known_backend_keys},
    )

    prompts_raw = _section(raw, "prompts")
    prompts = PromptConfig(
        generation=prompts_raw.get("generation", ""),
        judgment=prompts_raw.get("judgment", ""),
    )

    defaults = EvaluationConfig()
    technologies = raw.get("technologies", defaults.technologies)
    if isinstance(technologies, str):
        technologies = parse_technologies(technologies)

    return EvaluationConfig(
        instruction_file=raw.get("instruction_file", defaults.instruction_file),
        dataset_file=raw.get("dataset_file", defaults.dataset_file),
        output_file=raw.get("output_file", defaults.output_file),
        technologies=list(technologies),
        ui_library=raw.get("ui_library", defaults.ui_library),
        isolate_failures=bool(raw.get("isolate_failures", defaults.isolate_failures)),
        max_workers=int(raw.get("max_workers", defaults.max_workers)),
        backend=backend,
        prompts=prompts,
    )


def apply_overrides(config: EvaluationConfig, **values: Any) -> EvaluationConfig:
    """Return a copy of *config* with every non-``None`` value replaced.

    Keys matching :class:`BackendConfig` fields (``type``, ``model``,
    ``judge_model``, ``timeout``, ...) are applied to ``config.backend``;
    the rest to the top-level config.
    """
    backend_fields = set(BackendConfig.__dataclass_fields__)
    backend_values = {k: v for k, v in values.items() if v is not None and k in backend_fields}
    top_values = {k: v for k, v in values.items() if v is not None and k not in backend_fields}
    if backend_values:
        top_values["backend"] = replace(config.backend, **backend_values)
    return replace(config, **top_values)


def parse_technologies(value: str) -> list[str]:
    """Split a comma-separated technology list, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def validate_inputs(
    config: EvaluationConfig,
    environ: Mapping[str, str] | None = None,
    *,
    api_key_env: str | None = None,
) -> None:
    """Check every startup precondition and report all failures together.

    Parameters
    ----------
    config : EvaluationConfig
        Resolved run configuration.
    environ : Mapping[str, str] | None
        Environment to look credentials up in.  Defaults to ``os.environ``.
    api_key_env : str | None
        Environment variable the selected backend authenticates with.
        ``None`` skips the credential check.

    Raises
    ------
    ConfigurationError
        Listing every problem found.
    """
    environ = os.environ if environ is None else environ
    errors: list[str] = []

    if not Path(config.instruction_file).is_file():
        errors.append(f"Instruction file not found: {config.instruction_file}")
    if not Path(config.dataset_file).is_file():
        errors.append(f"Dataset file not found: {config.dataset_file}")
    for label, override in (("generation", config.prompts.generation), ("judgment", config.prompts.judgment)):
        if not override:
            continue
        if not Path(override).is_file():
            errors.append(f"Prompt template ({label}) not found: {override}")
            continue
        try:
            check_prompt_spec(load_prompt_spec(override), label)
        except ValueError as exc:
            errors.append(f"Prompt template ({label}) is invalid: {exc}")

    output_dir = _nearest_existing_dir(Path(config.output_file).parent)
    if output_dir is None or not os.access(output_dir, os.W_OK):
        errors.append(f"Output directory is not writable: {Path(config.output_file).parent}")

    if api_key_env and not config.backend.api_key and not environ.get(api_key_env):
        errors.append(f"Missing API credential: set {api_key_env}")

    if errors:
        raise ConfigurationError(errors)


def _nearest_existing_dir(path: Path) -> Path | None:
    """Walk up from *path* to the first directory that exists."""
    for candidate in (path, *path.parents):
        if candidate.exists():
            return candidate if candidate.is_dir() else None
    return None


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    """Return the *key* sub-mapping of *raw*; an empty or missing key yields ``{}``."""
    section = raw.get(key) or {}
    if not isinstance(section, dict):
        msg = f"Config section '{key}' must be a mapping, got {type(section).__name__}"
        raise ConfigurationError(msg)
    return section


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file using PyYAML."""
    with open(path, encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            msg = f"Config file {path} could not be parsed: {exc}"
            raise ConfigurationError(msg) from exc
