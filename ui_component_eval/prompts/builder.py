"""Generation and judgment prompt builders.

Both builders are pure: they render an in-memory Jinja2 template and
perform no I/O.  Inputs are embedded verbatim.  In particular, a generated
artifact containing a Markdown fence is not escaped and can end the fenced
block in the judgment prompt early.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2
import yaml

from ui_component_eval.models import PromptSpec

logger = logging.getLogger(__name__)

_ENV = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    autoescape=False,
)

GENERATION_SPEC = PromptSpec(
    name="component_generation",
    version="1.0",
    description="Generate a single UI component from instructions and a user query.",
    template="""\
You are given component instructions:
{{ instructions }}

Ensure to use the following technologies:
{% for tech in technologies %}
- {{ tech }}
{% endfor %}

Ensure to use the {{ component_kind }} component from {{ ui_library }}.

Return only the {{ component_kind }} component code. Nothing else.

User query:
{{ user_query }}
""",
)

JUDGMENT_SPEC = PromptSpec(
    name="component_judgment",
    version="1.0",
    description="Answer a yes/no question about generated component code.",
    template="""\
You are an expert code reviewer. Analyze the following React component code and answer the specific question below.

Generated Component Code:
```
{{ generated_artifact }}
```

Question: {{ evaluation_question }}

Please respond with:
1. A clear YES or NO answer
2. Your reasoning explaining why

Format your response as:
ANSWER: [YES/NO]
REASONING: [Your detailed explanation]
""",
)


def build_generation_prompt(
    instructions: str,
    technologies: list[str],
    component_kind: str,
    user_query: str,
    *,
    ui_library: str = "shadcn ui",
    spec: PromptSpec | None = None,
) -> str:
    """Assemble the component generation prompt.

    Parameters
    ----------
    instructions : str
        Instruction document, embedded verbatim.
    technologies : list[str]
        Required technologies, rendered as a bullet list in order.
    component_kind : str
        Component the model must build (e.g. ``"select"``).
    user_query : str
        Scenario description.
    ui_library : str
        UI library providing the component.
    spec : PromptSpec | None
        Template override.  Defaults to :data:`GENERATION_SPEC`.

    Returns
    -------
    str
    """
    return _render(
        spec or GENERATION_SPEC,
        {
            "instructions": instructions,
            "technologies": list(technologies),
            "component_kind": component_kind,
            "ui_library": ui_library,
            "user_query": user_query,
        },
    )


def build_judgment_prompt(
    generated_artifact: str,
    evaluation_question: str,
    *,
    spec: PromptSpec | None = None,
) -> str:
    """Assemble the yes/no judgment prompt.

    The reply format the prompt mandates (``ANSWER:`` then ``REASONING:``)
    is the one :func:`ui_component_eval.verdict.parse_verdict` reads.

    Parameters
    ----------
    generated_artifact : str
        Component code returned by the generation call.
    evaluation_question : str
        Question the judge must answer.
    spec : PromptSpec | None
        Template override.  Defaults to :data:`JUDGMENT_SPEC`.

    Returns
    -------
    str
    """
    return _render(
        spec or JUDGMENT_SPEC,
        {"generated_artifact": generated_artifact, "evaluation_question": evaluation_question},
    )


_SAMPLE_VARIABLES: dict[str, dict[str, Any]] = {
    "generation": {
        "instructions": "instructions",
        "technologies": ["React"],
        "component_kind": "select",
        "ui_library": "shadcn ui",
        "user_query": "query",
    },
    "judgment": {"generated_artifact": "code", "evaluation_question": "question"},
}


def load_prompt_spec(path: str | Path) -> PromptSpec:
    """Load a PromptSpec from a YAML file.

    Parameters
    ----------
    path : str | Path
        YAML file with ``name``, ``version``, ``description`` and
        ``template`` keys.

    Returns
    -------
    PromptSpec

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the file is not a YAML mapping with a ``template`` string.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Prompt template not found: {path}"
        raise FileNotFoundError(msg)

    with open(path, encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            msg = f"Prompt template {path} could not be parsed: {exc}"
            raise ValueError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Prompt template {path} must be a mapping"
        raise ValueError(msg)
    if not isinstance(data.get("template"), str) or not data["template"]:
        msg = f"Prompt template {path} has no 'template' key"
        raise ValueError(msg)

    spec = PromptSpec(
        name=data.get("name", path.stem),
        version=str(data.get("version", "0.0")),
        description=data.get("description", ""),
        template=data["template"],
    )
    logger.debug("Loaded prompt %s v%s from %s", spec.name, spec.version, path)
    return spec


def check_prompt_spec(spec: PromptSpec, kind: str) -> None:
    """Render *spec* once with placeholder inputs to surface template errors early.

    Parameters
    ----------
    spec : PromptSpec
        Template to check.
    kind : str
        ``"generation"`` or ``"judgment"``; selects the variables available.

    Raises
    ------
    ValueError
        If the template does not compile, references an unknown variable,
        or renders to blank text.
    """
    try:
        rendered = _render(spec, _SAMPLE_VARIABLES[kind])
    except jinja2.TemplateError as exc:
        msg = f"Prompt template {spec.name} does not render: {exc}"
        raise ValueError(msg) from exc
    if not rendered.strip():
        msg = f"Prompt template {spec.name} renders to an empty prompt"
        raise ValueError(msg)


def _render(spec: PromptSpec, variables: dict[str, Any]) -> str:
    """Render a single template string."""
    return _ENV.from_string(spec.template).render(**variables)
