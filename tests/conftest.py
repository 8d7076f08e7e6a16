"""Shared fixtures for harness tests."""

import json

import pytest

from ui_component_eval.backends.base import Backend
from ui_component_eval.backends.client import CompletionClient
from ui_component_eval.config import EvaluationConfig

SAMPLE_DATASET = [
    {
        "scenarioId": 1,
        "description": "select from 2000 universities",
        "evaluationPrompt": "Does it virtualize?",
    },
    {
        "scenarioId": 2,
        "description": "pick an age range from 15 brackets",
        "evaluationPrompt": "Does it avoid virtualization?",
    },
    {
        "scenarioId": 3,
        "description": "choose a role from 100 options then focus email",
        "evaluationPrompt": "Does it delay focus by 100ms?",
    },
]


class ScriptedBackend(Backend):
    """In-memory backend that records prompts and replies from a script.

    ``handler(prompt, model)`` computes replies; otherwise ``responses``
    are consumed in order.
    """

    name = "scripted"

    def __init__(self, responses=None, handler=None, **kwargs):
        self.calls = []
        self._responses = list(responses or [])
        self._handler = handler

    def complete(self, messages, *, model=None, temperature=None, max_tokens=4096):
        prompt = messages[-1]["content"]
        self.calls.append({"prompt": prompt, "model": model, "messages": messages})
        if self._handler is not None:
            return self._handler(prompt, model)
        return self._responses.pop(0)


@pytest.fixture()
def scripted_backend():
    return ScriptedBackend


@pytest.fixture()
def make_client():
    """Build a CompletionClient around a ScriptedBackend."""

    def _make(responses=None, handler=None, model="gpt-4o-mini"):
        backend = ScriptedBackend(responses=responses, handler=handler)
        return CompletionClient(backend, model), backend

    return _make


@pytest.fixture()
def workspace(tmp_path):
    """Directory with a select instruction document and a three-scenario dataset."""
    (tmp_path / "instructions").mkdir()
    (tmp_path / "datasets").mkdir()
    (tmp_path / "instructions" / "select.md").write_text("Virtualize lists above 200 items.", encoding="utf-8")
    (tmp_path / "datasets" / "select.json").write_text(json.dumps(SAMPLE_DATASET), encoding="utf-8")
    return tmp_path


@pytest.fixture()
def workspace_config(workspace):
    """EvaluationConfig pointing at the ``workspace`` fixture with absolute paths."""
    return EvaluationConfig(
        instruction_file=str(workspace / "instructions" / "select.md"),
        dataset_file=str(workspace / "datasets" / "select.json"),
        output_file=str(workspace / "reports" / "{component}_{timestamp}.md"),
    )
