"""Tests for backend registry, concrete backends, and CompletionClient."""

from unittest.mock import MagicMock, patch

import pytest

from ui_component_eval.backends import BackendRegistry, CompletionClient
from ui_component_eval.backends import anthropic_backend as _anthropic_mod
from ui_component_eval.backends import litellm_backend as _litellm_mod
from ui_component_eval.backends import openai_backend as _openai_mod
from ui_component_eval.config import BackendConfig
from ui_component_eval.exceptions import CompletionFailure


def _chat_response(content):
    return MagicMock(choices=[MagicMock(message=MagicMock(content=content))])


# -- Registry ----------------------------------------------------------------


def test_builtin_backends_registered():
    available = BackendRegistry.available()
    assert {"openai", "anthropic", "litellm"} <= set(available)


def test_register_and_create(scripted_backend):
    BackendRegistry.register("_test_scripted")(scripted_backend)
    try:
        backend = BackendRegistry.create("_test_scripted", responses=["hello"])
        assert backend.complete([{"role": "user", "content": "hi"}]) == "hello"
        assert BackendRegistry.get("_test_scripted") is scripted_backend
    finally:
        del BackendRegistry._backends["_test_scripted"]


def test_create_unknown_raises():
    with pytest.raises(KeyError, match="Unknown backend"):
        BackendRegistry.create("nonexistent_backend_xyz")


def test_api_key_env_declared():
    assert BackendRegistry.get("openai").api_key_env == "OPENAI_API_KEY"
    assert BackendRegistry.get("anthropic").api_key_env == "ANTHROPIC_API_KEY"
    assert BackendRegistry.get("litellm").api_key_env is None


# -- OpenAI ------------------------------------------------------------------


@patch.object(_openai_mod.openai, "OpenAI")
def test_openai_returns_first_choice(mock_openai):
    client = mock_openai.return_value
    client.chat.completions.create.return_value = _chat_response("component code")

    backend = _openai_mod.OpenAIBackend(model="gpt-4o-mini", api_key="sk-test", timeout=10.0)
    text = backend.complete([{"role": "user", "content": "build it"}], max_tokens=100)

    assert text == "component code"
    mock_openai.assert_called_once_with(api_key="sk-test", timeout=10.0)
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["messages"] == [{"role": "user", "content": "build it"}]
    assert "temperature" not in kwargs


@patch.object(_openai_mod.openai, "OpenAI")
def test_openai_no_content_returns_empty_string(mock_openai):
    mock_openai.return_value.chat.completions.create.return_value = _chat_response(None)
    backend = _openai_mod.OpenAIBackend(api_key="sk-test")
    assert backend.complete([{"role": "user", "content": "x"}]) == ""


@patch.object(_openai_mod.openai, "OpenAI")
def test_openai_no_choices_returns_empty_string(mock_openai):
    mock_openai.return_value.chat.completions.create.return_value = MagicMock(choices=[])
    backend = _openai_mod.OpenAIBackend(api_key="sk-test")
    assert backend.complete([{"role": "user", "content": "x"}]) == ""


@patch.object(_openai_mod.openai, "OpenAI")
def test_openai_error_becomes_completion_failure(mock_openai):
    mock_openai.return_value.chat.completions.create.side_effect = _openai_mod.openai.OpenAIError("bad key")
    backend = _openai_mod.OpenAIBackend(api_key="sk-test")
    with pytest.raises(CompletionFailure, match="bad key") as excinfo:
        backend.complete([{"role": "user", "content": "x"}], model="gpt-4o")
    assert isinstance(excinfo.value.__cause__, _openai_mod.openai.OpenAIError)


# -- Anthropic ---------------------------------------------------------------


@patch.object(_anthropic_mod.anthropic, "Anthropic")
def test_anthropic_returns_first_text_block(mock_anthropic):
    mock_anthropic.return_value.messages.create.return_value = MagicMock(
        content=[MagicMock(type="text", text="claude code")]
    )
    backend = _anthropic_mod.AnthropicBackend(api_key="key")
    messages = [{"role": "system", "content": "be brief"}, {"role": "user", "content": "build"}]
    assert backend.complete(messages, temperature=0.0) == "claude code"

    kwargs = mock_anthropic.return_value.messages.create.call_args.kwargs
    assert kwargs["system"] == "be brief"
    assert kwargs["messages"] == [{"role": "user", "content": "build"}]
    assert kwargs["temperature"] == 0.0


@patch.object(_anthropic_mod.anthropic, "Anthropic")
def test_anthropic_empty_content(mock_anthropic):
    mock_anthropic.return_value.messages.create.return_value = MagicMock(content=[])
    backend = _anthropic_mod.AnthropicBackend(api_key="key")
    assert backend.complete([{"role": "user", "content": "x"}]) == ""


@patch.object(_anthropic_mod.anthropic, "Anthropic")
def test_anthropic_error_becomes_completion_failure(mock_anthropic):
    mock_anthropic.return_value.messages.create.side_effect = _anthropic_mod.anthropic.AnthropicError("overloaded")
    backend = _anthropic_mod.AnthropicBackend(api_key="key")
    with pytest.raises(CompletionFailure, match="overloaded"):
        backend.complete([{"role": "user", "content": "x"}])


# -- LiteLLM -----------------------------------------------------------------


@patch.object(_litellm_mod, "litellm")
def test_litellm_forwards_timeout_and_key(mock_litellm):
    mock_litellm.completion.return_value = _chat_response("ok")
    backend = _litellm_mod.LiteLLMBackend(model="ollama/llama3", api_key="k", timeout=3.0)
    assert backend.complete([{"role": "user", "content": "x"}]) == "ok"
    kwargs = mock_litellm.completion.call_args.kwargs
    assert kwargs["model"] == "ollama/llama3"
    assert kwargs["timeout"] == 3.0
    assert kwargs["api_key"] == "k"


@patch.object(_litellm_mod, "litellm")
def test_litellm_error_becomes_completion_failure(mock_litellm):
    mock_litellm.completion.side_effect = RuntimeError("provider unreachable")
    backend = _litellm_mod.LiteLLMBackend()
    with pytest.raises(CompletionFailure, match="provider unreachable"):
        backend.complete([{"role": "user", "content": "x"}])


# -- CompletionClient --------------------------------------------------------


def test_client_sends_single_user_message(make_client):
    client, backend = make_client(responses=["reply"])
    assert client.complete("prompt text") == "reply"
    assert backend.calls[0]["messages"] == [{"role": "user", "content": "prompt text"}]
    assert backend.calls[0]["model"] == "gpt-4o-mini"


def test_client_model_override(make_client):
    client, backend = make_client(responses=["reply"])
    client.complete("prompt", "other-model")
    assert backend.calls[0]["model"] == "other-model"


def test_client_rejects_empty_prompt(make_client):
    client, backend = make_client(responses=["reply"])
    with pytest.raises(ValueError, match="non-empty"):
        client.complete("")
    assert backend.calls == []


def test_client_does_not_retry(make_client):
    def handler(prompt, model):
        raise CompletionFailure("boom")

    client, backend = make_client(handler=handler)
    with pytest.raises(CompletionFailure):
        client.complete("prompt")
    assert len(backend.calls) == 1


def test_client_from_config(scripted_backend):
    BackendRegistry.register("_test_from_config")(scripted_backend)
    try:
        config = BackendConfig(type="_test_from_config", model="m1", extra={"responses": ["hi"]})
        client = CompletionClient.from_config(config)
        assert client.backend_name == "scripted"
        assert client.complete("p") == "hi"
    finally:
        del BackendRegistry._backends["_test_from_config"]
