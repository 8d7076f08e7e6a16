"""OpenAI / Azure OpenAI LLM backend."""

from __future__ import annotations

import logging
from typing import Any

from ui_component_eval.backends.base import Backend, BackendRegistry
from ui_component_eval.exceptions import CompletionFailure

logger = logging.getLogger(__name__)

try:
    import openai

    _HAS_OPENAI = True
except ImportError:  # pragma: no cover
    _HAS_OPENAI = False


@BackendRegistry.register("openai")
class OpenAIBackend(Backend):
    """Backend powered by the OpenAI Chat Completions API.

    Parameters
    ----------
    model : str
        Default model identifier (e.g. ``"gpt-4o-mini"``).
    api_key : str | None
        OpenAI API key.  Falls back to ``OPENAI_API_KEY`` env var.
    base_url : str | None
        Custom base URL (for Azure OpenAI or compatible APIs).
    timeout : float | None
        Request timeout in seconds.  ``None`` keeps the SDK default.
    max_tokens : int
        Default max tokens for completions.
    """

    name = "openai"
    api_key_env = "OPENAI_API_KEY"

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_tokens: int = 4096,
    ) -> None:
        if not _HAS_OPENAI:
            msg = "The 'openai' package is required: pip install openai"
            raise ImportError(msg)
        self._model = model
        self._max_tokens = max_tokens
        kwargs: dict[str, Any] = {}
        if api_key:
            kwargs["api_key"] = api_key
        if base_url:
            kwargs["base_url"] = base_url
        if timeout is not None:
            kwargs["timeout"] = timeout
        self._client = openai.OpenAI(**kwargs)

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int = 4096,
    ) -> str:
        """Call the OpenAI Chat Completions API.

        Parameters
        ----------
        messages : list[dict[str, str]]
            Chat messages with ``role`` and ``content`` keys.
        model : str | None
            Override the default model.
        temperature : float | None
            Sampling temperature.
        max_tokens : int
            Maximum tokens in the response.

        Returns
        -------
        str

        Raises
        ------
        CompletionFailure
            On any OpenAI SDK error.
        """
        kwargs: dict[str, Any] = {
            "model": model or self._model,
            "messages": messages,
            "max_tokens": max_tokens or self._max_tokens,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature

        logger.debug("OpenAI request model=%s messages=%d", kwargs["model"], len(messages))
        try:
            response = self._client.chat.completions.create(**kwargs)
        except openai.OpenAIError as exc:
            msg = f"OpenAI completion failed (model={kwargs['model']}): {exc}"
            raise CompletionFailure(msg) from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
