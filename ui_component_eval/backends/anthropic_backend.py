"""Anthropic (Claude) LLM backend."""

from __future__ import annotations

import logging
from typing import Any

from ui_component_eval.backends.base import Backend, BackendRegistry
from ui_component_eval.exceptions import CompletionFailure

logger = logging.getLogger(__name__)

try:
    import anthropic

    _HAS_ANTHROPIC = True
except ImportError:  # pragma: no cover
    _HAS_ANTHROPIC = False


@BackendRegistry.register("anthropic")
class AnthropicBackend(Backend):
    """Backend powered by the Anthropic Messages API.

    Parameters
    ----------
    model : str
        Default model identifier (e.g. ``"claude-sonnet-4-5-20250929"``).
    api_key : str | None
        Anthropic API key.  Falls back to ``ANTHROPIC_API_KEY`` env var.
    timeout : float | None
        Request timeout in seconds.  ``None`` keeps the SDK default.
    max_tokens : int
        Default max tokens for completions.
    """

    name = "anthropic"
    api_key_env = "ANTHROPIC_API_KEY"

    def __init__(
        self,
        model: str = "claude-sonnet-4-5-20250929",
        api_key: str | None = None,
        timeout: float | None = None,
        max_tokens: int = 4096,
    ) -> None:
        if not _HAS_ANTHROPIC:
            msg = "The 'anthropic' package is required: pip install anthropic"
            raise ImportError(msg)
        self._model = model
        self._max_tokens = max_tokens
        kwargs: dict[str, Any] = {"api_key": api_key}
        if timeout is not None:
            kwargs["timeout"] = timeout
        self._client = anthropic.Anthropic(**kwargs)

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int = 4096,
    ) -> str:
        """Call the Anthropic Messages API.

        System messages are folded into the ``system`` parameter.  Only the
        first text block of the reply is returned.

        Raises
        ------
        CompletionFailure
            On any Anthropic SDK error.
        """
        system_parts = [m["content"] for m in messages if m["role"] == "system"]
        chat_messages = [m for m in messages if m["role"] != "system"]

        kwargs: dict[str, Any] = {
            "model": model or self._model,
            "max_tokens": max_tokens or self._max_tokens,
            "messages": chat_messages,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        if system_parts:
            kwargs["system"] = "\n\n".join(system_parts)

        logger.debug("Anthropic request model=%s messages=%d", kwargs["model"], len(chat_messages))
        try:
            response = self._client.messages.create(**kwargs)
        except anthropic.AnthropicError as exc:
            msg = f"Anthropic completion failed (model={kwargs['model']}): {exc}"
            raise CompletionFailure(msg) from exc

        for block in response.content:
            if getattr(block, "type", "") == "text":
                return block.text or ""
        return ""
