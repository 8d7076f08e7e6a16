"""LiteLLM catch-all backend supporting 100+ LLM providers."""

from __future__ import annotations

import logging
from typing import Any

from ui_component_eval.backends.base import Backend, BackendRegistry
from ui_component_eval.exceptions import CompletionFailure

logger = logging.getLogger(__name__)

try:
    import litellm

    _HAS_LITELLM = True
except ImportError:  # pragma: no cover
    _HAS_LITELLM = False


@BackendRegistry.register("litellm")
class LiteLLMBackend(Backend):
    """Backend powered by LiteLLM's unified completion interface.

    LiteLLM resolves provider credentials from provider-specific
    environment variables, so no single ``api_key_env`` is declared.

    Parameters
    ----------
    model : str
        Model identifier in LiteLLM format
        (e.g. ``"bedrock/anthropic.claude-3-5-sonnet-20241022-v2:0"``).
    api_key : str | None
        Explicit credential forwarded to every call.
    timeout : float | None
        Request timeout in seconds.  ``None`` keeps the LiteLLM default.
    max_tokens : int
        Default max tokens for completions.
    """

    name = "litellm"

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        timeout: float | None = None,
        max_tokens: int = 4096,
    ) -> None:
        if not _HAS_LITELLM:
            msg = "The 'litellm' package is required: pip install litellm"
            raise ImportError(msg)
        self._model = model
        self._api_key = api_key
        self._timeout = timeout
        self._max_tokens = max_tokens

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int = 4096,
    ) -> str:
        """Call LiteLLM's unified completion endpoint.

        Raises
        ------
        CompletionFailure
            On any error raised by LiteLLM or the underlying provider.
        """
        kwargs: dict[str, Any] = {
            "model": model or self._model,
            "messages": messages,
            "max_tokens": max_tokens or self._max_tokens,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        if self._api_key:
            kwargs["api_key"] = self._api_key
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        logger.debug("LiteLLM request model=%s messages=%d", kwargs["model"], len(messages))
        try:
            response = litellm.completion(**kwargs)
        except Exception as exc:
            msg = f"LiteLLM completion failed (model={kwargs['model']}): {exc}"
            raise CompletionFailure(msg) from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
