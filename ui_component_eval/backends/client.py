"""Single-capability completion client used by the evaluation engine."""

from __future__ import annotations

import logging
import time

from ui_component_eval.backends.base import Backend, BackendRegistry
from ui_component_eval.config import BackendConfig

logger = logging.getLogger(__name__)


class CompletionClient:
    """Send one prompt, get one text completion back.

    No retries, no streaming, no caching: every call is exactly one
    backend request.  Errors surface as
    :class:`~ui_component_eval.exceptions.CompletionFailure` from the
    backend and are not caught here.

    Parameters
    ----------
    backend : Backend
        LLM backend for completions.
    default_model : str
        Model used when ``complete`` is called without one.
    temperature : float | None
        Sampling temperature forwarded on every call.
    max_tokens : int
        Maximum tokens forwarded on every call.
    """

    def __init__(
        self,
        backend: Backend,
        default_model: str,
        *,
        temperature: float | None = None,
        max_tokens: int = 4096,
    ) -> None:
        self._backend = backend
        self._default_model = default_model
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def backend_name(self) -> str:
        return self._backend.name

    @classmethod
    def from_config(cls, config: BackendConfig) -> CompletionClient:
        """Construct the configured backend and wrap it."""
        kwargs = {"model": config.model, "max_tokens": config.max_tokens, **config.extra}
        if config.api_key:
            kwargs["api_key"] = config.api_key
        if config.timeout is not None:
            kwargs["timeout"] = config.timeout
        backend = BackendRegistry.create(config.type, **kwargs)
        return cls(
            backend,
            config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    def complete(self, prompt: str, model: str | None = None) -> str:
        """Return the first completion for *prompt*, or ``""`` if there is none.

        Parameters
        ----------
        prompt : str
            Non-empty user prompt.
        model : str | None
            Model override for this call.

        Returns
        -------
        str
        """
        if not prompt:
            msg = "prompt must be a non-empty string"
            raise ValueError(msg)

        used_model = model or self._default_model
        started = time.perf_counter()
        text = self._backend.complete(
            [{"role": "user", "content": prompt}],
            model=used_model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        logger.debug(
            "Completion backend=%s model=%s prompt_chars=%d reply_chars=%d elapsed=%.2fs",
            self._backend.name,
            used_model,
            len(prompt),
            len(text),
            time.perf_counter() - started,
        )
        return text
