"""Abstract backend protocol and registry for LLM providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Backend(ABC):
    """LLM backend that can produce completions.

    Subclasses must set ``name`` and implement ``complete``.  Provider
    errors must be re-raised as
    :class:`~ui_component_eval.exceptions.CompletionFailure`.

    Attributes
    ----------
    name : str
        Registry key.
    api_key_env : str | None
        Environment variable holding the provider credential, or ``None``
        when the provider resolves credentials on its own.
    """

    name: str = ""
    api_key_env: str | None = None

    @abstractmethod
    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int = 4096,
    ) -> str:
        """Return the assistant's text response.

        Parameters
        ----------
        messages : list[dict[str, str]]
            Chat messages (``role`` / ``content`` dicts).
        model : str | None
            Override the default model for this call.
        temperature : float | None
            Sampling temperature.  ``None`` leaves the provider default.
        max_tokens : int
            Maximum tokens in the response.

        Returns
        -------
        str
            The first textual completion, or ``""`` when there is none.
        """


class BackendRegistry:
    """Discover and instantiate registered LLM backends."""

    _backends: dict[str, type[Backend]] = {}

    @classmethod
    def register(cls, name: str):
        """Class decorator that registers a backend under *name*.

        Parameters
        ----------
        name : str
            Lookup key used in configuration files.

        Returns
        -------
        Callable
            The original class, unmodified.
        """

        def decorator(klass: type[Backend]) -> type[Backend]:
            cls._backends[name] = klass
            return klass

        return decorator

    @classmethod
    def get(cls, name: str) -> type[Backend]:
        """Return the backend class registered under *name*.

        Raises
        ------
        KeyError
            If *name* is not registered.
        """
        if name not in cls._backends:
            available = ", ".join(sorted(cls._backends)) or "(none)"
            msg = f"Unknown backend {name!r}. Available: {available}"
            raise KeyError(msg)
        return cls._backends[name]

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> Backend:
        """Instantiate a registered backend.

        Parameters
        ----------
        name : str
            Registered backend name.
        **kwargs
            Forwarded to the backend constructor.

        Returns
        -------
        Backend

        Raises
        ------
        KeyError
            If *name* is not registered.
        """
        return cls.get(name)(**kwargs)

    @classmethod
    def available(cls) -> list[str]:
        """Return sorted list of registered backend names."""
        return sorted(cls._backends)
