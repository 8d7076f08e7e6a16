"""LLM backend abstraction and registry."""

from ui_component_eval.backends.base import Backend, BackendRegistry
from ui_component_eval.backends.client import CompletionClient

__all__ = ["Backend", "BackendRegistry", "CompletionClient"]

# Auto-register concrete backends that are importable.
# Each module registers itself via @BackendRegistry.register on import.


def _auto_register() -> None:
    """Import concrete backends, skipping those whose SDK is not installed."""
    import importlib

    for mod in ("openai_backend", "anthropic_backend", "litellm_backend"):
        try:
            importlib.import_module(f"ui_component_eval.backends.{mod}")
        except ImportError:
            pass


_auto_register()
