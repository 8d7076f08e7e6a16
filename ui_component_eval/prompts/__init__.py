"""Prompt construction: built-in templates, overrides, and rendering."""

from ui_component_eval.prompts.builder import (
    GENERATION_SPEC,
    JUDGMENT_SPEC,
    build_generation_prompt,
    build_judgment_prompt,
    check_prompt_spec,
    load_prompt_spec,
)

__all__ = [
    "GENERATION_SPEC",
    "JUDGMENT_SPEC",
    "build_generation_prompt",
    "build_judgment_prompt",
    "check_prompt_spec",
    "load_prompt_spec",
]
