"""Chat prompt templates."""

from knowledge_context.prompts.renderer import DEFAULT_PROMPT_PATH, load_prompt_spec, render

__all__ = ["DEFAULT_PROMPT_PATH", "load_prompt_spec", "render"]
