"""LLM chat backend abstraction and registry."""

from knowledge_context.backends.base import Backend, BackendRegistry

# Importing the concrete modules registers them via @BackendRegistry.register.
from knowledge_context.backends import anthropic_backend, litellm_backend, openai_backend  # noqa: E402,F401

__all__ = ["Backend", "BackendRegistry"]
