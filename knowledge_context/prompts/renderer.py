"""Prompt template loading and rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2
import yaml

from knowledge_context.models import PromptSpec

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
DEFAULT_PROMPT_PATH = TEMPLATES_DIR / "chat.yaml"

_ENV = jinja2.Environment(undefined=jinja2.Undefined, keep_trailing_newline=False)


def load_prompt_spec(path: str | Path | None = None) -> PromptSpec:
    """Load a PromptSpec from a YAML file.

    Parameters
    ----------
    path : str | Path | None
        Path to a YAML prompt template file; ``None`` loads the packaged
        chat template.

    Returns
    -------
    PromptSpec

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    """
    path = Path(path) if path is not None else DEFAULT_PROMPT_PATH
    if not path.exists():
        msg = f"Prompt template not found: {path}"
        raise FileNotFoundError(msg)

    with open(path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    return PromptSpec(
        name=data.get("name", "unknown"),
        version=str(data.get("version", "0.0")),
        description=data.get("description", ""),
        system_template=data.get("system", ""),
        user_template=data.get("user", ""),
    )


def render(
    spec: PromptSpec,
    variables: dict[str, Any],
    history: list[dict[str, str]] | None = None,
) -> list[dict[str, str]]:
    """Render a prompt spec into chat messages.

    Parameters
    ----------
    spec : PromptSpec
        The prompt template to render.
    variables : dict[str, Any]
        Template variables (e.g. ``question``, ``context``).
    history : list[dict[str, str]] | None
        Earlier conversation turns, placed between the system message and
        the new user message.

    Returns
    -------
    list[dict[str, str]]
        Chat messages suitable for ``Backend.complete``.
    """
    system_text = _render_template(spec.system_template, variables)
    user_text = _render_template(spec.user_template, variables)

    messages: list[dict[str, str]] = []
    if system_text:
        messages.append({"role": "system", "content": system_text})
    messages.extend(history or [])
    if user_text:
        messages.append({"role": "user", "content": user_text})
    return messages


def _render_template(template: str, variables: dict[str, Any]) -> str:
    """Render a single template string."""
    if not template:
        return ""
    return _ENV.from_string(template).render(**variables).strip()
