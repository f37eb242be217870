"""Shared data models for the knowledge base and chat layers."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class KnowledgeItem:
    """A single stored knowledge snippet.

    Items are immutable. Correcting an item means adding a new one with a
    newer timestamp, which wins ties during ranking.

    Parameters
    ----------
    content : str
        Free-text snippet (often a ``QUESTION: ... ANSWER: ...`` pair).
    timestamp : int
        Creation time in milliseconds since the epoch.
    """

    content: str
    timestamp: int

    @classmethod
    def create(cls, content: str) -> KnowledgeItem:
        """Return a new item stamped with the current time."""
        return cls(content=content, timestamp=int(time.time() * 1000))

    @classmethod
    def from_dict(cls, data: Any) -> KnowledgeItem:
        """Build an item from its serialized form.

        Parameters
        ----------
        data : Any
            Expected to be a mapping with ``content`` and ``timestamp`` keys.

        Returns
        -------
        KnowledgeItem

        Raises
        ------
        ValueError
            If *data* does not have the expected shape.
        """
        if not isinstance(data, dict):
            msg = f"Knowledge item must be a mapping, got {type(data).__name__}"
            raise ValueError(msg)
        content = data.get("content")
        timestamp = data.get("timestamp")
        if not isinstance(content, str):
            msg = "Knowledge item 'content' must be a string"
            raise ValueError(msg)
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            msg = "Knowledge item 'timestamp' must be a number"
            raise ValueError(msg)
        return cls(content=content, timestamp=int(timestamp))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable form of this item."""
        return {"content": self.content, "timestamp": self.timestamp}


@dataclass
class ScoredItem:
    """A knowledge item together with its relevance score.

    Parameters
    ----------
    item : KnowledgeItem
        The scored item.
    score : int
        Sum of all signal contributions.
    reasons : list[str]
        One entry per signal that contributed, for debugging rankings.
    """

    item: KnowledgeItem
    score: int = 0
    reasons: list[str] = field(default_factory=list)


@dataclass
class PromptSpec:
    """A chat prompt template.

    Parameters
    ----------
    name : str
        Template identifier.
    version : str
        Template version string.
    description : str
        Human-readable description.
    system_template : str
        Jinja2 template for the system message.
    user_template : str
        Jinja2 template for the user message.
    """

    name: str
    version: str
    description: str
    system_template: str = ""
    user_template: str = ""


@dataclass
class ChatAnswer:
    """Result of answering one chat question.

    Parameters
    ----------
    question : str
        The user's question as received.
    answer : str
        The assistant's text response.
    context : list[str]
        Knowledge snippets injected into the prompt (empty if none).
    backend_name : str
        Registered name of the LLM backend.
    model : str
        Model identifier used for completion.
    timestamp : str
        ISO-8601 timestamp of the answer.
    """

    question: str
    answer: str
    context: list[str] = field(default_factory=list)
    backend_name: str = ""
    model: str = ""
    timestamp: str = ""
