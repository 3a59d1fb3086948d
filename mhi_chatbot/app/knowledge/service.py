from __future__ import annotations

import json
import logging
from pathlib import Path

from mhi_chatbot.app.knowledge.contracts import KnowledgeEntry, KnowledgeLoadError

LOGGER = logging.getLogger(__name__)

ENTRY_SEPARATOR = "\n---\n\n"


def _deserialize_entry(payload: object, index: int) -> KnowledgeEntry:
    if not isinstance(payload, dict):
        raise KnowledgeLoadError(f"entry {index} is not an object")
    category = payload.get("category")
    text = payload.get("text")
    keywords = payload.get("keywords")
    if not isinstance(category, str) or not isinstance(text, str):
        raise KnowledgeLoadError(f"entry {index} needs string category and text")
    if not isinstance(keywords, list) or not all(
        isinstance(keyword, str) for keyword in keywords
    ):
        raise KnowledgeLoadError(f"entry {index} needs a list of string keywords")
    return KnowledgeEntry(category=category, text=text, keywords=tuple(keywords))


def load_knowledge_entries(path: str | Path) -> list[KnowledgeEntry]:
    resources_path = Path(path)
    try:
        with resources_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except OSError as exc:
        raise KnowledgeLoadError(f"cannot read {resources_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise KnowledgeLoadError(f"invalid JSON in {resources_path}: {exc}") from exc

    if not isinstance(payload, list):
        raise KnowledgeLoadError(f"{resources_path} must contain a JSON array")
    return [_deserialize_entry(item, index) for index, item in enumerate(payload)]


def render_entry(entry: KnowledgeEntry) -> str:
    return (
        f"**{entry.category}**\n"
        f"{entry.text}\n"
        f"Keywords: {', '.join(entry.keywords)}\n"
    )


def render_knowledge(entries: list[KnowledgeEntry]) -> str:
    return ENTRY_SEPARATOR.join(render_entry(entry) for entry in entries)


def load_knowledge_text(path: str | Path) -> str:
    """Load and render the knowledge base, returning "" when it is unusable.

    A missing or malformed resources file degrades the system prompt but never
    stops the server from starting.
    """
    try:
        entries = load_knowledge_entries(path)
    except KnowledgeLoadError as exc:
        LOGGER.warning("Could not load knowledge base: %s", exc)
        return ""
    LOGGER.info("Loaded MHI knowledge base: %s entries from %s", len(entries), path)
    return render_knowledge(entries)
