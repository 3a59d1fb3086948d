from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KnowledgeEntry:
    category: str
    text: str
    keywords: tuple[str, ...]


class KnowledgeLoadError(Exception):
    pass
