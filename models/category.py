from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Category:
    id: str
    name: str


CATEGORIES: List[Category] = [
    Category("algorithms", "Data Structures & Algorithms"),
    Category("system_design", "System Design"),
    Category("networking", "Networking Concepts"),
    Category("databases", "Database Systems"),
    Category("os", "Operating Systems"),
    Category("concurrency", "Concurrency & Parallelism"),
    Category("web", "Web Technologies"),
    Category("devops", "DevOps & Infrastructure"),
    Category("security", "Security Concepts"),
]


def find_category(key: str) -> Optional[Category]:
    """Look a category up by id or display name, case-insensitively."""
    wanted = key.strip().lower()
    for cat in CATEGORIES:
        if cat.id == wanted or cat.name.lower() == wanted:
            return cat
    return None
