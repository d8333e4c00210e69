"""
recommender/categories.py
-------------------------
Sparse word/category co-occurrence counts gathered while scanning the dataset.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Optional


class CategoryStats:
    """Occurrence counter per category plus a running total."""

    def __init__(self, category: Optional[str] = None):
        self._counts: Counter = Counter()
        self.total = 0
        if category is not None:
            self.add(category)

    def add(self, category: str) -> None:
        self._counts[category] += 1
        self.total += 1

    def count(self, category: str) -> int:
        return self._counts.get(category, 0)

    def probability(self, category: str) -> float:
        return self.count(category) / self.total if self.total else 0.0

    def __contains__(self, category: str) -> bool:
        return category in self._counts


class WordCategoryIndex:
    """word → CategoryStats; answers P(category | word was seen)."""

    def __init__(self):
        self._stats: Dict[str, CategoryStats] = {}

    def observe(self, word: str, category: str) -> None:
        stats = self._stats.get(word)
        if stats is None:
            self._stats[word] = CategoryStats(category)
        else:
            stats.add(category)

    def get(self, word: str) -> Optional[CategoryStats]:
        return self._stats.get(word)

    def __contains__(self, word: str) -> bool:
        return word in self._stats

    def __len__(self) -> int:
        return len(self._stats)
