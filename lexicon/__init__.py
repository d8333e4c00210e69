"""
lexicon/__init__.py
-------------------
Expose the vocabulary interface.
"""

from .word import WordEntry, normalize_word
from .vocabulary import VocabularyStore

__all__ = ["WordEntry", "normalize_word", "VocabularyStore"]
