"""
lexicon/vocabulary.py
---------------------
Read-only lexical lookups shared by every request: word entries, lemmas,
verb polarities and the closed word classes.
"""

from __future__ import annotations

import time
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from agent_core.logger import log_perf
from lexicon import loader
from lexicon.word import WordEntry


class VocabularyStore:
    """Immutable after construction; every lookup is case-insensitive."""

    def __init__(
        self,
        words: Mapping[str, WordEntry],
        lemmas: Optional[Mapping[str, str]] = None,
        polarities: Optional[Mapping[str, float]] = None,
        stopwords: Iterable[str] = (),
        shifters: Iterable[str] = (),
        pronouns: Iterable[str] = (),
        determiners: Iterable[str] = (),
    ):
        self._words = MappingProxyType({k.lower(): v for k, v in words.items()})
        self._lemmas = MappingProxyType({k.lower(): v for k, v in (lemmas or {}).items()})
        self._polarities = MappingProxyType({k.lower(): float(v) for k, v in (polarities or {}).items()})
        self._stopwords = frozenset(w.lower() for w in stopwords)
        self._shifters = frozenset(w.lower() for w in shifters)
        self._pronouns = frozenset(w.lower() for w in pronouns)
        self._determiners = frozenset(w.lower() for w in determiners)

    @classmethod
    def load(cls, directory: Path) -> "VocabularyStore":
        """Load every lexical resource from `directory`."""
        t0 = time.perf_counter()
        directory = Path(directory)
        lists = {name: loader.load_word_list(directory / f"{name}.txt") for name in loader.WORD_LISTS}
        store = cls(
            words=loader.load_synonyms(directory / "synonyms.txt"),
            lemmas=loader.load_lemmas(directory / "lemmas.txt"),
            polarities=loader.load_polarities(directory / "polarities.txt"),
            **lists,
        )
        log_perf("vocabulary", "load", round(time.perf_counter() - t0, 4))
        return store

    # ── words ────────────────────────────────────────────────
    def lookup(self, word: str) -> Optional[WordEntry]:
        return self._words.get(word.lower())

    def lookup_or_create(self, word: str, default_type: str) -> WordEntry:
        """
        Return the known entry, or a transient one (not stored) whose only
        synonym under `default_type` is the word itself.
        """
        entry = self.lookup(word)
        if entry is None:
            entry = WordEntry(word)
            entry.add_part_of_speech(default_type)
            entry.add_synonym(entry.value)
        return entry

    def lemmatize(self, word: str) -> str:
        word = word.lower()
        return self._lemmas.get(word, word)

    def polarity_of(self, verb: str) -> float:
        return self._polarities.get(verb.lower(), 0.0)

    # ── closed classes ───────────────────────────────────────
    def is_stopword(self, word: str) -> bool:
        return word.lower() in self._stopwords

    def is_shifter(self, word: str) -> bool:
        return word.lower() in self._shifters

    def is_pronoun(self, word: str) -> bool:
        return word.lower() in self._pronouns

    def is_determiner(self, word: str) -> bool:
        return word.lower() in self._determiners

    def __contains__(self, word: str) -> bool:
        return word.lower() in self._words

    def __len__(self) -> int:
        return len(self._words)
