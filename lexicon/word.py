"""
lexicon/word.py
---------------
A vocabulary word with its parts of speech, their synonyms and frequencies.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional


def normalize_word(value: str) -> str:
    """Trim, lower-case and turn underscores into spaces."""
    return value.strip().lower().replace("_", " ")


class WordEntry:
    """
    Per-word part-of-speech table.

    `frequencies` is always ordered from the most to the least frequent part of
    speech (ties keep insertion order). Every part of speech present in the
    synonym table is present in the frequency table and vice versa.
    `current_type` is the part of speech that receives bare synonym additions;
    it follows the most recently added part of speech.
    """

    def __init__(self, value: str):
        self.value = normalize_word(value)
        self._synonyms: Dict[str, List[str]] = {}
        self._frequencies: Dict[str, float] = {}
        self.current_type: Optional[str] = None

    @property
    def frequencies(self) -> Dict[str, float]:
        return dict(self._frequencies)

    def describe(self) -> List[str]:
        return list(self._frequencies)

    def is_type(self, pos: str) -> bool:
        return pos in self._synonyms

    def synonyms(self, pos: str) -> List[str]:
        return list(self._synonyms.get(pos, ()))

    def add_part_of_speech(self, pos: str, frequency: float = 0.0) -> None:
        if pos in self._synonyms:
            raise ValueError(f"'{self.value}' already has part of speech '{pos}'")
        self._synonyms[pos] = []
        self._frequencies[pos] = float(frequency)
        self.current_type = pos
        self._sort_frequencies()

    def add_synonym(self, synonym: str, pos: Optional[str] = None) -> None:
        """Add a synonym under `pos`, or under the current part of speech."""
        if pos is None:
            if self.current_type is None:
                return
            pos = self.current_type
        elif pos not in self._synonyms:
            self.add_part_of_speech(pos)
        self._synonyms[pos].append(synonym)

    def add_details(self, pos: str, frequency: float, synonyms: Iterable[str]) -> None:
        """
        Register a part of speech with its synonyms and frequency.
        A repeated part of speech merges its synonyms and keeps the higher frequency.
        """
        if pos in self._synonyms:
            known = self._synonyms[pos]
            known.extend(s for s in synonyms if s not in known)
            self._frequencies[pos] = max(self._frequencies[pos], float(frequency))
        else:
            self._synonyms[pos] = list(synonyms)
            self._frequencies[pos] = float(frequency)
        self.current_type = pos
        self._sort_frequencies()

    def _sort_frequencies(self) -> None:
        ordered = sorted(self._frequencies.items(), key=lambda kv: kv[1], reverse=True)
        self._frequencies = dict(ordered)

    def __repr__(self) -> str:
        return f"WordEntry({self.value!r}, {self.describe()})"

    def __str__(self) -> str:
        return self.value
