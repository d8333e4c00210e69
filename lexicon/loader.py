"""
lexicon/loader.py
-----------------
Reads the lexical resources shipped under data/lexicon/:

    synonyms.txt      header, then  word,type,syn1;syn2;...,frequency
    lemmas.txt        lemma,word1;word2;...
    polarities.txt    verb,polarity
    <name>.txt        one word per line (stopwords, shifters, pronouns, determiners)
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, Set

from lexicon.word import WordEntry

WORD_LISTS = ("stopwords", "shifters", "pronouns", "determiners")


def _lines(path: Path) -> Iterator[str]:
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\r\n")
            if line.strip():
                yield line


def load_synonyms(path: Path) -> Dict[str, WordEntry]:
    words: Dict[str, WordEntry] = {}
    lines = _lines(path)
    next(lines, None)  # header

    for line in lines:
        record = line.lower().split(",")
        if len(record) < 4:
            raise ValueError(f"{path.name}: malformed synonym record {line!r}")
        text, pos, synonyms, frequency = record[0], record[1], record[2], record[3]

        word = words.get(text)
        if word is None:
            word = words[text] = WordEntry(text)
        word.add_details(pos, float(frequency), [s for s in synonyms.split(";") if s])
    return words


def load_lemmas(path: Path) -> Dict[str, str]:
    lemmas: Dict[str, str] = {}
    for line in _lines(path):
        lemma, _, forms = line.partition(",")
        for form in forms.split(";"):
            if form:
                lemmas.setdefault(form, lemma)
    return lemmas


def load_polarities(path: Path) -> Dict[str, float]:
    polarities: Dict[str, float] = {}
    for line in _lines(path):
        verb, _, value = line.partition(",")
        polarities[verb] = float(value)
    return polarities


def load_word_list(path: Path) -> Set[str]:
    return {line.strip().lower() for line in _lines(path)}
