"""
query/sentence.py
-----------------
Turns a free-text request into the signals the classifier needs:

    • the main verb, found by walking a small grammar table
    • the sentence polarity (shifter words and verb polarity)
    • a weighted bag of synonyms for every tagged noun / adjective
    • the target nouns that follow the verb
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional, Set

from agent_core.errors import MalformedSentence, UnknownWordDuringScoring
from lexicon.vocabulary import VocabularyStore

NOUN = "noun"
VERB = "verb"
ADJECTIVE = "adjective"
SATELLITE = "satellite"
DETERMINER = "determiner"
PRONOUN = "pronoun"
SHIFTER = "shifter"
STOPWORD = "stopword"
START = ""

# part of speech → parts of speech allowed to follow it
GRAMMAR: Dict[str, FrozenSet[str]] = {
    START: frozenset({NOUN, ADJECTIVE, SATELLITE, DETERMINER, PRONOUN}),
    NOUN: frozenset({NOUN, VERB, ADJECTIVE, SATELLITE, SHIFTER, DETERMINER}),
    DETERMINER: frozenset({NOUN, ADJECTIVE, SATELLITE, DETERMINER}),
    VERB: frozenset({SATELLITE, ADJECTIVE, NOUN, DETERMINER}),
    SATELLITE: frozenset({NOUN, ADJECTIVE, SATELLITE}),
    ADJECTIVE: frozenset({NOUN, ADJECTIVE, SATELLITE}),
    PRONOUN: frozenset({VERB, SHIFTER}),
    SHIFTER: frozenset({VERB}),
}

ALLOWED: FrozenSet[str] = frozenset({NOUN, VERB, ADJECTIVE, SATELLITE, DETERMINER, PRONOUN, SHIFTER})
TAGGED_TYPES = (NOUN, ADJECTIVE)
MIN_TOKENS = 3
MAX_SCORE = 5

_STRIP = re.compile(r"[^\w'\s\-/]")


def tokenize(sentence: str) -> List[str]:
    """Drop everything but word chars, apostrophes, whitespace, hyphens and slashes."""
    cleaned = _STRIP.sub("", sentence)
    return [token for token in cleaned.split(" ") if token]


@dataclass(frozen=True)
class TokenRole:
    word: str   # the form that matched the vocabulary (lemma or raw token)
    type: str


@dataclass
class SentenceAnalysis:
    tokens: List[str]
    roles: Dict[int, TokenRole] = field(default_factory=dict)
    verb_index: int = -1
    verb: str = ""
    polarity: float = 1.0
    word_scores: Dict[str, float] = field(default_factory=dict)
    targets: Set[str] = field(default_factory=set)

    @property
    def is_negative(self) -> bool:
        return self.polarity < 0


# ─────────────────────────────────────────────────────────────────────────────
# Verb search state
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class _Cursor:
    position: int
    rules: FrozenSet[str]
    frequency: float
    verb: int


@dataclass(frozen=True)
class _Step:
    position: int
    word: str
    type: Optional[str]     # None for an opaque position
    after: _Cursor


class SentenceAnalyzer:
    """Stateless apart from the shared vocabulary; one analysis per call."""

    def __init__(self, vocabulary: VocabularyStore, max_score: int = MAX_SCORE):
        self.vocabulary = vocabulary
        self.max_score = max_score

    def analyze(self, sentence: str) -> SentenceAnalysis:
        analysis = SentenceAnalysis(tokens=tokenize(sentence))
        if len(analysis.tokens) < MIN_TOKENS:
            raise MalformedSentence(f"Expected at least {MIN_TOKENS} words, got {len(analysis.tokens)}")

        path = self._find_verb(analysis.tokens)
        if path is None:
            raise MalformedSentence("No verb followed by an object was found")

        self._apply(analysis, path)
        analysis.polarity *= self.vocabulary.polarity_of(analysis.verb)
        self._score_tokens(analysis)
        return analysis

    # ── word types ───────────────────────────────────────────
    def word_types(self, word: str) -> Dict[str, float]:
        """Candidate parts of speech with frequencies, most frequent first."""
        vocab = self.vocabulary
        if vocab.is_shifter(word):
            return {SHIFTER: -1.0}
        if vocab.is_determiner(word):
            return {DETERMINER: -1.0}
        if vocab.is_pronoun(word):
            return {PRONOUN: -1.0}
        if vocab.is_stopword(word):
            return {STOPWORD: -1.0}
        entry = vocab.lookup(word)
        return entry.frequencies if entry is not None else {}

    # ── verb discovery ───────────────────────────────────────
    def _candidates(self, tokens: List[str], cursor: _Cursor) -> Iterator[_Step]:
        token = tokens[cursor.position].lower()
        lemma = self.vocabulary.lemmatize(token)
        nxt = cursor.position + 1
        opaque_seen = False

        for word in dict.fromkeys((lemma, token)):
            types = self.word_types(word)
            if not types:
                continue
            if ALLOWED.isdisjoint(types):
                if not opaque_seen:
                    opaque_seen = True
                    yield _Step(cursor.position, word, None,
                                _Cursor(nxt, cursor.rules, cursor.frequency, cursor.verb))
                continue

            for pos, frequency in types.items():
                if pos not in cursor.rules:
                    continue
                follow = GRAMMAR[pos]
                if pos != VERB or frequency < cursor.frequency:
                    after = _Cursor(nxt, follow, cursor.frequency, cursor.verb)
                elif cursor.frequency < 0:
                    after = _Cursor(nxt, follow, frequency, cursor.position)
                else:
                    # an equal or stronger verb after the accepted one
                    continue
                yield _Step(cursor.position, word, pos, after)

    def _find_verb(self, tokens: List[str]) -> Optional[List[_Step]]:
        """
        Depth-first search over token positions with backtracking.
        Returns the accepted steps (one per position) or None.
        """
        n = len(tokens)
        start = _Cursor(0, GRAMMAR[START], -1.0, -1)
        stack = [(start, self._candidates(tokens, start))]
        path: List[_Step] = []
        failed: Set[_Cursor] = set()

        while stack:
            cursor, candidates = stack[-1]
            step = next(candidates, None)
            if step is None:
                failed.add(cursor)
                stack.pop()
                if path:
                    path.pop()
                continue

            after = step.after
            if after.position >= n:
                if 0 <= after.verb < n - 1:
                    return path + [step]
                continue
            if after in failed:
                continue

            path.append(step)
            stack.append((after, self._candidates(tokens, after)))
        return None

    def _apply(self, analysis: SentenceAnalysis, path: List[_Step]) -> None:
        verb_index = path[-1].after.verb
        for step in path:
            if step.type in TAGGED_TYPES:
                analysis.roles[step.position] = TokenRole(step.word, step.type)
            elif step.type == SHIFTER:
                analysis.polarity = -1.0
            elif step.type == VERB and step.position == verb_index:
                analysis.verb = step.word
        analysis.verb_index = verb_index

    # ── targets & scores ─────────────────────────────────────
    def _score_tokens(self, analysis: SentenceAnalysis) -> None:
        for i in sorted(analysis.roles):
            if i == analysis.verb_index:
                continue
            role = analysis.roles[i]
            is_target = i > analysis.verb_index and role.type == NOUN
            self._add_word_values(analysis, role, is_target)

    def _add_word_values(self, analysis: SentenceAnalysis, role: TokenRole, is_target: bool) -> None:
        entry = self.vocabulary.lookup(role.word)
        if entry is None:
            raise UnknownWordDuringScoring(f"'{role.word}' was tagged as {role.type} but is not in the vocabulary")

        if is_target:
            analysis.targets.add(entry.value)
            factor = 0.4
        else:
            factor = 0.1 if role.type == ADJECTIVE else 0.2

        for synonym in entry.synonyms(role.type):
            if synonym in analysis.word_scores:
                continue
            weight = 1.0 if is_target and synonym == role.word else factor
            analysis.word_scores[synonym] = weight * self.max_score
