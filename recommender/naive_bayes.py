"""
recommender/naive_bayes.py
--------------------------
Scores every dataset row against the analyzed sentence, gathers word/category
statistics, builds one latent factor model per category, and ranks the
categories for the sentence's targets with a smoothed Naive Bayes estimate.
"""

from __future__ import annotations

import math
import random
from typing import Dict, Iterable, List, Optional, Sequence, Set

import numpy as np

from catalog.dataset import RATING_COLUMN, REVIEWS_COLUMN, TEXT_FIELDS, ProductDataset
from lexicon.vocabulary import VocabularyStore
from query.sentence import SentenceAnalysis
from recommender.categories import WordCategoryIndex
from recommender.matrix_factorization import FACTORS, LEARNING_RATE, MAX_ITERATIONS, LatentFactorRecommender
from recommender.ranking import TopKRanking

SMOOTHING = 1e-6
TEXT_WEIGHT = 0.6
RATING_WEIGHT = 0.4
REVIEW_DECAY = 0.02
WILDCARD_TARGETS = frozenset({"everything", "anything"})


def adjusted_rating(rating: str, reviews: str) -> float:
    """rating × (1 − e^(−0.02·reviews)); 0 when either field is not a number."""
    try:
        score = float(rating)
        count = int(reviews)
    except ValueError:
        return 0.0
    return score * (1 - math.exp(-REVIEW_DECAY * count))


class BayesianClassifier:
    def __init__(
        self,
        analysis: SentenceAnalysis,
        dataset: ProductDataset,
        vocabulary: VocabularyStore,
        smoothing: float = SMOOTHING,
        factors: int = FACTORS,
        learning_rate: float = LEARNING_RATE,
        iterations: int = MAX_ITERATIONS,
        random_source: Optional[random.Random] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.analysis = analysis
        self.dataset = dataset
        self.vocabulary = vocabulary
        self.smoothing = smoothing
        self.factors = factors
        self.learning_rate = learning_rate
        self.iterations = iterations
        self.random = random_source or random.Random()
        self.rng = rng if rng is not None else np.random.default_rng()

        self.word_stats = WordCategoryIndex()
        self.models: Dict[str, LatentFactorRecommender] = {}
        self._ingest()

    # ─────────────────────────────────────────────────────────
    # Dataset ingestion
    # ─────────────────────────────────────────────────────────
    def _ingest(self) -> None:
        for index, row in enumerate(self.dataset.rows):
            category = self.dataset.category(row)
            score = self._score_row(row, category)

            model = self.models.get(category)
            if model is None:
                model = self.models[category] = LatentFactorRecommender(
                    self.analysis.polarity,
                    factors=self.factors,
                    learning_rate=self.learning_rate,
                    iterations=self.iterations,
                    rng=self.rng,
                )
            model.add_observation(score, index)

    def _field_score(self, text: str, row_lemmas: Set[str]) -> float:
        """Sum of word scores of distinct lemmas, multiplied by a matching streak."""
        scores = self.analysis.word_scores
        seen: Set[str] = set()
        score = 0.0
        streak = 1

        for token in text.lower().split(" "):
            lemma = self.vocabulary.lemmatize(token)
            row_lemmas.add(lemma)

            value = scores.get(lemma)
            if value is None:
                streak = 1
            elif lemma not in seen:
                seen.add(lemma)
                score += value * streak
                streak += 1
        return score

    def _score_row(self, row: Sequence[str], category: Optional[str] = None) -> float:
        """0.6 × text overlap of the first three fields + 0.4 × adjusted rating."""
        category = self.dataset.category(row) if category is None else category
        row_lemmas: Set[str] = set()
        text = 0.0
        for i in range(TEXT_FIELDS):
            text += self._field_score(row[i] if i < len(row) else "", row_lemmas)

        for lemma in row_lemmas:
            self.word_stats.observe(lemma, category)

        rating = adjusted_rating(
            self.dataset.field(row, RATING_COLUMN),
            self.dataset.field(row, REVIEWS_COLUMN),
        )
        return TEXT_WEIGHT * text + RATING_WEIGHT * rating

    # ─────────────────────────────────────────────────────────
    # Classification
    # ─────────────────────────────────────────────────────────
    def log_probability(self, targets: Iterable[str], category: str, smoothing: Optional[float] = None) -> float:
        smoothing = self.smoothing if smoothing is None else smoothing
        rows = self.models[category].count
        log_proba = math.log(rows / len(self.dataset))

        for target in targets:
            stats = self.word_stats.get(target)
            if stats is not None and category in stats:
                weight = max(stats.count(category) / rows, smoothing)
                log_proba += math.log(stats.probability(category)) + math.log(weight)
            else:
                log_proba += math.log(smoothing)
        return log_proba

    def classify(self) -> List[str]:
        """Chosen categories, most relevant first."""
        targets = self.analysis.targets
        if targets & WILDCARD_TARGETS:
            return self.random_suggest()

        ranking: TopKRanking[str] = TopKRanking()
        for category in self.models:
            ranking.push_and_evict(category, self.log_probability(targets, category), len(targets))
        classes = ranking.drain()

        if self.analysis.is_negative:
            return self.random_suggest(ranking.dropped)
        return classes

    def random_suggest(self, pool: Optional[Sequence[str]] = None) -> List[str]:
        """Up to |targets| distinct categories drawn uniformly from `pool` (all by default)."""
        pool = list(self.models) if pool is None else list(pool)
        k = min(len(self.analysis.targets), len(pool))
        return self.random.sample(pool, k)
