"""
recommender/matrix_factorization.py
-----------------------------------
Per-category latent factor model. Items are dataset rows, the single "user"
is the current request; factors are trained with SGD on every recommend() call.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from recommender.ranking import TopKRanking

FACTORS = 50
LEARNING_RATE = 0.01
MAX_ITERATIONS = 100


class LatentFactorRecommender:
    def __init__(
        self,
        polarity: float,
        factors: int = FACTORS,
        learning_rate: float = LEARNING_RATE,
        iterations: int = MAX_ITERATIONS,
        rng: Optional[np.random.Generator] = None,
    ):
        self.is_positive = polarity >= 0
        self.factors = factors
        self.learning_rate = learning_rate
        self.iterations = iterations
        self.rng = rng if rng is not None else np.random.default_rng()

        self.scores: List[float] = []
        self.pointers: List[int] = []
        self.user_factors = np.empty(0)
        self.item_factors = np.empty((0, 0))

    @property
    def count(self) -> int:
        return len(self.pointers)

    def add_observation(self, score: float, row_index: int) -> None:
        """Store a row score; negative-polarity models store it negated."""
        self.scores.append(score if self.is_positive else -score)
        self.pointers.append(row_index)

    # ── training ─────────────────────────────────────────────
    def _fill_factors(self) -> None:
        self.user_factors = self.rng.random(self.factors)
        self.item_factors = self.rng.random((self.factors, self.count))

    def predict(self, item: int) -> float:
        return float(self.user_factors @ self.item_factors[:, item])

    def train(self) -> None:
        self._fill_factors()
        lr = self.learning_rate
        for _ in range(self.iterations):
            for item, score in enumerate(self.scores):
                if score <= 0:
                    continue
                error = score - self.predict(item)
                self.user_factors += lr * error * self.item_factors[:, item]
                # item update sees the refreshed user factors
                self.item_factors[:, item] += lr * error * self.user_factors

    def recommend(self, top_k: int = 3) -> List[int]:
        """Row indices of the `top_k` best predicted items, best first."""
        self.train()
        predictions = self.user_factors @ self.item_factors
        ranking: TopKRanking[int] = TopKRanking()
        for item, pointer in enumerate(self.pointers):
            ranking.push_and_evict(pointer, float(predictions[item]), top_k)
        return ranking.drain()
