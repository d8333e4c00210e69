"""
recommender/recommend.py
------------------------
Generates product recommendations from a free-text request:
sentence analysis → category classification → per-category latent factor
ranking → dataset rows returned as column→value records.
"""

from __future__ import annotations

import time
from functools import lru_cache
from typing import Dict, List, Optional

from agent_core.config import RecommenderConfig, get_config
from agent_core.logger import log_event, log_perf
from catalog.dataset import ProductDataset
from catalog.loader import load_dataset
from lexicon.vocabulary import VocabularyStore
from query.sentence import SentenceAnalyzer
from recommender.naive_bayes import BayesianClassifier

# ---------------------------------------------------------------------------
# Core Recommender
# ---------------------------------------------------------------------------

class ProductRecommender:
    """
    Holds the shared read-only resources. Everything derived from a sentence
    (analysis, word statistics, per-category models) is rebuilt per call.
    """

    def __init__(
        self,
        vocabulary: VocabularyStore,
        dataset: ProductDataset,
        config: Optional[RecommenderConfig] = None,
    ):
        self.vocabulary = vocabulary
        self.dataset = dataset
        self.config = config or get_config()
        self.analyzer = SentenceAnalyzer(vocabulary, max_score=self.config.max_score)

    def build_classifier(self, sentence: str) -> BayesianClassifier:
        analysis = self.analyzer.analyze(sentence)
        cfg = self.config
        return BayesianClassifier(
            analysis,
            self.dataset,
            self.vocabulary,
            smoothing=cfg.smoothing,
            factors=cfg.factors,
            learning_rate=cfg.learning_rate,
            iterations=cfg.iterations,
            random_source=cfg.make_random(),
            rng=cfg.make_rng(),
        )

    def recommend(self, sentence: str, top_k: Optional[int] = None) -> List[Dict[str, str]]:
        start = time.time()
        top_k = self.config.top_k if top_k is None else top_k

        classifier = self.build_classifier(sentence)
        analysis = classifier.analysis
        categories = classifier.classify()

        records: List[Dict[str, str]] = []
        for category in categories:
            for pointer in classifier.models[category].recommend(top_k):
                records.append(self.dataset.record(pointer))

        log_event("recommendation", {
            "verb": analysis.verb,
            "polarity": analysis.polarity,
            "targets": sorted(analysis.targets),
            "categories": categories,
            "items": len(records),
        }, log_dir=self.config.log_dir)
        log_perf("recommender", "recommend", round(time.time() - start, 4), log_dir=self.config.log_dir)
        return records


# ---------------------------------------------------------------------------
# Process-wide resources
# ---------------------------------------------------------------------------

@lru_cache(maxsize=1)
def default_recommender() -> ProductRecommender:
    """Load the vocabulary and dataset once per process."""
    config = get_config()
    vocabulary = VocabularyStore.load(config.lexicon_path)
    dataset = load_dataset(config.dataset_path)
    print(f"🚀 Recommender ready: {len(vocabulary)} words, {len(dataset)} products")
    return ProductRecommender(vocabulary, dataset, config)


def recommend_products(sentence: str, top_k: Optional[int] = None):
    """Recommend products for a free-text sentence using the default resources."""
    return default_recommender().recommend(sentence, top_k=top_k)
