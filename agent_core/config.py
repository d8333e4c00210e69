"""
agent_core/config.py
--------------------
Runtime configuration for the gift recommender.

Values come from (highest priority first):
    • keyword overrides passed to load_config()
    • config/recommender.yaml (optional)
    • environment variables prefixed with GIFTS_ (e.g. GIFTS_SEED=7)
    • the defaults below
"""

from __future__ import annotations

import random
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]
CONFIG_PATH = ROOT / "config" / "recommender.yaml"


# ─────────────────────────────────────────────────────────────────────────────
# ⚙️ Settings
# ─────────────────────────────────────────────────────────────────────────────
class RecommenderConfig(BaseSettings):
    data_dir: Path = ROOT / "data"
    dataset_file: str = "products.csv.gz"
    lexicon_dir: Optional[Path] = None          # defaults to <data_dir>/lexicon
    log_dir: Path = ROOT / "logs"

    # scoring
    max_score: int = Field(5, ge=1)
    smoothing: float = Field(1e-6, gt=0.0, le=1.0)

    # latent factor model
    factors: int = Field(50, ge=1)
    learning_rate: float = Field(0.01, gt=0.0)
    iterations: int = Field(100, ge=0)
    top_k: int = Field(3, ge=0)

    seed: Optional[int] = None                  # None → entropy
    api_key: Optional[str] = None

    model_config = SettingsConfigDict(env_prefix="GIFTS_")

    @property
    def dataset_path(self) -> Path:
        return self.data_dir / self.dataset_file

    @property
    def lexicon_path(self) -> Path:
        return self.lexicon_dir or self.data_dir / "lexicon"

    def make_random(self) -> random.Random:
        return random.Random(self.seed)

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)


# ─────────────────────────────────────────────────────────────────────────────
# 📄 Loading
# ─────────────────────────────────────────────────────────────────────────────
def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def load_config(path: Optional[Path] = None, **overrides: Any) -> RecommenderConfig:
    """Build a config from the YAML file (if any), the environment and overrides."""
    values = _read_yaml(path or CONFIG_PATH)
    values.update(overrides)
    return RecommenderConfig(**values)


@lru_cache(maxsize=1)
def get_config() -> RecommenderConfig:
    return load_config()
