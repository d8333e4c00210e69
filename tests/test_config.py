"""
tests/test_config.py
--------------------
Settings defaults, environment overrides, YAML loading and seeded randomness.
"""

import pytest
from pydantic import ValidationError

from agent_core.config import RecommenderConfig, load_config


def test_defaults():
    cfg = RecommenderConfig()
    assert (cfg.factors, cfg.learning_rate, cfg.iterations) == (50, 0.01, 100)
    assert cfg.top_k == 3 and cfg.max_score == 5
    assert cfg.smoothing == 1e-6
    assert cfg.dataset_path == cfg.data_dir / "products.csv.gz"
    assert cfg.lexicon_path == cfg.data_dir / "lexicon"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("GIFTS_FACTORS", "12")
    monkeypatch.setenv("GIFTS_SEED", "3")
    monkeypatch.setenv("GIFTS_DATA_DIR", str(tmp_path))
    cfg = RecommenderConfig()
    assert cfg.factors == 12
    assert cfg.seed == 3
    assert cfg.dataset_path == tmp_path / "products.csv.gz"


def test_yaml_file_and_keyword_overrides(tmp_path):
    path = tmp_path / "recommender.yaml"
    path.write_text("iterations: 7\ntop_k: 5\nlexicon_dir: /opt/lexicon\n", encoding="utf-8")
    cfg = load_config(path, top_k=2)
    assert cfg.iterations == 7
    assert cfg.top_k == 2
    assert str(cfg.lexicon_path) == "/opt/lexicon"


def test_missing_yaml_falls_back_to_defaults(tmp_path):
    assert load_config(tmp_path / "absent.yaml").iterations == 100


def test_yaml_must_be_a_mapping(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


@pytest.mark.parametrize("field,value", [("smoothing", 0.0), ("smoothing", 2.0), ("factors", 0), ("top_k", -1)])
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        RecommenderConfig(**{field: value})


def test_seeded_random_sources_repeat():
    cfg = RecommenderConfig(seed=42)
    assert cfg.make_random().random() == cfg.make_random().random()
    assert cfg.make_rng().random() == cfg.make_rng().random()
