import gzip

import pytest

from agent_core.config import RecommenderConfig, get_config
from catalog.dataset import ProductDataset
from lexicon.vocabulary import VocabularyStore
from lexicon.word import WordEntry
from query.sentence import SentenceAnalyzer
from recommender.recommend import ProductRecommender

# word, type, synonyms, frequency
SYNONYMS = [
    ("want", "verb", ["want", "desire", "wish"], 10),
    ("want", "noun", ["want", "need"], 2),
    ("love", "verb", ["love", "adore"], 5),
    ("love", "noun", ["love", "affection"], 3),
    ("hate", "verb", ["hate", "detest"], 4),
    ("buy", "verb", ["buy", "purchase"], 6),
    ("gift", "noun", ["gift", "present"], 8),
    ("gift", "verb", ["gift", "give"], 1),
    ("present", "noun", ["present", "gift"], 4),
    ("sister", "noun", ["sister", "sis"], 5),
    ("painting", "noun", ["painting", "picture", "art"], 6),
    ("art", "noun", ["art", "artwork"], 7),
    ("red", "adjective", ["red", "crimson"], 3),
    ("everything", "noun", ["everything"], 2),
]

LEMMAS = {"gifts": "gift", "loves": "love", "paintings": "painting", "sisters": "sister", "wants": "want"}
POLARITIES = {"want": 1.0, "love": 1.0, "buy": 1.0, "hate": -1.0}
STOPWORDS = ["for", "who", "with", "and", "it"]
SHIFTERS = ["don't", "not", "never"]
PRONOUNS = ["i", "you", "we"]
DETERMINERS = ["a", "an", "the", "my"]

HEADER = ["name", "description", "sub_category", "main_category", "ratings", "no_of_ratings", "price"]
ROWS = [
    ["Acrylic Paint Set", "painting kit with brushes for art lovers", "painting", "ArtsCrafts", "4.5", "120", "19.99"],
    ["Canvas Panels", "blank canvas for painting and art", "painting", "ArtsCrafts", "4.2", "80", "12.50"],
    ["Sketch Pad", "drawing paper gift for artists", "drawing", "ArtsCrafts", "4.0", "40", "7.99"],
    ["Wireless Earbuds", "bluetooth audio gift", "audio", "Electronics", "4.1", "300", "49.99"],
    ["Phone Charger", "fast usb charger", "accessories", "Electronics", "3.9", "150", "15.00"],
    ["Smart Speaker", "voice assistant speaker", "audio", "Electronics", "n/a", "many", "59.00"],
    ["Puzzle Box", "wooden puzzle gift for kids", "games", "Toys", "4.6", "60", "25.00"],
    ["Toy Robot", "programmable robot toy gift", "robots", "Toys", "4.3", "90", "35.00"],
    ["Chef Knife", "steel kitchen knife", "knives", "Kitchen", "4.7", "500", "39.00"],
    ["Coffee Mug", "ceramic mug", "mugs", "Kitchen", "4.4", "210", "9.99"],
]


def build_words():
    words = {}
    for text, pos, synonyms, frequency in SYNONYMS:
        word = words.setdefault(text, WordEntry(text))
        word.add_details(pos, frequency, synonyms)
    return words


def dataset_text():
    lines = ["\t".join(HEADER)] + ["\t".join(row) for row in ROWS]
    return "\n".join(lines) + "\n"


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path, monkeypatch):
    # process-wide logs (no engine config at hand) land apart from the engine ones
    monkeypatch.setenv("GIFTS_LOG_DIR", str(tmp_path / "global-logs"))
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def vocabulary():
    return VocabularyStore(
        words=build_words(),
        lemmas=LEMMAS,
        polarities=POLARITIES,
        stopwords=STOPWORDS,
        shifters=SHIFTERS,
        pronouns=PRONOUNS,
        determiners=DETERMINERS,
    )


@pytest.fixture
def analyzer(vocabulary):
    return SentenceAnalyzer(vocabulary)


@pytest.fixture
def dataset():
    return ProductDataset.from_text(dataset_text())


@pytest.fixture
def config(tmp_path):
    return RecommenderConfig(seed=7, factors=8, iterations=20, top_k=3, log_dir=tmp_path / "logs",
                             api_key="test-key")


@pytest.fixture
def engine(vocabulary, dataset, config):
    return ProductRecommender(vocabulary, dataset, config)


@pytest.fixture
def lexicon_dir(tmp_path):
    root = tmp_path / "lexicon"
    root.mkdir()
    lines = ["word,type,synonyms,frequency"]
    lines += [f"{w},{p},{';'.join(s)},{f}" for w, p, s, f in SYNONYMS]
    (root / "synonyms.txt").write_text("\n".join(lines) + "\n", encoding="utf-8")

    by_lemma = {}
    for form, lemma in LEMMAS.items():
        by_lemma.setdefault(lemma, []).append(form)
    (root / "lemmas.txt").write_text(
        "\n".join(f"{lemma},{';'.join(forms)}" for lemma, forms in by_lemma.items()) + "\n", encoding="utf-8"
    )
    (root / "polarities.txt").write_text(
        "\n".join(f"{verb},{value}" for verb, value in POLARITIES.items()) + "\n", encoding="utf-8"
    )
    for name, words in (("stopwords", STOPWORDS), ("shifters", SHIFTERS),
                        ("pronouns", PRONOUNS), ("determiners", DETERMINERS)):
        (root / f"{name}.txt").write_text("\n".join(words) + "\n", encoding="utf-8")
    return root


@pytest.fixture
def dataset_gz(tmp_path):
    path = tmp_path / "products.csv.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write(dataset_text())
    return path
