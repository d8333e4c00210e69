"""
agent_core/errors.py
--------------------
Error taxonomy shared by the query analyzer, the rankers and the catalog.
"""


class RecommenderError(Exception):
    """Base class for every failure raised by the recommendation pipeline."""


class MalformedSentence(RecommenderError, ValueError):
    """Input is too short or has no usable verb followed by at least one token."""


class EmptyRanking(RecommenderError, IndexError):
    """Popping from a ranking that holds no items (caller logic error)."""


class UnknownWordDuringScoring(RecommenderError, LookupError):
    """A word tagged during verb discovery is missing from the vocabulary."""


class DatasetError(RecommenderError, ValueError):
    """The product dataset is empty, has duplicate columns or lacks a required one."""
