"""
Core n-gram similarity and matching.
"""

from .case_mapper import CaseMapper
from .errors import InvalidParameterError
from .finder import FinderConfig, JaccardFinder, MatchResult, new_finder
from .jaccard import (jaccard_distance, jaccard_index,
                      weighted_jaccard_distance, weighted_jaccard_index)
from .ngrams import NGramSet, extract_ngrams

__all__ = [
    "CaseMapper",
    "InvalidParameterError",
    "NGramSet",
    "extract_ngrams",
    "jaccard_index",
    "weighted_jaccard_index",
    "jaccard_distance",
    "weighted_jaccard_distance",
    "FinderConfig",
    "JaccardFinder",
    "MatchResult",
    "new_finder",
]
