"""
Fuzzy string finder based on character n-gram Jaccard similarity.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pydantic import ConfigDict, Field, field_validator

from ngram_finder.core.base import ParameterModel
from ngram_finder.core.case_mapper import CaseMapper
from ngram_finder.core.jaccard import jaccard_index, weighted_jaccard_index
from ngram_finder.core.ngrams import NGramSet

logger = logging.getLogger(__name__)


class FinderConfig(ParameterModel):
    """
    Immutable matching settings shared by every call on a JaccardFinder.

    Raises InvalidParameterError when a setting is out of range.

    Example:
        FinderConfig(
            ngram_length=2,
            min_string_length=4,
            threshold=0.3,
            case_mapper=CaseMapper.FORCE_TO_LOWER
        )
    """
    model_config = ConfigDict(frozen=True)

    ngram_length: int = Field(ge=1, description="Length of the n-grams compared")
    min_string_length: int = Field(0, ge=0, description="Strings shorter than this are never matched")
    threshold: float = Field(ge=0.0, le=1.0, allow_inf_nan=False, description="Minimum similarity score to report a match")
    case_mapper: CaseMapper = Field(CaseMapper.NO_CASE_CHANGE, description="Normalization applied before scoring")
    weighted: bool = Field(True, description="Score with the multiset index instead of the set index")

    @field_validator("ngram_length", "min_string_length", mode="before")
    @classmethod
    def _reject_bool(cls, value):
        if isinstance(value, bool):
            raise ValueError("must be an int, not a bool")
        return value

    @field_validator("case_mapper", mode="before")
    @classmethod
    def _coerce_case_mapper(cls, value):
        return CaseMapper.coerce(value)


@dataclass(frozen=True)
class MatchResult:
    """
    A population entry that scored at or above the finder's threshold.

    Attributes:
        string: The population entry exactly as supplied (not case-mapped)
        score: Similarity to the target (0.0 to 1.0)
    """
    string: str
    score: float

    def to_dict(self) -> dict:
        return {"string": self.string, "score": self.score}


class JaccardFinder:
    """
    Finds the strings in a population that are similar to a target.

    Each candidate is case-mapped, split into n-grams and scored against the
    target with the (weighted, by default) Jaccard index. Candidates shorter
    than `min_string_length` are skipped and a target shorter than it matches
    nothing. The finder keeps no per-call state and can be reused freely.

    Example:
        finder = JaccardFinder(2, 4, 0.3, CaseMapper.FORCE_TO_LOWER)
        finder.find("hello", ["HELL", "world"])
        # [MatchResult(string='HELL', score=0.428...)]

        finder.find_top_n_strings("hell", ["HELLO", "hellos", "world"], 1)
        # ['HELLO']
    """

    def __init__(
        self,
        ngram_length: int,
        min_string_length: int = 0,
        threshold: float = 0.0,
        case_mapper: CaseMapper | str = CaseMapper.NO_CASE_CHANGE,
        weighted: bool = True,
    ):
        self._config = FinderConfig(
            ngram_length=ngram_length,
            min_string_length=min_string_length,
            threshold=threshold,
            case_mapper=case_mapper,
            weighted=weighted,
        )

        self._index = weighted_jaccard_index if weighted else jaccard_index
        logger.info(
            f"JaccardFinder initialized: n={ngram_length}, min_len={min_string_length}, "
            f"threshold={threshold}, case_mapper={self._config.case_mapper.value}, weighted={weighted}"
        )

    @classmethod
    def from_config(cls, config: FinderConfig) -> JaccardFinder:
        """Build a finder from an existing FinderConfig."""
        return cls(**config.model_dump())

    @property
    def config(self) -> FinderConfig:
        return self._config

    def __repr__(self) -> str:
        c = self._config
        return (f"JaccardFinder(n={c.ngram_length}, min_len={c.min_string_length}, "
                f"threshold={c.threshold}, case_mapper={c.case_mapper.value})")

    # ========================================================================
    # MATCHING
    # ========================================================================

    def score(self, target: str, candidate: str) -> float:
        """Similarity of two strings after case mapping, ignoring the length filter."""
        c = self._config
        return self._index(
            NGramSet.from_string(c.case_mapper.normalize(target), c.ngram_length),
            NGramSet.from_string(c.case_mapper.normalize(candidate), c.ngram_length),
        )

    def find(self, target: str, population: Iterable[str]) -> list[MatchResult]:
        """
        Return every population entry scoring at least `threshold`, in population order.

        Args:
            target: String to match against
            population: Candidate strings, scanned once in order

        Returns:
            List of MatchResult holding the original (unmapped) entries
        """
        c = self._config
        mapped_target = c.case_mapper.normalize(target)
        if len(target) < c.min_string_length:
            logger.debug(f"Target {target!r} shorter than {c.min_string_length}, no matches")
            return []

        target_ngrams = NGramSet.from_string(mapped_target, c.ngram_length)

        matches = []
        scanned = 0
        for candidate in population:
            scanned += 1
            if len(candidate) < c.min_string_length:
                continue
            candidate_ngrams = NGramSet.from_string(c.case_mapper.normalize(candidate), c.ngram_length)
            score = self._index(target_ngrams, candidate_ngrams)
            if score >= c.threshold:
                matches.append(MatchResult(string=candidate, score=score))

        logger.debug(f"Matched {len(matches)}/{scanned} candidates against {target!r}")
        return matches

    def find_top_n(self, target: str, population: Iterable[str], max_n: int) -> list[MatchResult]:
        """
        Return the best matches by descending score, at most max_n of them.

        Ties keep their population order. max_n <= 0 returns every match.
        """
        # sorted() is stable, so equal scores stay in population order
        ranked = sorted(self.find(target, population), key=lambda m: m.score, reverse=True)
        if max_n > 0:
            ranked = ranked[:max_n]
        return ranked

    def find_strings(self, target: str, population: Iterable[str]) -> list[str]:
        """Like find() but returns only the matching strings."""
        return [m.string for m in self.find(target, population)]

    def find_top_n_strings(self, target: str, population: Iterable[str], max_n: int) -> list[str]:
        """Like find_top_n() but returns only the matching strings."""
        return [m.string for m in self.find_top_n(target, population, max_n)]


def new_finder(
    ngram_length: int,
    min_string_length: int,
    threshold: float,
    case_mapper: CaseMapper | str = CaseMapper.NO_CASE_CHANGE,
) -> JaccardFinder:
    """Create a JaccardFinder scoring with the weighted Jaccard index."""
    return JaccardFinder(ngram_length, min_string_length, threshold, case_mapper)
