from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from pydantic import (ConfigDict, Field, computed_field, field_serializer,
                      field_validator, model_validator)

from ngram_finder.core.base import ParameterModel
from ngram_finder.core.errors import InvalidParameterError


def _check_ngram_length(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidParameterError(f"n-gram length must be an int, got {n!r}")
    if n <= 0:
        raise InvalidParameterError(f"n-gram length must be >= 1, got {n}")


class NGramSet(ParameterModel):
    """
    Multiset of the character n-grams of a string.

    Maps every distinct n-gram to the number of times it occurs. Instances
    are frozen once built and `counts` is a read-only mapping. Prefer
    from_string() or extract_ngrams() over filling `counts` by hand; direct
    construction rejects keys whose length is not n and counts below 1.

    Example:
        ngs = NGramSet.from_string("hello", 2)
        ngs.count("ll")      # 1
        ngs.total_count      # 4
        ngs.distinct_count   # 4
    """
    model_config = ConfigDict(frozen=True)

    n: int = Field(ge=1, description="Length of every n-gram in the set")
    counts: Mapping[str, int] = Field(default_factory=dict, validate_default=True, description="Occurrences per n-gram")

    @field_validator("counts", mode="after")
    @classmethod
    def _read_only_counts(cls, value):
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _check_counts(self) -> NGramSet:
        for ngram, count in self.counts.items():
            if len(ngram) != self.n:
                raise ValueError(f"n-gram {ngram!r} does not have length {self.n}")
            if count <= 0:
                raise ValueError(f"n-gram {ngram!r} has non-positive count {count}")
        return self

    @field_serializer("counts")
    def _serialize_counts(self, counts):
        return dict(counts)

    @classmethod
    def from_string(cls, s: str, n: int) -> NGramSet:
        """
        Slide a window of length n over s (stride 1) and count each substring.

        Raises:
            InvalidParameterError: If n is not a positive int
        """
        _check_ngram_length(n)
        counts = Counter(s[i:i + n] for i in range(len(s) - n + 1))
        return cls(n=n, counts=dict(counts))

    @computed_field
    @property
    def distinct_count(self) -> int:
        """Number of distinct n-grams."""
        return len(self.counts)

    @computed_field
    @property
    def total_count(self) -> int:
        """Sum of all occurrence counts."""
        return sum(self.counts.values())

    def count(self, ngram: str) -> int:
        """Occurrences of ngram, 0 if absent."""
        return self.counts.get(ngram, 0)

    def is_empty(self) -> bool:
        return not self.counts

    def __len__(self) -> int:
        return len(self.counts)

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.counts)

    def __contains__(self, ngram: object) -> bool:
        return ngram in self.counts

    def __getitem__(self, ngram: str) -> int:
        return self.counts[ngram]

    def __repr__(self) -> str:
        return f"NGramSet(n={self.n}, distinct={self.distinct_count}, total={self.total_count})"


def extract_ngrams(s: str, n: int) -> NGramSet:
    """Build the NGramSet of s for n-grams of length n."""
    return NGramSet.from_string(s, n)
