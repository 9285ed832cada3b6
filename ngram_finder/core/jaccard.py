"""
Jaccard similarity and distance over character n-grams.

Two families are provided:

- unweighted: the n-gram sets are treated as plain sets,
  J = |A & B| / |A | B|
- weighted: occurrence counts are taken into account,
  J_w = sum(min(countA, countB)) / (total(A) + total(B))

The weighted form divides by the sum of both multiset sizes rather than by
their union, so it never exceeds 0.5 unless both inputs are empty. This
normalization is kept as-is for compatibility with existing scores.

Both indices are defined as 1.0 when both inputs are empty: two strings too
short to produce any n-gram are considered identical.
"""
from ngram_finder.core.ngrams import NGramSet, extract_ngrams


def jaccard_index(a: NGramSet, b: NGramSet) -> float:
    """Set-based Jaccard index of two n-gram sets."""
    keys_a = set(a.counts)
    keys_b = set(b.counts)
    union = keys_a | keys_b
    if not union:
        return 1.0
    return len(keys_a & keys_b) / len(union)


def weighted_jaccard_index(a: NGramSet, b: NGramSet) -> float:
    """Multiset Jaccard index of two n-gram sets, normalized by their summed sizes."""
    total = a.total_count + b.total_count
    if total == 0:
        return 1.0
    # min() is 0 for n-grams present on one side only
    intersection = sum(min(count, b.count(ngram)) for ngram, count in a.counts.items())
    return intersection / total


def jaccard_distance(s1: str, s2: str, n: int) -> float:
    """1 - jaccard_index of the n-grams of s1 and s2."""
    return 1.0 - jaccard_index(extract_ngrams(s1, n), extract_ngrams(s2, n))


def weighted_jaccard_distance(s1: str, s2: str, n: int) -> float:
    """1 - weighted_jaccard_index of the n-grams of s1 and s2."""
    return 1.0 - weighted_jaccard_index(extract_ngrams(s1, n), extract_ngrams(s2, n))
