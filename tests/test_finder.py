import math

import pytest
from pydantic import ValidationError

from ngram_finder.core.case_mapper import CaseMapper
from ngram_finder.core.errors import InvalidParameterError
from ngram_finder.core.finder import (FinderConfig, JaccardFinder,
                                      MatchResult, new_finder)


class TestFinderConstruction:
    """Unit tests for finder parameter validation."""

    @pytest.mark.parametrize("kwargs", [
        {"ngram_length": 0},
        {"ngram_length": -3},
        {"threshold": -0.1},
        {"threshold": 1.1},
        {"threshold": math.nan},
        {"min_string_length": -1},
        {"case_mapper": "upper"},
    ])
    def test_invalid_parameters(self, kwargs):
        """Test out-of-range settings are rejected at construction."""
        params = {"ngram_length": 2, "min_string_length": 0, "threshold": 0.5,
                  "case_mapper": CaseMapper.NO_CASE_CHANGE}
        params.update(kwargs)
        with pytest.raises(InvalidParameterError):
            JaccardFinder(**params)

    @pytest.mark.parametrize("threshold", [0, 0.0, 1, 1.0])
    def test_threshold_bounds_are_inclusive(self, threshold):
        """Test 0 and 1 are valid thresholds."""
        assert JaccardFinder(2, 0, threshold).config.threshold == threshold

    def test_case_mapper_by_name(self):
        """Test case mapper may be given by its value."""
        finder = JaccardFinder(2, 4, 0.3, "force_to_lower")
        assert finder.config.case_mapper is CaseMapper.FORCE_TO_LOWER

    def test_config_is_immutable(self):
        """Test the stored config cannot be changed."""
        finder = JaccardFinder(2, 4, 0.3)
        with pytest.raises(ValidationError):
            finder.config.threshold = 0.9

    @pytest.mark.parametrize("kwargs", [
        {"ngram_length": 0, "threshold": 0.5},
        {"ngram_length": 2, "threshold": 2.0},
        {"ngram_length": 2, "threshold": 0.5, "case_mapper": "upper"},
    ])
    def test_finder_config_invalid(self, kwargs):
        """Test FinderConfig itself raises InvalidParameterError."""
        with pytest.raises(InvalidParameterError):
            FinderConfig(**kwargs)

    def test_from_config(self):
        """Test building a finder from a FinderConfig."""
        config = FinderConfig(ngram_length=3, min_string_length=1, threshold=0.2,
                              case_mapper=CaseMapper.FORCE_TO_LOWER, weighted=False)
        finder = JaccardFinder.from_config(config)
        assert finder.config == config

    def test_new_finder(self):
        """Test the functional constructor scores with the weighted index."""
        finder = new_finder(2, 4, 0.3, CaseMapper.FORCE_TO_LOWER)
        assert isinstance(finder, JaccardFinder)
        assert finder.config.weighted is True


class TestFinderMatching:
    """Unit tests for find / find_top_n."""

    @pytest.fixture
    def flat_case_finder(self):
        """Finder that lower-cases before scoring."""
        return JaccardFinder(2, 4, 0.3, CaseMapper.FORCE_TO_LOWER)

    @pytest.fixture
    def no_change_finder(self):
        """Finder that compares strings as given."""
        return JaccardFinder(2, 4, 0.3, CaseMapper.NO_CASE_CHANGE)

    @pytest.fixture
    def open_finder(self):
        """Finder with no length filter and a zero threshold."""
        return JaccardFinder(2, 0, 0.0)

    def test_flat_case_match(self, flat_case_finder):
        """Test case folding lets differently-cased strings match."""
        matches = flat_case_finder.find("hello", ["HELL", "world"])
        assert [m.string for m in matches] == ["HELL"]
        assert matches[0].score == pytest.approx(3 / 7)

    def test_no_case_change_no_match(self, no_change_finder):
        """Test without case folding nothing matches."""
        assert no_change_finder.find("hello", ["HELL", "world"]) == []

    def test_short_target(self):
        """Test a target shorter than the minimum never matches."""
        finder = JaccardFinder(2, 6, 0.3, CaseMapper.FORCE_TO_LOWER)
        assert finder.find("hello", ["HELL", "world", "hello"]) == []
        assert finder.find_top_n("hello", ["HELL", "world", "hello"], 99) == []

    def test_short_population_entry(self, flat_case_finder, no_change_finder):
        """Test entries shorter than the minimum are skipped."""
        population = ["HELLO", "hellos", "hel", "world"]
        assert flat_case_finder.find_strings("hell", population) == ["HELLO", "hellos"]
        assert flat_case_finder.find_top_n_strings("hell", population, 1) == ["HELLO"]
        assert no_change_finder.find_strings("hell", population) == ["hellos"]

    def test_short_entry_skipped_even_if_identical(self, flat_case_finder):
        """Test the length filter applies irrespective of score."""
        assert flat_case_finder.find("hel", ["hel"]) == []
        finder = JaccardFinder(2, 4, 0.0)
        assert finder.find_strings("hello", ["hel", "help"]) == ["help"]

    def test_empty_target(self):
        """Test an empty target matches empty entries with score 1.0."""
        population = ["", "HELLO", "hellos", "hel", "world"]
        for mapper in CaseMapper:
            finder = JaccardFinder(2, 0, 0.3, mapper)
            assert finder.find_strings("", population) == [""]
        finder = JaccardFinder(2, 0, 0.3, CaseMapper.FORCE_TO_LOWER)
        top = finder.find_top_n("", ["", "HELLO", "hel", "world"], 1)
        assert top == [MatchResult(string="", score=1.0)]

    def test_empty_target_outranks_others(self, open_finder):
        """Test the empty/empty score beats every non-empty candidate."""
        top = open_finder.find_top_n("", ["abc", "", "abcd"], 0)
        assert top[0] == MatchResult(string="", score=1.0)
        assert len(top) == 3

    def test_threshold_filter(self):
        """Test no match below the threshold is returned."""
        population = ["help", "hello", "yellow", "world", "jello", "hell", "he"]
        for threshold in [0.0, 0.1, 0.25, 3 / 7, 0.5]:
            finder = JaccardFinder(2, 0, threshold)
            for match in finder.find("hello", population):
                assert match.score >= threshold

    def test_threshold_is_inclusive(self):
        """Test a score exactly at the threshold is kept."""
        finder = JaccardFinder(2, 0, 3 / 7)
        assert finder.find_strings("hello", ["hell"]) == ["hell"]

    def test_find_keeps_population_order(self, open_finder):
        """Test find() does not reorder matches."""
        population = ["world", "hell", "hello", "jello"]
        assert open_finder.find_strings("hello", population) == population

    def test_top_n_bound_and_order(self, open_finder):
        """Test find_top_n() returns at most max_n matches with non-increasing scores."""
        population = ["help", "hello", "yellow", "world", "jello", "hell"]
        for max_n in [1, 2, 3, 10]:
            top = open_finder.find_top_n("hello", population, max_n)
            assert len(top) <= max_n
            scores = [m.score for m in top]
            assert scores == sorted(scores, reverse=True)
        assert open_finder.find_top_n_strings("hello", population, 1) == ["hello"]

    @pytest.mark.parametrize("max_n", [0, -1])
    def test_top_n_unbounded(self, open_finder, max_n):
        """Test max_n <= 0 returns every match."""
        population = ["help", "hello", "yellow", "world"]
        assert len(open_finder.find_top_n("hello", population, max_n)) == len(population)

    def test_top_n_ties_keep_population_order(self, open_finder):
        """Test equal scores are ranked by population position."""
        assert open_finder.find_top_n_strings("ab", ["abx", "xab"], 0) == ["abx", "xab"]
        assert open_finder.find_top_n_strings("ab", ["xab", "abx"], 0) == ["xab", "abx"]
        assert open_finder.find_top_n_strings("ab", ["xab", "abx"], 1) == ["xab"]

    def test_original_strings_returned(self, flat_case_finder):
        """Test results carry the unmapped entry and the caller's list is untouched."""
        population = ["HeLLo", "WORLD"]
        matches = flat_case_finder.find("HELLO", population)
        assert [m.string for m in matches] == ["HeLLo"]
        assert population == ["HeLLo", "WORLD"]

    def test_unweighted_scoring(self):
        """Test the set index can be used instead of the multiset index."""
        weighted = JaccardFinder(2, 0, 0.5)
        unweighted = JaccardFinder(2, 0, 0.5, weighted=False)
        assert weighted.find("hello", ["hell"]) == []
        assert unweighted.find("hello", ["hell"]) == [MatchResult(string="hell", score=0.75)]

    def test_reusable(self, flat_case_finder):
        """Test repeated calls are independent."""
        first = flat_case_finder.find("hello", ["HELL", "world"])
        flat_case_finder.find("world", ["WORLDS"])
        assert flat_case_finder.find("hello", ["HELL", "world"]) == first

    def test_population_iterable(self, flat_case_finder):
        """Test any iterable population is accepted."""
        population = (s for s in ["HELL", "world"])
        assert flat_case_finder.find_strings("hello", population) == ["HELL"]

    def test_empty_population(self, flat_case_finder):
        """Test an empty population yields no matches."""
        assert flat_case_finder.find("hello", []) == []
        assert flat_case_finder.find_top_n("hello", [], 3) == []

    def test_score(self, flat_case_finder):
        """Test score() applies case mapping but not the length filter."""
        assert flat_case_finder.score("HELLO", "hell") == pytest.approx(3 / 7)
        assert flat_case_finder.score("a", "a") == 1.0

    def test_match_result_to_dict(self):
        """Test MatchResult serialization."""
        assert MatchResult("HELL", 0.5).to_dict() == {"string": "HELL", "score": 0.5}
