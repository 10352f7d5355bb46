"""
Unit tests for the comparison engine.
"""

from comparator.differ import ComparisonEngine, compare_invaders, filter_invaders, normalize


class TestNormalize:
    """Tests for normalize."""

    def test_strips_surrounding_whitespace(self):
        """Test that leading/trailing whitespace is removed."""
        assert normalize("  PA_01 \t\n") == "PA_01"

    def test_keeps_inner_whitespace_and_case(self):
        """Test that inner spaces and case are untouched."""
        assert normalize(" Pa 01 ") == "Pa 01"

    def test_none_becomes_empty(self):
        """Test that a missing name normalizes to an empty string."""
        assert normalize(None) == ""

    def test_blank_becomes_empty(self):
        """Test that whitespace-only names normalize to an empty string."""
        assert normalize("   ") == ""


class TestCompareInvaders:
    """Tests for compare_invaders."""

    def test_basic_difference(self):
        """Test each player's exclusive items are returned."""
        result = compare_invaders(
            ["A", "B", "C"],
            {"P1": ["A", "B", "D"], "P2": ["C", "E"]},
        )
        assert result == {"P1": ["D"], "P2": ["E"]}

    def test_empty_reference_sorts_collection(self):
        """Test that an empty reference returns the whole collection sorted."""
        assert compare_invaders([], {"P1": ["Z", "A"]}) == {"P1": ["A", "Z"]}

    def test_whitespace_insensitive_case_sensitive(self):
        """Test stripped names match while case differences stay distinct."""
        result = compare_invaders(["A", " A ", "a"], {"P1": [" A ", "B"]})
        assert result == {"P1": ["B"]}

    def test_lowercase_not_matched_by_uppercase_reference(self):
        """Test that comparison does not fold case."""
        assert compare_invaders(["A"], {"P1": ["a"]}) == {"P1": ["a"]}

    def test_duplicates_of_reference_item(self):
        """Test that duplicates of a reference item yield nothing."""
        assert compare_invaders(["X"], {"P1": ["X", "X", "X"]}) == {"P1": []}

    def test_none_collection_is_empty(self):
        """Test that a missing collection produces an empty list."""
        assert compare_invaders(["X"], {"P1": None}) == {"P1": []}

    def test_empty_others(self):
        """Test that no named collections gives an empty result."""
        assert compare_invaders(["X"], {}) == {}

    def test_none_reference_and_others(self):
        """Test that None arguments are treated as empty."""
        assert compare_invaders(None, {"P1": ["B", "A"]}) == {"P1": ["A", "B"]}
        assert compare_invaders(["A"], None) == {}

    def test_output_deduplicated(self):
        """Test that output lists contain no duplicates."""
        result = compare_invaders([], {"P1": ["B", " B", "B ", "A", "A"]})
        assert result == {"P1": ["A", "B"]}

    def test_sorted_by_code_point(self):
        """Test that sorting uses default string ordering."""
        result = compare_invaders([], {"P1": ["b", "B", "a", "_", "10", "9"]})
        assert result["P1"] == ["10", "9", "B", "_", "a", "b"]

    def test_blank_entries_are_items(self):
        """Test that blank entries survive as the empty string."""
        assert compare_invaders([], {"P1": ["  ", "A"]}) == {"P1": ["", "A"]}
        assert compare_invaders([""], {"P1": ["  ", "A"]}) == {"P1": ["A"]}

    def test_keys_preserved(self):
        """Test that every input name appears in the output."""
        others = {"P1": ["A"], "P2": [], "P3": None, "P4": ["B"]}
        result = compare_invaders(["A", "B"], others)
        assert set(result) == set(others)
        assert all(items == [] for items in result.values())

    def test_no_output_item_in_reference(self):
        """Test that no output item matches a reference item."""
        reference = [" PA_01", "PA_02 ", "LDN_10"]
        result = compare_invaders(
            reference, {"P1": ["PA_01", "PA_03", "LDN_10 "], "P2": ["PA_02", "NY_01"]}
        )
        stripped_reference = {item.strip() for item in reference}
        for items in result.values():
            assert not stripped_reference & set(items)

    def test_padding_does_not_change_result(self):
        """Test that adding surrounding whitespace does not change results."""
        reference = ["A", "C"]
        others = {"P1": ["A", "B", "D"], "P2": ["C", "E"]}
        padded_reference = [f"  {item}\t" for item in reference]
        padded_others = {name: [f" {item} " for item in items] for name, items in others.items()}

        assert compare_invaders(padded_reference, padded_others) == compare_invaders(
            reference, others
        )

    def test_inputs_not_mutated(self):
        """Test that the engine never mutates its arguments."""
        reference = [" B", "A"]
        others = {"P1": ["C ", "A"]}
        compare_invaders(reference, others)
        assert reference == [" B", "A"]
        assert others == {"P1": ["C ", "A"]}

    def test_accepts_tuples_and_generators(self):
        """Test that any iterable of strings is accepted."""
        result = compare_invaders(("A",), {"P1": (item for item in ["B", "A"])})
        assert result == {"P1": ["B"]}


class TestFilterInvaders:
    """Tests for filter_invaders."""

    def test_case_insensitive_substring(self):
        """Test that filtering matches substrings regardless of case."""
        results = {"P1": ["LDN_01", "PA_10", "pa_2"], "P2": ["NY_01"]}
        assert filter_invaders(results, "Pa") == {"P1": ["PA_10", "pa_2"], "P2": []}

    def test_blank_term_returns_copy(self):
        """Test that an empty term leaves results untouched."""
        results = {"P1": ["B", "A"]}
        for term in (None, "", "   "):
            filtered = filter_invaders(results, term)
            assert filtered == results
            assert filtered["P1"] is not results["P1"]

    def test_order_preserved(self):
        """Test that filtered lists keep their sort order."""
        results = compare_invaders([], {"P1": ["PA_3", "LDN_1", "PA_1", "PA_2"]})
        assert filter_invaders(results, "pa") == {"P1": ["PA_1", "PA_2", "PA_3"]}

    def test_term_whitespace_trimmed(self):
        """Test that surrounding whitespace in the term is ignored."""
        assert filter_invaders({"P1": ["PA_1", "NY_1"]}, "  ny ") == {"P1": ["NY_1"]}


class TestComparisonEngine:
    """Tests for the ComparisonEngine wrapper."""

    def test_compare_then_filter(self):
        """Test that the engine composes comparison and filtering."""
        engine = ComparisonEngine()
        results = engine.compare(["PA_01"], {"Alice": ["PA_01", "PA_02", "LDN_01"]})
        assert results == {"Alice": ["LDN_01", "PA_02"]}
        assert engine.filter(results, "ldn") == {"Alice": ["LDN_01"]}
