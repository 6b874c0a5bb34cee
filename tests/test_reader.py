"""Tests for refinement lookup and result selection."""
import pytest

from searchstate import (
    InvalidContext,
    SearchContext,
    get_current_refinement_value,
    get_refinement,
    get_results,
    has_refinement,
    refine_value,
    search_context,
)


class TestGetCurrentRefinementValue:
    """Test the three-tier fallback: state, default refinement, default value."""

    def test_existence_precedes_defaults(self, single_context):
        props = {"default_refinement": 3}
        assert get_current_refinement_value(props, {"grade": 0}, single_context, "grade", 5) == 0

    def test_empty_string_is_a_value(self, single_context):
        assert get_current_refinement_value({}, {"query": ""}, single_context, "query", "fallback") == ""

    def test_none_is_a_value(self, single_context):
        assert get_current_refinement_value({}, {"query": None}, single_context, "query", "fallback") is None

    def test_default_refinement(self, single_context):
        props = {"default_refinement": 3}
        assert get_current_refinement_value(props, {}, single_context, "grade", 5) == 3

    def test_default_value(self, single_context):
        assert get_current_refinement_value({}, {}, single_context, "grade", 5) == 5

    def test_no_props(self, single_context):
        assert get_current_refinement_value(None, {}, single_context, "grade", 5) == 5

    def test_single_namespaced(self, single_context):
        state = {"range": {"price": {"min": 1}}}
        assert get_current_refinement_value({}, state, single_context, "range.price", None) == {"min": 1}
        assert get_current_refinement_value({}, state, single_context, "range.size", "none") == "none"

    def test_empty_namespace_reads_top_level_key(self, single_context, context_a):
        assert get_current_refinement_value({}, {".price": 4}, single_context, ".price", None) == 4
        state = {"indices": {"A": {".price": 5}}}
        assert get_current_refinement_value({}, state, context_a, ".price", None) == 5

    def test_single_context_reads_shared_keys(self, single_context, partitioned_state):
        assert get_current_refinement_value({}, partitioned_state, single_context, "query", "") == "shared"

    def test_multi_index(self, context_a, context_b, partitioned_state):
        assert get_current_refinement_value({}, partitioned_state, context_a, "query", "") == "a"
        assert get_current_refinement_value({}, partitioned_state, context_b, "query", "") == "b"

    def test_multi_index_namespaced(self, context_a, context_b, partitioned_state):
        value = get_current_refinement_value({}, partitioned_state, context_a, "range.price", None)
        assert value == {"min": 1, "max": 10}
        assert get_current_refinement_value({}, partitioned_state, context_b, "range.price", "none") == "none"

    def test_multi_index_missing_entry(self, partitioned_state):
        context = SearchContext.for_panel("C")
        props = {"default_refinement": "default"}
        assert get_current_refinement_value(props, partitioned_state, context, "query", "") == "default"

    def test_multi_index_on_flat_state(self, context_a):
        assert get_current_refinement_value({}, {"query": "top"}, context_a, "query", "x") == "x"

    def test_single_index_without_main_index(self):
        context = SearchContext()
        assert get_current_refinement_value({}, {"query": "a"}, context, "query", "") == "a"

    def test_ambient_context(self, context_b, partitioned_state):
        with search_context(context_b):
            assert get_current_refinement_value({}, partitioned_state, None, "query", "") == "b"


class TestHasAndGetRefinement:
    """Test has_refinement() and get_refinement()."""

    def test_has_refinement(self, context_a, single_context, partitioned_state):
        assert has_refinement(partitioned_state, context_a, "range.price") is True
        assert has_refinement(partitioned_state, context_a, "range.size") is False
        assert has_refinement(partitioned_state, single_context, "query") is True
        assert has_refinement(partitioned_state, single_context, "range.price") is False

    def test_get_refinement(self, context_a, partitioned_state):
        assert get_refinement(partitioned_state, context_a, "page") == 3

    def test_get_refinement_missing(self, context_a, single_context):
        with pytest.raises(KeyError):
            get_refinement({}, context_a, "query")
        with pytest.raises(KeyError):
            get_refinement({}, single_context, "range.price")
        with pytest.raises(KeyError):
            get_refinement({}, single_context, "query")


class TestProperties:
    """Round trip and sibling isolation across write locations."""

    @pytest.mark.parametrize("value", [0, "", "shoes", 4.5, {"min": 1}, [1, 2]])
    def test_write_read_round_trip(self, single_context, value):
        state = refine_value({"other": 1}, {"x": value}, single_context, False)
        assert get_current_refinement_value({}, state, single_context, "x", "default") == value

    def test_sibling_isolation(self, single_context, context_a, context_b):
        writes = [
            (single_context, "query", None),
            (single_context, "price", "range"),
            (context_a, "query", None),
            (context_a, "price", "range"),
            (context_b, "price", "range"),
        ]
        state = {}
        expected = {}
        for n, (context, attribute, namespace) in enumerate(writes):
            state = refine_value(state, {attribute: n}, context, False, namespace)
            widget_id = f"{namespace}.{attribute}" if namespace else attribute
            expected[(context, widget_id)] = n
            # Every value written so far is still readable
            for (ctx, wid), value in expected.items():
                assert get_current_refinement_value({}, state, ctx, wid, None) == value


class TestGetResults:
    """Test get_results()."""

    def test_single_index_results(self, context_a):
        results = {"hits": [], "nbHits": 0}
        assert get_results({"results": results}, context_a) is results

    def test_multi_index_results(self, context_a, context_b):
        results = {"A": {"hits": [1]}, "B": {"hits": [2]}}
        assert get_results({"results": results}, context_a) == {"hits": [1]}
        assert get_results({"results": results}, context_b) == {"hits": [2]}

    def test_single_context_uses_main_index(self, single_context):
        results = {"main": {"hits": [1]}, "B": {"hits": [2]}}
        assert get_results({"results": results}, single_context) == {"hits": [1]}

    def test_missing_index(self):
        results = {"A": {"hits": [1]}}
        assert get_results({"results": results}, SearchContext.for_panel("C")) is None

    def test_no_results(self, context_a):
        assert get_results({}, context_a) is None
        assert get_results({"results": None}, context_a) is None
        assert get_results(None, context_a) is None

    def test_invalid_context(self):
        with pytest.raises(InvalidContext):
            get_results({"results": {"A": {"hits": []}}}, SearchContext())
