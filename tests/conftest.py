"""Pytest configuration and shared fixtures."""
import pytest

from searchstate import SearchContext
import searchstate.index_config as index_config_module


@pytest.fixture(autouse=True)
def reset_default_main_index():
    """Clear the default main index before and after each test."""
    original = index_config_module.get_default_main_index()
    index_config_module.clear_default_main_index()

    yield

    index_config_module.clear_default_main_index()
    if original is not None:
        index_config_module.set_default_main_index(original)


@pytest.fixture
def single_context():
    """Single-index context on the main index."""
    return SearchContext.single(main_index="main")


@pytest.fixture
def context_a():
    """Multi-index context targeting index A."""
    return SearchContext.for_panel("A", main_index="main")


@pytest.fixture
def context_b():
    """Multi-index context targeting index B."""
    return SearchContext.for_panel("B", main_index="main")


@pytest.fixture
def partitioned_state():
    """State with a shared query and two index panels."""
    return {
        "query": "shared",
        "indices": {
            "A": {"query": "a", "page": 3, "range": {"price": {"min": 1, "max": 10}}},
            "B": {"query": "b", "page": 2},
        },
    }
