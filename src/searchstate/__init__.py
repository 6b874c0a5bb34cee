"""
Search state reconciliation for search-UI widget connectors.

This package provides the bookkeeping that every widget connector relies
on: where a widget's value lives in the search state tree, how to write a
new value without disturbing sibling widgets, and how to remove it again.

Key Features:
- Single-index (flat) and multi-index (partitioned) state trees
- Namespaced widget ids ("range.price") sharing one sub-object
- Page reset that cascades to every index for shared widgets
- Pure functions returning new trees with structural sharing
- Contextvars-based ambient search context

Quick Start:
    >>> from searchstate import SearchContext, refine_value, get_current_refinement_value
    >>>
    >>> ctx = SearchContext.for_panel("products")
    >>> state = refine_value({}, {"query": "shoes"}, ctx, reset_page=True)
    >>> state
    {'indices': {'products': {'query': 'shoes', 'page': 1}}}
    >>> get_current_refinement_value({}, state, ctx, "query", "")
    'shoes'

Architecture:
    State shapes:
        Flat:        {"query": "a", "page": 2, "range": {"price": {...}}}
        Partitioned: {"query": "a", "indices": {"A": {...}, "B": {...}}}

    Widget location (context x namespace):
        multi-index + namespace -> indices[index][namespace][attribute]
        multi-index             -> indices[index][id]
        single + namespace      -> [namespace][attribute]
        single                  -> [id]

Modules:
    - state_model: Reserved keys and flat/partitioned state views
    - context: Context classifier and ambient context scope
    - index_config: Thread-local default main index
    - widget_path: Widget id parsing
    - writer: refine_value()
    - reader: get_current_refinement_value() and friends
    - cleanup: clean_up_value()
    - connectors: State-side connector helpers
"""

# State model
from searchstate.state_model import (
    INDICES_KEY,
    PAGE_KEY,
    NAMESPACE_SEPARATOR,
    FIRST_PAGE,
    FlatState,
    PartitionedState,
    SearchStateView,
    classify_state,
)

# Context
from searchstate.context import (
    InvalidContext,
    MultiIndexContext,
    SearchContext,
    search_context,
    get_current_search_context,
    is_multi_index,
    resolve_index_id,
)

# Configuration
from searchstate.index_config import (
    set_default_main_index,
    get_default_main_index,
    clear_default_main_index,
)

# Paths
from searchstate.widget_path import WidgetPath, split_widget_id

# Writer / reader / cleaner
from searchstate.writer import refine_value
from searchstate.reader import (
    has_refinement,
    get_refinement,
    get_current_refinement_value,
    get_results,
)
from searchstate.cleanup import clean_up_value

# Connectors
from searchstate.connectors import (
    Connector,
    SearchBoxConnector,
    PaginationConnector,
    RangeConnector,
    RatingMenuConnector,
)

__all__ = [
    # State model
    'INDICES_KEY',
    'PAGE_KEY',
    'NAMESPACE_SEPARATOR',
    'FIRST_PAGE',
    'FlatState',
    'PartitionedState',
    'SearchStateView',
    'classify_state',
    # Context
    'InvalidContext',
    'MultiIndexContext',
    'SearchContext',
    'search_context',
    'get_current_search_context',
    'is_multi_index',
    'resolve_index_id',
    # Configuration
    'set_default_main_index',
    'get_default_main_index',
    'clear_default_main_index',
    # Paths
    'WidgetPath',
    'split_widget_id',
    # Core operations
    'refine_value',
    'has_refinement',
    'get_refinement',
    'get_current_refinement_value',
    'get_results',
    'clean_up_value',
    # Connectors
    'Connector',
    'SearchBoxConnector',
    'PaginationConnector',
    'RangeConnector',
    'RatingMenuConnector',
]

__version__ = "0.1.0"
