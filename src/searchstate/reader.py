"""
Refinement reader.

Looks up a widget's current value in the state tree. The location follows
the same four-way split as the writer (multi-index or not, namespaced or
not); see writer.py.

get_current_refinement_value() falls back in three tiers:

    live state value  ->  props["default_refinement"]  ->  default_value

A key that exists in the state always wins, even when its value is falsy
(0, "", False).
"""

import logging
from typing import Any, Mapping, Optional, Tuple

from searchstate.context import SearchContext, is_multi_index, resolve_context, resolve_index_id
from searchstate.state_model import classify_state
from searchstate.widget_path import split_widget_id

logger = logging.getLogger(__name__)

DEFAULT_REFINEMENT_PROP = "default_refinement"
RESULTS_KEY = "results"
HITS_KEY = "hits"


def _locate(
    state: Optional[Mapping[str, Any]],
    context: Optional[SearchContext],
    widget_id: str,
) -> Tuple[Optional[Mapping[str, Any]], str]:
    """Return (container, key) holding the widget's value.

    container is None when an intermediate node (index entry, namespace
    object) is missing.
    """
    view = classify_state(state)
    namespace, attribute = split_widget_id(widget_id)

    if is_multi_index(context):
        index_id = resolve_index_id(context)
        if namespace:
            return view.namespace_state(namespace, index_id), attribute
        return view.index_state(index_id), widget_id

    if namespace:
        return view.namespace_state(namespace), attribute
    return state, widget_id


def has_refinement(
    state: Optional[Mapping[str, Any]],
    context: Optional[SearchContext],
    widget_id: str,
) -> bool:
    """True iff the widget's key exists at its location in the state tree."""
    container, key = _locate(state, resolve_context(context), widget_id)
    return container is not None and key in container


def get_refinement(
    state: Optional[Mapping[str, Any]],
    context: Optional[SearchContext],
    widget_id: str,
) -> Any:
    """Value stored for the widget.

    Raises:
        KeyError: If the widget has no value; check has_refinement() first
    """
    container, key = _locate(state, resolve_context(context), widget_id)
    if container is None:
        raise KeyError(widget_id)
    return container[key]


def get_current_refinement_value(
    props: Optional[Mapping[str, Any]],
    state: Optional[Mapping[str, Any]],
    context: Optional[SearchContext],
    widget_id: str,
    default_value: Any = None,
) -> Any:
    """
    Resolve a widget's current value.

    Args:
        props: Widget props; may declare ``default_refinement``
        state: Current search state
        context: Calling widget's context (None means the ambient context)
        widget_id: ``"<namespace>.<attribute>"`` or a bare id
        default_value: Caller fallback when neither state nor props have a value

    Returns:
        Live value, else the widget's default refinement, else default_value

    Raises:
        InvalidContext: Only in multi-index mode, from index resolution.
            Single-index lookups never resolve an index id, so a context
            without a main index is accepted here.
    """
    context = resolve_context(context)
    container, key = _locate(state, context, widget_id)
    if container is not None and key in container:
        return container[key]

    if props is not None and props.get(DEFAULT_REFINEMENT_PROP) is not None:
        logger.debug(f"No live value for {widget_id!r}, using default refinement")
        return props[DEFAULT_REFINEMENT_PROP]

    return default_value


def get_results(search_results: Optional[Mapping[str, Any]], context: Optional[SearchContext]) -> Any:
    """Pick the results a widget should render.

    Multi-index responses map index id -> results; single-index responses
    carry ``hits`` directly and are returned as-is.

    Returns:
        Results for the context's index, or None if there are none
    """
    if not search_results:
        return None
    results = search_results.get(RESULTS_KEY)
    if not results:
        return None
    if HITS_KEY in results:
        return results
    return results.get(resolve_index_id(context)) or None
