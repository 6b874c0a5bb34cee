"""
Widget cleanup.

clean_up_value() strips a widget's own key when it unmounts and leaves
everything else in place. Namespace objects are kept even when their last
attribute goes away. Removing a key that is not there returns the input
state object unchanged, so cleanup is idempotent.
"""

import logging
from typing import Any, Mapping, Optional

from searchstate.context import SearchContext, is_multi_index, resolve_context, resolve_index_id
from searchstate.state_model import INDICES_KEY, classify_state
from searchstate.widget_path import split_widget_id

logger = logging.getLogger(__name__)


def _omit(mapping: Mapping[str, Any], key: str) -> dict:
    return {k: v for k, v in mapping.items() if k != key}


def clean_up_value(
    state: Optional[Mapping[str, Any]],
    context: Optional[SearchContext],
    widget_id: str,
) -> Mapping[str, Any]:
    """
    Remove a widget's value from the state tree.

    Multi-index contexts only reach into ``indices`` when the tree already
    has one; otherwise the top level is cleaned, as for single-index widgets.

    Args:
        state: Current search state (None is treated as empty)
        context: Calling widget's context (None means the ambient context)
        widget_id: ``"<namespace>.<attribute>"`` or a bare id

    Returns:
        New search state, or ``state`` itself if there was nothing to remove

    Raises:
        InvalidContext: Only for multi-index contexts on a partitioned
            state; single-index cleanup never resolves an index id.
    """
    if state is None:
        state = {}
    context = resolve_context(context)
    view = classify_state(state)
    namespace, attribute = split_widget_id(widget_id)

    if is_multi_index(context) and view.is_partitioned:
        index_id = resolve_index_id(context)
        index_state = view.index_state(index_id)
        if index_state is None:
            return state

        if namespace:
            namespace_state = view.namespace_state(namespace, index_id)
            if namespace_state is None or attribute not in namespace_state:
                return state
            entry = {**index_state, namespace: _omit(namespace_state, attribute)}
        else:
            if widget_id not in index_state:
                return state
            entry = _omit(index_state, widget_id)

        logger.debug(f"Cleaned up {widget_id!r} from index={index_id!r}")
        return {**state, INDICES_KEY: {**view.indices, index_id: entry}}

    if namespace:
        namespace_state = view.namespace_state(namespace)
        if namespace_state is None or attribute not in namespace_state:
            return state
        logger.debug(f"Cleaned up {attribute!r} from namespace={namespace!r}")
        return {**state, namespace: _omit(namespace_state, attribute)}

    if widget_id not in state:
        return state
    logger.debug(f"Cleaned up {widget_id!r} from top level")
    return _omit(state, widget_id)
