"""
Refinement writer.

refine_value() produces a new state tree reflecting a widget's new value.
The input tree is never mutated: every level on the written path is
shallow-copied and every other sub-tree is shared with the input.

Where the value lands depends on two things:

    Context      Namespace   Location
    -----------  ----------  ----------------------------------------
    multi-index  yes         indices[<index>][<namespace>]
    multi-index  no          indices[<index>]
    single       no          top level
    single       yes         <namespace> (page stays at the top level)

Page reset rules:
- Multi-index, namespaced: an existing index entry always gets page 1;
  a newly created one gets page 1 only when reset_page is set.
- Single-index with reset_page on a partitioned tree: every index entry
  gets page 1 first, so shared widgets re-paginate every panel.
"""

import logging
from typing import Any, Mapping, Optional

from searchstate.context import SearchContext, is_multi_index, resolve_context, resolve_index_id
from searchstate.state_model import FIRST_PAGE, INDICES_KEY, PAGE_KEY, classify_state

logger = logging.getLogger(__name__)

SearchState = Mapping[str, Any]


def _page(reset_page: bool) -> dict:
    return {PAGE_KEY: FIRST_PAGE} if reset_page else {}


def refine_value(
    state: Optional[SearchState],
    refinement: Mapping[str, Any],
    context: Optional[SearchContext] = None,
    reset_page: bool = False,
    namespace: Optional[str] = None,
) -> dict:
    """
    Write a widget refinement into the state tree.

    Args:
        state: Current search state (None is treated as empty)
        refinement: Partial mapping shallow-merged into the target location
        context: Calling widget's context (None means the ambient context)
        reset_page: Whether the refinement restarts pagination
        namespace: Optional namespace object the refinement belongs to

    Returns:
        New search state

    Raises:
        InvalidContext: From index resolution, for malformed contexts
    """
    if state is None:
        state = {}
    context = resolve_context(context)

    if is_multi_index(context):
        index_id = resolve_index_id(context)
        if namespace:
            return _refine_multi_index_with_namespace(state, refinement, index_id, reset_page, namespace)
        return _refine_multi_index(state, refinement, index_id, reset_page)

    # Shared widget on a multi-index page: restart every panel's pagination too
    view = classify_state(state)
    if reset_page and view.is_partitioned:
        index_ids = view.index_ids()
        logger.debug(f"Resetting page on {len(index_ids)} index(es) for shared refinement")
        for index_id in index_ids:
            state = _refine_multi_index(state, {PAGE_KEY: FIRST_PAGE}, index_id, reset_page=True)

    if namespace:
        return _refine_single_index_with_namespace(state, refinement, reset_page, namespace)
    return _refine_single_index(state, refinement, reset_page)


def _refine_multi_index(state: SearchState, refinement: Mapping[str, Any], index_id: str, reset_page: bool) -> dict:
    view = classify_state(state)
    index_state = view.index_state(index_id) or {}
    logger.debug(f"Refining index={index_id!r} keys={list(refinement)} reset_page={reset_page}")
    return {
        **state,
        INDICES_KEY: {
            **view.indices,
            index_id: {**index_state, **refinement, **_page(reset_page)},
        },
    }


def _refine_single_index(state: SearchState, refinement: Mapping[str, Any], reset_page: bool) -> dict:
    logger.debug(f"Refining top level keys={list(refinement)} reset_page={reset_page}")
    return {**state, **refinement, **_page(reset_page)}


def _refine_multi_index_with_namespace(
    state: SearchState,
    refinement: Mapping[str, Any],
    index_id: str,
    reset_page: bool,
    namespace: str,
) -> dict:
    view = classify_state(state)
    index_state = view.index_state(index_id)

    if index_state is not None:
        namespace_state = view.namespace_state(namespace, index_id) or {}
        # TODO: drop the forced page once callers pass reset_page explicitly for existing panels
        entry = {
            **index_state,
            namespace: {**namespace_state, **refinement},
            PAGE_KEY: FIRST_PAGE,
        }
    else:
        # New panel: no prior results to paginate, page only on explicit reset
        entry = {namespace: dict(refinement), **_page(reset_page)}

    logger.debug(f"Refining index={index_id!r} namespace={namespace!r} keys={list(refinement)}")
    return {**state, INDICES_KEY: {**view.indices, index_id: entry}}


def _refine_single_index_with_namespace(
    state: SearchState,
    refinement: Mapping[str, Any],
    reset_page: bool,
    namespace: str,
) -> dict:
    namespace_state = classify_state(state).namespace_state(namespace) or {}
    logger.debug(f"Refining namespace={namespace!r} keys={list(refinement)} reset_page={reset_page}")
    return {
        **state,
        namespace: {**namespace_state, **refinement},
        **_page(reset_page),
    }
