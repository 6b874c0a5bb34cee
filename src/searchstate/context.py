"""
Search context classification and scoping.

A SearchContext describes how a widget is scoped:

- Single-index: the widget targets the application's main index and its
  values live at the top level of the state tree.
- Multi-index: the widget renders inside a per-index panel and its values
  live under ``indices[<targeted index>]``.

Contexts are owned by the application shell. They are either passed
explicitly to every operation, or scoped with search_context() so that
operations called with ``context=None`` pick up the ambient one:

    with search_context(SearchContext.for_panel("products", main_index="products")):
        state = refine_value(state, {"query": "shoes"}, reset_page=True)
"""

import contextvars
import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from searchstate.index_config import get_default_main_index

logger = logging.getLogger(__name__)

# Ambient context pushed by search_context()
current_search_context: contextvars.ContextVar[Optional['SearchContext']] = contextvars.ContextVar(
    'current_search_context', default=None
)


class InvalidContext(ValueError):
    """Raised when no index id can be resolved from a context.

    Always an integration bug: the shell must supply either a targeted
    index (multi-index) or a main index.
    """


@dataclass(frozen=True)
class MultiIndexContext:
    """Per-index scoping data carried by multi-index contexts."""
    targeted_index: str


@dataclass(frozen=True)
class SearchContext:
    """Scope of the calling widget.

    Attributes:
        main_index: The application's main index, used by widgets rendered
            outside any per-index panel.
        multi_index: Present iff the widget renders inside a per-index panel.
    """
    main_index: Optional[str] = None
    multi_index: Optional[MultiIndexContext] = None

    @classmethod
    def single(cls, main_index: Optional[str] = None) -> 'SearchContext':
        """Create a single-index context."""
        return cls(main_index=main_index)

    @classmethod
    def for_panel(cls, targeted_index: str, main_index: Optional[str] = None) -> 'SearchContext':
        """Create a multi-index context targeting one index."""
        return cls(main_index=main_index, multi_index=MultiIndexContext(targeted_index))

    def for_index(self, index_id: str) -> 'SearchContext':
        """Same context, retargeted at index_id in multi-index mode."""
        return replace(self, multi_index=MultiIndexContext(index_id))

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'SearchContext':
        """Import from the shell's raw context shape.

        Accepts ``{"multiIndexContext": {"targetedIndex": ...},
        "ais": {"mainTargetedIndex": ...}}``; both parts are optional.
        """
        if not data:
            return cls()
        multi = data.get('multiIndexContext')
        ais = data.get('ais') or {}
        return cls(
            main_index=ais.get('mainTargetedIndex'),
            multi_index=MultiIndexContext(multi['targetedIndex']) if multi else None,
        )


@contextmanager
def search_context(context: SearchContext):
    """Scope an ambient SearchContext for operations called without one.

    Nested scopes shadow outer ones and are restored on exit.
    """
    token = current_search_context.set(context)
    logger.debug(f"Entering search context: main_index={context.main_index!r}, multi_index={context.multi_index!r}")
    try:
        yield context
    finally:
        current_search_context.reset(token)


def get_current_search_context() -> Optional[SearchContext]:
    """Return the ambient SearchContext, or None outside search_context()."""
    return current_search_context.get()


def resolve_context(context: Optional[SearchContext]) -> Optional[SearchContext]:
    """Explicit context wins; otherwise fall back to the ambient one."""
    if context is not None:
        return context
    return current_search_context.get()


def is_multi_index(context: Optional[SearchContext]) -> bool:
    """True iff the context carries multi-index scoping data."""
    context = resolve_context(context)
    return context is not None and context.multi_index is not None


def resolve_index_id(context: Optional[SearchContext]) -> str:
    """
    Resolve the index a widget targets.

    ALGORITHM:
      1. Multi-index context: the targeted index
      2. Single-index context: the context's main index
      3. Otherwise: the application default main index (index_config)

    Args:
        context: Calling widget's context (None means the ambient context)

    Returns:
        Index identifier

    Raises:
        InvalidContext: If none of the above yields an index id
    """
    context = resolve_context(context)
    if context is not None:
        if context.multi_index is not None:
            return context.multi_index.targeted_index
        if context.main_index is not None:
            return context.main_index

    default_index = get_default_main_index()
    if default_index is not None:
        return default_index

    raise InvalidContext(
        f"Cannot resolve an index id from context {context!r}: "
        f"no targeted index, no main index and no default main index configured"
    )
