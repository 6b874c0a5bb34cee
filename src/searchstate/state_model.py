"""
Typed views over a search state tree.

A search state is a plain, serializable dict. It comes in two shapes:

- Flat: property key -> value, the configuration of a single index.
- Partitioned: carries the reserved ``indices`` key, mapping each index id
  to its own flat sub-tree. Any other top-level keys belong to widgets
  shared by every index.

The writer, reader and cleaner never probe raw dicts for these shapes
themselves; they classify the tree once with classify_state() and use the
optional lookups on the resulting view.

Design Philosophy:
- Views are frozen and never copy the underlying mappings
- Lookups return None for absence instead of raising
- Reserved keys live here and nowhere else
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

# Reserved keys of the state schema
INDICES_KEY = "indices"
PAGE_KEY = "page"
NAMESPACE_SEPARATOR = "."
FIRST_PAGE = 1

_EMPTY: Mapping[str, Any] = {}


def _sub_mapping(container: Optional[Mapping], key: str) -> Optional[Mapping]:
    """Return container[key] if it is present and is a mapping, else None."""
    if container is None:
        return None
    value = container.get(key)
    return value if isinstance(value, Mapping) else None


@dataclass(frozen=True)
class FlatState:
    """Single-index state: every key belongs to the one index."""
    values: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_partitioned(self) -> bool:
        return False

    @property
    def indices(self) -> Mapping[str, Mapping[str, Any]]:
        return _EMPTY

    def index_ids(self):
        return ()

    def index_state(self, index_id: str) -> Optional[Mapping[str, Any]]:
        """Flat states have no per-index sub-trees."""
        return None

    def namespace_state(self, namespace: str, index_id: Optional[str] = None) -> Optional[Mapping[str, Any]]:
        if index_id is not None:
            return None
        return _sub_mapping(self.values, namespace)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.values)


@dataclass(frozen=True)
class PartitionedState:
    """Multi-index state.

    ``shared`` holds the top-level keys written by widgets that are not
    scoped to an index (a global search box, shared pagination). ``indices``
    maps index id -> flat sub-tree for that index.
    """
    shared: Mapping[str, Any] = field(default_factory=dict)
    indices: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    @property
    def is_partitioned(self) -> bool:
        return True

    def index_ids(self):
        """Snapshot of the index ids present in the tree."""
        return tuple(self.indices.keys())

    def index_state(self, index_id: str) -> Optional[Mapping[str, Any]]:
        """Flat sub-tree for index_id, or None if the index has no entry."""
        return _sub_mapping(self.indices, index_id)

    def namespace_state(self, namespace: str, index_id: Optional[str] = None) -> Optional[Mapping[str, Any]]:
        """Namespace object at the top level, or inside index_id when given."""
        if index_id is None:
            return _sub_mapping(self.shared, namespace)
        return _sub_mapping(self.index_state(index_id), namespace)

    def to_dict(self) -> Dict[str, Any]:
        return {**self.shared, INDICES_KEY: dict(self.indices)}


SearchStateView = Union[FlatState, PartitionedState]


def classify_state(state: Optional[Mapping[str, Any]]) -> SearchStateView:
    """Classify a raw state tree as flat or partitioned.

    The presence of the ``indices`` key is what makes a tree partitioned,
    whatever mode the calling widget runs in.

    Args:
        state: Raw search state (None is treated as an empty flat state)

    Returns:
        FlatState or PartitionedState wrapping the same mappings
    """
    if state is None:
        return FlatState(values=_EMPTY)
    indices = state.get(INDICES_KEY)
    if isinstance(indices, Mapping):
        shared = {key: value for key, value in state.items() if key != INDICES_KEY}
        return PartitionedState(shared=shared, indices=indices)
    return FlatState(values=state)


def from_dict(data: Mapping[str, Any]) -> SearchStateView:
    """Import a view from a dict (e.g. decoded from a URL or storage)."""
    return classify_state(data)
