"""
Application-level index configuration.

Provides thread-local storage for the application's default main index.
This is the last fallback used by resolve_index_id() when a single-index
context does not name its main index itself.

The shell normally sets it once at startup:

    set_default_main_index("products")
"""

import threading
from typing import Optional


_default_main_index = threading.local()


def set_default_main_index(index_id: str) -> None:
    """Set the default main index for the current thread.

    Args:
        index_id: Identifier of the index single-index widgets target
    """
    _default_main_index.value = index_id


def get_default_main_index() -> Optional[str]:
    """Get the default main index for the current thread.

    Returns:
        Index id or None if not configured
    """
    return getattr(_default_main_index, 'value', None)


def clear_default_main_index() -> None:
    """Forget the default main index (tests, app reset)."""
    if hasattr(_default_main_index, 'value'):
        del _default_main_index.value
