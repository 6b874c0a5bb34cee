"""Widget id parsing: ``"<namespace>.<attribute>"`` or a bare id."""

from typing import NamedTuple, Optional

from searchstate.state_model import NAMESPACE_SEPARATOR


class WidgetPath(NamedTuple):
    namespace: Optional[str]
    attribute: str


def split_widget_id(widget_id: str) -> WidgetPath:
    """Split a widget id on its first separator.

    Only the first dot is significant, so attributes may contain dots
    themselves ("range.price.amount" -> ("range", "price.amount")). Without
    a dot the namespace is None and the attribute is the whole id. Empty
    parts are returned as-is; callers treat an empty namespace as absent.
    """
    namespace, separator, attribute = widget_id.partition(NAMESPACE_SEPARATOR)
    if not separator:
        return WidgetPath(namespace=None, attribute=widget_id)
    return WidgetPath(namespace=namespace, attribute=attribute)
