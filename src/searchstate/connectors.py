"""
State-side connector helpers.

A connector is the part of a widget that reads its value out of the search
state, writes a new value back and removes it on unmount. Rendering is not
handled here. Each connector only decides *which* id, namespace and page
behaviour it uses; the bookkeeping is done by refine_value(),
get_current_refinement_value() and clean_up_value().

Props are plain mappings, e.g. ``{"attribute": "grade", "max": 5}``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from searchstate.cleanup import clean_up_value
from searchstate.context import SearchContext
from searchstate.reader import get_current_refinement_value
from searchstate.state_model import FIRST_PAGE, NAMESPACE_SEPARATOR, PAGE_KEY
from searchstate.writer import refine_value

logger = logging.getLogger(__name__)

Props = Mapping[str, Any]


class Connector(ABC):
    """Base connector: one value per widget, optionally inside a namespace."""

    namespace: Optional[str] = None
    reset_page: bool = True
    default_value: Any = None

    @abstractmethod
    def get_id(self, props: Props) -> str:
        """Key of the widget value inside its location."""

    def widget_id(self, props: Props) -> str:
        """Full id including the namespace, as understood by the reader."""
        if self.namespace:
            return f"{self.namespace}{NAMESPACE_SEPARATOR}{self.get_id(props)}"
        return self.get_id(props)

    def get_current_refinement(self, props: Props, state, context: Optional[SearchContext] = None) -> Any:
        return get_current_refinement_value(props, state, context, self.widget_id(props), self.default_value)

    def refine(self, props: Props, state, value: Any, context: Optional[SearchContext] = None):
        return refine_value(state, {self.get_id(props): value}, context, self.reset_page, self.namespace)

    def clean_up(self, props: Props, state, context: Optional[SearchContext] = None):
        return clean_up_value(state, context, self.widget_id(props))


class SearchBoxConnector(Connector):
    """Free-text query. A new query restarts pagination."""

    default_value = ""

    def get_id(self, props: Props) -> str:
        return "query"


class PaginationConnector(Connector):
    """Current page number. Changing page must not reset it."""

    reset_page = False
    default_value = FIRST_PAGE

    def get_id(self, props: Props) -> str:
        return PAGE_KEY

    def get_current_refinement(self, props: Props, state, context: Optional[SearchContext] = None) -> int:
        return int(super().get_current_refinement(props, state, context))

    def refine(self, props: Props, state, value: Any, context: Optional[SearchContext] = None):
        return super().refine(props, state, int(value), context)


class RangeConnector(Connector):
    """Numeric range ``{"min": ..., "max": ...}`` stored under ``range.<attribute>``."""

    namespace = "range"

    def get_id(self, props: Props) -> str:
        attribute = props.get("attribute")
        if not attribute:
            raise ValueError("The `attribute` prop is required.")
        return attribute

    def get_current_refinement(self, props: Props, state, context: Optional[SearchContext] = None) -> dict:
        current = super().get_current_refinement(props, state, context) or {}
        return {"min": current.get("min"), "max": current.get("max")}

    def refine(self, props: Props, state, value: Mapping[str, Any], context: Optional[SearchContext] = None):
        lower, upper = value.get("min"), value.get("max")
        if lower is not None and upper is not None and lower > upper:
            raise ValueError(f"Invalid range for {self.get_id(props)!r}: min {lower} is greater than max {upper}")
        return super().refine(props, state, {"min": lower, "max": upper}, context)


class RatingMenuConnector(RangeConnector):
    """Minimum rating filter on top of a range.

    Selecting a rating keeps items rated between it and ``props["max"]``
    (5 by default). Selecting the current rating again clears the filter.
    """

    DEFAULT_MAX_RATING = 5

    def max_rating(self, props: Props) -> int:
        return int(props.get("max", self.DEFAULT_MAX_RATING))

    def refine(self, props: Props, state, value: Any, context: Optional[SearchContext] = None):
        rating = int(value)
        max_rating = self.max_rating(props)
        if not 0 <= rating <= max_rating:
            raise ValueError(f"Rating {rating} is outside 0..{max_rating}")

        if self.get_current_refinement(props, state, context)["min"] == rating:
            logger.debug(f"Toggling off rating {rating} for {self.get_id(props)!r}")
            # Stored empty range, so a default_refinement does not come back
            return super().refine(props, state, {"min": None, "max": None}, context)

        return super().refine(props, state, {"min": rating, "max": max_rating}, context)
