# src/qs_filter/base/interfaces.py

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from qs_filter.base.predicates import FilterSpecification

# Type variable for the backend-native query structure
Q = TypeVar("Q")


class FilterAdapter(Generic[Q], ABC):
    """
    Base interface for persistence adapters.

    An adapter knows how to express the closed set of comparison kinds in its
    backend's native filter syntax. The translation core never calls an
    adapter; callers hand a parsed ``FilterSpecification`` to one.
    """

    @abstractmethod
    def translate(self, spec: FilterSpecification) -> Q:
        """
        Translate a filter specification into a backend-native query.

        Args:
            spec: The parsed specification.

        Returns:
            The backend-specific query structure.
        """
        pass
