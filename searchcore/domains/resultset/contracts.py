"""
Result Set Contracts - Interfaces for the result set domain.

Capabilities of components and query modifiers are checked at runtime with
``isinstance`` against the protocols below.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .models import SearchRequest, SearchResultSet

if TYPE_CHECKING:
    from searchcore.adapters.solr import ResponseAdapter
    from searchcore.domains.query import Query


@runtime_checkable
class Transport(Protocol):
    """Contract for the connection to the search engine."""

    def dispatch(
        self,
        query: Query,
        offset: int = 0,
        limit: int | None = None,
    ) -> ResponseAdapter | None:
        """
        Send a query to the engine.

        Args:
            query: Query to execute
            offset: Zero-based start row
            limit: Row limit, None for the query's own rows

        Returns:
            Parsed reply, or None when the reply was incomplete
        """
        ...

    def ping(self, use_cache: bool = True) -> bool:
        """Check whether the engine is reachable."""
        ...


@runtime_checkable
class SearchComponent(Protocol):
    """Contract for pluggable search components."""

    def set_search_configuration(self, configuration: dict[str, Any]) -> None:
        ...

    def initialize_search_component(self) -> None:
        ...


@runtime_checkable
class QueryAware(Protocol):
    """Receives the query before dispatch."""

    def set_query(self, query: Query) -> None:
        ...


@runtime_checkable
class SearchRequestAware(Protocol):
    """Receives the current search request."""

    def set_search_request(self, search_request: SearchRequest) -> None:
        ...


@runtime_checkable
class SearchAware(Protocol):
    """Receives the transport used for the search."""

    def set_search(self, search: Transport) -> None:
        ...


@runtime_checkable
class ComponentRegistry(Protocol):
    """Contract for component discovery."""

    def get_search_components(self) -> Sequence[SearchComponent]:
        """Registered components in registration order."""
        ...


@runtime_checkable
class QueryModifier(Protocol):
    """Transforms the query right before dispatch."""

    def modify_query(self, query: Query) -> Query:
        ...


@runtime_checkable
class SearchResultSetProcessor(Protocol):
    """Before/after search hook."""

    def process(self, result_set: SearchResultSet) -> SearchResultSet | None:
        """Process the result set, in place or by returning a replacement."""
        ...


@runtime_checkable
class ResultParser(Protocol):
    """Turns response documents into search results."""

    def can_parse(self, result_set: SearchResultSet) -> bool:
        ...

    def parse(self, result_set: SearchResultSet, use_raw_documents: bool) -> None:
        """Fill ``result_set.search_results`` in place."""
        ...
