"""
Search Components - Pluggable units initialized before every dispatch.

This module handles:
- Component registration (ordered, by name)
- Injection of configuration, query, request and transport
- Built-in spellchecking, faceting and debug components
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .contracts import (
    ComponentRegistry,
    QueryAware,
    SearchAware,
    SearchComponent,
    SearchRequestAware,
)
from .models import FacetType, SearchRequest
from .reconstitution import active_facet_values

if TYPE_CHECKING:
    from searchcore.domains.query import Query

    from .contracts import Transport

logger = logging.getLogger(__name__)

__all__ = [
    "SearchComponentManager",
    "initialize_search_components",
    "BaseSearchComponent",
    "SpellcheckingComponent",
    "FacetingComponent",
    "DebugComponent",
]


class SearchComponentManager:
    """Ordered registry of search components."""

    def __init__(self) -> None:
        self._components: dict[str, SearchComponent] = {}

    def register(self, name: str, component: SearchComponent) -> None:
        """Register a component; re-registering a name replaces it in place."""
        if not isinstance(component, SearchComponent):
            raise TypeError(f"{type(component).__name__} is not a search component")
        self._components[name] = component

    def unregister(self, name: str) -> None:
        self._components.pop(name, None)

    def get_search_component(self, name: str) -> SearchComponent | None:
        return self._components.get(name)

    def get_search_components(self) -> Sequence[SearchComponent]:
        return list(self._components.values())


def initialize_search_components(
    registry: ComponentRegistry,
    configuration: dict[str, Any],
    query: Query,
    search_request: SearchRequest,
    search: Transport | None = None,
) -> None:
    """
    Wire the current search context into every registered component.

    Args:
        registry: Source of components, iterated in registration order
        configuration: Search configuration handed to every component
        query: Query about to be dispatched
        search_request: Request being served
        search: Transport used for the search
    """
    for component in registry.get_search_components():
        component.set_search_configuration(configuration)

        if isinstance(component, QueryAware):
            component.set_query(query)

        if isinstance(component, SearchRequestAware):
            component.set_search_request(search_request)

        if isinstance(component, SearchAware) and search is not None:
            component.set_search(search)

        component.initialize_search_component()
        logger.debug("Initialized search component %s", type(component).__name__)


class BaseSearchComponent:
    """
    Common base holding the injected configuration and query.

    Subclasses provide ``initialize_search_component`` to become a SearchComponent.
    """

    def __init__(self) -> None:
        self.configuration: dict[str, Any] = {}
        self.query: Query | None = None

    def set_search_configuration(self, configuration: dict[str, Any]) -> None:
        self.configuration = configuration

    def set_query(self, query: Query) -> None:
        self.query = query


class SpellcheckingComponent(BaseSearchComponent):
    """Asks the engine for spell checking collations."""

    def initialize_search_component(self) -> None:
        if self.query is None or not self.configuration.get("spellchecking_enabled"):
            return
        self.query.set_param("spellcheck", "true")
        self.query.set_param("spellcheck.collate", "true")
        self.query.set_param(
            "spellcheck.maxCollations",
            self.configuration.get("spellchecking_max_collations", 1),
        )


class FacetingComponent(BaseSearchComponent):
    """Requests facet counts and applies the facet values selected in the request."""

    def __init__(self) -> None:
        super().__init__()
        self.search_request: SearchRequest | None = None

    def set_search_request(self, search_request: SearchRequest) -> None:
        self.search_request = search_request

    def initialize_search_component(self) -> None:
        if self.query is None or not self.configuration.get("faceting_enabled"):
            return

        query = self.query
        query.set_param("facet", "true")
        query.set_param("facet.mincount", self.configuration.get("faceting_min_count", 1))
        query.set_param("facet.limit", self.configuration.get("faceting_limit", 100))

        facets: dict[str, dict[str, Any]] = self.configuration.get("facets", {})
        active = active_facet_values(self.search_request)
        for name, facet in facets.items():
            field = facet.get("field", "")
            if facet.get("type") == FacetType.QUERY_GROUP.value:
                queries: dict[str, str] = facet.get("queries", {})
                for facet_query in queries.values():
                    query.add_param_value("facet.query", f"{field}:{facet_query}")
                for value in active.get(name, []):
                    if value in queries:
                        query.add_filter(f"{field}:{queries[value]}")
            else:
                query.add_param_value("facet.field", field)
                for value in active.get(name, []):
                    query.add_filter(f'{field}:"{value}"')


class DebugComponent(BaseSearchComponent):
    """Enables engine debug output."""

    def initialize_search_component(self) -> None:
        if self.query is not None and self.configuration.get("debug_enabled"):
            self.query.set_param("debugQuery", "true")
