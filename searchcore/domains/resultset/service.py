"""
Search Result Set Service - Turns a search request into a search result set.

Pipeline:
    result set -> before hooks -> query -> components -> query modifiers
    -> dispatch -> parse -> variants -> reconstitution -> auto correction
    -> after hooks

One service instance keeps exactly one "last result set", so scope an
instance per request or session when serving concurrent users.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from searchcore.config import (
    DocumentNotFoundError,
    SearchSettings,
    TransportIncompleteError,
)
from searchcore.domains.query import Query, QueryBuilder, QueryFields

from .autocorrect import AutoCorrector
from .components import (
    DebugComponent,
    FacetingComponent,
    SearchComponentManager,
    SpellcheckingComponent,
    initialize_search_components,
)
from .contracts import ComponentRegistry, Transport
from .hooks import HookRegistry
from .models import SearchRequest, SearchResult, SearchResultSet
from .parser import ResultParserRegistry, SearchResultBuilder
from .reconstitution import ResultSetReconstitutionProcessor
from .variants import VariantsProcessor

if TYPE_CHECKING:
    from searchcore.adapters.solr import ResponseAdapter

logger = logging.getLogger(__name__)

__all__ = ["SearchResultSetService", "default_search_components"]


def default_search_components() -> SearchComponentManager:
    """Component manager with the built-in components registered."""
    manager = SearchComponentManager()
    manager.register("spellchecking", SpellcheckingComponent())
    manager.register("faceting", FacetingComponent())
    manager.register("debug", DebugComponent())
    return manager


class SearchResultSetService:
    """
    Builds search result sets from search requests.

    Example:
        >>> service = SearchResultSetService(get_settings(), transport)
        >>> result_set = service.search(SearchRequest(raw_query="elevator"))
        >>> result_set.all_result_count
        12
    """

    def __init__(
        self,
        settings: SearchSettings,
        transport: Transport,
        hooks: HookRegistry | None = None,
        components: ComponentRegistry | None = None,
        query_builder: QueryBuilder | None = None,
        result_builder: SearchResultBuilder | None = None,
        parser_registry: ResultParserRegistry | None = None,
        result_set_factory: Callable[[], SearchResultSet] = SearchResultSet,
    ) -> None:
        """
        Initialize the service.

        Args:
            settings: Search settings
            transport: Connection to the search engine
            hooks: Before/after search hooks and query modifiers
            components: Component registry, built-in components by default
            query_builder: Query builder, default builder for ``settings``
            result_builder: Builds search results from documents
            parser_registry: Selects the result parser
            result_set_factory: Creates empty result sets
        """
        self._settings = settings
        self._transport = transport
        self._hooks = hooks or HookRegistry()
        self._components = components or default_search_components()
        self._query_builder = query_builder or QueryBuilder(settings)
        self._result_builder = result_builder or SearchResultBuilder()
        self._parser_registry = parser_registry or ResultParserRegistry(self._result_builder)
        self._result_set_factory = result_set_factory
        self._variants = VariantsProcessor(settings, self._result_builder)
        self._reconstitution = ResultSetReconstitutionProcessor(settings)
        self._auto_corrector = AutoCorrector(settings)
        self._last_result_set: SearchResultSet | None = None
        self._is_search_available: bool | None = None

    def get_search(self) -> Transport:
        """Transport used by this service."""
        return self._transport

    def is_search_available(self, use_cache: bool = True) -> bool:
        """Ping the engine once and remember the answer."""
        if self._is_search_available is None:
            self._is_search_available = self._transport.ping(use_cache)
        return self._is_search_available

    def search(self, search_request: SearchRequest) -> SearchResultSet:
        """
        Perform a search.

        Args:
            search_request: The user's search request

        Returns:
            The result set, possibly from an auto corrected search

        Raises:
            TransportIncompleteError: the engine reply was incomplete
            ModifierContractViolationError: a query modifier is misconfigured
            InvalidFacetConfigurationError: a facet is misconfigured
        """
        return self._run(search_request)

    def _run(
        self,
        search_request: SearchRequest,
        correction_run: bool = False,
    ) -> SearchResultSet:
        result_set = self._get_initialized_search_result_set(search_request)
        self._last_result_set = result_set

        result_set = self._hooks.run_before_search(result_set)
        if self._should_return_empty_result_set_without_executed_search(search_request):
            result_set.has_searched = False
            self._last_result_set = result_set
            logger.debug("Search skipped for query %r", search_request.raw_query)
            return result_set

        query = self._query_builder.build_search_query(
            search_request.raw_query,
            search_request.results_per_page,
            search_request.additional_filters,
        )
        initialize_search_components(
            self._components,
            self._settings.search_configuration(),
            query,
            search_request,
            self._transport,
        )

        query = self._hooks.modify_query(query, search_request, self._transport)
        result_set.used_query = query
        response = self._do_a_search(query, search_request)

        if search_request.results_per_page == 0:
            # Page size 0 hides results, e.g. those of an initial search
            response.num_found = 0

        result_set.has_searched = True
        result_set.response = response
        self._parse_search_results(result_set)
        result_set.used_additional_filters = self._query_builder.get_additional_filters()

        self._variants.process(result_set)
        self._reconstitution.process(result_set)

        if correction_run:
            # The outer run corrects and applies the after hooks
            return result_set

        final_result_set = self._auto_corrector.correct(
            result_set,
            lambda request: self._run(request, correction_run=True),
        )
        final_result_set = self._hooks.run_after_search(final_result_set)

        self._last_result_set = final_result_set
        logger.info(
            "Search: query='%s' page=%d -> %d results (auto corrected=%s)",
            (search_request.raw_query or "")[:50],
            search_request.page,
            final_result_set.all_result_count,
            final_result_set.is_auto_corrected,
        )
        return final_result_set

    def _get_initialized_search_result_set(self, search_request: SearchRequest) -> SearchResultSet:
        result_set = self._result_set_factory()
        result_set.used_search_request = search_request
        result_set.used_page = search_request.page
        result_set.used_results_per_page = search_request.results_per_page
        result_set.used_search = self._transport
        return result_set

    def _should_return_empty_result_set_without_executed_search(
        self,
        search_request: SearchRequest,
    ) -> bool:
        if search_request.raw_query_is_null and not self._settings.initial_search_is_configured:
            return True

        if search_request.raw_query_is_empty_string and not self._settings.allow_empty_query:
            return True

        return False

    def _do_a_search(self, query: Query, search_request: SearchRequest) -> ResponseAdapter:
        offset = max(0, search_request.page - 1) * search_request.results_per_page
        response = self._transport.dispatch(query, offset)
        if response is None:
            raise TransportIncompleteError(
                "The response retrieved from the search engine was incomplete",
                {"query": query.get_query(), "offset": offset},
            )
        return response

    def _parse_search_results(self, result_set: SearchResultSet) -> None:
        parser = self._parser_registry.get_parser(result_set)
        parser.parse(result_set, self._settings.use_raw_documents)

    def get_document_by_id(self, document_id: str) -> SearchResult:
        """
        Retrieve a single document by id.

        Raises:
            DocumentNotFoundError: no document, or a malformed one
            TransportIncompleteError: the engine reply was incomplete
        """
        query = (
            self._query_builder.new_search_query(document_id)
            .use_query_fields(QueryFields.from_string("id"))
            .get_query()
        )
        response = self._transport.dispatch(query, 0, 1)
        if response is None:
            raise TransportIncompleteError(
                "The response retrieved from the search engine was incomplete",
                {"document_id": document_id},
            )

        document = response.docs[0] if response.docs else None
        if not isinstance(document, Mapping) or "id" not in document:
            raise DocumentNotFoundError(
                "Response did not contain a valid document",
                {"document_id": document_id},
            )

        return self._result_builder.from_document(document, self._settings.use_raw_documents)

    def get_last_result_set(self) -> SearchResultSet | None:
        return self._last_result_set

    def get_last_search_was_executed_with_empty_query_string(self) -> bool:
        """
        True when the last search ran with an empty or whitespace-only query.

        False when no search was triggered yet.
        """
        if self._last_result_set is None or self._last_result_set.used_search_request is None:
            return False
        return self._last_result_set.used_search_request.raw_query_is_empty_string
