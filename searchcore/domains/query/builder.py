"""
Query Builder - Builds search queries from requests and settings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from searchcore.config import SearchSettings

from .models import Query, QueryFields

logger = logging.getLogger(__name__)

__all__ = ["QueryBuilder"]

ALL_DOCUMENTS = "*:*"


class QueryBuilder:
    """
    Fluent builder for search queries.

    Example:
        >>> builder = QueryBuilder(settings)
        >>> query = builder.new_search_query("42").use_query_fields(
        ...     QueryFields.from_string("id")
        ... ).get_query()
    """

    def __init__(self, settings: SearchSettings) -> None:
        self._settings = settings
        self._query = Query()
        self._additional_filters: list[str] = []

    def new_search_query(self, query_string: str) -> QueryBuilder:
        """Start a fresh query for the given text."""
        self._query = Query(query_string=query_string)
        return self

    def get_query(self) -> Query:
        return self._query

    def use_query_fields(self, query_fields: QueryFields) -> QueryBuilder:
        self._query.query_fields = query_fields
        return self

    def use_return_fields(self, fields: list[str]) -> QueryBuilder:
        for field in fields:
            self._query.add_return_field(field)
        return self

    def use_results_per_page(self, rows: int) -> QueryBuilder:
        self._query.rows = max(0, rows)
        return self

    def use_filter(self, expression: str) -> QueryBuilder:
        self._query.add_filter(expression)
        return self

    def use_collapsing(self, field: str, expand_limit: int) -> QueryBuilder:
        """Collapse on ``field`` and expand up to ``expand_limit`` group members."""
        self._query.add_filter(f"{{!collapse field={field}}}")
        self._query.set_param("expand", "true")
        self._query.set_param("expand.rows", expand_limit)
        return self

    def get_additional_filters(self) -> list[str]:
        """Filters applied by the last build_search_query() call."""
        return list(self._additional_filters)

    def build_search_query(
        self,
        raw_query: str | None,
        results_per_page: int,
        additional_filters: Mapping[str, str] | None = None,
    ) -> Query:
        """
        Build the query for a search request.

        Args:
            raw_query: User query text, may be None or blank
            results_per_page: Rows to fetch
            additional_filters: Request filters, name -> filter expression

        Returns:
            The built query
        """
        settings = self._settings
        self.new_search_query(self._initial_query_string(raw_query))
        self.use_results_per_page(results_per_page)
        self.use_return_fields(settings.return_fields)
        self.use_query_fields(QueryFields.from_string(settings.query_fields))

        self._additional_filters = []
        for expression in settings.filters:
            self._apply_additional_filter(expression)
        for expression in (additional_filters or {}).values():
            self._apply_additional_filter(expression)

        if settings.variants_enabled:
            self.use_collapsing(settings.variants_field, settings.variants_expand_limit)

        logger.debug(
            "Built query '%s' (rows=%d, filters=%d)",
            self._query.query_string[:50],
            results_per_page,
            len(self._query.filters),
        )
        return self._query

    def _initial_query_string(self, raw_query: str | None) -> str:
        if raw_query is not None and raw_query.strip():
            return raw_query
        if self._settings.initialize_with_query:
            return self._settings.initialize_with_query
        return ALL_DOCUMENTS

    def _apply_additional_filter(self, expression: str) -> None:
        if not expression or expression in self._additional_filters:
            return
        self._additional_filters.append(expression)
        self._query.add_filter(expression)
