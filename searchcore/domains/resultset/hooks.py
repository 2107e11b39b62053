"""
Search Hooks - Ordered before/after search processors and query modifiers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from searchcore.config import ModifierContractViolationError

from .contracts import (
    QueryModifier,
    SearchAware,
    SearchRequestAware,
    SearchResultSetProcessor,
)
from .models import SearchRequest, SearchResultSet

if TYPE_CHECKING:
    from searchcore.domains.query import Query

    from .contracts import Transport

logger = logging.getLogger(__name__)

__all__ = ["HookRegistry"]


class HookRegistry:
    """
    Hooks injected into the result set service.

    Example:
        >>> hooks = HookRegistry()
        >>> hooks.add_after_search(MyProcessor())
        >>> service = SearchResultSetService(settings, transport, hooks=hooks)
    """

    def __init__(
        self,
        before_search: list[Any] | None = None,
        after_search: list[Any] | None = None,
        query_modifiers: list[Any] | None = None,
    ) -> None:
        self.before_search: list[Any] = list(before_search or [])
        self.after_search: list[Any] = list(after_search or [])
        self.query_modifiers: list[Any] = list(query_modifiers or [])

    def add_before_search(self, processor: SearchResultSetProcessor) -> None:
        self.before_search.append(processor)

    def add_after_search(self, processor: SearchResultSetProcessor) -> None:
        self.after_search.append(processor)

    def add_query_modifier(self, modifier: QueryModifier) -> None:
        self.query_modifiers.append(modifier)

    def run_before_search(self, result_set: SearchResultSet) -> SearchResultSet:
        return self._run_processors("before_search", self.before_search, result_set)

    def run_after_search(self, result_set: SearchResultSet) -> SearchResultSet:
        return self._run_processors("after_search", self.after_search, result_set)

    def modify_query(
        self,
        query: Query,
        search_request: SearchRequest,
        search: Transport,
    ) -> Query:
        """
        Pass the query through every modifier, in registration order.

        Raises:
            ModifierContractViolationError: a modifier lacks modify_query()
        """
        for modifier in self.query_modifiers:
            if not isinstance(modifier, QueryModifier):
                raise ModifierContractViolationError(
                    f"{type(modifier).__name__} must implement modify_query()",
                    {"modifier": type(modifier).__name__},
                )

            if isinstance(modifier, SearchAware):
                modifier.set_search(search)

            if isinstance(modifier, SearchRequestAware):
                modifier.set_search_request(search_request)

            query = modifier.modify_query(query)

        return query

    @staticmethod
    def _run_processors(
        event: str,
        processors: list[Any],
        result_set: SearchResultSet,
    ) -> SearchResultSet:
        for processor in processors:
            if not isinstance(processor, SearchResultSetProcessor):
                logger.warning(
                    "Skipping %s hook %s: no process() method",
                    event,
                    type(processor).__name__,
                )
                continue
            processed = processor.process(result_set)
            if processed is not None:
                result_set = processed
        return result_set
