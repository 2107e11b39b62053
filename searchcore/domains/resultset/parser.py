"""
Result Parser - Turns engine documents into search results.

Features:
- Priority ordered parser registry
- Default document parser with optional raw mode
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from searchcore.config import DocumentNotFoundError

from .contracts import ResultParser
from .models import SearchResult, SearchResultSet

logger = logging.getLogger(__name__)

__all__ = ["SearchResultBuilder", "DocumentParser", "ResultParserRegistry"]

PROMOTED_FIELDS = ("id", "type", "title", "url", "score", "content")


class SearchResultBuilder:
    """Builds SearchResult objects from raw documents."""

    def from_document(self, document: Any, use_raw_document: bool = False) -> SearchResult:
        """
        Build a search result.

        Args:
            document: Raw engine document
            use_raw_document: Keep every field of the document in ``fields``

        Returns:
            The search result

        Raises:
            DocumentNotFoundError: document is not a mapping
        """
        if not isinstance(document, Mapping):
            raise DocumentNotFoundError(
                "Response did not contain a valid document",
                {"document_type": type(document).__name__},
            )

        if use_raw_document:
            fields = dict(document)
        else:
            fields = {k: v for k, v in document.items() if k not in PROMOTED_FIELDS}

        return SearchResult(
            result_id=str(document.get("id", "")),
            result_type=str(document.get("type", "")),
            title=str(document.get("title", "")),
            url=str(document.get("url", "")),
            score=float(document.get("score") or 0.0),
            content=str(document.get("content", "")),
            fields=fields,
        )

    def from_documents(
        self,
        documents: Iterable[Any],
        use_raw_documents: bool = False,
    ) -> list[SearchResult]:
        """Build search results, skipping documents that are not mappings."""
        results = []
        for document in documents:
            if not isinstance(document, Mapping):
                logger.warning("Skipping malformed document of type %s", type(document).__name__)
                continue
            results.append(self.from_document(document, use_raw_documents))
        return results


class DocumentParser:
    """Default parser, one search result per response document."""

    def __init__(self, builder: SearchResultBuilder | None = None) -> None:
        self._builder = builder or SearchResultBuilder()

    def can_parse(self, result_set: SearchResultSet) -> bool:
        return result_set.response is not None

    def parse(self, result_set: SearchResultSet, use_raw_documents: bool) -> None:
        response = result_set.response
        if response is None:
            return

        result_set.search_results = self._builder.from_documents(response.docs, use_raw_documents)
        result_set.all_result_count = response.num_found


class ResultParserRegistry:
    """
    Selects the parser for a result set.

    Higher priority wins; the default document parser is registered at 0.
    """

    def __init__(self, builder: SearchResultBuilder | None = None) -> None:
        self._parsers: list[tuple[int, ResultParser]] = []
        self._default = DocumentParser(builder)
        self.register(self._default, priority=0)

    def register(self, parser: ResultParser, priority: int) -> None:
        self._parsers.append((priority, parser))
        self._parsers.sort(key=lambda item: item[0], reverse=True)

    def get_parser(self, result_set: SearchResultSet) -> ResultParser:
        for _, parser in self._parsers:
            if parser.can_parse(result_set):
                return parser
        logger.debug("No parser accepted the result set, using the default")
        return self._default
