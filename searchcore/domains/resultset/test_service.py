"""
Tests for the search result set service.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from searchcore.adapters.solr import ResponseAdapter
from searchcore.config import (
    DocumentNotFoundError,
    ModifierContractViolationError,
    SearchSettings,
    TransportIncompleteError,
)
from searchcore.domains.query import Query

from .components import BaseSearchComponent, SearchComponentManager
from .hooks import HookRegistry
from .models import SearchRequest, SearchResultSet
from .service import SearchResultSetService


def solr_reply(num_found: int, docs: list[dict[str, Any]], **extra: Any) -> ResponseAdapter:
    """Build a response adapter from a Solr-shaped reply."""
    return ResponseAdapter.from_dict({"response": {"numFound": num_found, "docs": docs}, **extra})


DOCS = [
    {"id": "1", "type": "pages", "title": "Welcome"},
    {"id": "2", "type": "pages", "title": "Contact"},
    {"id": "3", "type": "news", "title": "Release notes"},
]


@pytest.fixture
def settings() -> SearchSettings:
    return SearchSettings(return_fields=["*"])


@pytest.fixture
def transport() -> MagicMock:
    transport = MagicMock()
    transport.dispatch.return_value = solr_reply(3, DOCS)
    return transport


def make_service(
    settings: SearchSettings,
    transport: MagicMock,
    **kwargs: Any,
) -> SearchResultSetService:
    kwargs.setdefault("components", SearchComponentManager())
    return SearchResultSetService(settings, transport, **kwargs)


class RecordingComponent(BaseSearchComponent):
    """Query and request aware component recording its calls."""

    def __init__(self, calls: list[str]) -> None:
        super().__init__()
        self.calls = calls
        self.search_request: SearchRequest | None = None
        self.initialized = 0

    def set_query(self, query: Query) -> None:
        super().set_query(query)
        self.calls.append("query")

    def set_search_request(self, search_request: SearchRequest) -> None:
        self.search_request = search_request
        self.calls.append("request")

    def initialize_search_component(self) -> None:
        self.initialized += 1
        self.calls.append("initialize")


class UppercaseTypeProcessor:
    """After search hook rewriting result types."""

    def process(self, result_set: SearchResultSet) -> SearchResultSet:
        for result in result_set.search_results:
            result.type = result.type.upper()
        return result_set


class CorrectionRecorder:
    """After search hook recording what a "showing results for" notice would show."""

    def __init__(self) -> None:
        self.seen: list[tuple[str | None, bool, str, str]] = []

    def process(self, result_set: SearchResultSet) -> None:
        self.seen.append(
            (
                result_set.used_search_request.raw_query,
                result_set.is_auto_corrected,
                result_set.initial_query_string,
                result_set.corrected_query_string,
            )
        )


class AppendFilterModifier:
    def __init__(self, expression: str) -> None:
        self.expression = expression
        self.search_request: SearchRequest | None = None

    def set_search_request(self, search_request: SearchRequest) -> None:
        self.search_request = search_request

    def modify_query(self, query: Query) -> Query:
        return query.add_filter(self.expression)


# --- search() ---


def test_search_is_fired_with_initialized_query(settings, transport) -> None:
    """Test the query string reaches the transport and the response is attached."""
    service = make_service(settings, transport)

    result_set = service.search(SearchRequest(raw_query="my search", results_per_page=10))

    query, offset = transport.dispatch.call_args.args
    assert query.get_query() == "my search"
    assert offset == 0
    assert result_set.response is transport.dispatch.return_value
    assert result_set.has_searched is True
    assert result_set.all_result_count == 3
    assert [r.id for r in result_set.search_results] == ["1", "2", "3"]


def test_offset_is_computed_from_page(settings, transport) -> None:
    """Test page 3 with 25 results per page starts at row 50."""
    service = make_service(settings, transport)

    service.search(SearchRequest(raw_query="my 2. search", page=3, results_per_page=25))

    _, offset = transport.dispatch.call_args.args
    assert offset == 50


def test_offset_never_negative_for_page_zero(settings, transport) -> None:
    service = make_service(settings, transport)

    service.search(SearchRequest(raw_query="test", page=0, results_per_page=25))

    _, offset = transport.dispatch.call_args.args
    assert offset == 0


@pytest.mark.parametrize("raw_query", ["", "   "])
def test_empty_query_is_not_searched_when_disallowed(settings, transport, raw_query) -> None:
    """Test blank queries short-circuit without contacting the engine."""
    service = make_service(settings, transport)

    result_set = service.search(SearchRequest(raw_query=raw_query))

    transport.dispatch.assert_not_called()
    assert result_set.has_searched is False
    assert result_set.search_results == []
    assert service.get_last_result_set() is result_set


def test_empty_query_is_searched_when_allowed(transport) -> None:
    service = make_service(SearchSettings(allow_empty_query=True), transport)

    result_set = service.search(SearchRequest(raw_query=""))

    transport.dispatch.assert_called_once()
    assert result_set.has_searched is True


def test_missing_query_without_initial_search_is_not_searched(settings, transport) -> None:
    service = make_service(settings, transport)

    result_set = service.search(SearchRequest(raw_query=None))

    transport.dispatch.assert_not_called()
    assert result_set.has_searched is False


def test_missing_query_with_initial_search_is_searched(transport) -> None:
    """Test the initial query replaces a missing user query."""
    service = make_service(SearchSettings(initialize_with_query="welcome"), transport)

    result_set = service.search(SearchRequest(raw_query=None))

    query, _ = transport.dispatch.call_args.args
    assert query.get_query() == "welcome"
    assert result_set.has_searched is True


def test_results_per_page_zero_forces_zero_count(transport) -> None:
    """Test page size 0 suppresses the count but still counts as searched."""
    service = make_service(SearchSettings(initialize_with_empty_query=True), transport)

    result_set = service.search(SearchRequest(raw_query=None, results_per_page=0))

    assert result_set.has_searched is True
    assert result_set.all_result_count == 0
    assert result_set.response.num_found == 0


def test_incomplete_response_raises(settings, transport) -> None:
    transport.dispatch.return_value = None
    service = make_service(settings, transport)

    with pytest.raises(TransportIncompleteError):
        service.search(SearchRequest(raw_query="test"))


def test_additional_filters_are_passed_to_the_query(transport) -> None:
    """Test configured and request filters end up on the query."""
    service = make_service(SearchSettings(filters=["type:pages"]), transport)

    result_set = service.search(
        SearchRequest(raw_query="test", additional_filters={"lang": "language:en"})
    )

    assert result_set.used_query.get_filters() == ["type:pages", "language:en"]
    assert result_set.used_additional_filters == ["type:pages", "language:en"]


# --- Components ---


def test_components_are_initialized_in_order(settings, transport) -> None:
    """Test every component gets query, request and initialization, in order."""
    calls: list[str] = []
    first = RecordingComponent(calls)
    second = RecordingComponent(calls)
    components = SearchComponentManager()
    components.register("first", first)
    components.register("second", second)
    service = make_service(settings, transport, components=components)
    request = SearchRequest(raw_query="my 3. search")

    service.search(request)

    assert calls == ["query", "request", "initialize"] * 2
    assert first.search_request is request
    assert first.query is transport.dispatch.call_args.args[0]
    assert first.configuration["return_fields"] == ["*"]


def test_component_state_survives_searches(settings, transport) -> None:
    component = RecordingComponent([])
    components = SearchComponentManager()
    components.register("recording", component)
    service = make_service(settings, transport, components=components)

    service.search(SearchRequest(raw_query="one"))
    service.search(SearchRequest(raw_query="two"))

    assert component.initialized == 2


# --- Hooks ---


def test_after_search_processor_modifies_results(settings, transport) -> None:
    hooks = HookRegistry(after_search=[UppercaseTypeProcessor()])
    service = make_service(settings, transport, hooks=hooks)

    result_set = service.search(SearchRequest(raw_query="my 4. search"))

    assert len(result_set.search_results) == 3
    assert result_set.search_results[0].type == "PAGES"


def test_before_search_runs_even_when_search_is_skipped(settings, transport) -> None:
    processor = MagicMock()
    processor.process.return_value = None
    hooks = HookRegistry(before_search=[processor])
    service = make_service(settings, transport, hooks=hooks)

    result_set = service.search(SearchRequest(raw_query=""))

    processor.process.assert_called_once_with(result_set)


def test_before_search_hook_can_replace_result_set(settings, transport) -> None:
    replacement = SearchResultSet()
    processor = MagicMock()
    processor.process.return_value = replacement
    service = make_service(settings, transport, hooks=HookRegistry(before_search=[processor]))

    result_set = service.search(SearchRequest(raw_query=None))

    assert result_set is replacement
    assert service.get_last_result_set() is replacement


def test_query_modifiers_are_chained(settings, transport) -> None:
    first = AppendFilterModifier("a:1")
    second = AppendFilterModifier("b:2")
    service = make_service(settings, transport, hooks=HookRegistry(query_modifiers=[first, second]))
    request = SearchRequest(raw_query="test")

    result_set = service.search(request)

    query, _ = transport.dispatch.call_args.args
    assert query.get_filters()[-2:] == ["a:1", "b:2"]
    assert result_set.used_query is query
    assert first.search_request is request


def test_non_conforming_query_modifier_raises(settings, transport) -> None:
    service = make_service(settings, transport, hooks=HookRegistry(query_modifiers=[object()]))

    with pytest.raises(ModifierContractViolationError):
        service.search(SearchRequest(raw_query="test"))

    transport.dispatch.assert_not_called()


# --- Variants ---


def test_expanded_documents_are_added_when_variants_are_configured(transport) -> None:
    settings = SearchSettings(variants_enabled=True, variants_field="type")
    transport.dispatch.return_value = solr_reply(
        1,
        [{"id": "p1", "type": "pages", "title": "Parent"}],
        expanded={
            "pages": {
                "numFound": 5,
                "docs": [{"id": f"v{i}", "type": "pages"} for i in range(5)],
            }
        },
    )
    service = make_service(settings, transport)

    result_set = service.search(SearchRequest(raw_query="variantsSearch"))

    query, _ = transport.dispatch.call_args.args
    assert "{!collapse field=type}" in query.get_filters()
    assert len(result_set.search_results) == 1
    assert len(result_set.search_results[0].variants) == 5


# --- Auto correction ---


def test_auto_correction_retries_with_suggestion() -> None:
    settings = SearchSettings(
        spellchecking_search_using_suggestion=True,
        spellchecking_number_of_suggestions_to_try=2,
    )
    transport = MagicMock()
    transport.dispatch.side_effect = [
        solr_reply(0, [], spellcheck={"collations": ["collation", "typo3"]}),
        solr_reply(1, [{"id": "1", "title": "TYPO3"}]),
    ]
    after = CorrectionRecorder()
    service = make_service(settings, transport, hooks=HookRegistry(after_search=[after]))
    request = SearchRequest(raw_query="tpyo3")

    result_set = service.search(request)

    assert transport.dispatch.call_count == 2
    assert transport.dispatch.call_args_list[1].args[0].get_query() == "typo3"
    assert result_set.is_auto_corrected is True
    assert result_set.initial_query_string == "tpyo3"
    assert result_set.corrected_query_string == "typo3"
    assert result_set.used_search_request.raw_query == "typo3"
    assert request.raw_query == "tpyo3"
    assert service.get_last_result_set() is result_set
    assert after.seen == [("typo3", True, "tpyo3", "typo3")]


def test_auto_correction_is_skipped_when_disabled(settings) -> None:
    transport = MagicMock()
    transport.dispatch.return_value = solr_reply(
        0, [], spellcheck={"collations": ["collation", "typo3"]}
    )
    service = make_service(settings, transport)

    result_set = service.search(SearchRequest(raw_query="tpyo3"))

    transport.dispatch.assert_called_once()
    assert result_set.is_auto_corrected is False
    assert result_set.has_spell_checking_suggestions is True


def test_forced_zero_count_triggers_auto_correction() -> None:
    """Test a page size of 0 counts as zero hits for auto correction."""
    settings = SearchSettings(
        spellchecking_search_using_suggestion=True,
        spellchecking_number_of_suggestions_to_try=1,
    )
    transport = MagicMock()
    transport.dispatch.return_value = solr_reply(
        4, [], spellcheck={"collations": ["collation", "typo3"]}
    )
    service = make_service(settings, transport)

    result_set = service.search(SearchRequest(raw_query="tpyo3", results_per_page=0))

    assert transport.dispatch.call_count == 2
    assert result_set.all_result_count == 0
    assert result_set.is_auto_corrected is False


# --- get_document_by_id() ---


def test_get_document_by_id(settings, transport) -> None:
    transport.dispatch.return_value = solr_reply(1, [{"id": "X", "title": "Found"}])
    service = make_service(settings, transport)

    document = service.get_document_by_id("X")

    query, offset, limit = transport.dispatch.call_args.args
    assert query.get_query() == "X"
    assert query.query_fields.to_string() == "id"
    assert (offset, limit) == (0, 1)
    assert document.id == "X"
    assert document.title == "Found"


@pytest.mark.parametrize("docs", [[], ["not a document"], [{"title": "no id"}]])
def test_get_document_by_id_raises_when_missing(settings, transport, docs) -> None:
    transport.dispatch.return_value = solr_reply(len(docs), docs)
    service = make_service(settings, transport)

    with pytest.raises(DocumentNotFoundError):
        service.get_document_by_id("X")


def test_get_document_by_id_raises_on_incomplete_response(settings, transport) -> None:
    """Test a missing reply is a transport failure, not a missing document."""
    transport.dispatch.return_value = None
    service = make_service(settings, transport)

    with pytest.raises(TransportIncompleteError):
        service.get_document_by_id("X")


# --- Last result set ---


def test_last_result_set_is_from_latest_search(settings, transport) -> None:
    service = make_service(settings, transport)

    service.search(SearchRequest(raw_query="first"))
    second = service.search(SearchRequest(raw_query="second"))

    assert service.get_last_result_set() is second


def test_last_search_was_executed_with_empty_query_string(transport) -> None:
    service = make_service(SearchSettings(allow_empty_query=True), transport)
    assert service.get_last_search_was_executed_with_empty_query_string() is False

    service.search(SearchRequest(raw_query="  "))
    assert service.get_last_search_was_executed_with_empty_query_string() is True

    service.search(SearchRequest(raw_query="test"))
    assert service.get_last_search_was_executed_with_empty_query_string() is False


def test_is_search_available_is_cached(settings, transport) -> None:
    transport.ping.return_value = True
    service = make_service(settings, transport)

    assert service.is_search_available() is True
    assert service.is_search_available() is True
    transport.ping.assert_called_once_with(True)


def test_default_components_request_spellchecking(transport) -> None:
    service = SearchResultSetService(SearchSettings(spellchecking_enabled=True), transport)

    service.search(SearchRequest(raw_query="test"))

    query, _ = transport.dispatch.call_args.args
    assert query.get_param("spellcheck") == "true"
