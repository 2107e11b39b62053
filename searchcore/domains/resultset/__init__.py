"""
Result Set Domain - Query execution and result assembly.

This domain handles:
- Search orchestration (SearchResultSetService)
- Result parsing
- Variant expansion
- Search components and hooks
- Spell checker auto correction
"""

from .autocorrect import AutoCorrector
from .components import (
    BaseSearchComponent,
    DebugComponent,
    FacetingComponent,
    SearchComponentManager,
    SpellcheckingComponent,
    initialize_search_components,
)
from .contracts import (
    ComponentRegistry,
    QueryAware,
    QueryModifier,
    ResultParser,
    SearchAware,
    SearchComponent,
    SearchRequestAware,
    SearchResultSetProcessor,
    Transport,
)
from .hooks import HookRegistry
from .models import (
    Facet,
    FacetOption,
    FacetType,
    SearchRequest,
    SearchResult,
    SearchResultSet,
    SpellingSuggestion,
)
from .parser import DocumentParser, ResultParserRegistry, SearchResultBuilder
from .reconstitution import ResultSetReconstitutionProcessor
from .service import SearchResultSetService, default_search_components
from .variants import VariantsProcessor

__all__ = [
    # Contracts
    "Transport",
    "SearchComponent",
    "QueryAware",
    "SearchRequestAware",
    "SearchAware",
    "ComponentRegistry",
    "QueryModifier",
    "SearchResultSetProcessor",
    "ResultParser",
    # Models
    "SearchRequest",
    "SearchResult",
    "SearchResultSet",
    "SpellingSuggestion",
    "Facet",
    "FacetOption",
    "FacetType",
    # Implementations
    "SearchResultSetService",
    "default_search_components",
    "SearchResultBuilder",
    "DocumentParser",
    "ResultParserRegistry",
    "VariantsProcessor",
    "ResultSetReconstitutionProcessor",
    "SearchComponentManager",
    "initialize_search_components",
    "BaseSearchComponent",
    "SpellcheckingComponent",
    "FacetingComponent",
    "DebugComponent",
    "HookRegistry",
    "AutoCorrector",
]
