"""
Result Set Models - Data types for the result set domain.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from searchcore.adapters.solr import ResponseAdapter
    from searchcore.domains.query import Query

    from .contracts import Transport


class SearchRequest(BaseModel):
    """User search intent. ``raw_query=None`` means no query was given at all."""

    raw_query: str | None = None
    page: int = Field(default=1, ge=0)
    results_per_page: int = Field(default=10, ge=0)
    additional_filters: dict[str, str] = Field(default_factory=dict)
    arguments: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def raw_query_is_null(self) -> bool:
        return self.raw_query is None

    @property
    def raw_query_is_empty_string(self) -> bool:
        """True for ``""`` or whitespace only, false for None."""
        return self.raw_query is not None and self.raw_query.strip() == ""

    def with_raw_query(self, raw_query: str) -> SearchRequest:
        """Copy of this request with another query string."""
        return self.model_copy(update={"raw_query": raw_query})


class SpellingSuggestion(BaseModel):
    """Spell checker collation offered by the engine."""

    suggestion: str
    num_found: int = 0
    corrections: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}


class FacetType(str, Enum):
    """Supported facet types."""

    OPTIONS = "options"
    QUERY_GROUP = "query_group"


class FacetOption(BaseModel):
    """Single selectable value of a facet."""

    value: str
    label: str
    count: int = 0
    selected: bool = False


class Facet(BaseModel):
    """Facet rebuilt from engine facet data."""

    name: str
    field: str
    type: FacetType
    label: str = ""
    options: list[FacetOption] = Field(default_factory=list)

    @property
    def is_used(self) -> bool:
        return any(option.selected for option in self.options)


class SearchResult:
    """
    One normalized hit.

    A variant keeps a weak reference to its parent; the parent owns its
    variants through ``variants``.
    """

    def __init__(
        self,
        result_id: str,
        result_type: str = "",
        title: str = "",
        url: str = "",
        score: float = 0.0,
        content: str = "",
        fields: dict[str, Any] | None = None,
    ) -> None:
        self.id = result_id
        self.type = result_type
        self.title = title
        self.url = url
        self.score = score
        self.content = content
        self.fields: dict[str, Any] = fields or {}
        self.is_variant = False
        self.variants: list[SearchResult] = []
        self.variants_found = 0
        self.variant_field_value: str | None = None
        self._variant_parent: weakref.ReferenceType[SearchResult] | None = None

    @property
    def variant_parent(self) -> SearchResult | None:
        if self._variant_parent is None:
            return None
        return self._variant_parent()

    @variant_parent.setter
    def variant_parent(self, parent: SearchResult | None) -> None:
        self._variant_parent = weakref.ref(parent) if parent is not None else None

    def add_variant(self, variant: SearchResult) -> None:
        """Attach ``variant`` below this result."""
        if variant is self:
            raise ValueError("A search result cannot be its own variant")
        if self.is_variant:
            raise ValueError("A variant cannot carry variants itself")
        variant.is_variant = True
        variant.variant_parent = self
        variant.variants = []
        variant.variants_found = 0
        self.variants.append(variant)

    def get(self, name: str, default: Any = None) -> Any:
        """Field value by name, including the promoted attributes."""
        if name in ("id", "type", "title", "url", "score", "content"):
            return getattr(self, name)
        return self.fields.get(name, default)

    def __repr__(self) -> str:
        return (
            f"SearchResult(id={self.id!r}, type={self.type!r}, "
            f"variants={len(self.variants)}/{self.variants_found})"
        )


@dataclass
class SearchResultSet:
    """Outcome of one search pipeline run."""

    used_search_request: SearchRequest | None = None
    used_query: Query | None = None
    response: ResponseAdapter | None = None
    used_search: Transport | None = None
    used_page: int = 0
    used_results_per_page: int = 0
    used_additional_filters: list[str] = field(default_factory=list)
    search_results: list[SearchResult] = field(default_factory=list)
    all_result_count: int = 0
    has_searched: bool = False
    is_auto_corrected: bool = False
    initial_query_string: str = ""
    corrected_query_string: str = ""
    spell_checking_suggestions: list[SpellingSuggestion] = field(default_factory=list)
    facets: list[Facet] = field(default_factory=list)

    @property
    def has_spell_checking_suggestions(self) -> bool:
        return bool(self.spell_checking_suggestions)

    @property
    def page_count(self) -> int:
        if self.used_results_per_page == 0:
            return 0
        return -(-self.all_result_count // self.used_results_per_page)

    def add_search_result(self, result: SearchResult) -> None:
        self.search_results.append(result)

    def get_facet(self, name: str) -> Facet | None:
        return next((facet for facet in self.facets if facet.name == name), None)
