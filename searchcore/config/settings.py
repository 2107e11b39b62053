"""
Settings - Search configuration using Pydantic Settings.

Loads from environment variables (prefix ``SEARCHCORE_``) and .env files.
Nested values such as ``facets`` are read as JSON.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FacetSettings(BaseModel):
    """Configuration of a single facet."""

    field: str = ""
    type: str = "options"  # "options", "query_group"
    label: str = ""
    # query_group only: option value -> engine query
    queries: dict[str, str] = Field(default_factory=dict)


class SearchSettings(BaseSettings):
    """Search settings consulted by the result set service."""

    # Query
    allow_empty_query: bool = False
    initialize_with_empty_query: bool = False
    show_results_of_initial_empty_query: bool = False
    initialize_with_query: str = ""
    show_results_of_initial_query: bool = False
    return_fields: list[str] = Field(default_factory=lambda: ["*", "score"])
    query_fields: str = "content^40.0, title^5.0, keywords^2.0, tagsH1^5.0"
    filters: list[str] = Field(default_factory=list)

    # Variants (collapse/expand)
    variants_enabled: bool = False
    variants_field: str = "variantId"
    variants_expand_limit: int = Field(default=10, ge=0)

    # Spellchecking
    spellchecking_enabled: bool = False
    spellchecking_search_using_suggestion: bool = False
    spellchecking_number_of_suggestions_to_try: int = Field(default=1, ge=0)
    spellchecking_max_collations: int = Field(default=1, ge=1)

    # Faceting
    faceting_enabled: bool = False
    faceting_min_count: int = 1
    faceting_limit: int = 100
    facets: dict[str, FacetSettings] = Field(default_factory=dict)

    # Result parsing
    use_raw_documents: bool = False

    # Debug
    debug_enabled: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SEARCHCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def initial_search_is_configured(self) -> bool:
        """True when any form of initial (query-less) search is enabled."""
        return (
            self.initialize_with_empty_query
            or self.show_results_of_initial_empty_query
            or bool(self.initialize_with_query)
            or self.show_results_of_initial_query
        )

    def search_configuration(self) -> dict[str, Any]:
        """Plain view of the settings handed to search components."""
        return self.model_dump()


@lru_cache
def get_settings() -> SearchSettings:
    """Get cached settings instance."""
    return SearchSettings()
