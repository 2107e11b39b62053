"""
Result Set Reconstitution - Rebuilds derived result set state from the response.

Every run replaces what it derives, so processing twice is a no-op the
second time.
"""

from __future__ import annotations

import logging

from searchcore.config import FacetSettings, InvalidFacetConfigurationError, SearchSettings

from .models import Facet, FacetOption, FacetType, SearchRequest, SearchResultSet

logger = logging.getLogger(__name__)

__all__ = ["ResultSetReconstitutionProcessor", "active_facet_values"]


def active_facet_values(request: SearchRequest | None) -> dict[str, list[str]]:
    """
    Facet values selected in a request.

    Selections are passed as ``arguments["filter"]``, a list of
    ``"facetName:value"`` strings.
    """
    active: dict[str, list[str]] = {}
    if request is None:
        return active
    for item in request.arguments.get("filter", []) or []:
        name, sep, value = str(item).partition(":")
        if sep and name and value:
            active.setdefault(name, []).append(value)
    return active


class ResultSetReconstitutionProcessor:
    """Reconciles counts, suggestions, facets and variant references."""

    def __init__(self, settings: SearchSettings) -> None:
        self._settings = settings

    def process(self, result_set: SearchResultSet) -> SearchResultSet:
        response = result_set.response
        if response is None:
            return result_set

        result_set.all_result_count = response.num_found
        result_set.spell_checking_suggestions = list(response.spellcheck_suggestions)
        result_set.facets = self._build_facets(result_set)

        for result in result_set.search_results:
            result.variants_found = max(result.variants_found, len(result.variants))
            for variant in result.variants:
                variant.is_variant = True
                variant.variant_parent = result

        return result_set

    def _build_facets(self, result_set: SearchResultSet) -> list[Facet]:
        if not self._settings.faceting_enabled:
            return []

        response = result_set.response
        active = active_facet_values(result_set.used_search_request)
        facets = []
        for name, facet_settings in self._settings.facets.items():
            try:
                facet_type = FacetType(facet_settings.type)
            except ValueError as e:
                raise InvalidFacetConfigurationError(
                    f"Unknown facet type '{facet_settings.type}' for facet '{name}'",
                    {"facet": name, "type": facet_settings.type},
                ) from e

            selected = active.get(name, [])
            if facet_type is FacetType.OPTIONS:
                options = [
                    FacetOption(
                        value=value,
                        label=value,
                        count=count,
                        selected=value in selected,
                    )
                    for value, count in response.facet_fields.get(facet_settings.field, [])
                ]
            else:
                options = self._query_group_options(
                    name, facet_settings, response.facet_queries, selected
                )

            facets.append(
                Facet(
                    name=name,
                    field=facet_settings.field,
                    type=facet_type,
                    label=facet_settings.label or name,
                    options=options,
                )
            )

        logger.debug("Reconstituted %d facets", len(facets))
        return facets

    @staticmethod
    def _query_group_options(
        name: str,
        facet_settings: FacetSettings,
        facet_queries: dict[str, int],
        selected: list[str],
    ) -> list[FacetOption]:
        if not facet_settings.queries:
            raise InvalidFacetConfigurationError(
                f"Query group facet '{name}' has no queries configured",
                {"facet": name},
            )
        options = []
        for value, query in facet_settings.queries.items():
            count = facet_queries.get(f"{facet_settings.field}:{query}", 0)
            if count == 0 and value not in selected:
                continue
            options.append(
                FacetOption(value=value, label=value, count=count, selected=value in selected)
            )
        return options
