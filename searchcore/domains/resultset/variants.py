"""
Variants Processor - Re-expands collapsed documents into variant trees.

The engine collapses documents sharing the variants field and returns the
other group members in its ``expanded`` section, keyed by the field value.
Keys are matched exactly, so values differing only by case are distinct
groups.
"""

from __future__ import annotations

import logging
from typing import Any

from searchcore.config import SearchSettings

from .models import SearchResult, SearchResultSet
from .parser import SearchResultBuilder

logger = logging.getLogger(__name__)

__all__ = ["VariantsProcessor"]


class VariantsProcessor:
    """
    Attaches expanded group members to their collapsed representative.

    Example:
        >>> processor = VariantsProcessor(settings)
        >>> processor.process(result_set)
    """

    def __init__(
        self,
        settings: SearchSettings,
        builder: SearchResultBuilder | None = None,
    ) -> None:
        self._settings = settings
        self._builder = builder or SearchResultBuilder()

    def process(self, result_set: SearchResultSet) -> SearchResultSet:
        """
        Expand variants of every top-level result.

        Args:
            result_set: Parsed result set, modified in place

        Returns:
            The same result set
        """
        if not self._settings.variants_enabled or result_set.response is None:
            return result_set

        field = self._settings.variants_field
        limit = self._settings.variants_expand_limit
        use_raw = self._settings.use_raw_documents
        expanded = result_set.response.expanded
        expanded_count = 0

        for result in result_set.search_results:
            if result.is_variant:
                continue
            value = self._variant_field_value(result.get(field))
            if value is None:
                continue

            result.variant_field_value = value
            group = expanded.get(value)
            if group is None:
                continue

            result.variants = []
            for variant in self._builder.from_documents(group.docs[:limit], use_raw):
                result.add_variant(variant)
            result.variants_found = group.num_found
            expanded_count += 1

        logger.debug("Expanded variants for %d results on field '%s'", expanded_count, field)
        return result_set

    @staticmethod
    def _variant_field_value(value: Any) -> str | None:
        if isinstance(value, list):
            value = value[0] if value else None
        if value is None:
            return None
        return str(value)
