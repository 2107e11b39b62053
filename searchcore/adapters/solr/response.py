"""
Solr Response Adapter - Wraps a parsed Solr JSON reply.

Handles:
- response.numFound / response.docs
- expanded groups (collapse/expand)
- spellcheck collations (flat or map style)
- facet_counts.facet_fields / facet_queries
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from searchcore.domains.resultset.models import SpellingSuggestion

logger = logging.getLogger(__name__)

__all__ = ["ExpandedGroup", "ResponseAdapter"]


class ExpandedGroup(BaseModel):
    """Collapsed group members returned for one group value."""

    num_found: int = 0
    docs: list[Any] = Field(default_factory=list)


def _pairs(value: Any) -> list[tuple[Any, Any]]:
    """Normalize Solr named lists (flat ``[k, v, k, v]`` or map) to pairs."""
    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, list):
        return [(value[i], value[i + 1]) for i in range(0, len(value) - 1, 2)]
    return []


class ResponseAdapter:
    """
    Read-only view of one engine reply.

    Only ``num_found`` may be overwritten (page size 0 suppresses the count).

    Example:
        >>> response = ResponseAdapter.from_dict({"response": {"numFound": 0, "docs": []}})
        >>> response.num_found
        0
    """

    def __init__(
        self,
        num_found: int = 0,
        docs: list[Any] | None = None,
        spellcheck_suggestions: list[SpellingSuggestion] | None = None,
        facet_fields: dict[str, list[tuple[str, int]]] | None = None,
        facet_queries: dict[str, int] | None = None,
        expanded: dict[str, ExpandedGroup] | None = None,
        raw: dict[str, Any] | None = None,
    ) -> None:
        self.num_found = num_found
        self.docs = list(docs or [])
        self.spellcheck_suggestions = list(spellcheck_suggestions or [])
        self.facet_fields = dict(facet_fields or {})
        self.facet_queries = dict(facet_queries or {})
        self.expanded = dict(expanded or {})
        self.raw = raw or {}

    @classmethod
    def from_json(cls, payload: str) -> ResponseAdapter:
        """Create adapter from a JSON string."""
        return cls.from_dict(json.loads(payload))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResponseAdapter:
        """Create adapter from a decoded Solr JSON reply."""
        body = data.get("response") or {}

        expanded = {
            str(value): ExpandedGroup(
                num_found=int(group.get("numFound", 0)),
                docs=list(group.get("docs", [])),
            )
            for value, group in (data.get("expanded") or {}).items()
        }

        facet_counts = data.get("facet_counts") or {}
        facet_fields = {
            name: [(str(option), int(count)) for option, count in _pairs(values)]
            for name, values in (facet_counts.get("facet_fields") or {}).items()
        }
        facet_queries = {
            str(query): int(count)
            for query, count in _pairs(facet_counts.get("facet_queries") or {})
        }

        return cls(
            num_found=int(body.get("numFound", 0)),
            docs=list(body.get("docs", [])),
            spellcheck_suggestions=cls._parse_collations(data.get("spellcheck") or {}),
            facet_fields=facet_fields,
            facet_queries=facet_queries,
            expanded=expanded,
            raw=data,
        )

    @staticmethod
    def _parse_collations(spellcheck: dict[str, Any]) -> list[SpellingSuggestion]:
        suggestions = []
        for key, collation in _pairs(spellcheck.get("collations") or []):
            if key != "collation":
                continue
            if isinstance(collation, str):
                suggestions.append(SpellingSuggestion(suggestion=collation))
            elif isinstance(collation, Mapping):
                corrections = {
                    str(term): str(correction)
                    for term, correction in _pairs(
                        collation.get("misspellingsAndCorrections") or []
                    )
                }
                suggestions.append(
                    SpellingSuggestion(
                        suggestion=str(collation.get("collationQuery", "")),
                        num_found=int(collation.get("hits", 0)),
                        corrections=corrections,
                    )
                )
            else:
                logger.debug("Ignoring unsupported collation: %r", collation)
        return [s for s in suggestions if s.suggestion]

    @property
    def has_spellcheck_suggestions(self) -> bool:
        return bool(self.spellcheck_suggestions)
