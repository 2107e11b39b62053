"""
Query Models - The outgoing search query.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class QueryFields(BaseModel):
    """Fields searched by the query, with optional boosts."""

    boosts: dict[str, float | None] = Field(default_factory=dict)

    @classmethod
    def from_string(cls, definition: str) -> QueryFields:
        """
        Parse a definition such as ``"title^2.0, content"``.

        Args:
            definition: Comma separated field list, boosts after ``^``

        Returns:
            Parsed query fields
        """
        boosts: dict[str, float | None] = {}
        for part in definition.split(","):
            part = part.strip()
            if not part:
                continue
            name, _, boost = part.partition("^")
            boosts[name.strip()] = float(boost) if boost else None
        return cls(boosts=boosts)

    def to_string(self) -> str:
        """Render as an engine ``qf`` value."""
        parts = []
        for name, boost in self.boosts.items():
            parts.append(name if boost is None else f"{name}^{boost}")
        return " ".join(parts)


class Query(BaseModel):
    """
    Mutable search query.

    Filters and return fields keep insertion order and never hold duplicates.
    """

    query_string: str = ""
    query_fields: QueryFields = Field(default_factory=QueryFields)
    filters: list[str] = Field(default_factory=list)
    return_fields: list[str] = Field(default_factory=list)
    sort: str | None = None
    rows: int | None = None
    params: dict[str, Any] = Field(default_factory=dict)

    def get_query(self) -> str:
        return self.query_string

    def set_query(self, query_string: str) -> Query:
        self.query_string = query_string
        return self

    def add_filter(self, expression: str) -> Query:
        if expression and expression not in self.filters:
            self.filters.append(expression)
        return self

    def remove_filter(self, expression: str) -> Query:
        if expression in self.filters:
            self.filters.remove(expression)
        return self

    def get_filters(self) -> list[str]:
        return list(self.filters)

    def add_return_field(self, field: str) -> Query:
        if field and field not in self.return_fields:
            self.return_fields.append(field)
        return self

    def get_return_fields(self) -> list[str]:
        return list(self.return_fields)

    def set_param(self, name: str, value: Any) -> Query:
        self.params[name] = value
        return self

    def add_param_value(self, name: str, value: Any) -> Query:
        """Append to a multi-valued parameter such as ``facet.field``."""
        values = self.params.setdefault(name, [])
        if value not in values:
            values.append(value)
        return self

    def get_param(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)

    def to_params(self, offset: int = 0, limit: int | None = None) -> dict[str, Any]:
        """
        Flatten into engine request parameters.

        Args:
            offset: Zero-based start row
            limit: Row limit, overrides the query's own rows

        Returns:
            Parameter mapping ready for a transport
        """
        params: dict[str, Any] = {"q": self.query_string, "start": offset}
        rows = limit if limit is not None else self.rows
        if rows is not None:
            params["rows"] = rows
        if self.filters:
            params["fq"] = list(self.filters)
        if self.return_fields:
            params["fl"] = ",".join(self.return_fields)
        if self.query_fields.boosts:
            params["qf"] = self.query_fields.to_string()
        if self.sort:
            params["sort"] = self.sort
        params.update(self.params)
        return params
