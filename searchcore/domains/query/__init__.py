"""
Query Domain - The outgoing search query and its builder.
"""

from .builder import QueryBuilder
from .models import Query, QueryFields

__all__ = [
    "Query",
    "QueryFields",
    "QueryBuilder",
]
