"""
Adapters - Search engine integrations.

Engine-specific reply formats are wrapped here to isolate domains from them.
"""

from .solr import ExpandedGroup, ResponseAdapter

__all__ = [
    "ResponseAdapter",
    "ExpandedGroup",
]
