"""
SearchCore - Query execution and result assembly for search integrations.

Example:
    >>> from searchcore.domains.resultset import SearchRequest, SearchResultSetService
    >>> service = SearchResultSetService(get_settings(), transport)
    >>> result_set = service.search(SearchRequest(raw_query="elevator"))
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
