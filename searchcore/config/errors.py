"""
Error Taxonomy - Consistent error codes across the search core.

Usage:
    from searchcore.config.errors import DocumentNotFoundError

    raise DocumentNotFoundError("Response did not contain a valid document")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Transport errors
    TRANSPORT_INCOMPLETE = "TRANSPORT_INCOMPLETE"

    # Lookup errors
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"

    # Configuration errors
    MODIFIER_CONTRACT_VIOLATION = "MODIFIER_CONTRACT_VIOLATION"
    INVALID_FACET_CONFIGURATION = "INVALID_FACET_CONFIGURATION"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SearchCoreError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to API-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class TransportIncompleteError(SearchCoreError):
    """The transport returned no usable response."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.TRANSPORT_INCOMPLETE, message, details)


class DocumentNotFoundError(SearchCoreError):
    """A single-document lookup returned nothing or a malformed document."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.DOCUMENT_NOT_FOUND, message, details)


class ModifierContractViolationError(SearchCoreError):
    """A registered query modifier does not implement modify_query()."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.MODIFIER_CONTRACT_VIOLATION, message, details)


class InvalidFacetConfigurationError(SearchCoreError):
    """A configured facet cannot be built from the response."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.INVALID_FACET_CONFIGURATION, message, details)
