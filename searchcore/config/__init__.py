"""
Configuration - Search settings and error taxonomy.
"""

from .errors import (
    DocumentNotFoundError,
    ErrorCode,
    InvalidFacetConfigurationError,
    ModifierContractViolationError,
    SearchCoreError,
    TransportIncompleteError,
)
from .settings import FacetSettings, SearchSettings, get_settings

__all__ = [
    # Settings
    "SearchSettings",
    "FacetSettings",
    "get_settings",
    # Errors
    "ErrorCode",
    "SearchCoreError",
    "TransportIncompleteError",
    "DocumentNotFoundError",
    "ModifierContractViolationError",
    "InvalidFacetConfigurationError",
]
