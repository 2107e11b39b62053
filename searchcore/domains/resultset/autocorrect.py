"""
Auto Correction - Retries zero-hit searches with spell checker suggestions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from searchcore.config import SearchSettings

from .models import SearchRequest, SearchResultSet

logger = logging.getLogger(__name__)

__all__ = ["AutoCorrector"]


class AutoCorrector:
    """
    Bounded retry loop over the engine's spelling suggestions.

    Each attempt is a full pipeline run for the corrected request, supplied by
    the caller as ``run_search``. The first attempt with hits wins.
    """

    def __init__(self, settings: SearchSettings) -> None:
        self._settings = settings

    def should_correct(self, result_set: SearchResultSet) -> bool:
        """True when correction is enabled and the set has no hits but has suggestions."""
        if not self._settings.spellchecking_search_using_suggestion:
            return False
        if result_set.all_result_count > 0:
            return False
        if result_set.used_search_request is None:
            return False
        return result_set.has_spell_checking_suggestions

    def correct(
        self,
        result_set: SearchResultSet,
        run_search: Callable[[SearchRequest], SearchResultSet],
    ) -> SearchResultSet:
        """
        Try suggestions until one yields hits or the attempt budget is spent.

        Args:
            result_set: Zero-hit result set carrying suggestions
            run_search: Runs the pipeline for a request, without correction

        Returns:
            The corrected result set, or the last attempted one unmarked
        """
        search_request = result_set.used_search_request
        if search_request is None or not self.should_correct(result_set):
            return result_set

        initial_query = search_request.raw_query or ""
        max_attempts = self._settings.spellchecking_number_of_suggestions_to_try
        attempts = 0

        for suggestion in list(result_set.spell_checking_suggestions):
            if attempts >= max_attempts:
                break
            attempts += 1

            correction = suggestion.suggestion
            result_set = run_search(search_request.with_raw_query(correction))
            if result_set.all_result_count > 0:
                result_set.is_auto_corrected = True
                result_set.initial_query_string = initial_query
                result_set.corrected_query_string = correction
                logger.info(
                    "Auto corrected '%s' -> '%s' (%d results, attempt %d)",
                    initial_query[:50],
                    correction[:50],
                    result_set.all_result_count,
                    attempts,
                )
                return result_set

        logger.info(
            "Auto correction for '%s' found no results after %d attempts",
            initial_query[:50],
            attempts,
        )
        return result_set
