"""
Standardized error handling and reporting utilities
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, Any, Optional


class FeedError(Exception):
    """Base class for errors that cross the parser boundary."""


class FeedParseError(FeedError):
    """The token stream could not be parsed (invalid bytes, truncated document, ...)."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class MalformedFeedError(FeedParseError):
    """An end tag did not match the innermost open element."""

    def __init__(self, expected: Optional[str], found: str):
        super().__init__(f"Mismatched end tag: expected </{expected}>, found </{found}>")
        self.expected = expected
        self.found = found


class FeedTransportError(FeedError):
    """The feed could not be downloaded or the response was not an XML document."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseAborted(Exception):
    """Raised by the record limit to stop the tokenizer. Not an error."""


class ErrorHandler:
    """
    Centralized error handling with stats tracking and context logging
    """

    def __init__(
        self,
        logger: logging.Logger,
        stats: Optional[Dict[str, Any]] = None,
        debug: bool = False
    ):
        """
        Args:
            logger: Configured logger instance
            stats: Optional stats dictionary to update
            debug: Enable detailed error reporting
        """
        self.logger = logger
        self.stats = stats if stats is not None else {}
        self.debug = debug

        self.stats.setdefault('error_count', 0)
        self.stats.setdefault('error_types', {})
        self.stats.setdefault('last_error', None)

    def handle(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        level: int = logging.ERROR,
        increment_stats: bool = True
    ) -> Dict[str, Any]:
        """
        Process an exception and return updated stats

        Args:
            error: Exception to handle
            context: Additional context about the error
            level: Logging level for the report
            increment_stats: Whether to update error counters

        Returns:
            Updated stats dictionary
        """
        error_type = type(error).__name__
        error_details = self._build_error_details(error, context, error_type)

        if increment_stats:
            self._update_stats(error_type, error_details)

        self._log_error(error, error_details, level)
        return self.stats

    def _build_error_details(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]],
        error_type: str
    ) -> Dict[str, Any]:
        """Construct detailed error information dictionary"""
        return {
            'type': error_type,
            'message': str(error),
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'context': context,
            'traceback': traceback.format_exc() if self.debug else None
        }

    def _update_stats(self, error_type: str, error_details: Dict[str, Any]) -> None:
        self.stats['error_count'] += 1
        self.stats['error_types'][error_type] = self.stats['error_types'].get(error_type, 0) + 1
        self.stats['last_error'] = error_details

    def _log_error(self, error: Exception, details: Dict[str, Any], level: int) -> None:
        if self.debug and level >= logging.ERROR:
            self.logger.exception("Error occurred: %s", details)
        else:
            self.logger.log(level, "%s: %s", details['type'], details)

    @classmethod
    def create_context(
        cls,
        component: str,
        item_id: Optional[str] = None,
        metadata: Optional[Dict] = None
    ) -> Dict[str, Any]:
        """
        Create standardized error context

        Args:
            component: Which component failed
            item_id: ID of item being processed
            metadata: Additional context

        Returns:
            Context dictionary
        """
        return {
            'component': component,
            'item_id': item_id,
            'metadata': metadata or {}
        }
