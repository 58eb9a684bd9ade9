"""Builds Earthquake records from field values as the parse progresses."""
import logging
import math
from dataclasses import replace
from typing import Any, Callable, Dict, Mapping, Optional

from seismic_feed.domain.models import Earthquake
from seismic_feed.processing.shared.constants import (
    FIELD_ERROR_REASONS,
    LOCATION_MARKER,
    NUMERIC_DEFAULTS,
    RECORD_ID_ATTRIBUTE,
)
from seismic_feed.processing.shared.error_handling import ErrorHandler
from seismic_feed.utils.datetime_utils import FEED_TIMESTAMP_FORMAT, parse_feed_timestamp


class FieldValueError(ValueError):
    """A single field could not be normalized. Never aborts a parse."""

    def __init__(self, field_name: str, raw: str, reason: str):
        super().__init__(f"{field_name}: {reason} ({raw!r})")
        self.field_name = field_name
        self.raw = raw
        self.reason = reason


class RecordAssembler:
    """
    Owns the record currently being built and normalizes raw field text.

    Field problems are absorbed here: the field keeps its default, a diagnostic
    is logged through the error handler, and the record is still produced.
    """

    def __init__(
        self,
        timestamp_format: str = FEED_TIMESTAMP_FORMAT,
        logger: Optional[logging.Logger] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        self.timestamp_format = timestamp_format
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger)
        self.field_errors = 0
        self._current: Optional[Earthquake] = None
        self._parsers: Dict[str, Callable[[str], Any]] = {
            'location': self._parse_location,
            'timestamp': self._parse_timestamp,
            'latitude': lambda raw: self._parse_float('latitude', raw, NUMERIC_DEFAULTS['LATITUDE']),
            'longitude': lambda raw: self._parse_float('longitude', raw, NUMERIC_DEFAULTS['LONGITUDE']),
            'magnitude': lambda raw: self._parse_float('magnitude', raw, NUMERIC_DEFAULTS['MAGNITUDE']),
        }

    @property
    def in_record(self) -> bool:
        return self._current is not None

    def begin_record(self, attrs: Optional[Mapping[str, str]] = None) -> None:
        event_id = (attrs or {}).get(RECORD_ID_ATTRIBUTE)
        self._current = Earthquake(event_id=event_id)

    def finish_record(self) -> Optional[Earthquake]:
        record, self._current = self._current, None
        return record

    def assign(self, field_name: str, raw: str) -> None:
        if self._current is None:
            # Values like the document's own creation time sit outside any record
            self.logger.debug(f"Ignoring {field_name} value outside a record: {raw!r}")
            return

        parse = self._parsers.get(field_name)
        if parse is None:
            self.logger.debug(f"No normalizer for field {field_name!r}, ignoring")
            return

        try:
            value = parse(raw)
        except FieldValueError as e:
            self._report(e)
            return
        self._current = replace(self._current, **{field_name: value})

    def _parse_location(self, raw: str) -> str:
        index = raw.find(LOCATION_MARKER)
        if index < 0:
            raise FieldValueError('location', raw, FIELD_ERROR_REASONS['MISSING_LOCATION_MARKER'])
        return raw[index + len(LOCATION_MARKER):]

    def _parse_timestamp(self, raw: str):
        timestamp = parse_feed_timestamp(raw, self.timestamp_format, context="record time", logger=self.logger)
        if timestamp is None:
            raise FieldValueError('timestamp', raw, FIELD_ERROR_REASONS['INVALID_TIMESTAMP'])
        return timestamp

    def _parse_float(self, field_name: str, raw: str, default: float) -> float:
        try:
            value = float(raw.strip())
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            self._report(FieldValueError(field_name, raw, FIELD_ERROR_REASONS['INVALID_NUMBER']))
            return default
        return value

    def _report(self, error: FieldValueError) -> None:
        self.field_errors += 1
        context = ErrorHandler.create_context(
            component=f"{type(self).__name__}.{error.field_name}",
            item_id=self._current.event_id if self._current else None,
            metadata={'raw_preview': error.raw[:50]}
        )
        self.error_handler.handle(error, context=context, level=logging.WARNING)
