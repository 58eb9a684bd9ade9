# processing/parser/base_parser.py
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union
import logging

from seismic_feed.config.settings import PARSER_CONFIG
from seismic_feed.domain.models import ParseOutcome, ParseStats
from seismic_feed.processing.shared.constants import DEFAULT_FIELD_MAPPINGS, RECORD_ELEMENT, FieldMapping
from seismic_feed.utils.datetime_utils import FEED_TIMESTAMP_FORMAT


@dataclass(frozen=True)
class ParserConfig:
    max_records: int = 50
    batch_size: int = 10
    timestamp_format: str = FEED_TIMESTAMP_FORMAT
    record_element: str = RECORD_ELEMENT
    field_mappings: Tuple[FieldMapping, ...] = field(default=DEFAULT_FIELD_MAPPINGS)

    @classmethod
    def from_settings(cls, **overrides) -> 'ParserConfig':
        """Build a config from ``PARSER_CONFIG``, letting keyword arguments win."""
        values = {
            'max_records': PARSER_CONFIG['max_records'],
            'batch_size': PARSER_CONFIG['batch_size'],
            'timestamp_format': PARSER_CONFIG['timestamp_format'],
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class BaseFeedParser(ABC):
    """Abstract base class for feed parsers implementing parse."""

    def __init__(self, config: Optional[ParserConfig] = None, logger: Optional[logging.Logger] = None):
        """Initialize parser with optional config and logger."""
        self.config = config or ParserConfig.from_settings()
        self.logger = logger or logging.getLogger(__name__)
        self.stats = ParseStats()

    @abstractmethod
    def parse(self, data: bytes) -> ParseOutcome:
        """
        Parse one complete feed document.

        Args:
            data: The whole document, already received

        Returns:
            The terminal state of the parse
        """
        raise NotImplementedError

    def parse_file(self, path: Union[str, Path]) -> ParseOutcome:
        """Read a feed document from disk and parse it."""
        path = Path(path).expanduser()
        self.logger.info(f"Parsing feed file {path}")
        return self.parse(path.read_bytes())
