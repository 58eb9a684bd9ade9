"""Streaming parser for earthquake feed documents."""
from seismic_feed.domain.models import Earthquake, ParseOutcome, ParseStats
from seismic_feed.processing.parser.base_parser import ParserConfig
from seismic_feed.processing.parser.batch_dispatcher import AsyncioDelivery, ExecutorDelivery, InlineDelivery
from seismic_feed.processing.parser.quakeml_parser import FeedParseOperation, FeedParser
from seismic_feed.processing.shared.error_handling import (
    FeedError,
    FeedParseError,
    FeedTransportError,
    MalformedFeedError,
)

__all__ = [
    "AsyncioDelivery",
    "Earthquake",
    "ExecutorDelivery",
    "FeedError",
    "FeedParseError",
    "FeedParseOperation",
    "FeedParser",
    "FeedTransportError",
    "InlineDelivery",
    "MalformedFeedError",
    "ParseOutcome",
    "ParseStats",
    "ParserConfig",
]
