"""Streaming parser turning a QuakeML document into batches of Earthquake records."""
import logging
import time
from concurrent.futures import Executor, Future
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from lxml import etree

from seismic_feed.domain.models import ParseOutcome, ParseStats
from seismic_feed.processing.parser.base_parser import BaseFeedParser, ParserConfig
from seismic_feed.processing.parser.batch_dispatcher import BatchDispatcher, BatchHandler
from seismic_feed.processing.parser.element_tracker import ElementTracker
from seismic_feed.processing.parser.field_extractor import FieldExtractor
from seismic_feed.processing.parser.limit_guard import LimitGuard
from seismic_feed.processing.parser.record_assembler import RecordAssembler
from seismic_feed.processing.shared.error_handling import (
    ErrorHandler,
    FeedError,
    FeedParseError,
    MalformedFeedError,
    ParseAborted,
)

ErrorCallback = Callable[[FeedError], Any]


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix lxml puts on element names."""
    return tag.rsplit('}', 1)[-1]


class _TokenizerTarget:
    """lxml parser target forwarding tokenizer events to a FeedParser."""

    def __init__(self, feed_parser: 'FeedParser'):
        self._feed_parser = feed_parser

    def start(self, tag, attrib):
        self._feed_parser.start_tag(local_name(tag), attrib)

    def end(self, tag):
        self._feed_parser.end_tag(local_name(tag))

    def data(self, data):
        self._feed_parser.characters(data)

    def close(self):
        return None


class FeedParser(BaseFeedParser):
    """
    Single-use streaming parser for one feed document.

    The parser is a visitor over tokenizer events (``start_tag``, ``end_tag``,
    ``characters``). ``parse`` drives it with lxml; ``parse_events`` accepts
    events from any other tokenizer. Batches go to ``on_batch`` and at most one
    error goes to ``on_error``, both through the same delivery context so the
    consumer sees them in the order they were produced.

    Terminal states:
        DONE: the document ended normally; the trailing partial batch is flushed.
        ABORTED_LIMIT: ``max_records`` was reached. Not an error; the trailing
            batch is flushed and nothing is reported.
        ABORTED_MALFORMED: an end tag did not match the innermost open element.
        FAILED: the tokenizer rejected the document.
    In both failure states one error is reported and no further batch is flushed.
    """

    def __init__(
        self,
        on_batch: BatchHandler,
        on_error: Optional[ErrorCallback] = None,
        config: Optional[ParserConfig] = None,
        delivery=None,
        logger: Optional[logging.Logger] = None,
        debug: bool = False
    ):
        super().__init__(config, logger)
        self.on_error = on_error
        self.error_handler = ErrorHandler(self.logger, debug=debug)
        self.tracker = ElementTracker(self.logger)
        self.extractor = FieldExtractor(self.config.field_mappings)
        self.assembler = RecordAssembler(self.config.timestamp_format, self.logger, self.error_handler)
        self.dispatcher = BatchDispatcher(on_batch, self.config.batch_size, delivery, self.logger)
        self.limit_guard = LimitGuard(self.config.max_records, self.logger)
        self._started = False

    # Tokenizer events

    def start_tag(self, name: str, attrs: Optional[Mapping[str, str]] = None) -> None:
        self.limit_guard.check()
        self.tracker.start(name)
        self.extractor.start(name)
        if name == self.config.record_element:
            self.assembler.begin_record(attrs)

    def end_tag(self, name: str) -> None:
        self.tracker.end(name)

        if completed := self.extractor.end(name):
            self.assembler.assign(*completed)

        if name == self.config.record_element:
            record = self.assembler.finish_record()
            self.extractor.reset()
            if record is not None:
                self.dispatcher.add(record)
                self.limit_guard.record_parsed()

    def characters(self, text: str) -> None:
        self.extractor.characters(text)

    # Drivers

    def parse(self, data: bytes) -> ParseOutcome:
        return self._run(lambda: self._tokenize(data))

    def parse_events(self, events: Iterable[Tuple]) -> ParseOutcome:
        """
        Drive the parser from pre-tokenized events.

        Each event is ``('start', name[, attrs])``, ``('end', name)`` or
        ``('data', text)``. A stream that ends with elements still open is
        a truncated document.
        """
        def drive():
            for kind, *args in events:
                if kind == 'start':
                    self.start_tag(*args)
                elif kind == 'end':
                    self.end_tag(*args)
                elif kind == 'data':
                    self.characters(*args)
                else:
                    raise ValueError(f"Unknown tokenizer event {kind!r}")
            if not self.tracker.is_empty:
                raise FeedParseError(f"Feed document ended with {self.tracker.depth} unclosed elements")

        return self._run(drive)

    def _tokenize(self, data: bytes) -> None:
        if not data:
            raise FeedParseError("Feed document is empty")

        parser = etree.XMLParser(target=_TokenizerTarget(self), resolve_entities=False, no_network=True)
        try:
            parser.feed(data)
            parser.close()
        except etree.XMLSyntaxError as e:
            raise FeedParseError(f"Invalid feed document: {e}", cause=e) from e

    def _run(self, drive: Callable[[], None]) -> ParseOutcome:
        if self._started:
            raise RuntimeError("A FeedParser instance parses a single document")
        self._started = True
        self.stats = ParseStats()

        error: Optional[FeedParseError] = None
        try:
            drive()
        except ParseAborted:
            pass
        except FeedParseError as e:
            error = e

        outcome = self._outcome_for(error)
        if outcome.is_success:
            self.dispatcher.flush()
        else:
            self.dispatcher.discard()
        if error is not None:
            self._report_error(error)

        self._finish_stats(outcome)
        return outcome

    def _outcome_for(self, error: Optional[FeedParseError]) -> ParseOutcome:
        if self.limit_guard.aborted:
            return ParseOutcome.ABORTED_LIMIT
        if error is None:
            return ParseOutcome.DONE
        if isinstance(error, MalformedFeedError):
            return ParseOutcome.ABORTED_MALFORMED
        return ParseOutcome.FAILED

    def _report_error(self, error: FeedParseError) -> None:
        # A stop requested by the record limit surfaces as an error from some
        # tokenizers; it is the normal end of the parse and is never reported.
        if self.limit_guard.aborted:
            self.logger.debug(f"Discarding error raised after deliberate stop: {error}")
            return

        context = ErrorHandler.create_context(
            component=type(self).__name__,
            metadata={'records_parsed': self.limit_guard.records_parsed, 'depth': self.tracker.depth}
        )
        self.error_handler.handle(error, context=context)
        if self.on_error is not None:
            self.dispatcher.delivery.post(self.on_error, error)

    def _finish_stats(self, outcome: ParseOutcome) -> None:
        self.stats.records_parsed = self.limit_guard.records_parsed
        self.stats.batches_flushed = self.dispatcher.batches_flushed
        self.stats.field_errors = self.assembler.field_errors
        self.stats.outcome = outcome
        self.stats.end_time = time.time()
        self.logger.info(
            f"Parsed {self.stats.records_parsed} records in {self.stats.batches_flushed} batches "
            f"({outcome.value}, {self.stats.field_errors} field errors) in {self.stats.duration():.2f}s"
        )


class FeedParseOperation:
    """
    One parse packaged as a unit of work for a worker thread.

    Callbacks are posted to ``delivery``, which represents the consumer's own
    context. Overlapping operations are not serialized with each other.
    """

    def __init__(
        self,
        data: bytes,
        on_batch: BatchHandler,
        on_error: Optional[ErrorCallback],
        delivery,
        config: Optional[ParserConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.data = bytes(data)
        self.parser = FeedParser(on_batch, on_error, config=config, delivery=delivery, logger=logger)

    def run(self) -> ParseOutcome:
        return self.parser.parse(self.data)

    def submit(self, executor: Executor) -> 'Future[ParseOutcome]':
        return executor.submit(self.run)

    @property
    def stats(self) -> ParseStats:
        return self.parser.stats
