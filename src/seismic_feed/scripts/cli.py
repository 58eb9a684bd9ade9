#!/usr/bin/env python3
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from seismic_feed.config.settings import FEED_CONFIG, LOG_CONFIG
from seismic_feed.domain.models import Earthquake
from seismic_feed.io.downloader import FeedDownloader
from seismic_feed.processing.parser.base_parser import ParserConfig
from seismic_feed.processing.parser.quakeml_parser import FeedParser
from seismic_feed.processing.shared.error_handling import FeedError, FeedTransportError
from seismic_feed.utils.logging_utils import ApplicationLogger


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Parse an earthquake feed and print its records as JSON lines')
    parser.add_argument('source', nargs='?', default=FEED_CONFIG['url'],
                        help='Path or URL of a QuakeML feed document (default: configured feed URL)')
    parser.add_argument('--max-records', type=int, default=None, help='Maximum number of records to parse')
    parser.add_argument('--batch-size', type=int, default=None, help='Records per delivered batch')
    parser.add_argument('--log-dir', type=str, default=LOG_CONFIG['log_dir'], help='Directory for log files')
    parser.add_argument('--log-level', type=str.upper, default=LOG_CONFIG['log_level'],
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level for the log file (default: %(default)s)')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--verbose', action='store_true', help='Echo log messages to the console')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    app_logger = ApplicationLogger(Path(args.log_dir), level=args.log_level, debug=args.debug, verbose=args.verbose)
    try:
        return run(args, app_logger)
    finally:
        app_logger.close()


def run(args: argparse.Namespace, app_logger: ApplicationLogger) -> int:
    logger = app_logger.get_logger('cli')

    try:
        if args.source.startswith(('http://', 'https://')):
            downloader = FeedDownloader(args.source, logger=app_logger.get_logger('downloader'))
            try:
                data = downloader.fetch()
            finally:
                downloader.close()
        else:
            data = Path(args.source).expanduser().read_bytes()
    except (FeedTransportError, OSError) as e:
        logger.error(f"Could not load feed from {args.source}: {e}")
        return 1

    errors: List[FeedError] = []

    def print_batch(batch: List[Earthquake]) -> None:
        for record in batch:
            sys.stdout.write(json.dumps(record.to_dict()) + '\n')

    config = ParserConfig.from_settings(max_records=args.max_records, batch_size=args.batch_size)
    parser = FeedParser(print_batch, errors.append, config=config,
                        logger=app_logger.get_logger('parser'), debug=args.debug)
    outcome = parser.parse(data)
    logger.info(f"Finished with outcome {outcome.value} after {parser.stats.records_parsed} records")

    if errors:
        logger.error(f"Feed could not be parsed: {errors[0]}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
