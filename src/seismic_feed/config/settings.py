# Standard library imports
import os
from pathlib import Path

# Base directory of the project (``config`` lives one level below the package root)
ROOT_DIR = Path(__file__).resolve().parents[1]

# Parser configuration settings
# max_records caps how many events are taken from one feed document; a weekly feed
# can hold thousands of events, so only the first ones are parsed.
# batch_size controls how many records are handed to the consumer per delivery.
PARSER_CONFIG = {
    'max_records': int(os.environ.get('SEISMIC_MAX_RECORDS', 50)),
    'batch_size': int(os.environ.get('SEISMIC_BATCH_SIZE', 10)),
    # Feed timestamps look like 2016-11-21T07:41:58.470Z and are always UTC
    'timestamp_format': os.environ.get('SEISMIC_TIMESTAMP_FORMAT', '%Y-%m-%dT%H:%M:%S.%fZ'),
}

# Feed transport configuration
FEED_CONFIG = {
    'url': os.environ.get(
        'SEISMIC_FEED_URL',
        'https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_week.quakeml'
    ),
    'timeout': int(os.environ.get('SEISMIC_FEED_TIMEOUT', 30)),
    'max_retries': int(os.environ.get('SEISMIC_FEED_MAX_RETRIES', 3)),
    'retry_delay': int(os.environ.get('SEISMIC_FEED_RETRY_DELAY', 2)),
    'accepted_content_types': ('application/xml', 'text/xml'),
}

# Logging configuration used by the command line entry point
LOG_CONFIG = {
    'log_dir': os.environ.get('SEISMIC_LOG_DIR', str(Path.home() / '.seismic_feed' / 'logs')),
    'log_level': os.environ.get('SEISMIC_LOG_LEVEL', 'INFO'),
}
