"""
Shared constants across the seismic feed parsing pipeline.
Only for values used across multiple components.
"""
from collections import namedtuple

# Top-level element that wraps one earthquake in a QuakeML document
RECORD_ELEMENT = 'event'

# Attribute of the record element carrying the upstream identifier
RECORD_ID_ATTRIBUTE = 'publicID'

# A field is addressed by the container element that opens it and the value
# element whose character data holds the raw value. Several fields share the
# generic ``value`` element, so the container is what tells them apart.
FieldMapping = namedtuple('FieldMapping', ['field', 'container', 'value'])

DEFAULT_FIELD_MAPPINGS = (
    FieldMapping('location', 'description', 'text'),
    FieldMapping('timestamp', 'time', 'value'),
    FieldMapping('latitude', 'latitude', 'value'),
    FieldMapping('longitude', 'longitude', 'value'),
    FieldMapping('magnitude', 'mag', 'value'),
)

# Descriptions read like "5km NW of The Geysers, CA"; the location is what follows
LOCATION_MARKER = 'of '

# Default numeric values for unparsable data
NUMERIC_DEFAULTS = {
    'MAGNITUDE': 0.0,
    'LATITUDE': 0.0,
    'LONGITUDE': 0.0,
}

# Reasons recorded for field-level diagnostics
FIELD_ERROR_REASONS = {
    'MISSING_LOCATION_MARKER': 'description has no location marker',
    'INVALID_TIMESTAMP': 'timestamp does not match the feed format',
    'INVALID_NUMBER': 'value is not a finite number',
}
