"""Builders for QuakeML documents used across the test suite."""
from typing import Iterable, Optional

QUAKEML_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<q:quakeml xmlns:q="http://quakeml.org/xmlns/quakeml/1.2" '
    'xmlns="http://quakeml.org/xmlns/bed/1.2" '
    'xmlns:catalog="http://anss.org/xmlns/catalog/0.1">\n'
    '<eventParameters publicID="quakeml:earthquake.usgs.gov/fdsnws/event/1/query">\n'
)
CREATION_INFO = '<creationInfo><creationTime>2016-11-22T08:00:00.000Z</creationTime></creationInfo>\n'
QUAKEML_FOOTER = (
    '</eventParameters>\n'
    '</q:quakeml>\n'
)


def quakeml_event(
    index: int = 0,
    description: Optional[str] = None,
    time: str = '2016-11-21T07:41:58.470Z',
    latitude: str = '38.8213',
    longitude: str = '-122.8063',
    magnitude: Optional[str] = None,
) -> str:
    if description is None:
        description = f'{index + 1}km NW of The Geysers, CA'
    if magnitude is None:
        magnitude = f'{1 + index / 10:.1f}'
    return (
        f'<event catalog:datasource="nc" publicID="quakeml:us.anss.org/event/nc{index:08d}">'
        f'<description><type>earthquake name</type><text>{description}</text></description>'
        f'<origin publicID="quakeml:us.anss.org/origin/nc{index:08d}">'
        f'<time><value>{time}</value></time>'
        f'<longitude><value>{longitude}</value></longitude>'
        f'<latitude><value>{latitude}</value></latitude>'
        f'<depth><value>1800</value><uncertainty>500</uncertainty></depth>'
        f'</origin>'
        f'<magnitude><mag><value>{magnitude}</value></mag><type>md</type></magnitude>'
        f'<type>earthquake</type>'
        f'</event>\n'
    )


def quakeml_feed(events: Iterable[str], creation_info: bool = True) -> bytes:
    """Wrap events in a document; ``creation_info`` adds elements after the last event."""
    trailer = CREATION_INFO if creation_info else ''
    return (QUAKEML_HEADER + ''.join(events) + trailer + QUAKEML_FOOTER).encode('utf-8')


def feed_with(count: int, creation_info: bool = True) -> bytes:
    return quakeml_feed((quakeml_event(i) for i in range(count)), creation_info=creation_info)
