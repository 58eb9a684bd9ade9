import time
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from seismic_feed.utils.datetime_utils import format_as_iso


@dataclass(frozen=True)
class Earthquake:
    """One earthquake parsed from a feed document."""

    magnitude: float = 0.0
    location: Optional[str] = None
    timestamp: Optional[datetime] = None
    latitude: float = 0.0
    longitude: float = 0.0
    event_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['timestamp'] = format_as_iso(self.timestamp) if self.timestamp else None
        return data


class ParseOutcome(Enum):
    """Terminal state of a single parse."""

    DONE = 'done'
    ABORTED_LIMIT = 'aborted_limit'
    ABORTED_MALFORMED = 'aborted_malformed'
    FAILED = 'failed'

    @property
    def is_success(self) -> bool:
        return self in (ParseOutcome.DONE, ParseOutcome.ABORTED_LIMIT)


@dataclass
class ParseStats:
    records_parsed: int = 0
    batches_flushed: int = 0
    field_errors: int = 0
    outcome: Optional[ParseOutcome] = None
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    def duration(self) -> float:
        return (self.end_time or time.time()) - self.start_time
