import logging
from typing import Optional

from seismic_feed.processing.shared.error_handling import ParseAborted


class LimitGuard:
    """
    Caps the number of records taken from one document.

    ``check`` runs before every start tag. Once the cap is reached it sets
    ``aborted`` and raises ``ParseAborted`` to stop the tokenizer. Any error the
    tokenizer reports after that is a consequence of the stop, not a failure.
    """

    def __init__(self, max_records: int, logger: Optional[logging.Logger] = None):
        if max_records < 0:
            raise ValueError(f"max_records must not be negative, got {max_records}")
        self.max_records = max_records
        self.logger = logger or logging.getLogger(__name__)
        self.records_parsed = 0
        self.aborted = False

    def check(self) -> None:
        if self.records_parsed >= self.max_records:
            if not self.aborted:
                self.logger.info(f"Record limit of {self.max_records} reached, stopping parse")
            self.aborted = True
            raise ParseAborted(self.max_records)

    def record_parsed(self) -> None:
        self.records_parsed += 1
