import logging
from typing import List, Optional

from seismic_feed.processing.shared.error_handling import MalformedFeedError


class ElementTracker:
    """Stack of open element names used to validate tag nesting."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._stack: List[str] = []

    def start(self, name: str) -> None:
        self._stack.append(name)

    def end(self, name: str) -> None:
        """Pop ``name`` off the stack.

        Raises:
            MalformedFeedError: if ``name`` is not the innermost open element.
                The stack is cleared first; the parse cannot continue.
        """
        top = self._stack[-1] if self._stack else None
        if top != name:
            self.logger.debug(f"End tag </{name}> does not close <{top}> at depth {len(self._stack)}")
            self._stack.clear()
            raise MalformedFeedError(expected=top, found=name)
        self._stack.pop()

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def is_empty(self) -> bool:
        return not self._stack
