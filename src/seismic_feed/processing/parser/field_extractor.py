"""Tracks which record field, if any, character data currently belongs to."""
from typing import Dict, Iterable, List, Optional, Tuple

from seismic_feed.processing.shared.constants import DEFAULT_FIELD_MAPPINGS, FieldMapping


class FieldExtractor:
    """
    Per-record state machine deciding when character data is accumulated.

    Each field has its own seeking flag, raised when the field's container
    element opens and lowered once its value has been consumed. Text is only
    collected inside a value element while at least one field waiting on that
    value element is seeking. Containers may be separated by unrelated
    elements, so one global flag would not be enough to tell fields apart.
    """

    def __init__(self, mappings: Iterable[FieldMapping] = DEFAULT_FIELD_MAPPINGS):
        self.mappings: Tuple[FieldMapping, ...] = tuple(mappings)
        self._seeking: Dict[str, bool] = {m.field: False for m in self.mappings}
        self._containers: Dict[str, List[str]] = {}
        for mapping in self.mappings:
            self._containers.setdefault(mapping.container, []).append(mapping.field)
        self._value_tags = {m.value for m in self.mappings}
        self._buffer: List[str] = []
        self._accumulating = False

    def start(self, name: str) -> None:
        for field_name in self._containers.get(name, ()):
            self._seeking[field_name] = True

        if name in self._value_tags and self._pending_field(name):
            self._accumulating = True
            self._buffer = []

    def characters(self, text: str) -> None:
        # The tokenizer may split one text node over several calls
        if self._accumulating:
            self._buffer.append(text)

    def end(self, name: str) -> Optional[Tuple[str, str]]:
        """Close ``name`` and return ``(field, raw_text)`` if it completed a field value."""
        if name not in self._value_tags:
            return None

        was_accumulating = self._accumulating
        self._accumulating = False
        if not was_accumulating:
            return None

        field_name = self._pending_field(name)
        if field_name is None:
            return None
        self._seeking[field_name] = False
        return field_name, ''.join(self._buffer)

    def reset(self) -> None:
        for field_name in self._seeking:
            self._seeking[field_name] = False
        self._buffer = []
        self._accumulating = False

    def is_seeking(self, field_name: str) -> bool:
        return self._seeking[field_name]

    @property
    def accumulating(self) -> bool:
        return self._accumulating

    def _pending_field(self, value_tag: str) -> Optional[str]:
        for mapping in self.mappings:
            if mapping.value == value_tag and self._seeking[mapping.field]:
                return mapping.field
        return None
