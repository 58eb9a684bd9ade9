import pytest

from seismic_feed.processing.parser.element_tracker import ElementTracker
from seismic_feed.processing.shared.error_handling import MalformedFeedError


def test_matching_tags_leave_stack_empty() -> None:
    tracker = ElementTracker()
    for name in ("quakeml", "event", "origin"):
        tracker.start(name)
    assert tracker.depth == 3

    for name in ("origin", "event", "quakeml"):
        tracker.end(name)
    assert tracker.is_empty


def test_mismatched_end_tag_raises_and_clears_stack() -> None:
    tracker = ElementTracker()
    tracker.start("event")
    tracker.start("origin")

    with pytest.raises(MalformedFeedError) as excinfo:
        tracker.end("event")

    assert excinfo.value.expected == "origin"
    assert excinfo.value.found == "event"
    assert tracker.is_empty


def test_end_tag_without_open_element_is_malformed() -> None:
    tracker = ElementTracker()

    with pytest.raises(MalformedFeedError) as excinfo:
        tracker.end("event")

    assert excinfo.value.expected is None
