import pytest

from seismic_feed.processing.parser.limit_guard import LimitGuard
from seismic_feed.processing.shared.error_handling import ParseAborted


def test_check_passes_below_limit() -> None:
    guard = LimitGuard(max_records=2)
    guard.check()
    guard.record_parsed()
    guard.check()

    assert guard.records_parsed == 1
    assert not guard.aborted


def test_check_aborts_once_limit_is_reached() -> None:
    guard = LimitGuard(max_records=2)
    guard.record_parsed()
    guard.record_parsed()

    with pytest.raises(ParseAborted):
        guard.check()
    assert guard.aborted

    # The flag is never cleared
    with pytest.raises(ParseAborted):
        guard.check()
    assert guard.aborted


def test_zero_limit_aborts_on_first_tag() -> None:
    guard = LimitGuard(max_records=0)
    with pytest.raises(ParseAborted):
        guard.check()


def test_rejects_negative_limit() -> None:
    with pytest.raises(ValueError):
        LimitGuard(max_records=-1)
