import pytest

from blocker.escalation import PERMANENT_TIMEOUT, decide, format_timeout


def test_timed_tiers_follow_schedule():
    schedule = [1, 3, 7]
    for count, expected in ((1, "01:00:00"), (2, "03:00:00"), (3, "07:00:00")):
        outcome = decide(count, schedule)
        assert not outcome.permanent
        assert outcome.timeout == expected
        assert outcome.attempt == count


def test_permanent_beyond_schedule():
    for count in (4, 5, 100):
        outcome = decide(count, [1, 3, 7])
        assert outcome.permanent
        assert outcome.timeout == PERMANENT_TIMEOUT


def test_empty_schedule_is_always_permanent():
    assert decide(1, []).permanent


def test_schedule_is_used_verbatim():
    # not sorted, not deduplicated
    assert decide(1, [24, 1, 1]).timeout == "24:00:00"
    assert decide(3, [24, 1, 1]).timeout == "01:00:00"


def test_long_and_zero_durations():
    assert format_timeout(0) == "00:00:00"
    assert format_timeout(168) == "168:00:00"
    assert decide(1, [0]).permanent is False


def test_same_input_same_outcome():
    assert decide(2, (1, 3)) == decide(2, (1, 3))


def test_count_must_be_positive():
    with pytest.raises(ValueError):
        decide(0, [1])
