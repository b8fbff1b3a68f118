import pytest
from dataclasses import dataclass
from datetime import datetime

from meetingroom.utils.validator import (
    QUICK_DURATIONS,
    Accepted,
    Rejected,
    RejectionReason,
    end_after,
    find_conflict,
    overlaps,
    validate_reservation,
)

ROOM_ID = 1
NOW = datetime(2024, 6, 1, 12, 0)


@dataclass(frozen=True)
class Booked:
    id: int
    start_time: datetime
    end_time: datetime


def at(hour, minute=0, day=2):
    return datetime(2024, 6, day, hour, minute)


def validate(start, end, existing=(), now=NOW):
    return validate_reservation(ROOM_ID, start, end, now, list(existing))


@pytest.mark.parametrize(
    "a, b",
    [
        ((at(9), at(10)), (at(9, 30), at(10, 30))),
        ((at(9), at(10)), (at(10), at(11))),
        ((at(9), at(12)), (at(10), at(11))),
        ((at(9), at(10)), (at(13), at(14))),
    ],
)
def test_overlaps_is_symmetric(a, b):
    assert overlaps(*a, *b) == overlaps(*b, *a)


def test_back_to_back_windows_both_accepted():
    first = validate(at(9), at(10))
    assert first == Accepted(room_id=ROOM_ID, start_time=at(9), end_time=at(10))

    second = validate(at(10), at(11), existing=[Booked(1, at(9), at(10))])
    assert isinstance(second, Accepted)

    earlier = validate(at(8), at(9), existing=[Booked(1, at(9), at(10))])
    assert isinstance(earlier, Accepted)


def test_identical_window_conflicts():
    existing = Booked(1, at(9), at(10))
    result = validate(at(9), at(10), existing=[existing])
    assert result == Rejected(RejectionReason.OVERLAP, offending_reservation=existing)


def test_partial_overlap_rejected():
    existing = Booked(7, at(9), at(10))
    result = validate(at(9, 30), at(10, 30), existing=[existing])
    assert isinstance(result, Rejected)
    assert result.reason == RejectionReason.OVERLAP
    assert result.offending_reservation.id == 7


def test_contained_and_enclosing_windows_rejected():
    existing = [Booked(1, at(9), at(12))]
    assert validate(at(10), at(11), existing).reason == RejectionReason.OVERLAP
    assert validate(at(8), at(13), existing).reason == RejectionReason.OVERLAP


def test_first_conflict_is_reported():
    existing = [Booked(1, at(9), at(10)), Booked(2, at(10), at(11))]
    result = validate(at(9, 30), at(10, 30), existing)
    assert result.offending_reservation.id == 1


def test_reversed_window_rejected_without_conflicts():
    result = validate(at(10), at(9))
    assert result == Rejected(RejectionReason.INVALID_WINDOW)


def test_empty_window_rejected():
    assert validate(at(10), at(10)).reason == RejectionReason.INVALID_WINDOW


def test_invalid_window_checked_before_overlap():
    result = validate(at(10), at(9), existing=[Booked(1, at(8), at(11))])
    assert result.reason == RejectionReason.INVALID_WINDOW


def test_past_start_today_rejected():
    result = validate(datetime(2024, 6, 1, 10, 0), datetime(2024, 6, 1, 11, 0))
    assert result.reason == RejectionReason.PAST_START_TIME


def test_earlier_clock_time_on_future_day_accepted():
    result = validate(datetime(2024, 6, 2, 10, 0), datetime(2024, 6, 2, 11, 0))
    assert isinstance(result, Accepted)


def test_start_exactly_now_accepted():
    result = validate(NOW, datetime(2024, 6, 1, 13, 0))
    assert isinstance(result, Accepted)


def test_past_start_checked_before_overlap():
    existing = [Booked(1, datetime(2024, 6, 1, 9), datetime(2024, 6, 1, 11))]
    result = validate(datetime(2024, 6, 1, 10), datetime(2024, 6, 1, 11), existing)
    assert result.reason == RejectionReason.PAST_START_TIME


def test_same_inputs_same_outcome():
    existing = [Booked(1, at(9), at(10))]
    assert validate(at(9, 30), at(11), existing) == validate(at(9, 30), at(11), existing)
    assert validate(at(11), at(12), existing) == validate(at(11), at(12), existing)


def test_rejection_messages_are_distinct():
    messages = {Rejected(reason).message for reason in RejectionReason}
    assert len(messages) == len(RejectionReason)


def test_non_datetime_input_raises():
    with pytest.raises(TypeError):
        validate_reservation(ROOM_ID, "2024-06-02T09:00", at(10), NOW, [])
    with pytest.raises(TypeError):
        validate_reservation(ROOM_ID, at(9), at(10), None, [])


@pytest.mark.parametrize("minutes", QUICK_DURATIONS)
def test_end_after_adds_minutes(minutes):
    end = end_after(at(9), minutes)
    assert (end - at(9)).total_seconds() == minutes * 60


def test_end_after_is_not_validated():
    assert end_after(at(23, 30), 60) == datetime(2024, 6, 3, 0, 30)
    assert end_after(at(9), -30) == at(8, 30)


def test_find_conflict_none_when_free():
    assert find_conflict(at(11), at(12), [Booked(1, at(9), at(10))]) is None
