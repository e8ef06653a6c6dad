"""Tests for completion history resolution."""

from datetime import date, datetime

import pytest

from muistutin.core.history import (
    HistoryEntry,
    is_done_for_day,
    last_completion,
    newest_first,
    record_toggle,
)


def entry(day: int, hour: int, done: bool) -> HistoryEntry:
    return HistoryEntry(timestamp=datetime(2024, 1, day, hour, 0), done=done)


@pytest.fixture
def history():
    return [
        entry(9, 7, True),
        entry(10, 7, True),
        entry(10, 8, False),
        entry(10, 9, True),
        entry(11, 7, False),
    ]


class TestIsDoneForDay:
    def test_empty_history(self):
        assert is_done_for_day([], date(2024, 1, 10)) is False

    def test_last_entry_of_day_wins(self, history):
        assert is_done_for_day(history, date(2024, 1, 10)) is True

    def test_last_entry_of_day_wins_when_undone(self, history):
        history = record_toggle(history, datetime(2024, 1, 10, 20, 0), False)
        assert is_done_for_day(history, date(2024, 1, 10)) is False

    def test_independent_of_other_days(self, history):
        assert is_done_for_day(history, date(2024, 1, 9)) is True
        assert is_done_for_day(history, date(2024, 1, 11)) is False

    def test_day_without_entries(self, history):
        assert is_done_for_day(history, date(2024, 1, 12)) is False


class TestRecordToggle:
    def test_appends_exactly_one(self, history):
        updated = record_toggle(history, datetime(2024, 1, 11, 8, 0), True)
        assert len(updated) == len(history) + 1
        assert updated[-1] == HistoryEntry(datetime(2024, 1, 11, 8, 0), True)

    def test_does_not_modify_original(self, history):
        before = list(history)
        record_toggle(history, datetime(2024, 1, 11, 8, 0), True)
        assert history == before

    def test_never_coalesces_same_day(self):
        at = datetime(2024, 1, 10, 8, 0)
        updated = record_toggle(record_toggle([], at, True), at, True)
        assert len(updated) == 2


class TestLastCompletion:
    def test_none_when_never_done(self):
        assert last_completion([entry(10, 7, False)]) is None

    def test_most_recent_done_entry(self, history):
        assert last_completion(history) == entry(10, 9, True)


class TestEntrySerialization:
    def test_timestamp_stored_as_epoch_millis(self):
        at = datetime(2024, 1, 10, 9, 5)
        data = HistoryEntry(at, True).to_dict()
        assert data == {"timestamp": int(at.timestamp() * 1000), "done": True}
        assert HistoryEntry.from_dict(data) == HistoryEntry(at, True)

    def test_accepts_iso_timestamps(self):
        parsed = HistoryEntry.from_dict({"timestamp": "2024-01-10T09:05:00", "done": False})
        assert parsed == HistoryEntry(datetime(2024, 1, 10, 9, 5), False)


def test_newest_first(history):
    ordered = newest_first(history)
    assert ordered[0] == entry(11, 7, False)
    assert ordered[-1] == entry(9, 7, True)


class TestEntryParsing:
    def test_out_of_range_timestamp(self):
        with pytest.raises(ValueError, match="out of range"):
            HistoryEntry.from_dict({"timestamp": 10**20, "done": True})

    def test_timestamp_with_utc_offset(self):
        with pytest.raises(ValueError):
            HistoryEntry.from_dict({"timestamp": "2024-01-10T09:05:00+02:00", "done": True})

    def test_done_must_be_boolean(self):
        with pytest.raises(ValueError):
            HistoryEntry.from_dict({"timestamp": 1704873900000, "done": "false"})

    def test_missing_done_is_false(self):
        assert HistoryEntry.from_dict({"timestamp": 1704873900000}).done is False
