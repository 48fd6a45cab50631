"""
Unit tests for EventStore — ordering, inclusive range queries and the
no-op semantics of update/delete on unknown ids.
"""

import pytest

from desk_calendar.db import CalendarDatabase
from desk_calendar.events import EventStore
from desk_calendar.models import CalendarEvent
from desk_calendar.models import ValidationError


class TestAddAndList:
    def test_add_returns_fresh_unique_ids(self, event_store):
        first = event_store.add_event("Dentist", "2024-03-15")
        second = event_store.add_event("Dentist", "2024-03-15")
        assert first != second

        events = event_store.list_events()
        assert {e.id for e in events} == {first, second}

    def test_added_event_listed_once(self, event_store):
        event_id = event_store.add_event("Standup", "2024-05-02")
        matches = [e for e in event_store.list_events() if e.id == event_id]
        assert matches == [CalendarEvent(id=event_id, title="Standup", date="2024-05-02")]

    def test_list_is_sorted_by_date(self, event_store):
        event_store.add_event("C", "2024-03-20")
        event_store.add_event("A", "2024-01-05")
        event_store.add_event("B", "2024-02-10T09:30")

        assert [e.title for e in event_store.list_events()] == ["A", "B", "C"]

    def test_blank_title_rejected(self, event_store):
        with pytest.raises(ValidationError):
            event_store.add_event("   ", "2024-03-15")
        assert event_store.list_events() == []

    def test_non_text_title_rejected(self, event_store):
        with pytest.raises(ValidationError):
            event_store.add_event(5, "2024-03-15")

    def test_get_event(self, event_store):
        event_id = event_store.add_event("Dentist", "2024-03-15")
        assert event_store.get_event(event_id).title == "Dentist"
        assert event_store.get_event(event_id + 100) is None


class TestRangeQuery:
    @pytest.fixture
    def seeded(self, event_store):
        for title, day in [
            ("before", "2024-02-29"),
            ("first", "2024-03-01"),
            ("middle", "2024-03-15"),
            ("last", "2024-03-31"),
            ("after", "2024-04-01"),
        ]:
            event_store.add_event(title, day)
        return event_store

    def test_bounds_are_inclusive(self, seeded):
        events = seeded.list_events("2024-03-01", "2024-03-31")
        assert [e.title for e in events] == ["first", "middle", "last"]

    def test_single_day_range(self, seeded):
        events = seeded.list_events("2024-03-15", "2024-03-15")
        assert [e.title for e in events] == ["middle"]

    def test_comparison_is_lexical(self, event_store):
        """A date-time on the end day sorts after the bare end date."""
        event_store.add_event("morning", "2024-03-31T09:00")
        assert event_store.list_events("2024-03-01", "2024-03-31") == []

    def test_single_bound_returns_everything(self, seeded):
        assert len(seeded.list_events("2024-03-01", None)) == 5


class TestUpdate:
    def test_update_changes_only_target(self, event_store):
        keep = event_store.add_event("Keep", "2024-03-01")
        change = event_store.add_event("Change", "2024-03-02")

        event_store.update_event(CalendarEvent(id=change, title="Changed", date="2024-03-05"))

        assert event_store.get_event(change) == CalendarEvent(
            id=change, title="Changed", date="2024-03-05"
        )
        assert event_store.get_event(keep) == CalendarEvent(
            id=keep, title="Keep", date="2024-03-01"
        )

    def test_update_without_id_raises(self, event_store):
        with pytest.raises(ValidationError):
            event_store.update_event(CalendarEvent(title="No id", date="2024-03-01"))

    def test_update_unknown_id_is_noop(self, event_store):
        event_id = event_store.add_event("Only", "2024-03-01")
        event_store.update_event(CalendarEvent(id=event_id + 42, title="Ghost", date="2024-01-01"))
        assert event_store.list_events() == [
            CalendarEvent(id=event_id, title="Only", date="2024-03-01")
        ]

    def test_move_changes_date_only(self, event_store):
        event_id = event_store.add_event("Trip", "2024-03-01")
        event_store.move_event(event_id, "2024-03-08")
        assert event_store.get_event(event_id) == CalendarEvent(
            id=event_id, title="Trip", date="2024-03-08"
        )

    def test_move_unknown_id_is_noop(self, event_store):
        event_id = event_store.add_event("Trip", "2024-03-01")
        event_store.move_event(event_id + 5, "2024-03-08")
        assert event_store.list_events() == [
            CalendarEvent(id=event_id, title="Trip", date="2024-03-01")
        ]

    @pytest.mark.parametrize("missing_id", [None, 0])
    def test_move_without_id_raises(self, event_store, missing_id):
        with pytest.raises(ValidationError):
            event_store.move_event(missing_id, "2024-03-08")


class TestDelete:
    def test_delete_removes_only_target(self, event_store):
        a = event_store.add_event("A", "2024-03-01")
        b = event_store.add_event("B", "2024-03-02")

        event_store.delete_event(a)

        assert [e.id for e in event_store.list_events()] == [b]

    def test_repeated_delete_is_noop(self, event_store):
        event_id = event_store.add_event("A", "2024-03-01")
        event_store.delete_event(event_id)
        event_store.delete_event(event_id)
        assert event_store.list_events() == []

    def test_ids_not_reused_after_delete(self, db_path):
        with CalendarDatabase(db_path) as db:
            store = EventStore(db)
            old_id = store.add_event("A", "2024-03-01")
            store.delete_event(old_id)

        with CalendarDatabase(db_path) as db:
            new_id = EventStore(db).add_event("B", "2024-03-02")

        assert new_id > old_id


class TestScenario:
    def test_dentist_lifecycle(self, event_store):
        event_id = event_store.add_event("Dentist", "2024-03-15")
        assert event_id == 1
        assert event_store.list_events("2024-03-01", "2024-03-31") == [
            CalendarEvent(id=1, title="Dentist", date="2024-03-15")
        ]

        event_store.update_event(CalendarEvent(id=1, title="Dentist Checkup", date="2024-03-15"))
        assert [e.title for e in event_store.list_events()] == ["Dentist Checkup"]

        event_store.delete_event(1)
        assert event_store.list_events() == []
