"""
Dose schedule expansion: one event per (day, selected time of day).
"""

from datetime import date, datetime

from medreminder.services.schedule import MedicationEntry, expand_entry, generate_schedule

START = date(2026, 3, 30)


class TestExpandEntry:

    def test_event_count_is_days_times_slots(self):
        entry = MedicationEntry(name="Amoxicillin", morning=True, evening=True, dose=2, duration_days=5)
        events = expand_entry(entry, START)
        assert len(events) == 10
        assert sorted({e.day for e in events}) == [1, 2, 3, 4, 5]
        pairs = {(e.day, e.slot) for e in events}
        assert len(pairs) == 10

    def test_clock_times_are_fixed(self):
        entry = MedicationEntry(name="Doliprane", morning=True, midday=True, evening=True, duration_days=1)
        assert [e.clock for e in expand_entry(entry, START)] == ["08:00", "12:00", "18:00"]

    def test_days_are_contiguous_from_start_date(self):
        # crosses a month boundary
        entry = MedicationEntry(name="Ibuprofen", midday=True, duration_days=3)
        events = expand_entry(entry, START)
        assert [e.scheduled_at for e in events] == [
            datetime(2026, 3, 30, 12, 0),
            datetime(2026, 3, 31, 12, 0),
            datetime(2026, 4, 1, 12, 0),
        ]

    def test_no_selected_slot_gives_no_event(self):
        entry = MedicationEntry(name="Vitamin D", duration_days=10)
        assert expand_entry(entry, START) == []

    def test_unnamed_entry_is_skipped(self):
        assert expand_entry(MedicationEntry(name="  ", morning=True, duration_days=3), START) == []

    def test_dose_and_unit_are_carried(self):
        entry = MedicationEntry(name="Syrup", evening=True, dose=5, unit="ml", duration_days=1)
        (event,) = expand_entry(entry, START)
        assert (event.dose, event.unit, event.slot) == (5, "ml", "evening")


class TestGenerateSchedule:

    def test_entries_keep_their_order_and_index(self):
        entries = [
            MedicationEntry(name="A", evening=True, duration_days=2),
            MedicationEntry(name="", morning=True, duration_days=2),
            MedicationEntry(name="B", morning=True, duration_days=1),
        ]
        schedule = generate_schedule(entries, START)
        assert [(e.medication_name, e.day, e.entry_index) for e in schedule] == [
            ("A", 1, 0), ("A", 2, 0), ("B", 1, 2),
        ]

    def test_is_deterministic(self):
        entries = [MedicationEntry(name="A", morning=True, midday=True, duration_days=4)]
        assert generate_schedule(entries, START) == generate_schedule(entries, START)
