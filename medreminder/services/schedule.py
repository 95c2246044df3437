"""Expansion of a prescription's medication entries into dated dose events.

Each entry selects any of three fixed times of day. For an entry lasting
``duration_days`` days the schedule holds one event per (day, selected slot),
days numbered from 1 on ``start_date``. Clock times are attached to calendar
dates as naive local datetimes.
"""
from datetime import datetime, time, timedelta
from typing import Iterable, List, NamedTuple

SLOTS = (
    ("morning", time(8, 0)),
    ("midday", time(12, 0)),
    ("evening", time(18, 0)),
)


class MedicationEntry(NamedTuple):
    name: str
    morning: bool = False
    midday: bool = False
    evening: bool = False
    dose: int = 1
    unit: str = "unit"
    duration_days: int = 1

    def selected_slots(self):
        flags = {"morning": self.morning, "midday": self.midday, "evening": self.evening}
        return [(slot, clock) for slot, clock in SLOTS if flags[slot]]


class ScheduledDose(NamedTuple):
    entry_index: int
    medication_name: str
    day: int
    slot: str
    scheduled_at: datetime
    dose: int
    unit: str

    @property
    def clock(self):
        return self.scheduled_at.strftime("%H:%M")


def expand_entry(entry, start_date, entry_index=0) -> List[ScheduledDose]:
    """Dose events for a single entry; empty when it has no name or no slot."""
    if not (entry.name or "").strip():
        return []
    slots = entry.selected_slots()
    events = []
    for day in range(1, entry.duration_days + 1):
        current = start_date + timedelta(days=day - 1)
        for slot, clock in slots:
            events.append(ScheduledDose(
                entry_index=entry_index,
                medication_name=entry.name,
                day=day,
                slot=slot,
                scheduled_at=datetime.combine(current, clock),
                dose=entry.dose,
                unit=entry.unit,
            ))
    return events


def generate_schedule(entries: Iterable[MedicationEntry], start_date) -> List[ScheduledDose]:
    schedule = []
    for index, entry in enumerate(entries):
        schedule.extend(expand_entry(entry, start_date, entry_index=index))
    return schedule
