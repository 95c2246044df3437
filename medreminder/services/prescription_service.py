from datetime import date

from flask import current_app
from sqlalchemy import func

from medreminder.extensions import db
from medreminder.helpers import ValidationError, clean_str, optional_date, optional_float, optional_int, require_int
from medreminder.models import (
    DoseEvent,
    Medication,
    NotificationPreference,
    Prescription,
    PrescriptionItem,
    User,
)
from medreminder.models.notification_channel import channel_id_for
from medreminder.services import schedule

DEFAULT_UNIT = "unit"
MAX_DURATION_DAYS = 365


def parse_medication_entries(raw_medications):
    """Turn the request's medication list into schedule entries plus item extras.

    Unnamed entries are dropped here; named ones must carry a positive
    duration and dose.
    """
    if raw_medications is None:
        return []
    if not isinstance(raw_medications, list):
        raise ValidationError("medications must be a list")

    parsed = []
    for position, raw in enumerate(raw_medications, start=1):
        if not isinstance(raw, dict):
            raise ValidationError(f"medications[{position}] must be an object")
        name = clean_str(raw.get("name"))
        if not name:
            continue
        entry = schedule.MedicationEntry(
            name=name,
            morning=bool(raw.get("morning")),
            midday=bool(raw.get("midday")),
            evening=bool(raw.get("evening")),
            dose=require_int(raw.get("doseValue", 1), f"{name}: doseValue", minimum=1),
            unit=clean_str(raw.get("unit")) or DEFAULT_UNIT,
            duration_days=require_int(raw.get("durationDays"), f"{name}: durationDays",
                                      minimum=1, maximum=MAX_DURATION_DAYS),
        )
        parsed.append((entry, frequency_type_for(entry, raw.get("intervalHours"))))
    return parsed


def frequency_type_for(entry, interval_hours=None):
    if interval_hours:
        return "custom"
    for slot, _clock in entry.selected_slots():
        return slot
    return "evening"


def find_or_create_medication(name):
    medication = Medication.query.filter(func.lower(Medication.name) == name.lower()).first()
    if medication is None:
        medication = Medication(name=name)
        db.session.add(medication)
        db.session.flush()
    return medication


def upsert_notification_preference(user_id, contact_value, channel_name):
    channel_id = channel_id_for(channel_name)
    preference = NotificationPreference.query.filter_by(user_id=user_id, channel_id=channel_id).first()
    if preference is None:
        preference = NotificationPreference(user_id=user_id, channel_id=channel_id)
        db.session.add(preference)
    preference.contact_value = contact_value
    preference.active = True
    return preference


def create_prescription(data):
    """Stage a prescription, its items and their dose events on the session.

    Nothing is committed here; the caller owns the transaction.
    """
    user_id = require_int(data.get("userId"), "userId")
    if db.session.get(User, user_id) is None:
        raise ValidationError("Unknown user")

    entries = parse_medication_entries(data.get("medications"))
    notif_config = data.get("notifConfig") or {}
    if not isinstance(notif_config, dict):
        raise ValidationError("notifConfig must be an object")
    start_date = optional_date(data.get("startDate"), "startDate") or date.today()

    prescription = Prescription(
        user_id=user_id,
        title=clean_str(data.get("title")) or None,
        patient_weight=optional_float(data.get("weight"), "weight"),
        patient_age=optional_int(data.get("age"), "age", minimum=0),
        prescribed_on=start_date,
        active=True,
    )
    db.session.add(prescription)
    db.session.flush()

    contact = clean_str(notif_config.get("phone"))
    if contact:
        upsert_notification_preference(user_id, contact, notif_config.get("type"))

    dose_count = 0
    for entry, frequency_type in entries:
        medication = find_or_create_medication(entry.name)
        item = PrescriptionItem(
            prescription_id=prescription.id,
            medication_id=medication.id,
            frequency_type=frequency_type,
            duration_days=entry.duration_days,
            custom_dose=entry.dose,
            unit=entry.unit,
        )
        db.session.add(item)
        db.session.flush()

        events = schedule.expand_entry(entry, start_date)
        db.session.add_all([
            DoseEvent(
                prescription_item_id=item.id,
                scheduled_at=event.scheduled_at,
                slot=event.slot,
                dose=event.dose,
                reminder_sent=False,
                taken=False,
            )
            for event in events
        ])
        dose_count += len(events)

    db.session.flush()
    current_app.logger.info(
        "Prescription %s staged for user %s: %d item(s), %d dose event(s)",
        prescription.id, user_id, len(entries), dose_count,
    )
    return prescription, dose_count
