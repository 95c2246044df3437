from datetime import datetime, timedelta

from flask import current_app

from medreminder.extensions import db
from medreminder.models import DoseEvent, NotificationPreference, Prescription, PrescriptionItem


def log_notifier(preference, dose):
    """Default delivery: record the outgoing reminder in the application log."""
    current_app.logger.info(
        "Reminder via %s to %s: %s %s %s at %s",
        preference.channel.name if preference.channel else preference.channel_id,
        preference.contact_value,
        dose.item.medication.name,
        dose.dose,
        dose.item.unit,
        dose.scheduled_at.strftime("%Y-%m-%d %H:%M"),
    )


def due_doses(now, lead_minutes=0):
    cutoff = now + timedelta(minutes=lead_minutes)
    return (
        DoseEvent.query
        .join(PrescriptionItem, DoseEvent.prescription_item_id == PrescriptionItem.id)
        .join(Prescription, PrescriptionItem.prescription_id == Prescription.id)
        .filter(
            Prescription.active.is_(True),
            DoseEvent.taken.is_(False),
            DoseEvent.reminder_sent.is_(False),
            DoseEvent.scheduled_at <= cutoff,
        )
        .order_by(DoseEvent.scheduled_at.asc())
        .all()
    )


def dispatch_due_reminders(now=None, lead_minutes=None, notifier=log_notifier):
    """Notify owners of due doses over each active channel, then flag the doses.

    Returns the number of doses flagged. Doses of users without an active
    preference are flagged too so they are not picked up again.
    """
    now = now or datetime.now()
    if lead_minutes is None:
        lead_minutes = current_app.config.get("REMINDER_LEAD_MINUTES", 0)

    doses = due_doses(now, lead_minutes)
    preferences_by_user = {}
    for dose in doses:
        user_id = dose.item.prescription.user_id
        if user_id not in preferences_by_user:
            preferences_by_user[user_id] = NotificationPreference.query.filter_by(
                user_id=user_id, active=True
            ).all()
        for preference in preferences_by_user[user_id]:
            notifier(preference, dose)
        dose.reminder_sent = True

    db.session.commit()
    current_app.logger.info("Reminder dispatch: %d dose(s) flagged", len(doses))
    return len(doses)
