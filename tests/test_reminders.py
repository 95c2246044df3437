from datetime import datetime

from medreminder.models import DoseEvent
from medreminder.services.reminder_service import dispatch_due_reminders


def create_prescription(client, user_id, notif_config=None, start_date="2026-05-01"):
    response = client.post("/api/prescriptions", json={
        "userId": user_id,
        "title": "Cold",
        "startDate": start_date,
        "medications": [{"name": "Doliprane", "morning": True, "evening": True, "durationDays": 2, "doseValue": 1}],
        "notifConfig": notif_config or {"phone": "+212600000001", "type": "sms"},
    })
    assert response.status_code == 201
    return response.get_json()["prescriptionId"]


class TestReminderDispatch:

    def test_due_doses_are_sent_once(self, client, login):
        user = login()
        create_prescription(client, user["id"])
        sent = []

        count = dispatch_due_reminders(now=datetime(2026, 5, 1, 18, 0), lead_minutes=0,
                                       notifier=lambda pref, dose: sent.append((pref.contact_value, dose.slot)))

        assert count == 2
        assert sent == [("+212600000001", "morning"), ("+212600000001", "evening")]
        assert DoseEvent.query.filter_by(reminder_sent=True).count() == 2

        again = dispatch_due_reminders(now=datetime(2026, 5, 1, 18, 0), lead_minutes=0,
                                       notifier=lambda pref, dose: sent.append(dose))
        assert again == 0
        assert len(sent) == 2

    def test_lead_time_includes_upcoming_doses(self, client, login):
        user = login()
        create_prescription(client, user["id"])
        count = dispatch_due_reminders(now=datetime(2026, 5, 1, 7, 50), lead_minutes=15,
                                       notifier=lambda pref, dose: None)
        assert count == 1

    def test_taken_and_inactive_doses_are_skipped(self, client, login):
        user = login()
        prescription_id = create_prescription(client, user["id"])
        first = DoseEvent.query.order_by(DoseEvent.scheduled_at).first()
        client.patch(f"/api/prescriptions/doses/{first.id}", json={"taken": True})

        assert dispatch_due_reminders(now=datetime(2026, 5, 1, 9, 0), lead_minutes=0,
                                      notifier=lambda pref, dose: None) == 0

        client.post(f"/api/prescriptions/{prescription_id}/deactivate")
        assert dispatch_due_reminders(now=datetime(2026, 6, 1), lead_minutes=0,
                                      notifier=lambda pref, dose: None) == 0

    def test_each_active_channel_is_notified(self, client, login):
        user = login()
        create_prescription(client, user["id"], {"phone": "+212600000001", "type": "sms"})
        create_prescription(client, user["id"], {"phone": "+212600000009", "type": "push"})
        channels = []

        dispatch_due_reminders(now=datetime(2026, 5, 1, 8, 0), lead_minutes=0,
                               notifier=lambda pref, dose: channels.append(pref.channel.name))

        # two prescriptions, one morning dose each, two channels
        assert sorted(channels) == ["push", "push", "sms", "sms"]

    def test_cli_command(self, app, client, login):
        user = login()
        create_prescription(client, user["id"], start_date="2020-01-01")

        result = app.test_cli_runner().invoke(args=["send-reminders", "--lead-minutes", "0"])

        assert result.exit_code == 0
        assert "4 reminder(s) sent." in result.output
        assert DoseEvent.query.filter_by(reminder_sent=True).count() == 4
