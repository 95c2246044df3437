from medreminder.extensions import db


class DoseEvent(db.Model):
    __tablename__ = "dose_events"
    id = db.Column(db.Integer, primary_key=True)
    prescription_item_id = db.Column(
        db.Integer, db.ForeignKey("prescription_items.id", ondelete="CASCADE"), nullable=False, index=True
    )

    scheduled_at = db.Column(db.DateTime, nullable=False, index=True)  # local clock time, naive
    slot = db.Column(db.String(10), nullable=False)                    # morning/midday/evening
    dose = db.Column(db.Integer, nullable=True)
    reminder_sent = db.Column(db.Boolean, nullable=False, default=False)
    taken = db.Column(db.Boolean, nullable=False, default=False)
    taken_at = db.Column(db.DateTime, nullable=True)

    item = db.relationship(
        "PrescriptionItem",
        backref=db.backref("doses", order_by="DoseEvent.scheduled_at", cascade="all,delete-orphan"),
    )
