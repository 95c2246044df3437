from medreminder.extensions import db

FREQUENCY_TYPES = ("morning", "midday", "evening", "custom")


class PrescriptionItem(db.Model):
    __tablename__ = "prescription_items"
    id = db.Column(db.Integer, primary_key=True)
    prescription_id = db.Column(db.Integer, db.ForeignKey("prescriptions.id", ondelete="CASCADE"), nullable=False, index=True)
    medication_id = db.Column(db.Integer, db.ForeignKey("medications.id"), nullable=False, index=True)

    frequency_type = db.Column(db.String(20), nullable=False)
    duration_days = db.Column(db.Integer, nullable=False)
    custom_dose = db.Column(db.Integer, nullable=True)
    unit = db.Column(db.String(30), nullable=False, server_default="unit")

    prescription = db.relationship("Prescription", backref=db.backref("items", cascade="all,delete-orphan"))
    medication = db.relationship("Medication")
