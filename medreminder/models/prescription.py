from sqlalchemy.sql import func
from medreminder.extensions import db


class Prescription(db.Model):
    __tablename__ = "prescriptions"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = db.Column(db.String(150), nullable=True)
    patient_weight = db.Column(db.Float, nullable=True)   # kg
    patient_age = db.Column(db.Integer, nullable=True)
    prescribed_on = db.Column(db.Date, nullable=False)    # first day of the dose schedule
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, server_default=func.now(), nullable=False)

    user = db.relationship("User", backref=db.backref("prescriptions", cascade="all,delete-orphan"))
