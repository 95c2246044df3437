from sqlalchemy.sql import func
from medreminder.extensions import db


class Medication(db.Model):
    __tablename__ = "medications"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    photo_url = db.Column(db.String(500), nullable=True)
    price = db.Column(db.String(50), nullable=True)         # free text, e.g. "35 MAD"
    usage_type = db.Column(db.String(40), nullable=False, server_default="tablet")
    dietary_precaution = db.Column(db.Text, nullable=True)
    administration_mode = db.Column(db.String(60), nullable=True)
    meal_timing = db.Column(db.String(60), nullable=True)   # before/during/after meal
    added_at = db.Column(db.DateTime, default=func.now(), server_default=func.now(), nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "photoUrl": self.photo_url,
            "price": self.price,
            "dateAdded": self.added_at.isoformat() if self.added_at else None,
            "type": self.usage_type,
            "precautions": self.dietary_precaution,
            "mode": self.administration_mode,
            "moment": self.meal_timing,
        }
