from medreminder.extensions import db


class Pharmacy(db.Model):
    __tablename__ = "pharmacies"
    id = db.Column(db.Integer, primary_key=True)
    pharmacist_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = db.Column(db.String(150), nullable=False)
    address = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    opening_time = db.Column(db.String(5), nullable=False, server_default="08:00")  # HH:MM
    closing_time = db.Column(db.String(5), nullable=False, server_default="20:00")
    latitude = db.Column(db.Float, nullable=True)
    longitude = db.Column(db.Float, nullable=True)

    pharmacist = db.relationship("User", backref=db.backref("pharmacies", cascade="all,delete-orphan"))

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "openTime": self.opening_time,
            "closeTime": self.closing_time,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
