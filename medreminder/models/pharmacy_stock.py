from medreminder.extensions import db


class PharmacyStock(db.Model):
    __tablename__ = "pharmacy_stock"
    id = db.Column(db.Integer, primary_key=True)
    pharmacy_id = db.Column(db.Integer, db.ForeignKey("pharmacies.id", ondelete="CASCADE"), nullable=False, index=True)
    medication_id = db.Column(db.Integer, db.ForeignKey("medications.id", ondelete="CASCADE"), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.UniqueConstraint("pharmacy_id", "medication_id", name="uq_pharmacy_stock_pharmacy_medication"),
        db.CheckConstraint("quantity >= 0", name="ck_pharmacy_stock_quantity_non_negative"),
    )

    pharmacy = db.relationship("Pharmacy", backref=db.backref("stock", cascade="all,delete-orphan"))
    medication = db.relationship("Medication")
