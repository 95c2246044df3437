from medreminder.extensions import db

RISK_LEVELS = ("low", "moderate", "high", "critical")


class Interaction(db.Model):
    __tablename__ = "interactions"
    id = db.Column(db.Integer, primary_key=True)
    source_medication_id = db.Column(db.Integer, db.ForeignKey("medications.id", ondelete="CASCADE"), nullable=False, index=True)
    interacting_medication_id = db.Column(db.Integer, db.ForeignKey("medications.id", ondelete="CASCADE"), nullable=False, index=True)

    risk_level = db.Column(db.String(20), nullable=False, server_default="moderate")
    description = db.Column(db.Text, nullable=True)

    source = db.relationship("Medication", foreign_keys=[source_medication_id])
    interacting = db.relationship("Medication", foreign_keys=[interacting_medication_id])

    def to_dict(self):
        return {
            "id": self.id,
            "med1Id": self.source_medication_id,
            "med1Name": self.source.name,
            "med2Id": self.interacting_medication_id,
            "med2Name": self.interacting.name,
            "riskLevel": self.risk_level,
            "description": self.description,
        }
