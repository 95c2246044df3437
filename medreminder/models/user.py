from sqlalchemy.sql import func
from medreminder.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    email = db.Column(db.String(255), index=True, nullable=True)
    phone = db.Column(db.String(30), index=True, nullable=True)
    account_type_id = db.Column(db.Integer, db.ForeignKey("account_types.id"), nullable=False)
    is_pharmacist = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, server_default=func.now(), nullable=False)

    account_type = db.relationship("AccountType")

    @property
    def display_name(self):
        if self.profile and self.profile.full_name:
            return self.profile.full_name
        return "User"
