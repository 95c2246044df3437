from sqlalchemy.sql import func
from medreminder.extensions import db


class NotificationPreference(db.Model):
    __tablename__ = "notification_preferences"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    channel_id = db.Column(db.Integer, db.ForeignKey("notification_channels.id"), nullable=False)

    contact_value = db.Column(db.String(255), nullable=False)
    active = db.Column(db.Boolean, nullable=False, default=True)
    updated_at = db.Column(db.DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (db.UniqueConstraint("user_id", "channel_id", name="uq_notification_preference_user_channel"),)

    user = db.relationship("User", backref=db.backref("notification_preferences", cascade="all,delete-orphan"))
    channel = db.relationship("NotificationChannel")
