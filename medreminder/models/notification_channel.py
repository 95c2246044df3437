from medreminder.extensions import db

# id -> name, fixed reference data
CHANNELS = {1: "sms", 2: "whatsapp", 3: "call", 4: "push"}
DEFAULT_CHANNEL_ID = 1


def channel_id_for(name):
    for channel_id, channel_name in CHANNELS.items():
        if channel_name == name:
            return channel_id
    return DEFAULT_CHANNEL_ID


class NotificationChannel(db.Model):
    __tablename__ = "notification_channels"
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(20), unique=True, nullable=False)
