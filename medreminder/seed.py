from medreminder.extensions import db
from medreminder.models import AccountType, NotificationChannel
from medreminder.models.account_type import ACCOUNT_TYPES
from medreminder.models.notification_channel import CHANNELS


def seed_reference_data():
    """Insert missing account types and notification channels. Safe to rerun."""
    existing_types = {name for (name,) in db.session.query(AccountType.name).all()}
    db.session.add_all([AccountType(name=n) for n in ACCOUNT_TYPES if n not in existing_types])

    existing_channels = {cid for (cid,) in db.session.query(NotificationChannel.id).all()}
    db.session.add_all([
        NotificationChannel(id=cid, name=name) for cid, name in CHANNELS.items() if cid not in existing_channels
    ])
    db.session.commit()
