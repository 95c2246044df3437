from medreminder.extensions import db

STANDARD = "standard"
PROFESSIONAL = "professional"
PHARMACIST = "pharmacist"
ACCOUNT_TYPES = (STANDARD, PROFESSIONAL, PHARMACIST)


class AccountType(db.Model):
    __tablename__ = "account_types"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(30), unique=True, nullable=False)
