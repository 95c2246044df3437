from medreminder.extensions import db


class UserProfile(db.Model):
    __tablename__ = "user_profiles"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    full_name = db.Column(db.String(120), nullable=True)

    user = db.relationship("User", backref=db.backref("profile", uselist=False, cascade="all,delete"))
