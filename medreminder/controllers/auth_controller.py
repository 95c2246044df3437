from flask import current_app, jsonify, request
from flask_jwt_extended import create_access_token

from medreminder.extensions import db
from medreminder.models import AccountType, User, UserProfile
from medreminder.models.account_type import ACCOUNT_TYPES, PHARMACIST, PROFESSIONAL, STANDARD

NEW_USER_NAME = "New user"


def _find_user(account_type, email, phone):
    query = User.query.filter_by(account_type_id=account_type.id)
    if account_type.name == PROFESSIONAL:
        return query.filter_by(phone=phone).first()
    return query.filter_by(email=email).first()


def _register(account_type, email, phone):
    user = User(
        email=email or None,
        phone=phone or None,
        account_type_id=account_type.id,
        is_pharmacist=account_type.name == PHARMACIST,
    )
    db.session.add(user)
    db.session.flush()
    db.session.add(UserProfile(user_id=user.id, full_name=email.split("@")[0] if email else NEW_USER_NAME))
    return user


def login():
    """Look up a user by email (phone for professionals) and account type.

    Unknown users are registered on the fly. No credential is checked: the
    password field the client sends is ignored.
    """
    data = request.get_json() or {}
    email = (data.get("email") or "").lower().strip()
    phone = (data.get("phone") or "").strip()
    type_name = (data.get("type") or STANDARD).strip().lower()

    if type_name not in ACCOUNT_TYPES:
        return jsonify({"success": False, "message": "Invalid account type"}), 400
    if type_name == PROFESSIONAL and not phone:
        return jsonify({"success": False, "message": "Phone number required"}), 400
    if type_name != PROFESSIONAL and not email:
        return jsonify({"success": False, "message": "Email required"}), 400

    account_type = AccountType.query.filter_by(name=type_name).first()
    if not account_type:
        return jsonify({"success": False, "message": "Invalid account type"}), 400

    try:
        user = _find_user(account_type, email, phone)
        if not user:
            user = _register(account_type, email, phone)
            db.session.commit()
            current_app.logger.info("Auto-registered %s user %s", type_name, user.id)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Login failed")
        return jsonify({"success": False, "message": "Internal server error"}), 500

    access_token = create_access_token(identity=str(user.id))

    return jsonify({
        "success": True,
        "id": user.id,
        "email": user.email,
        "phone": user.phone,
        "type": type_name,
        "name": user.display_name,
        "access_token": access_token
    }), 200
