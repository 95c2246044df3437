from datetime import datetime, timezone

from flask import current_app, jsonify, request
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from medreminder.extensions import db
from medreminder.helpers import ValidationError, clean_str, require_int
from medreminder.models import Interaction, Medication
from medreminder.models.interaction import RISK_LEVELS

DEFAULT_USAGE_TYPE = "tablet"
DEFAULT_RISK_LEVEL = "moderate"


def _month_bounds(now):
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def list_medications():
    """Catalog ordered by name; ``q`` searches name/description, ``new=true`` keeps this month's additions."""
    query = Medication.query

    search = (request.args.get("q") or "").strip()
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Medication.name.ilike(pattern), Medication.description.ilike(pattern)))

    if request.args.get("new") == "true":
        # added_at is stored by the database clock, which is UTC
        start, end = _month_bounds(datetime.now(timezone.utc).replace(tzinfo=None))
        query = query.filter(Medication.added_at >= start, Medication.added_at < end)

    medications = query.order_by(Medication.name.asc()).all()
    return jsonify({"success": True, "medications": [m.to_dict() for m in medications]}), 200


def create_medication():
    data = request.get_json() or {}
    name = clean_str(data.get("name"))
    if not name:
        return jsonify({"success": False, "message": "Medication name is required"}), 400

    existing = Medication.query.filter(func.lower(Medication.name) == name.lower()).first()
    if existing:
        return jsonify({"success": False, "message": "This medication already exists"}), 409

    medication = Medication(
        name=name,
        description=clean_str(data.get("description")),
        photo_url=clean_str(data.get("photoUrl")),
        price=clean_str(data.get("price")),
        usage_type=clean_str(data.get("typeUtilisation")) or DEFAULT_USAGE_TYPE,
        dietary_precaution=clean_str(data.get("precautions")) or None,
        administration_mode=clean_str(data.get("mode")) or None,
        meal_timing=clean_str(data.get("moment")) or None,
    )
    try:
        db.session.add(medication)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({"success": False, "message": "This medication already exists"}), 409
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to register medication %s", name)
        return jsonify({"success": False, "message": "Internal server error"}), 500

    current_app.logger.info("Medication %s registered as %s", name, medication.id)
    return jsonify({"success": True, "medicationId": medication.id}), 201


def list_interactions():
    interactions = Interaction.query.order_by(Interaction.id.asc()).all()
    return jsonify({"success": True, "interactions": [i.to_dict() for i in interactions]}), 200


def create_interaction():
    data = request.get_json() or {}
    if not data.get("medicamentSourceId") or not data.get("medicamentInterditId"):
        return jsonify({"success": False, "message": "Source and interacting medication IDs are required"}), 400

    source_id = require_int(data.get("medicamentSourceId"), "medicamentSourceId")
    target_id = require_int(data.get("medicamentInterditId"), "medicamentInterditId")
    if source_id == target_id:
        raise ValidationError("A medication cannot interact with itself")

    risk_level = clean_str(data.get("riskLevel")).lower() or DEFAULT_RISK_LEVEL
    if risk_level not in RISK_LEVELS:
        raise ValidationError(f"riskLevel must be one of {list(RISK_LEVELS)}")

    for med_id in (source_id, target_id):
        if db.session.get(Medication, med_id) is None:
            return jsonify({"success": False, "message": f"Medication {med_id} not found"}), 404

    # (A, B) and (B, A) describe the same pair
    duplicate = Interaction.query.filter(or_(
        (Interaction.source_medication_id == source_id) & (Interaction.interacting_medication_id == target_id),
        (Interaction.source_medication_id == target_id) & (Interaction.interacting_medication_id == source_id),
    )).first()
    if duplicate:
        return jsonify({"success": False, "message": "This interaction is already registered"}), 409

    interaction = Interaction(
        source_medication_id=source_id,
        interacting_medication_id=target_id,
        risk_level=risk_level,
        description=clean_str(data.get("description")),
    )
    try:
        db.session.add(interaction)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to add interaction %s/%s", source_id, target_id)
        return jsonify({"success": False, "message": "Internal server error"}), 500

    return jsonify({"success": True, "interactionId": interaction.id}), 201
