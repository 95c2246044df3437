from datetime import datetime

from flask import current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from medreminder.extensions import db
from medreminder.helpers import ValidationError, require_int
from medreminder.models import DoseEvent, Medication, Prescription, PrescriptionItem
from medreminder.services import prescription_service, stock_service

DOSE_LIST_LIMIT = 100


def _resolve_user_id(raw_user_id):
    """The caller's user id: ``userId`` checked against the bearer token when one is sent."""
    if raw_user_id in (None, ""):
        raise ValidationError("Missing userId")
    user_id = require_int(raw_user_id, "userId")

    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    if identity is not None and int(identity) != user_id:
        raise ValidationError("Forbidden: token does not match userId", status_code=403)
    return user_id


def _serialize_dose(dose, item, prescription, medication_name):
    return {
        "id": dose.id,
        "prescriptionId": prescription.id,
        "medicationId": item.medication_id,
        "medicationName": medication_name,
        "dose": dose.dose,
        "unit": item.unit,
        "time": dose.scheduled_at.strftime("%H:%M"),
        "scheduledAt": dose.scheduled_at.isoformat(),
        "day": (dose.scheduled_at.date() - prescription.prescribed_on).days + 1,
        "type": dose.slot,
        "statusReminderSent": bool(dose.reminder_sent),
        "statusTaken": bool(dose.taken),
    }


def compute_stats(doses, nearby_pharmacies):
    taken = sum(1 for d in doses if d["statusTaken"])
    pending = [d for d in doses if not d["statusTaken"]]
    return {
        "observanceRate": round(taken / len(doses) * 100) if doses else 100,
        "activeReminders": len(pending),
        "plannedReminders": len(doses),
        "nearbyPharmacies": nearby_pharmacies,
        "nextDose": pending[0] if pending else None,
    }


def list_doses():
    """Upcoming dose events of the user's active prescriptions, with adherence stats."""
    user_id = _resolve_user_id(request.args.get("userId"))

    rows = (
        db.session.query(DoseEvent, PrescriptionItem, Prescription, Medication.name)
        .join(PrescriptionItem, DoseEvent.prescription_item_id == PrescriptionItem.id)
        .join(Prescription, PrescriptionItem.prescription_id == Prescription.id)
        .join(Medication, PrescriptionItem.medication_id == Medication.id)
        .filter(Prescription.user_id == user_id, Prescription.active.is_(True))
        .order_by(DoseEvent.scheduled_at.asc(), DoseEvent.id.asc())
        .limit(DOSE_LIST_LIMIT)
        .all()
    )
    doses = [_serialize_dose(*row) for row in rows]

    return jsonify({
        "success": True,
        "doses": doses,
        "stats": compute_stats(doses, stock_service.count_stocked_pharmacies()),
    }), 200


def create_prescription():
    data = request.get_json() or {}
    _resolve_user_id(data.get("userId"))

    try:
        prescription, dose_count = prescription_service.create_prescription(data)
        db.session.commit()
    except ValidationError:
        db.session.rollback()
        raise
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to save prescription for user %s", data.get("userId"))
        return jsonify({"success": False, "message": "Server error saving prescription"}), 500

    return jsonify({"success": True, "prescriptionId": prescription.id, "doseCount": dose_count}), 201


def update_dose(dose_id):
    data = request.get_json() or {}
    if "taken" not in data:
        return jsonify({"success": False, "message": "Missing taken"}), 400
    if not isinstance(data["taken"], bool):
        raise ValidationError("taken must be true or false")

    dose = db.session.get(DoseEvent, dose_id)
    if not dose:
        return jsonify({"success": False, "message": "Dose not found"}), 404
    _check_owner(dose.item.prescription)

    dose.taken = data["taken"]
    dose.taken_at = datetime.now() if dose.taken else None
    db.session.commit()

    return jsonify({"success": True, "id": dose.id, "statusTaken": dose.taken}), 200


def deactivate_prescription(prescription_id):
    prescription = db.session.get(Prescription, prescription_id)
    if not prescription:
        return jsonify({"success": False, "message": "Prescription not found"}), 404
    _check_owner(prescription)

    prescription.active = False
    db.session.commit()
    current_app.logger.info("Prescription %s deactivated", prescription_id)

    return jsonify({"success": True, "id": prescription.id, "active": False}), 200


def _check_owner(prescription):
    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    if identity is not None and int(identity) != prescription.user_id:
        raise ValidationError("Forbidden: not your prescription", status_code=403)
