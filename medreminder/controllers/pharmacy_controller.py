from flask import current_app, jsonify, request

from medreminder.extensions import db
from medreminder.helpers import ValidationError, clean_str, optional_float, require_int
from medreminder.models import Medication, Pharmacy, PharmacyStock, User
from medreminder.services import stock_service

DEFAULT_OPEN_TIME = "08:00"
DEFAULT_CLOSE_TIME = "20:00"


def _parse_initial_stock(raw_meds):
    if raw_meds is None:
        return []
    if not isinstance(raw_meds, list):
        raise ValidationError("initialMeds must be a list")
    parsed = []
    for med in raw_meds:
        if not isinstance(med, dict):
            raise ValidationError("initialMeds entries must be objects")
        medication_id = require_int(med.get("id"), "initialMeds.id")
        quantity = require_int(med.get("quantity", 0), "initialMeds.quantity", minimum=0)
        parsed.append((medication_id, quantity))
    return parsed


def list_pharmacies():
    pharmacist_id = request.args.get("pharmacistId")
    if not pharmacist_id:
        return jsonify({"success": False, "message": "Missing pharmacistId"}), 400
    pharmacist_id = require_int(pharmacist_id, "pharmacistId")

    pharmacies = Pharmacy.query.filter_by(pharmacist_id=pharmacist_id).order_by(Pharmacy.name.asc()).all()
    return jsonify({"success": True, "pharmacies": [p.to_dict() for p in pharmacies]}), 200


def create_pharmacy():
    """Create a pharmacy together with its opening stock, all or nothing."""
    data = request.get_json() or {}
    name = clean_str(data.get("name"))
    if not name or not data.get("pharmacistId"):
        return jsonify({"success": False, "message": "Name and pharmacist ID are required"}), 400

    pharmacist_id = require_int(data.get("pharmacistId"), "pharmacistId")
    initial_stock = _parse_initial_stock(data.get("initialMeds"))
    latitude = optional_float(data.get("latitude"), "latitude")
    longitude = optional_float(data.get("longitude"), "longitude")

    if db.session.get(User, pharmacist_id) is None:
        return jsonify({"success": False, "message": "Pharmacist not found"}), 404
    for medication_id, _quantity in initial_stock:
        if db.session.get(Medication, medication_id) is None:
            return jsonify({"success": False, "message": f"Medication {medication_id} not found"}), 404

    try:
        pharmacy = Pharmacy(
            pharmacist_id=pharmacist_id,
            name=name,
            address=clean_str(data.get("address")),
            phone=clean_str(data.get("phone")),
            opening_time=clean_str(data.get("openTime")) or DEFAULT_OPEN_TIME,
            closing_time=clean_str(data.get("closeTime")) or DEFAULT_CLOSE_TIME,
            latitude=latitude,
            longitude=longitude,
        )
        db.session.add(pharmacy)
        db.session.flush()

        for medication_id, quantity in initial_stock:
            stock_service.upsert_stock(pharmacy.id, medication_id, quantity)

        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create pharmacy %s", name)
        return jsonify({"success": False, "message": "Internal server error"}), 500

    current_app.logger.info("Pharmacy %s created for pharmacist %s", pharmacy.id, pharmacist_id)
    return jsonify({"success": True, "pharmacyId": pharmacy.id}), 201


def delete_pharmacy(pharmacy_id):
    pharmacy = db.session.get(Pharmacy, pharmacy_id)
    if not pharmacy:
        return jsonify({"success": False, "message": "Pharmacy not found"}), 404

    requester = request.args.get("pharmacistId")
    if requester and require_int(requester, "pharmacistId") != pharmacy.pharmacist_id:
        return jsonify({"success": False, "message": "Forbidden: not the owner of this pharmacy"}), 403

    try:
        db.session.delete(pharmacy)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to delete pharmacy %s", pharmacy_id)
        return jsonify({"success": False, "message": "Internal server error"}), 500

    return jsonify({"success": True}), 200


def get_stock(pharmacy_id):
    if db.session.get(Pharmacy, pharmacy_id) is None:
        return jsonify({"success": False, "message": "Pharmacy not found"}), 404

    rows = (
        db.session.query(PharmacyStock, Medication.name)
        .join(Medication, PharmacyStock.medication_id == Medication.id)
        .filter(PharmacyStock.pharmacy_id == pharmacy_id)
        .order_by(Medication.name.asc())
        .all()
    )
    return jsonify({
        "success": True,
        "stock": [
            {
                "id": stock.id,
                "medicationId": stock.medication_id,
                "medicationName": medication_name,
                "quantity": stock.quantity,
            }
            for stock, medication_name in rows
        ]
    }), 200


def update_stock(pharmacy_id):
    data = request.get_json() or {}
    if not data.get("medicationId"):
        return jsonify({"success": False, "message": "Missing medicationId"}), 400

    medication_id = require_int(data.get("medicationId"), "medicationId")
    quantity = require_int(data.get("quantity") or 0, "quantity", minimum=0)

    if db.session.get(Pharmacy, pharmacy_id) is None:
        return jsonify({"success": False, "message": "Pharmacy not found"}), 404
    if db.session.get(Medication, medication_id) is None:
        return jsonify({"success": False, "message": "Medication not found"}), 404

    try:
        stock = stock_service.upsert_stock(pharmacy_id, medication_id, quantity)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to update stock of pharmacy %s", pharmacy_id)
        return jsonify({"success": False, "message": "Internal server error"}), 500

    return jsonify({"success": True, "stockId": stock.id, "quantity": stock.quantity}), 200


def search_pharmacies():
    """GET /search?medId=&lat=&lng= : pharmacies with the medication in stock."""
    if not request.args.get("medId"):
        return jsonify({"success": False, "message": "medId is required"}), 400
    medication_id = require_int(request.args.get("medId"), "medId")

    # unparseable coordinates fall back to alphabetical order
    try:
        lat = optional_float(request.args.get("lat"), "lat")
        lng = optional_float(request.args.get("lng"), "lng")
    except ValidationError:
        lat = lng = None
    if lat is None or lng is None:
        lat = lng = None

    pharmacies = stock_service.search_pharmacies(medication_id, lat, lng)
    return jsonify({"success": True, "pharmacies": pharmacies}), 200
