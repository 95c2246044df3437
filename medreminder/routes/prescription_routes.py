# medreminder/routes/prescription_routes.py
from flask import Blueprint
from medreminder.controllers import prescription_controller

prescription_bp = Blueprint("prescriptions", __name__, url_prefix="/api/prescriptions")

prescription_bp.route("", methods=["GET"])(prescription_controller.list_doses)
prescription_bp.route("", methods=["POST"])(prescription_controller.create_prescription)
prescription_bp.route("/doses/<int:dose_id>", methods=["PATCH"])(prescription_controller.update_dose)
prescription_bp.route("/<int:prescription_id>/deactivate", methods=["POST"])(prescription_controller.deactivate_prescription)
