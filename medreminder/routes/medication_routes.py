# medreminder/routes/medication_routes.py
from flask import Blueprint
from medreminder.controllers import medication_controller

medication_bp = Blueprint("medications", __name__, url_prefix="/api/medications")

medication_bp.route("", methods=["GET"])(medication_controller.list_medications)
medication_bp.route("", methods=["POST"])(medication_controller.create_medication)
medication_bp.route("/interactions", methods=["GET"])(medication_controller.list_interactions)
medication_bp.route("/interactions", methods=["POST"])(medication_controller.create_interaction)
