# medreminder/routes/pharmacy_routes.py
from flask import Blueprint
from medreminder.controllers import pharmacy_controller

pharmacy_bp = Blueprint("pharmacies", __name__, url_prefix="/api/pharmacies")

pharmacy_bp.route("", methods=["GET"])(pharmacy_controller.list_pharmacies)
pharmacy_bp.route("", methods=["POST"])(pharmacy_controller.create_pharmacy)
pharmacy_bp.route("/search", methods=["GET"])(pharmacy_controller.search_pharmacies)
pharmacy_bp.route("/<int:pharmacy_id>", methods=["DELETE"])(pharmacy_controller.delete_pharmacy)
pharmacy_bp.route("/<int:pharmacy_id>/stock", methods=["GET"])(pharmacy_controller.get_stock)
pharmacy_bp.route("/<int:pharmacy_id>/stock", methods=["POST"])(pharmacy_controller.update_stock)
