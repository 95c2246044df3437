# medreminder/routes/auth_routes.py
from flask import Blueprint
from medreminder.controllers import auth_controller

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

auth_bp.route("/login", methods=["POST"])(auth_controller.login)
