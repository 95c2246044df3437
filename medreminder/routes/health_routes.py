from flask import Blueprint, current_app
from sqlalchemy import text
from medreminder.extensions import db
from medreminder.helpers import api_response

health_bp = Blueprint('health', __name__, url_prefix='/api')


@health_bp.route('/ping')
def ping():
    return {"message": current_app.config['PING_MESSAGE']}


@health_bp.route('/health')
def health():
    try:
        db.session.execute(text('SELECT 1'))
        return api_response(
            success=True,
            message="Database connection successful",
            data={"status": "connected"}
        )
    except Exception:
        current_app.logger.exception("Database health check failed")
        return api_response(
            success=False,
            message="Database connection failed",
            data={"status": "disconnected"},
            status_code=500
        )
