# medreminder/__init__.py
import logging
import os
from datetime import timedelta

from flask import Flask, jsonify
from flask_cors import CORS
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

from .extensions import db, migrate, jwt
from .helpers import ValidationError

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "migrations")
DEFAULT_FRONTEND_URLS = "http://localhost:5173,http://127.0.0.1:5173"
CONTENT_SECURITY_POLICY = (
    "default-src 'self' 'unsafe-inline' 'unsafe-eval' https: http: data: blob: ws: wss:;"
)

load_dotenv()


def _env_flag(name, default):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def create_app(config_overrides=None):
    app = Flask(__name__)

    app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URL', 'sqlite:///medreminder.sqlite')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SQLALCHEMY_ECHO'] = _env_flag('SQL_ECHO', 'false')
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'medreminder-dev-secret-change-me-please')
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(hours=int(os.getenv('JWT_EXPIRES_HOURS', '24')))
    app.config['FRONTEND_URLS'] = [
        u.strip() for u in os.getenv('FRONTEND_URLS', DEFAULT_FRONTEND_URLS).split(',') if u.strip()
    ]
    app.config['AUTO_MIGRATE'] = _env_flag('AUTO_MIGRATE', 'true')
    app.config['REMINDER_LEAD_MINUTES'] = int(os.getenv('REMINDER_LEAD_MINUTES', '15'))
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO').upper()
    app.config['PING_MESSAGE'] = os.getenv('PING_MESSAGE', 'ping')

    if config_overrides:
        app.config.update(config_overrides)

    app.logger.setLevel(getattr(logging, app.config['LOG_LEVEL'], logging.INFO))

    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)
    jwt.init_app(app)

    CORS(app,
         origins=app.config['FRONTEND_URLS'],
         supports_credentials=True,
         methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization", "X-Requested-With"])

    @app.after_request
    def add_security_headers(response):
        response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
        return response

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify(success=False, message=e.message), e.status_code

    @app.errorhandler(Exception)
    def handle_error(e):
        if isinstance(e, HTTPException):
            return jsonify(success=False, message=e.description), e.code
        db.session.rollback()
        app.logger.exception("Unhandled error")
        return jsonify(success=False, message="Internal server error"), 500

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"success": False, "message": "Token expired"}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(err_msg):
        return jsonify({"success": False, "message": f"Invalid token: {err_msg}"}), 422

    @jwt.unauthorized_loader
    def missing_token_callback(err_msg):
        return jsonify({"success": False, "message": f"Missing token: {err_msg}"}), 401

    from . import models  # noqa: F401  registers tables on db.metadata
    from .routes.auth_routes import auth_bp
    from .routes.medication_routes import medication_bp
    from .routes.pharmacy_routes import pharmacy_bp
    from .routes.prescription_routes import prescription_bp
    from .routes.health_routes import health_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(medication_bp)
    app.register_blueprint(pharmacy_bp)
    app.register_blueprint(prescription_bp)
    app.register_blueprint(health_bp)

    from .commands import register_commands
    register_commands(app, MIGRATIONS_DIR)

    if app.config['AUTO_MIGRATE']:
        from flask_migrate import upgrade
        with app.app_context():
            upgrade(directory=MIGRATIONS_DIR)

    return app
