"""
Pytest fixtures: an isolated app per test on a throwaway SQLite file.
"""

import pytest

from medreminder import create_app
from medreminder.extensions import db as _db
from medreminder.seed import seed_reference_data


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test.sqlite'}",
        "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
        "AUTO_MIGRATE": False,
        "REMINDER_LEAD_MINUTES": 0,
    })
    with app.app_context():
        _db.create_all()
        seed_reference_data()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Log in (auto-registering) and return the response JSON."""
    def _login(email="patient@example.com", type_="standard", phone=None):
        payload = {"email": email, "type": type_, "password": "ignored"}
        if phone:
            payload["phone"] = phone
        response = client.post("/api/auth/login", json=payload)
        assert response.status_code == 200, response.get_json()
        return response.get_json()
    return _login


@pytest.fixture
def pharmacist(login):
    return login(email="pharma@example.com", type_="pharmacist")


@pytest.fixture
def medication_id(client):
    def _create(name, **extra):
        response = client.post("/api/medications", json={"name": name, **extra})
        assert response.status_code == 201, response.get_json()
        return response.get_json()["medicationId"]
    return _create
