import os

# Point config at an in-memory database before anything imports it.
# Empty DB_HOST keeps a local .env from switching to Postgres.
os.environ["DB_HOST"] = ""
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_APP_ON_IMPORT"] = "0"

import pytest

from app import create_app
from models import db
from utils.factories import fake, make_department
from utils.rate_limit import limiter


@pytest.fixture
def app():
    app = create_app(config_overrides={
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "RATELIMIT_STORAGE_URI": "memory://",
        "EMPLOYEES_RATE_LIMIT": "60 per minute",
    })
    with app.app_context():
        db.create_all()
        fake.unique.clear()
        limiter.reset()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def department(app):
    return make_department(name="Engineering", description="Builds the product")


@pytest.fixture
def other_department(app):
    return make_department(name="Finance", description="Keeps the books")


def employee_payload(department_id, **overrides):
    payload = {
        "name": "Aman Sharma",
        "email": "aman.sharma@company.com",
        "department_id": department_id,
        "details": {
            "designation": "Software Engineer",
            "salary": 50000.5,
            "joined_date": "2023-01-15",
            "address": "123 Main Street, Delhi",
        },
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_payload():
    return employee_payload


@pytest.fixture
def created_employee(client, department):
    response = client.post("/api/employees", json=employee_payload(department.id))
    assert response.status_code == 201
    return response.get_json()["data"]
