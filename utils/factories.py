"""
Fake data for tests and seeding scripts.

The *_row helpers return plain dicts suitable for bulk inserts; the
make_* helpers persist ORM objects through the current session.
"""

import uuid
from datetime import datetime

from faker import Faker

from models import db
from models.department import Department
from models.employee import Employee
from models.employee_detail import EmployeeDetail

fake = Faker()


def department_row(**overrides) -> dict:
    row = {
        "name": fake.unique.word().capitalize(),
        "description": fake.sentence(nb_words=6),
    }
    row.update(overrides)
    return row


def employee_row(department_id: int, **overrides) -> dict:
    row = {
        "id": str(uuid.uuid4()),
        "name": fake.name(),
        "email": fake.unique.safe_email(),
        "department_id": department_id,
    }
    row.update(overrides)
    return row


def detail_row(employee_id: str, **overrides) -> dict:
    row = {
        "employee_id": employee_id,
        "designation": fake.job()[:255],
        "salary": fake.pydecimal(min_value=30000, max_value=150000, right_digits=2),
        "address": fake.address(),
        "joined_date": fake.date_between(start_date="-5y", end_date="today"),
    }
    row.update(overrides)
    return row


def employee_batch(department_ids, size: int):
    """Build `size` employee rows and their matching detail rows"""
    now = datetime.utcnow().replace(microsecond=0)
    employees, details = [], []
    for _ in range(size):
        emp = employee_row(fake.random_element(department_ids), created_at=now, updated_at=now)
        employees.append(emp)
        details.append(detail_row(emp["id"], created_at=now, updated_at=now))
    return employees, details


def make_department(**overrides) -> Department:
    department = Department(**department_row(**overrides))
    db.session.add(department)
    db.session.commit()
    return department


def make_employee(department: Department, details: dict = None, **overrides) -> Employee:
    """Persist an employee plus details, bypassing the API"""
    employee = Employee(**employee_row(department.id, **overrides))
    db.session.add(employee)
    db.session.flush()
    db.session.add(EmployeeDetail(**detail_row(employee.id, **(details or {}))))
    db.session.commit()
    return employee
