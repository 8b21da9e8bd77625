from models import db
from models.department import Department


def list_departments():
    """All departments, oldest first"""
    return Department.query.order_by(Department.id.asc()).all()


def department_exists(department_id) -> bool:
    if department_id is None:
        return False
    return db.session.get(Department, department_id) is not None
