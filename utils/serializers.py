"""
Response shapes for persisted entities.

The employee shape needs `department` and `details` already loaded; the
employee service always fetches them eagerly before handing an entity out.
"""

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(value):
    return value.strftime(TIMESTAMP_FORMAT) if value else None


def serialize_department(department):
    return {
        "id": department.id,
        "name": department.name,
    }


def serialize_details(details):
    return {
        "designation": details.designation,
        "salary": float(details.salary) if details.salary is not None else None,
        "address": details.address,
        "joined_date": details.joined_date.isoformat() if details.joined_date else None,
    }


def serialize_employee(employee):
    return {
        "id": employee.id,
        "name": employee.name,
        "email": employee.email,
        "department": serialize_department(employee.department),
        "details": serialize_details(employee.details),
        "created_at": format_timestamp(employee.created_at),
        "updated_at": format_timestamp(employee.updated_at),
    }
