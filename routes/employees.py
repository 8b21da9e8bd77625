import logging

from flask import Blueprint, current_app, request

from models import db
from schemas.employee import EmployeeCreate, EmployeeListQuery, EmployeeUpdate
from services import employee_service
from utils.errors import ApiError, ValidationError
from utils.rate_limit import limiter
from utils.responses import send_api_error, send_error, send_response
from utils.serializers import serialize_employee
from utils.validators import clean_query_args, validate_payload

logger = logging.getLogger(__name__)

employees_bp = Blueprint("employees", __name__)

# One counter per client for the whole route group
limiter.shared_limit(lambda: current_app.config["EMPLOYEES_RATE_LIMIT"], scope="employees")(employees_bp)


def _request_payload():
    """JSON body only; the nested details object has no form encoding"""
    if not request.is_json:
        raise ValidationError({"payload": ["Content-Type must be application/json"]})
    payload = request.get_json(silent=True)
    if payload is None:
        raise ValidationError({"payload": ["Malformed JSON body"]})
    return payload


def _server_error(event, e):
    db.session.rollback()
    logger.error(f"{event}: {e}")
    return send_error(str(e) or "Server Error", status=500)


@employees_bp.route("/", methods=["GET"])
def list_employees():
    """
    List employees with department and details attached.

    Query parameters (all optional):
    - search: case-insensitive match on name or email
    - department_id: restrict to one department
    - salary_min / salary_max: inclusive salary bounds
    - order: asc | desc by joined_date (default desc)
    - page, per_page: pagination (defaults 1 and 25)
    """
    try:
        query = validate_payload(EmployeeListQuery, clean_query_args(request.args))
        page = employee_service.list_employees(query)

        return send_response(
            [serialize_employee(emp) for emp in page.items],
            "Employees retrieved successfully.",
            meta={
                "current_page": page.page,
                "last_page": max(page.pages, 1),
                "per_page": page.per_page,
                "total": page.total,
            },
        )
    except ApiError as e:
        return send_api_error(e)
    except Exception as e:
        return _server_error("EMPLOYEE_INDEX_ERROR", e)


@employees_bp.route("/", methods=["POST"])
def create_employee():
    """
    Create an employee together with its details.

    Example JSON:
    {
      "name": "Aman Sharma",
      "email": "aman.sharma@company.com",
      "department_id": 1,
      "details": {
        "designation": "Software Engineer",
        "salary": 50000,
        "joined_date": "2023-01-01",
        "address": "123 Main Street, Delhi"
      }
    }
    """
    try:
        data = validate_payload(EmployeeCreate, _request_payload())
        employee = employee_service.create_employee(data)
        return send_response(serialize_employee(employee), "Employee created successfully.", 201)
    except ApiError as e:
        return send_api_error(e)
    except Exception as e:
        return _server_error("EMPLOYEE_STORE_ERROR", e)


@employees_bp.route("/<employee_id>", methods=["GET"])
def get_employee(employee_id):
    """Get one employee by id"""
    try:
        employee = employee_service.get_employee(employee_id)
        return send_response(serialize_employee(employee), "Employee retrieved successfully.")
    except ApiError as e:
        return send_api_error(e)
    except Exception as e:
        return _server_error("EMPLOYEE_SHOW_ERROR", e)


@employees_bp.route("/<employee_id>", methods=["PUT", "PATCH"])
def update_employee(employee_id):
    """Update any subset of name, email, department_id; details are replaced when sent"""
    try:
        data = validate_payload(EmployeeUpdate, _request_payload())
        employee = employee_service.update_employee(employee_id, data)
        return send_response(serialize_employee(employee), "Employee updated successfully.")
    except ApiError as e:
        return send_api_error(e)
    except Exception as e:
        return _server_error("EMPLOYEE_UPDATE_ERROR", e)


@employees_bp.route("/<employee_id>", methods=["DELETE"])
def delete_employee(employee_id):
    """Soft delete an employee"""
    try:
        employee_service.delete_employee(employee_id)
        return send_response([], "Employee deleted successfully.")
    except ApiError as e:
        return send_api_error(e)
    except Exception as e:
        return _server_error("EMPLOYEE_DESTROY_ERROR", e)
