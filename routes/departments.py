import logging

from flask import Blueprint
from services import department_service
from utils.responses import send_error, send_response
from utils.serializers import serialize_department

logger = logging.getLogger(__name__)

departments_bp = Blueprint("departments", __name__)

@departments_bp.route("/", methods=["GET"])
def list_departments():
    """List all departments (id and name)"""
    try:
        departments = department_service.list_departments()
        return send_response(
            [serialize_department(dept) for dept in departments],
            "Departments retrieved successfully.",
        )
    except Exception as e:
        logger.error(f"DEPARTMENT_INDEX_ERROR: {e}")
        return send_error("Failed to load departments.", status=500)
