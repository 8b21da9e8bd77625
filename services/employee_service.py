import logging
import uuid
from contextlib import contextmanager

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import contains_eager, selectinload

from models import db
from models.employee import Employee
from models.employee_detail import EmployeeDetail
from services.department_service import department_exists
from utils.errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "The email has already been taken."
DEPARTMENT_INVALID = "The selected department id is invalid."


def _new_employee_id() -> str:
    """Random UUID4 primary key for a new employee"""
    return str(uuid.uuid4())


@contextmanager
def atomic():
    """
    Run a block of writes as one unit of work.

    Commits the session when the block finishes and rolls back everything
    flushed so far if anything inside it raises.
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        # Lost a race against another writer for the same address
        if "email" in str(e.orig).lower():
            raise ValidationError({"email": [EMAIL_TAKEN]}) from e
        logger.error(f"Transaction rolled back due to integrity error: {e.orig}")
        raise PersistenceError(str(e.orig)) from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Transaction rolled back due to database error: {e}")
        raise PersistenceError(str(e)) from e
    except Exception as e:
        db.session.rollback()
        logger.error(f"Transaction rolled back due to error: {e}")
        raise


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _email_available(email: str, exclude_id: str = None) -> bool:
    stmt = select(Employee.id).where(
        func.lower(Employee.email) == email.lower(),
        Employee.deleted_at.is_(None),
    )
    if exclude_id:
        stmt = stmt.where(Employee.id != exclude_id)
    return db.session.execute(stmt.limit(1)).first() is None


def _build_details(employee_id: str, payload) -> EmployeeDetail:
    return EmployeeDetail(
        employee_id=employee_id,
        designation=payload.designation,
        salary=payload.salary,
        address=payload.address,
        joined_date=payload.joined_date,
    )


def _apply_details(employee: Employee, payload) -> None:
    """Overwrite the employee's detail row, creating it if missing. Address is kept when omitted."""
    details = employee.details
    if details is None:
        employee.details = _build_details(employee.id, payload)
        return

    details.designation = payload.designation
    details.salary = payload.salary
    details.joined_date = payload.joined_date
    if "address" in payload.model_fields_set:
        details.address = payload.address


def build_employee_query(search=None, department_id=None, salary_min=None, salary_max=None, order="desc"):
    """
    Compose the listing SELECT over active employees joined with their details.

    Only the filters that were supplied end up in the WHERE clause. Rows are
    ordered by joined_date in the requested direction, then by detail id so
    that employees sharing a joined_date always come back in insertion order.
    """
    stmt = (
        select(Employee)
        .join(Employee.details)
        .options(contains_eager(Employee.details), selectinload(Employee.department))
        .where(Employee.deleted_at.is_(None))
    )

    if search:
        pattern = f"%{_escape_like(search)}%"
        stmt = stmt.where(
            or_(
                Employee.name.ilike(pattern, escape="\\"),
                Employee.email.ilike(pattern, escape="\\"),
            )
        )

    if department_id is not None:
        stmt = stmt.where(Employee.department_id == department_id)

    if salary_min is not None:
        stmt = stmt.where(EmployeeDetail.salary >= salary_min)

    if salary_max is not None:
        stmt = stmt.where(EmployeeDetail.salary <= salary_max)

    joined = EmployeeDetail.joined_date.asc() if order == "asc" else EmployeeDetail.joined_date.desc()
    return stmt.order_by(joined, EmployeeDetail.id.asc())


def list_employees(query):
    """Paginate the listing for a validated EmployeeListQuery"""
    stmt = build_employee_query(
        search=query.search,
        department_id=query.department_id,
        salary_min=query.salary_min,
        salary_max=query.salary_max,
        order=query.order,
    )
    return db.paginate(stmt, page=query.page, per_page=query.per_page, error_out=False, count=True)


def get_employee(employee_id: str) -> Employee:
    """Active employee with department and details loaded, or NotFoundError"""
    stmt = (
        select(Employee)
        .options(selectinload(Employee.department), selectinload(Employee.details))
        .where(Employee.id == employee_id, Employee.deleted_at.is_(None))
        .execution_options(populate_existing=True)
    )
    employee = db.session.execute(stmt).scalar_one_or_none()
    if employee is None:
        raise NotFoundError("Employee not found.")
    return employee


def create_employee(data) -> Employee:
    """Insert an employee and its detail row in one transaction"""
    errors = {}
    if not department_exists(data.department_id):
        errors["department_id"] = [DEPARTMENT_INVALID]
    if not _email_available(data.email):
        errors["email"] = [EMAIL_TAKEN]
    if errors:
        raise ValidationError(errors)

    employee_id = _new_employee_id()
    with atomic():
        employee = Employee(
            id=employee_id,
            name=data.name,
            email=data.email,
            department_id=data.department_id,
        )
        db.session.add(employee)
        db.session.flush()

        db.session.add(_build_details(employee_id, data.details))
        db.session.flush()

    logger.info(f"Employee created: {employee_id}")
    return get_employee(employee_id)


def update_employee(employee_id: str, data) -> Employee:
    """Apply the supplied subset of fields (and details, if sent) in one transaction"""
    employee = get_employee(employee_id)
    changes = data.model_dump(exclude_unset=True, exclude={"details"})

    errors = {}
    if "department_id" in changes and not department_exists(changes["department_id"]):
        errors["department_id"] = [DEPARTMENT_INVALID]
    if "email" in changes and not _email_available(changes["email"], exclude_id=employee.id):
        errors["email"] = [EMAIL_TAKEN]
    if errors:
        raise ValidationError(errors)

    with atomic():
        for field, value in changes.items():
            setattr(employee, field, value)
        if data.details is not None:
            _apply_details(employee, data.details)
            # A details change is a change to the employee resource
            employee.updated_at = func.now()

    logger.info(f"Employee updated: {employee_id}")
    return get_employee(employee_id)


def delete_employee(employee_id: str) -> None:
    """Soft delete. The detail row stays attached to the flagged employee."""
    employee = get_employee(employee_id)
    with atomic():
        employee.deleted_at = func.now()
    logger.info(f"Employee deleted: {employee_id}")
