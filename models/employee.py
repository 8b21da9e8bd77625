from models import db
from sqlalchemy.sql import func

class Employee(db.Model):
    __tablename__ = "employees"

    # UUID string, assigned by the employee service on creation
    id = db.Column(db.String(36), primary_key=True)

    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    department_id = db.Column(db.Integer, db.ForeignKey("departments.id"), nullable=False, index=True)

    # Audit fields
    created_at = db.Column(db.DateTime, server_default=func.now())
    updated_at = db.Column(db.DateTime, server_default=func.now(), onupdate=func.now())

    # Soft-delete marker, never serialized
    deleted_at = db.Column(db.DateTime, nullable=True)

    # Relationships
    department = db.relationship("Department", backref="employees")
    details = db.relationship(
        "EmployeeDetail",
        back_populates="employee",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        # Email is unique among employees that are not soft-deleted
        db.Index(
            "uq_employees_email_active",
            "email",
            unique=True,
            postgresql_where=db.text("deleted_at IS NULL"),
            sqlite_where=db.text("deleted_at IS NULL"),
        ),
    )

    def __repr__(self):
        return f"<Employee {self.id} - {self.name}>"
