from models import db
from sqlalchemy.sql import func

class EmployeeDetail(db.Model):
    __tablename__ = "employee_details"

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(
        db.String(36),
        db.ForeignKey("employees.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    designation = db.Column(db.String(255), nullable=False)
    salary = db.Column(db.Numeric(12, 2), db.CheckConstraint("salary >= 0"), nullable=False)
    address = db.Column(db.String(500))
    joined_date = db.Column(db.Date, nullable=False, index=True)

    # Audit fields
    created_at = db.Column(db.DateTime, server_default=func.now())
    updated_at = db.Column(db.DateTime, server_default=func.now(), onupdate=func.now())

    # Relationship
    employee = db.relationship("Employee", back_populates="details")

    def __repr__(self):
        return f"<EmployeeDetail {self.employee_id} - {self.designation}>"
