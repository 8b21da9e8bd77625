"""
Request shapes for the employee endpoints.

Payloads are validated here, at the HTTP boundary, before any service
function sees them. Field names mirror the JSON accepted by the API.
"""

from datetime import date
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from config import DEFAULT_PER_PAGE

# Largest value an INTEGER column or LIMIT/OFFSET accepts on every backend
MAX_INT = 2**31 - 1


class EmployeeDetailPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    designation: str = Field(..., min_length=1, max_length=255)
    salary: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    joined_date: date
    address: Optional[str] = Field(None, max_length=500)


class EmployeeCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    department_id: int = Field(..., strict=True, ge=1, le=MAX_INT)
    details: EmployeeDetailPayload


class EmployeeUpdate(BaseModel):
    """
    Partial update. A field is applied only when present in the payload;
    present fields may not be null. When `details` is sent it must be
    complete (designation, salary, joined_date), address stays optional.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    department_id: Optional[int] = Field(None, strict=True, ge=1, le=MAX_INT)
    details: Optional[EmployeeDetailPayload] = None

    @field_validator("name", "email", "department_id", "details", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("This field may not be null")
        return value


class EmployeeListQuery(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    search: Optional[str] = Field(None, max_length=255)
    department_id: Optional[int] = Field(None, ge=1, le=MAX_INT)
    salary_min: Optional[Decimal] = Field(None, ge=0)
    salary_max: Optional[Decimal] = Field(None, ge=0)
    order: Literal["asc", "desc"] = "desc"
    page: int = Field(1, ge=1, le=MAX_INT)
    per_page: int = Field(DEFAULT_PER_PAGE, ge=1, le=MAX_INT)

    @field_validator("salary_max")
    @classmethod
    def salary_range(cls, value, info):
        low = info.data.get("salary_min")
        if value is not None and low is not None and value < low:
            raise ValueError("salary_max must be greater than or equal to salary_min")
        return value
