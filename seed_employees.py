#!/usr/bin/env python3
"""
Seed fake employees (with details) into the configured database.

Usage:
  python init_db.py                      # tables + departments first
  python seed_employees.py --count 100000 --chunk-size 1000

Rows are written with SQLAlchemy Core bulk inserts, one transaction per chunk.
"""

import argparse
import os
import sys

os.environ.setdefault("CREATE_APP_ON_IMPORT", "0")

from sqlalchemy import insert

from app import create_app
from models import db
from models.department import Department
from models.employee import Employee
from models.employee_detail import EmployeeDetail
from utils.factories import employee_batch


def seed_employees(total: int, chunk_size: int) -> int:
    department_ids = [row.id for row in db.session.query(Department.id).all()]
    if not department_ids:
        raise ValueError("No departments found. Run init_db.py first.")

    inserted = 0
    for start in range(0, total, chunk_size):
        batch_size = min(chunk_size, total - start)
        employees, details = employee_batch(department_ids, batch_size)

        try:
            db.session.execute(insert(Employee), employees)
            db.session.execute(insert(EmployeeDetail), details)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        inserted += batch_size
        print(f"Inserted {batch_size} employees. Progress: {inserted}/{total}")

    return inserted


def main():
    parser = argparse.ArgumentParser(description="Seed fake employees")
    parser.add_argument("--count", type=int, default=100000, help="number of employees to create")
    parser.add_argument("--chunk-size", type=int, default=1000, help="rows per insert batch")
    args = parser.parse_args()

    if args.count < 1 or args.chunk_size < 1:
        parser.error("--count and --chunk-size must be positive")

    app = create_app(register_blueprints=False)
    with app.app_context():
        print("🟢 Seeding Employees...")
        inserted = seed_employees(args.count, args.chunk_size)
        print(f"✅ Seeded {inserted} employees")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"❌ Seeding failed: {e}")
        sys.exit(1)
