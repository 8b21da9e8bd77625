#!/usr/bin/env python3
"""
Database initialization script for the Employee Records API.

Creates all tables and seeds a default set of departments.
Use `flask db upgrade` instead once migrations are managed with Flask-Migrate.
"""

import os
import sys

os.environ.setdefault("CREATE_APP_ON_IMPORT", "0")

from app import create_app
from models import db
from models.department import Department

DEFAULT_DEPARTMENTS = [
    {"name": "Engineering", "description": "Builds and maintains the product"},
    {"name": "Human Resources", "description": "People operations and hiring"},
    {"name": "Finance", "description": "Accounting, payroll and budgeting"},
    {"name": "Operations", "description": "Day-to-day business operations"},
    {"name": "Sales", "description": "Customer acquisition and accounts"},
]


def init_database():
    """Initialize the database with all tables"""
    app = create_app(register_blueprints=False)

    with app.app_context():
        print("Creating database tables...")
        db.create_all()
        print("✅ Database tables created successfully!")

        if not Department.query.first():
            print("Creating sample departments...")
            for dept_data in DEFAULT_DEPARTMENTS:
                db.session.add(Department(**dept_data))
            db.session.commit()
            print("✅ Sample departments created!")

        print("\n🎉 Database initialization completed successfully!")
        print("\nYou can now:")
        print("1. View departments using: GET http://127.0.0.1:5000/api/departments")
        print("2. Create employees using: POST http://127.0.0.1:5000/api/employees")
        print("3. Seed fake employees using: python seed_employees.py --count 1000")


if __name__ == "__main__":
    try:
        init_database()
    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        sys.exit(1)
