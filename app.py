import logging
import os
from datetime import datetime

from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import (
    SQLALCHEMY_DATABASE_URI,
    SQLALCHEMY_TRACK_MODIFICATIONS,
    SECRET_KEY,
    LOG_LEVEL,
    CORS_ORIGINS,
    EMPLOYEES_RATE_LIMIT,
    RATELIMIT_STORAGE_URI,
)
from models import db
from utils.rate_limit import limiter
from utils.responses import send_error

logger = logging.getLogger(__name__)

def create_app(register_blueprints: bool = True, config_overrides: dict = None):
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)

    # Disable strict slashes to avoid redirect issues with CORS
    app.url_map.strict_slashes = False

    app.config["SQLALCHEMY_DATABASE_URI"] = SQLALCHEMY_DATABASE_URI
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SECRET_KEY"] = SECRET_KEY
    app.config["EMPLOYEES_RATE_LIMIT"] = EMPLOYEES_RATE_LIMIT
    app.config["RATELIMIT_STORAGE_URI"] = RATELIMIT_STORAGE_URI
    app.config["RATELIMIT_HEADERS_ENABLED"] = True

    if config_overrides:
        app.config.update(config_overrides)

    CORS(app,
         origins=CORS_ORIGINS,
         methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With"],
         expose_headers=["Content-Type", "X-RateLimit-Limit", "X-RateLimit-Remaining", "Retry-After"],
         max_age=86400)  # Cache preflight for 24 hours

    db.init_app(app)
    Migrate(app, db)
    limiter.init_app(app)

    register_error_handlers(app)

    # Register all blueprints (optional for scripts)
    if register_blueprints:
        from routes.departments import departments_bp
        from routes.employees import employees_bp

        app.register_blueprint(departments_bp, url_prefix="/api/departments")
        app.register_blueprint(employees_bp, url_prefix="/api/employees")

    @app.route("/")
    def home():
        return {
            "message": "Employee Records API",
            "version": "1.0",
            "status": "running",
            "endpoints": {
                "departments": "/api/departments",
                "employees": "/api/employees",
            }
        }

    @app.route("/health")
    def health_check():
        return {"status": "healthy", "timestamp": datetime.now().isoformat()}

    return app


def register_error_handlers(app):
    """Render anything that escapes a view in the {success, message} envelope"""

    @app.errorhandler(404)
    def not_found(e):
        return send_error("Resource not found.", status=404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return send_error("Method not allowed.", status=405)

    @app.errorhandler(429)
    def too_many_requests(e):
        return send_error("Too Many Attempts.", status=429)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return send_error(e.description or e.name, status=e.code)

    @app.errorhandler(Exception)
    def unhandled_error(e):
        db.session.rollback()
        logger.exception(f"Unhandled error: {e}")
        return send_error("Server Error", status=500)


# Create the WSGI app when importing this module (needed for gunicorn),
# but allow scripts and tests to disable this by setting CREATE_APP_ON_IMPORT=0
if os.getenv("CREATE_APP_ON_IMPORT", "1") not in ("0", "false", "False"):
    app = create_app()

if __name__ == "__main__":
    # For local development
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_ENV") != "production"

    # Ensure app exists even if CREATE_APP_ON_IMPORT disabled
    try:
        app
    except NameError:
        app = create_app()

    app.run(host="0.0.0.0", port=port, debug=debug)
