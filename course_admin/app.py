import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

from course_admin.config import Config
from course_admin.db import init_db, get_db
from course_admin.errors import register_error_handlers
from course_admin.partitions import init_partitions
from course_admin.seed import seed_command

# Import blueprints
from course_admin.routes.courses import courses_bp
from course_admin.routes.years import years_bp
from course_admin.routes.students import students_bp
from course_admin.routes.cohorts import cohorts_bp

logger = logging.getLogger(__name__)


def create_app(overrides=None):
    settings = Config(**(overrides or {}))
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # ---------------------------------------------
    # FLASK APP SETUP
    # ---------------------------------------------
    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    CORS(app, resources={r"/api/*": {
        "origins": settings.CORS_ORIGINS,
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization"],
    }})

    # ---------------------------------------------
    # MONGODB CONNECTION
    # ---------------------------------------------
    init_db(settings)
    init_partitions(app)

    # ---------------------------------------------
    # REGISTER BLUEPRINTS
    # ---------------------------------------------
    for bp in [courses_bp, years_bp, students_bp, cohorts_bp]:
        app.register_blueprint(bp)

    register_error_handlers(app)
    app.cli.add_command(seed_command)

    @app.before_request
    def log_request():
        logger.info("%s %s", request.method, request.path)

    # ---------------------------------------------
    # BASIC ROUTES
    # ---------------------------------------------
    @app.route("/")
    def home():
        return jsonify({"message": "Course Admin API running"}), 200

    @app.route("/health")
    def health():
        try:
            get_db().command("ping")
        except Exception as e:
            logger.error("❌ Database ping failed: %s", e)
            return jsonify({"success": False, "database": "unavailable"}), 503
        return jsonify({"success": True, "database": "connected"}), 200

    return app


# ---------------------------------------------
# MAIN ENTRY POINT
# ---------------------------------------------
if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["SETTINGS"].PORT)
