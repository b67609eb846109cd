"""Retirement Calculator Flask Application Factory."""

from typing import Optional

from flask import Flask

from retirement_calculator.config import Settings, get_global_settings


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Settings to apply; the global settings are used when omitted

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = settings or get_global_settings()
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = settings.app_env
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["TESTING"] = settings.app_env == "testing"
    app.config["SOLVER_TOLERANCE"] = settings.solver_tolerance
    app.config["SOLVER_MAX_ITERATIONS"] = settings.solver_max_iterations
    app.logger.setLevel(settings.log_level)

    # Register blueprints
    from retirement_calculator.blueprints.health import health_bp
    from retirement_calculator.blueprints.projection import projection_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(projection_bp)

    return app
