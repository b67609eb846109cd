"""
Projection blueprint for the retirement calculator.

This module provides the API endpoints behind the calculator form: the form's
default values and running a projection from submitted fields.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from retirement_calculator.models.errors import DidNotConvergeError, InvalidInputError
from retirement_calculator.models.inputs import FORM_DEFAULTS, RetirementInputs
from retirement_calculator.services.projection_service import ProjectionService

projection_bp = Blueprint("projection", __name__, url_prefix="/api")


@projection_bp.route("/projections/defaults", methods=["GET"])
def get_form_defaults() -> Any:
    """Get the calculator form's default field values.

    Returns:
        JSON response with the default value of every form field
    """
    return jsonify(FORM_DEFAULTS), 200


@projection_bp.route("/projections", methods=["POST"])
def create_projection() -> Any:
    """Run a retirement projection from submitted form fields.

    Returns:
        JSON response with headline figures, chart series and summary labels
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        inputs = RetirementInputs.from_form(data)

        service = ProjectionService(
            tolerance=current_app.config["SOLVER_TOLERANCE"],
            max_iterations=current_app.config["SOLVER_MAX_ITERATIONS"],
        )
        result = service.run_projection(inputs)

        return jsonify(result.to_dict()), 200

    except InvalidInputError as e:
        return jsonify({"error": str(e), "field_errors": e.field_errors}), 400

    except DidNotConvergeError as e:
        current_app.logger.warning(f"Contribution solver failed: {str(e)}")
        return (
            jsonify(
                {
                    "error": "Could not solve for the required monthly contribution",
                    "message": str(e),
                }
            ),
            422,
        )

    except Exception as e:
        current_app.logger.error(f"Error running projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500
