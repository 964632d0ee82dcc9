"""JSON API route for channel analysis and SEO suggestions."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from workbench.services.serializers import outcome_to_response
from workbench.services.seo_runner import execute_analysis

api_bp = Blueprint("api", __name__)


@api_bp.post("/api/analyze")
def analyze():
    payload = request.get_json(silent=True)
    outcome = execute_analysis(payload, current_app.config, logger=current_app.logger.info)
    body, status = outcome_to_response(outcome)
    if status != 200:
        current_app.logger.warning("Analysis request rejected: %s", body.get("error"))

    response = jsonify(body)
    response.status_code = status
    response.headers["Cache-Control"] = "no-store"
    return response
