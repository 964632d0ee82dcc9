"""Serializer helpers for API responses."""

from __future__ import annotations

from typing import Dict, Tuple

from workbench.services.seo_runner import AnalysisFailure, AnalysisOutcome



def outcome_to_response(outcome: AnalysisOutcome) -> Tuple[Dict, int]:
    if isinstance(outcome, AnalysisFailure):
        return {"error": outcome.error}, 400
    return outcome.to_dict(), 200
