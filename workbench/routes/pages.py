"""HTML page routes for the SEO workbench."""

from __future__ import annotations

from flask import Blueprint, current_app, flash, render_template, request

from workbench.services.serializers import outcome_to_response
from workbench.services.seo_runner import execute_analysis

pages_bp = Blueprint("pages", __name__)

DEFAULT_CHANNELS = "\n".join([
    "https://www.youtube.com/@Top5News4",
    "https://www.youtube.com/@TazaHalaat",
])



@pages_bp.app_template_filter("top_frequency")
def top_frequency(frequency: dict, limit: int = 6) -> list:
    return sorted((frequency or {}).items(), key=lambda item: item[1], reverse=True)[:limit]


@pages_bp.get("/")
def workbench():
    return render_template("index.html", channels_input=DEFAULT_CHANNELS, video_url="", result=None)


@pages_bp.post("/")
def run_workbench():
    channels_input = request.form.get("channels", "")
    video_url = request.form.get("video_url", "").strip()

    channels = [line.strip() for line in channels_input.splitlines() if line.strip()]
    if not channels:
        flash("Add at least one channel to analyze.", "error")
        return render_template("index.html", channels_input=channels_input, video_url=video_url, result=None)

    payload = {"channels": channels, "targetVideoUrl": video_url or None}
    outcome = execute_analysis(payload, current_app.config, logger=current_app.logger.info)
    body, status = outcome_to_response(outcome)

    if status != 200:
        flash(body["error"], "error")
        return render_template("index.html", channels_input=channels_input, video_url=video_url, result=None)

    return render_template("index.html", channels_input=channels_input, video_url=video_url, result=body)
