"""Flask entrypoint for the YouTube SEO workbench."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from workbench.config import AppConfig
from workbench.routes.api import api_bp
from workbench.routes.pages import pages_bp



def create_app() -> Flask:
    app = Flask(__name__, template_folder="templates")

    config = AppConfig.from_env()
    app.config.update(config.to_flask_config())

    app.register_blueprint(pages_bp)
    app.register_blueprint(api_bp)

    @app.context_processor
    def inject_globals():
        return {
            "app_name": "YouTube SEO Workbench",
            "env_name": app.config.get("APP_ENV", "development"),
        }

    @app.template_filter("join_or_dash")
    def join_or_dash(items, limit: int = 10) -> str:
        items = list(items or [])[:limit]
        return ", ".join(items) if items else "—"

    if app.config.get("TRUST_PROXY", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)
    return app


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8080, debug=app.config.get("APP_ENV") != "production")
