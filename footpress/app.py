import logging

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix  # optional, safe behind proxies

from footpress import config
from footpress.routes.dashboard import dashboard_bp
from footpress.routes.sessions import sessions_bp
from footpress.routes.suggestion import suggestion_bp
from footpress.sensors.client import SensorClient
from footpress.sessions.store import SessionStore
from footpress.suggestions.provider import SuggestionProvider


def create_app(store: SessionStore | None = None, overrides: dict | None = None):
    app = Flask(__name__, static_folder="static", template_folder="templates")

    app.config["JSON_SORT_KEYS"] = False
    app.config["TICK_SECONDS"] = config.TICK_SECONDS
    app.config["SUGGESTION_MODE"] = config.SUGGESTION_MODE
    if overrides:
        app.config.update(overrides)

    # Respect X-Forwarded-* when behind a proxy/load balancer
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=1)

    if store is None:
        store = SessionStore(
            fetch=SensorClient().fetch,
            provider=SuggestionProvider(mode=app.config["SUGGESTION_MODE"]),
            tick_seconds=app.config["TICK_SECONDS"],
        )
    app.extensions["footpress.sessions"] = store

    # Blueprints
    app.register_blueprint(dashboard_bp, url_prefix="/")
    app.register_blueprint(sessions_bp, url_prefix="/api")
    app.register_blueprint(suggestion_bp, url_prefix="/api")

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    app.run(host=config.FLASK_HOST, port=config.FLASK_PORT, debug=False)
